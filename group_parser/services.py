from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Sequence

from groups.services import Group, Member, timestamp_id
from roster.services import Student, match_student, normalize_name

logger = logging.getLogger(__name__)

BLOCK_SEPARATOR = re.compile(r"\n\s*\n")
TITLE_PREFIX = re.compile(r".*:\s*(.*)")


@dataclass
class GroupParseResult:
    groups: list[Group]
    not_found_names: list[str] = field(default_factory=list)
    duplicate_names: list[str] = field(default_factory=list)

    @property
    def groups_count(self) -> int:
        return len(self.groups)

    @property
    def has_warnings(self) -> bool:
        return bool(self.not_found_names or self.duplicate_names)


def _iter_blocks(text: str) -> list[list[str]]:
    """Split text on blank lines into blocks of trimmed, non-empty lines."""

    text = (text or "").replace("\r\n", "\n").replace("\r", "\n").strip()
    if not text:
        return []
    blocks = []
    for chunk in BLOCK_SEPARATOR.split(text):
        lines = [line.strip() for line in chunk.strip().split("\n")]
        blocks.append([line for line in lines if line])
    return blocks


def extract_title(line: str) -> str:
    """Drop a leading topic code such as "- Materi 1 :" from a title line."""

    match = TITLE_PREFIX.match(line)
    if match:
        return match.group(1).strip()
    return line.strip()


def parse_and_generate(text: str, roster: Sequence[Student]) -> GroupParseResult:
    """Build groups from pasted text, one group per blank-line separated block.

    The first line of a block is the assignment title, every following line
    a student name looked up in ``roster``. Names missing from the roster and
    students already placed by an earlier line are reported, not raised.
    """

    groups: list[Group] = []
    not_found: list[str] = []
    duplicates: list[str] = []
    placed: set[str] = set()

    for lines in _iter_blocks(text):
        # A block needs a title line and at least one member line.
        if len(lines) < 2:
            continue

        title_line, *member_lines = lines
        members: list[Member] = []
        for student_name in member_lines:
            student = match_student(student_name, roster)
            if student is None:
                not_found.append(student_name)
                continue
            key = normalize_name(student.name)
            if key in placed:
                duplicates.append(student_name)
                continue
            placed.add(key)
            members.append(Member(student=student))

        if not members:
            continue

        groups.append(
            Group(
                id=timestamp_id((g.id for g in groups), suffix=str(len(groups))),
                assignment_title=extract_title(title_line),
                presentation_time="",
                members=members,
            )
        )

    logger.info(
        "Parsed group text",
        extra={
            "groups_count": len(groups),
            "not_found_count": len(not_found),
            "duplicate_count": len(duplicates),
        },
    )
    return GroupParseResult(
        groups=groups, not_found_names=not_found, duplicate_names=duplicates
    )
