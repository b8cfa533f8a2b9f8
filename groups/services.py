"""In-memory courses, groups and members, and the edits allowed on them.

``GroupStore`` holds one ``GeneratedGroup`` per course. It never touches the
database; ``groups.persistence`` loads it from and writes it back to the
record store.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Sequence

from django.conf import settings
from django.utils import timezone, translation
from django.utils.dateparse import parse_date, parse_datetime
from django.utils.formats import date_format

from roster.services import Student, normalize_name

logger = logging.getLogger(__name__)

DEFAULT_MEMBER_ROLE = "Anggota"
DISPLAY_DATE_FORMAT = "l, j F Y"
UNSET_DATE_LABEL = "Belum diatur"
EDITABLE_COURSE_FIELDS = ("name", "assignment_notes")


class GroupStoreError(Exception):
    """Raised when an edit refers to something that does not exist."""


class DuplicateMemberError(GroupStoreError):
    """Raised when a student is already in a group of the same course."""

    def __init__(self, student: Student, group_number: int):
        self.student = student
        self.group_number = group_number
        super().__init__(
            f"{student.name} sudah terdaftar di Kelompok {group_number}."
        )


@dataclass
class Course:
    id: str
    name: str = ""
    assignment_notes: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "assignment_notes": self.assignment_notes,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Course":
        return cls(
            id=str(data["id"]),
            name=data.get("name") or "",
            assignment_notes=data.get("assignment_notes") or "",
        )


@dataclass
class Member:
    student: Student
    role: str = DEFAULT_MEMBER_ROLE

    def to_dict(self) -> dict:
        return {"student": self.student.to_dict(), "role": self.role}

    @classmethod
    def from_dict(cls, data: dict) -> "Member":
        return cls(
            student=Student.from_dict(data.get("student") or {}),
            role=data.get("role") or DEFAULT_MEMBER_ROLE,
        )


@dataclass
class Group:
    id: str
    assignment_title: str = ""
    presentation_time: str = ""
    members: list[Member] = field(default_factory=list)

    @property
    def presentation_date(self) -> date | None:
        return parse_presentation_date(self.presentation_time)

    def has_student(self, student: Student) -> bool:
        wanted = normalize_name(student.name)
        return any(normalize_name(m.student.name) == wanted for m in self.members)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "assignment_title": self.assignment_title,
            "presentation_time": self.presentation_time,
            "members": [member.to_dict() for member in self.members],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Group":
        return cls(
            id=str(data["id"]),
            assignment_title=data.get("assignment_title") or "",
            presentation_time=data.get("presentation_time") or "",
            members=[Member.from_dict(item) for item in data.get("members") or []],
        )


@dataclass
class GeneratedGroup:
    course: Course
    groups: list[Group] = field(default_factory=list)

    def numbered_groups(self) -> Iterable[tuple[int, Group]]:
        return enumerate(self.groups, start=1)

    def groups_data(self) -> list[dict]:
        return [group.to_dict() for group in self.groups]


def parse_presentation_date(value: str | None) -> date | None:
    """Return the calendar date of a stored presentation time, if any.

    Accepts ``YYYY-MM-DD`` and ISO datetimes; anything else counts as unset.
    """

    if not value or not value.strip():
        return None
    value = value.strip()
    try:
        parsed = parse_date(value)
        if parsed is not None:
            return parsed
        parsed_dt = parse_datetime(value)
    except ValueError:
        return None
    return parsed_dt.date() if parsed_dt is not None else None


def format_display_date(value: str | None, empty: str = "") -> str:
    """Render a presentation time as a long local date, e.g. "Senin, 4 Maret 2024".

    Empty values become ``empty``; values that are not dates are returned as is.
    """

    if not value or not value.strip():
        return empty
    parsed = parse_presentation_date(value)
    if parsed is None:
        return value
    with translation.override(settings.DISPLAY_DATE_LANGUAGE):
        return date_format(parsed, DISPLAY_DATE_FORMAT)


def timestamp_id(taken: Iterable[str] = (), suffix: str | None = None) -> str:
    """Build an id from the current time in milliseconds, unique among ``taken``."""

    taken = set(taken)
    stamp = int(timezone.now().timestamp() * 1000)
    while True:
        candidate = str(stamp) if suffix is None else f"{stamp}-{suffix}"
        if candidate not in taken:
            return candidate
        stamp += 1


class GroupStore:
    """Ordered list of courses, each owning its ordered groups."""

    def __init__(self, entries: Sequence[GeneratedGroup] | None = None):
        self.entries: list[GeneratedGroup] = list(entries or [])

    @classmethod
    def from_records(cls, records: Iterable[dict]) -> "GroupStore":
        entries = []
        for record in records:
            course = Course.from_dict(record["course_data"])
            groups = [Group.from_dict(item) for item in record.get("groups_data") or []]
            entries.append(GeneratedGroup(course=course, groups=groups))
        return cls(entries)

    @property
    def courses(self) -> list[Course]:
        return [entry.course for entry in self.entries]

    def get_entry(self, course_id: str) -> GeneratedGroup:
        for entry in self.entries:
            if entry.course.id == course_id:
                return entry
        raise GroupStoreError(f"Mata kuliah {course_id} tidak ditemukan.")

    def get_group(self, course_id: str, group_index: int) -> Group:
        groups = self.get_entry(course_id).groups
        if not 0 <= group_index < len(groups):
            raise GroupStoreError(f"Kelompok {group_index + 1} tidak ditemukan.")
        return groups[group_index]

    def _get_member(self, course_id: str, group_index: int, member_index: int) -> Member:
        members = self.get_group(course_id, group_index).members
        if not 0 <= member_index < len(members):
            raise GroupStoreError("Anggota tidak ditemukan.")
        return members[member_index]

    # Courses

    def add_course(self) -> Course:
        course = Course(id=timestamp_id(c.id for c in self.courses))
        self.entries.append(GeneratedGroup(course=course))
        return course

    def remove_course(self, course_id: str) -> None:
        entry = self.get_entry(course_id)
        self.entries.remove(entry)

    def edit_course_field(self, course_id: str, field_name: str, value: str) -> Course:
        if field_name not in EDITABLE_COURSE_FIELDS:
            raise GroupStoreError(f"Kolom {field_name!r} tidak dapat diubah.")
        course = self.get_entry(course_id).course
        setattr(course, field_name, value)
        return course

    # Groups

    def add_group(self, course_id: str) -> Group:
        entry = self.get_entry(course_id)
        group = Group(id=timestamp_id(g.id for g in entry.groups))
        entry.groups.append(group)
        return group

    def remove_group(self, course_id: str, group_index: int) -> Group:
        group = self.get_group(course_id, group_index)
        self.get_entry(course_id).groups.pop(group_index)
        return group

    def edit_group_title(self, course_id: str, group_index: int, title: str) -> Group:
        group = self.get_group(course_id, group_index)
        group.assignment_title = title
        return group

    def edit_group_presentation_time(
        self, course_id: str, group_index: int, presentation_time: str
    ) -> Group:
        group = self.get_group(course_id, group_index)
        group.presentation_time = presentation_time or ""
        return group

    def sort_groups_by_presentation_time(self, course_id: str) -> list[Group]:
        entry = self.get_entry(course_id)

        def sort_key(group: Group):
            presentation_date = group.presentation_date
            return (presentation_date is None, presentation_date or date.min)

        entry.groups = sorted(entry.groups, key=sort_key)
        return entry.groups

    def replace_groups(self, course_id: str, groups: Sequence[Group]) -> list[Group]:
        entry = self.get_entry(course_id)
        entry.groups = list(groups)
        return entry.groups

    # Members

    def find_student_group(self, course_id: str, student: Student) -> int | None:
        """Return the 0-based index of the group holding ``student``, if any."""

        for index, group in enumerate(self.get_entry(course_id).groups):
            if group.has_student(student):
                return index
        return None

    def add_member(self, course_id: str, group_index: int, student: Student) -> Member:
        group = self.get_group(course_id, group_index)
        existing = self.find_student_group(course_id, student)
        if existing is not None:
            logger.info(
                "Rejected duplicate member",
                extra={"course_id": course_id, "student": student.name},
            )
            raise DuplicateMemberError(student, existing + 1)
        member = Member(student=student)
        group.members.append(member)
        return member

    def remove_member(self, course_id: str, group_index: int, member_index: int) -> Member:
        member = self._get_member(course_id, group_index, member_index)
        self.get_group(course_id, group_index).members.pop(member_index)
        return member

    def edit_member_role(
        self, course_id: str, group_index: int, member_index: int, role: str
    ) -> Member:
        member = self._get_member(course_id, group_index, member_index)
        member.role = role
        return member

    def available_students(self, course_id: str, roster: Iterable[Student]) -> list[Student]:
        """Roster students not yet placed in any group of the course."""

        entry = self.get_entry(course_id)
        assigned = {
            normalize_name(member.student.name)
            for group in entry.groups
            for member in group.members
        }
        return [s for s in roster if normalize_name(s.name) not in assigned]
