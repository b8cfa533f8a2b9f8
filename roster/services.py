"""Parsing and matching of the student roster.

The roster is pasted by the administrator as plain text, one student per
line in the form ``Name[,Email]``. Parsing is best effort: lines that do not
yield a name are dropped without raising.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable


@dataclass(frozen=True)
class Student:
    name: str
    email: str | None = None

    def to_dict(self) -> dict:
        return {"name": self.name, "email": self.email}

    @classmethod
    def from_dict(cls, data: dict) -> "Student":
        return cls(name=data.get("name") or "", email=data.get("email") or None)


def normalize_name(name: str) -> str:
    """Return the form of a name used for equality checks."""

    return name.strip().lower()


def parse_roster(text: str) -> list[Student]:
    """Turn roster text into students, keeping the input order."""

    students: list[Student] = []
    text = (text or "").replace("\r\n", "\n").replace("\r", "\n")
    for raw_line in text.split("\n"):
        line = raw_line.strip()
        if not line:
            continue
        name, _, email = line.partition(",")
        name = name.strip()
        if not name:
            continue
        students.append(Student(name=name, email=email.strip() or None))
    return students


def match_student(candidate: str, roster: Iterable[Student]) -> Student | None:
    """Return the first roster student whose name equals ``candidate``.

    Comparison ignores case and surrounding whitespace. Duplicate names in the
    roster cannot be told apart, so the earliest entry wins.
    """

    wanted = normalize_name(candidate)
    for student in roster:
        if normalize_name(student.name) == wanted:
            return student
    return None
