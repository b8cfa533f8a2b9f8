"""CSV exports of group assignments, per course and for all courses."""

from __future__ import annotations

import csv
import io
import re
from typing import Iterable, Sequence

from .services import Course, GeneratedGroup, GroupStore, format_display_date

CSV_BOM = "\ufeff"
ALL_COURSES_FILENAME = "rekap_semua_mahasiswa.csv"

# Control characters and path separators never reach a filename.
UNSAFE_FILENAME_CHARS = re.compile(r"[\x00-\x1f\x7f/\\]")

COURSE_HEADER = [
    "Mata Kuliah",
    "Judul Tugas",
    "Catatan Tugas",
    "Tanggal Presentasi",
    "No. Kelompok",
    "Nama",
    "Email",
    "Role",
]

ALL_COURSES_HEADER = [
    "Nama",
    "Email",
    "Mata Kuliah",
    "Judul Tugas",
    "Catatan Tugas",
    "Tanggal Presentasi",
    "Kelompok",
    "Role",
]


def course_export_filename(course: Course) -> str:
    name = UNSAFE_FILENAME_CHARS.sub("_", course.name.replace(" ", "_"))
    return f"kelompok-{name}.csv"


def course_rows(entry: GeneratedGroup) -> list[list]:
    """One row per member, in group order then member order."""

    course = entry.course
    rows = []
    for number, group in entry.numbered_groups():
        for member in group.members:
            rows.append(
                [
                    course.name,
                    group.assignment_title,
                    course.assignment_notes,
                    format_display_date(group.presentation_time),
                    number,
                    member.student.name,
                    member.student.email or "",
                    member.role,
                ]
            )
    return rows


def all_course_rows(store: GroupStore) -> list[list]:
    """Rows for every course, gathered per student.

    Students are keyed by email when they have one, by name otherwise, and
    appear in the order they are first met.
    """

    per_student: dict[str, tuple] = {}
    for entry in store.entries:
        course = entry.course
        for number, group in entry.numbered_groups():
            for member in group.members:
                key = member.student.email or member.student.name
                if key not in per_student:
                    per_student[key] = (member.student, [])
                per_student[key][1].append(
                    [
                        course.name,
                        group.assignment_title,
                        course.assignment_notes,
                        format_display_date(group.presentation_time),
                        number,
                        member.role,
                    ]
                )

    rows = []
    for student, assignments in per_student.values():
        for assignment in assignments:
            rows.append([student.name, student.email or ""] + assignment)
    return rows


def render_csv(header: Sequence[str], rows: Iterable[Sequence]) -> str:
    """Render rows with every field quoted and CRLF line endings, BOM first."""

    buffer = io.StringIO()
    buffer.write(CSV_BOM)
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\r\n")
    writer.writerow(header)
    writer.writerows(rows)
    return buffer.getvalue()


def export_course(entry: GeneratedGroup) -> tuple[str, str]:
    """Return ``(filename, content)`` for a single course."""

    return course_export_filename(entry.course), render_csv(COURSE_HEADER, course_rows(entry))


def export_all(store: GroupStore) -> tuple[str, str]:
    """Return ``(filename, content)`` for the recap across all courses."""

    return ALL_COURSES_FILENAME, render_csv(ALL_COURSES_HEADER, all_course_rows(store))
