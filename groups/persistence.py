"""Record store for the roster slot and per-course group records.

The in-memory model is always updated first; writes here are side effects.
A failed write is logged and reported back as ``False`` so the caller can
warn the administrator, but the in-memory change is kept.
"""

from __future__ import annotations

import logging
from typing import Iterable, TypedDict

from django.conf import settings
from django.contrib import messages
from django.db import DatabaseError

from roster.models import RosterText
from roster.services import Student, parse_roster

from .models import CourseGroupRecord
from .services import GroupStore

logger = logging.getLogger(__name__)

LOAD_FAILED_WARNING = "Data kelompok gagal dimuat. Coba muat ulang halaman sebentar lagi."


class PersistenceError(Exception):
    """Raised when the record store cannot be read or written."""


class CourseGroupData(TypedDict):
    course_id: str
    course_data: dict
    groups_data: list


class RecordStore:
    """Database-backed store with one roster slot and one record per course."""

    def __init__(self, slot: str = RosterText.DEFAULT_SLOT):
        self.slot = slot

    def load_roster_text(self) -> str:
        try:
            record = RosterText.objects.filter(slot=self.slot).first()
        except DatabaseError as exc:
            raise PersistenceError("Gagal memuat daftar mahasiswa") from exc
        if record is None:
            return settings.DEFAULT_ROSTER_TEXT
        return record.text

    def save_roster_text(self, text: str) -> None:
        try:
            RosterText.objects.update_or_create(slot=self.slot, defaults={"text": text})
        except DatabaseError as exc:
            raise PersistenceError("Gagal menyimpan daftar mahasiswa") from exc

    def load_all_course_groups(self) -> list[CourseGroupData]:
        try:
            records = list(CourseGroupRecord.objects.all())
        except DatabaseError as exc:
            raise PersistenceError("Gagal memuat data kelompok") from exc
        return [
            {
                "course_id": record.course_id,
                "course_data": record.course_data,
                "groups_data": record.groups_data,
            }
            for record in records
        ]

    def upsert_course_group(self, course_id: str, course_data: dict, groups_data: list) -> None:
        try:
            CourseGroupRecord.objects.update_or_create(
                course_id=course_id,
                defaults={"course_data": course_data, "groups_data": groups_data},
            )
        except DatabaseError as exc:
            raise PersistenceError(f"Gagal menyimpan mata kuliah {course_id}") from exc

    def delete_course_groups(self, ids: Iterable[str]) -> None:
        try:
            CourseGroupRecord.objects.filter(course_id__in=list(ids)).delete()
        except DatabaseError as exc:
            raise PersistenceError("Gagal menghapus data kelompok") from exc

    def delete_all_course_groups(self) -> None:
        try:
            CourseGroupRecord.objects.all().delete()
        except DatabaseError as exc:
            raise PersistenceError("Gagal menghapus data kelompok") from exc


class GroupBoard:
    """Roster and course groups for one request, backed by a record store.

    With ``load=False`` the board starts empty and only writes.
    """

    def __init__(self, records: RecordStore | None = None, load: bool = True):
        self.records = records or RecordStore()
        self.roster_text = ""
        self.store = GroupStore()
        self.loaded = False
        if load:
            self.roster_text = self.records.load_roster_text()
            self.store = GroupStore.from_records(self.records.load_all_course_groups())
            self.loaded = True

    @property
    def roster(self) -> list[Student]:
        return parse_roster(self.roster_text)

    def save_course(self, course_id: str) -> bool:
        entry = self.store.get_entry(course_id)
        try:
            self.records.upsert_course_group(
                course_id, entry.course.to_dict(), entry.groups_data()
            )
        except PersistenceError:
            logger.exception("Failed to persist course", extra={"course_id": course_id})
            return False
        logger.debug(
            "Course persisted",
            extra={"course_id": course_id, "groups_count": len(entry.groups)},
        )
        return True

    def delete_courses(self, ids: Iterable[str]) -> bool:
        ids = list(ids)
        try:
            self.records.delete_course_groups(ids)
        except PersistenceError:
            logger.exception("Failed to delete courses", extra={"course_ids": ids})
            return False
        return True

    def save_roster_text(self, text: str) -> bool:
        self.roster_text = text
        try:
            self.records.save_roster_text(text)
        except PersistenceError:
            logger.exception("Failed to persist roster text")
            return False
        return True

    def reset(self) -> bool:
        """Drop every course and restore the default roster.

        The two writes are independent; if the second one fails the courses
        are already gone.
        """

        self.store = GroupStore()
        self.roster_text = settings.DEFAULT_ROSTER_TEXT
        try:
            self.records.delete_all_course_groups()
            self.records.save_roster_text(self.roster_text)
        except PersistenceError:
            logger.exception("Reset did not complete")
            return False
        logger.info("Board reset to defaults")
        return True


def load_board(request=None) -> GroupBoard:
    """Load the board, falling back to an empty one when the store is down.

    The failure is logged and, given a request, reported with a warning
    message so the page still renders.
    """

    try:
        return GroupBoard()
    except PersistenceError:
        logger.exception("Failed to load board")
        if request is not None:
            messages.warning(request, LOAD_FAILED_WARNING)
        return GroupBoard(load=False)
