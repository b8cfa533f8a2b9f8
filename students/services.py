"""Read-only views computed from the group store: search and schedule."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta

from django.db import models
from django.utils import timezone

from groups.services import (
    GroupStore,
    Member,
    UNSET_DATE_LABEL,
    format_display_date,
)


class ScheduleWindow(models.TextChoices):
    TODAY = "today", "Hari Ini"
    NEXT_3_DAYS = "3days", "3 Hari"
    NEXT_7_DAYS = "7days", "Minggu Ini"
    ALL = "all", "Semua"


DEFAULT_SCHEDULE_WINDOW = ScheduleWindow.NEXT_7_DAYS

WINDOW_OFFSET_DAYS = {
    ScheduleWindow.TODAY: 0,
    ScheduleWindow.NEXT_3_DAYS: 3,
    ScheduleWindow.NEXT_7_DAYS: 7,
}


@dataclass
class SearchResult:
    course_name: str
    assignment_title: str
    assignment_notes: str
    group_number: int
    student_role: str
    group_members: list[Member]
    presentation_time: str = ""

    @property
    def presentation_label(self) -> str:
        return format_display_date(self.presentation_time, empty=UNSET_DATE_LABEL)


@dataclass
class UpcomingPresentation:
    date: date
    presentation_time: str
    course_name: str
    assignment_title: str
    group_number: int
    group_members: list[Member]


@dataclass
class ScheduleDay:
    label: str
    presentations: list[UpcomingPresentation] = field(default_factory=list)


def search_by_student_name(term: str, store: GroupStore) -> list[SearchResult]:
    """Find the groups whose members' names contain ``term``.

    One result per matching group, carrying the role of the first member that
    matched, in course then group order. A blank term yields nothing.
    """

    needle = (term or "").strip().lower()
    if not needle:
        return []

    results: list[SearchResult] = []
    for entry in store.entries:
        for number, group in entry.numbered_groups():
            found = next(
                (m for m in group.members if needle in m.student.name.lower()), None
            )
            if found is None:
                continue
            results.append(
                SearchResult(
                    course_name=entry.course.name,
                    assignment_title=group.assignment_title,
                    assignment_notes=entry.course.assignment_notes,
                    group_number=number,
                    student_role=found.role,
                    group_members=list(group.members),
                    presentation_time=group.presentation_time,
                )
            )
    return results


def _today(now: datetime | date | None) -> date:
    if now is None:
        return timezone.localdate()
    if isinstance(now, datetime):
        if timezone.is_aware(now):
            return timezone.localtime(now).date()
        return now.date()
    return now


def upcoming_presentations(
    store: GroupStore,
    window: str = DEFAULT_SCHEDULE_WINDOW,
    now: datetime | date | None = None,
) -> list[ScheduleDay]:
    """Dated groups from today on, within ``window``, bucketed by display date.

    Groups without a usable date are never upcoming.
    """

    window = ScheduleWindow(window)
    today = _today(now)
    last_day = None
    if window != ScheduleWindow.ALL:
        last_day = today + timedelta(days=WINDOW_OFFSET_DAYS[window])

    presentations: list[UpcomingPresentation] = []
    for entry in store.entries:
        for number, group in entry.numbered_groups():
            presentation_date = group.presentation_date
            if presentation_date is None or presentation_date < today:
                continue
            if last_day is not None and presentation_date > last_day:
                continue
            presentations.append(
                UpcomingPresentation(
                    date=presentation_date,
                    presentation_time=group.presentation_time,
                    course_name=entry.course.name,
                    assignment_title=group.assignment_title,
                    group_number=number,
                    group_members=list(group.members),
                )
            )

    # Same-day datetimes keep their time order.
    presentations.sort(key=lambda item: (item.date, item.presentation_time.strip()))

    days: dict[str, ScheduleDay] = {}
    for presentation in presentations:
        label = format_display_date(presentation.presentation_time)
        days.setdefault(label, ScheduleDay(label=label)).presentations.append(presentation)
    return list(days.values())
