from __future__ import annotations

from uuid import uuid4

from groups.persistence import GroupBoard
from groups.services import Course, GeneratedGroup, Group, GroupStore, Member
from roster.services import Student


def make_group(
    title: str = "",
    members: list[str | Student] | None = None,
    presentation_time: str = "",
    group_id: str | None = None,
) -> Group:
    member_objs = []
    for member in members or []:
        student = member if isinstance(member, Student) else Student(member)
        member_objs.append(Member(student=student))
    return Group(
        id=group_id or uuid4().hex,
        assignment_title=title,
        presentation_time=presentation_time,
        members=member_objs,
    )


def make_entry(
    name: str,
    groups: list[Group] | None = None,
    notes: str = "",
    course_id: str | None = None,
) -> GeneratedGroup:
    course = Course(id=course_id or uuid4().hex, name=name, assignment_notes=notes)
    return GeneratedGroup(course=course, groups=list(groups or []))


def make_store(*entries: GeneratedGroup) -> GroupStore:
    return GroupStore(list(entries))


def save_board(store: GroupStore, roster_text: str = "") -> GroupBoard:
    """Write ``store`` and the roster through the real record store."""

    board = GroupBoard()
    board.store = store
    board.save_roster_text(roster_text)
    for entry in store.entries:
        board.save_course(entry.course.id)
    return board
