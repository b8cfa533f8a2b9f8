"""Views for the admin panel that edits courses, groups and members."""

import logging
from functools import wraps

from django.conf import settings
from django.contrib import messages
from django.http import Http404, HttpResponse
from django.shortcuts import redirect, render
from django.utils.http import content_disposition_header
from django.views.decorators.http import require_POST

from accounts.decorators import admin_required
from roster.services import match_student

from . import exports
from .forms import ConfirmForm, CourseForm, GroupForm, MemberAddForm, MemberRoleForm
from .persistence import load_board
from .services import GroupStoreError

logger = logging.getLogger(__name__)

UNSAVED_WARNING = "Perubahan diterapkan tetapi gagal disimpan. Coba lagi sebentar lagi."
NOT_LOADED_WARNING = "Perubahan tidak diterapkan karena data gagal dimuat."


def board_view(view_func):
    """Pass the loaded board to the view; back to the panel if loading failed."""

    @wraps(view_func)
    def _wrapped(request, *args, **kwargs):
        board = load_board()
        if not board.loaded:
            messages.warning(request, NOT_LOADED_WARNING)
            return redirect("groups:panel")
        return view_func(request, board, *args, **kwargs)

    return _wrapped


def _warn_unsaved(request, saved: bool) -> None:
    if not saved:
        messages.warning(request, UNSAVED_WARNING)


def _back_to_course(course_id: str):
    response = redirect("groups:panel")
    response["Location"] += f"#course-{course_id}"
    return response


def _edit_course(request, board, course_id: str, operation, success: str | None = None):
    """Apply ``operation`` to the in-memory store, then persist the course."""

    try:
        operation(board.store)
    except GroupStoreError as exc:
        messages.error(request, str(exc))
    else:
        _warn_unsaved(request, board.save_course(course_id))
        if success:
            messages.success(request, success)
    return _back_to_course(course_id)


@admin_required
def panel(request):
    """Show the roster editor and every course with its groups."""

    board = load_board(request)
    roster = board.roster
    course_data = []
    for entry in board.store.entries:
        available = board.store.available_students(entry.course.id, roster)
        course_data.append(
            {
                "entry": entry,
                "course_form": CourseForm(
                    initial={
                        "name": entry.course.name,
                        "assignment_notes": entry.course.assignment_notes,
                    },
                    prefix=f"course-{entry.course.id}",
                ),
                "groups": [
                    {
                        "index": index,
                        "number": index + 1,
                        "group": group,
                        "form": GroupForm(
                            initial={
                                "assignment_title": group.assignment_title,
                                "presentation_time": group.presentation_time,
                            },
                            prefix=f"group-{group.id}",
                        ),
                        "member_form": MemberAddForm(
                            students=available, prefix=f"member-{group.id}"
                        ),
                    }
                    for index, group in enumerate(entry.groups)
                ],
                "available_count": len(available),
            }
        )
    context = {
        "roster_text": board.roster_text,
        "roster_count": len(roster),
        "course_data": course_data,
        "roster_autosave_delay": settings.ROSTER_AUTOSAVE_DELAY_MS,
    }
    return render(request, "groups/panel.html", context)


@admin_required
@require_POST
@board_view
def reset(request, board):
    form = ConfirmForm(request.POST)
    if not form.is_valid():
        messages.error(request, "Reset dibatalkan: konfirmasi belum dicentang.")
        return redirect("groups:panel")
    if board.reset():
        messages.success(request, "Semua data telah direset.")
    else:
        _warn_unsaved(request, False)
    return redirect("groups:panel")


@admin_required
@require_POST
@board_view
def course_add(request, board):
    course = board.store.add_course()
    _warn_unsaved(request, board.save_course(course.id))
    return _back_to_course(course.id)


@admin_required
@require_POST
@board_view
def course_edit(request, board, course_id):
    form = CourseForm(request.POST, prefix=f"course-{course_id}")
    if not form.is_valid():
        messages.error(request, "Data mata kuliah tidak valid.")
        return _back_to_course(course_id)

    def operation(store):
        for field_name in ("name", "assignment_notes"):
            store.edit_course_field(course_id, field_name, form.cleaned_data[field_name])

    return _edit_course(request, board, course_id, operation)


@admin_required
@require_POST
@board_view
def course_remove(request, board, course_id):
    try:
        board.store.remove_course(course_id)
    except GroupStoreError as exc:
        messages.error(request, str(exc))
    else:
        _warn_unsaved(request, board.delete_courses([course_id]))
    return redirect("groups:panel")


@admin_required
@require_POST
@board_view
def group_add(request, board, course_id):
    return _edit_course(request, board, course_id, lambda store: store.add_group(course_id))


@admin_required
@require_POST
@board_view
def groups_sort(request, board, course_id):
    return _edit_course(
        request,
        board,
        course_id,
        lambda store: store.sort_groups_by_presentation_time(course_id),
        success="Kelompok diurutkan berdasarkan tanggal presentasi.",
    )


@admin_required
@require_POST
@board_view
def group_edit(request, board, course_id, group_index):
    try:
        group = board.store.get_group(course_id, group_index)
    except GroupStoreError as exc:
        messages.error(request, str(exc))
        return _back_to_course(course_id)

    form = GroupForm(request.POST, prefix=f"group-{group.id}")
    if not form.is_valid():
        messages.error(request, "Data kelompok tidak valid.")
        return _back_to_course(course_id)

    board.store.edit_group_title(course_id, group_index, form.cleaned_data["assignment_title"])
    board.store.edit_group_presentation_time(
        course_id, group_index, form.cleaned_data["presentation_time"]
    )
    _warn_unsaved(request, board.save_course(course_id))
    return _back_to_course(course_id)


@admin_required
@require_POST
@board_view
def group_remove(request, board, course_id, group_index):
    form = ConfirmForm(request.POST)
    if not form.is_valid():
        messages.error(
            request, f"Kelompok {group_index + 1} tidak dihapus: konfirmasi belum dicentang."
        )
        return _back_to_course(course_id)
    return _edit_course(
        request,
        board,
        course_id,
        lambda store: store.remove_group(course_id, group_index),
        success=f"Kelompok {group_index + 1} dihapus.",
    )


@admin_required
@require_POST
@board_view
def member_add(request, board, course_id, group_index):
    try:
        group = board.store.get_group(course_id, group_index)
    except GroupStoreError as exc:
        messages.error(request, str(exc))
        return _back_to_course(course_id)

    roster = board.roster
    form = MemberAddForm(request.POST, students=roster, prefix=f"member-{group.id}")
    if not form.is_valid():
        messages.error(request, "Pilih mahasiswa dari daftar.")
        return _back_to_course(course_id)

    student = match_student(form.cleaned_data["student"], roster)
    if student is None:
        messages.error(request, "Mahasiswa tidak ada di daftar.")
        return _back_to_course(course_id)

    try:
        board.store.add_member(course_id, group_index, student)
    except GroupStoreError as exc:
        messages.error(request, str(exc))
    else:
        _warn_unsaved(request, board.save_course(course_id))
    return _back_to_course(course_id)


@admin_required
@require_POST
@board_view
def member_remove(request, board, course_id, group_index, member_index):
    return _edit_course(
        request,
        board,
        course_id,
        lambda store: store.remove_member(course_id, group_index, member_index),
    )


@admin_required
@require_POST
@board_view
def member_role(request, board, course_id, group_index, member_index):
    form = MemberRoleForm(request.POST)
    if not form.is_valid():
        messages.error(request, "Role tidak boleh kosong.")
        return _back_to_course(course_id)
    return _edit_course(
        request,
        board,
        course_id,
        lambda store: store.edit_member_role(
            course_id, group_index, member_index, form.cleaned_data["role"]
        ),
    )


def _csv_response(filename: str, content: str) -> HttpResponse:
    response = HttpResponse(content, content_type="text/csv; charset=utf-8")
    response["Content-Disposition"] = content_disposition_header(True, filename)
    return response


@admin_required
@board_view
def export_course(request, board, course_id):
    try:
        entry = board.store.get_entry(course_id)
    except GroupStoreError as exc:
        raise Http404(str(exc)) from exc
    filename, content = exports.export_course(entry)
    logger.info("Exported course", extra={"course_id": course_id, "csv_filename": filename})
    return _csv_response(filename, content)


@admin_required
@board_view
def export_all(request, board):
    filename, content = exports.export_all(board.store)
    logger.info("Exported all courses", extra={"courses_count": len(board.store.entries)})
    return _csv_response(filename, content)
