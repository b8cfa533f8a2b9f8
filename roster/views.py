"""Saving the roster text from the admin panel."""

from django.contrib import messages
from django.http import JsonResponse
from django.shortcuts import redirect
from django.views.decorators.http import require_POST

from accounts.decorators import admin_required
from groups.persistence import GroupBoard

from .forms import RosterForm
from .services import parse_roster


@admin_required
@require_POST
def save(request):
    form = RosterForm(request.POST)
    if form.is_valid():
        board = GroupBoard(load=False)
        if board.save_roster_text(form.cleaned_data["text"]):
            messages.success(
                request, f"Daftar mahasiswa disimpan ({len(board.roster)} mahasiswa)."
            )
        else:
            messages.warning(request, "Daftar mahasiswa gagal disimpan.")
    return redirect("groups:panel")


@admin_required
@require_POST
def autosave(request):
    """Store the textarea contents once typing has paused."""

    form = RosterForm(request.POST)
    if not form.is_valid():
        return JsonResponse({"saved": False, "errors": form.errors}, status=400)
    text = form.cleaned_data["text"]
    saved = GroupBoard(load=False).save_roster_text(text)
    return JsonResponse(
        {"saved": saved, "students_count": len(parse_roster(text))},
        status=200 if saved else 503,
    )
