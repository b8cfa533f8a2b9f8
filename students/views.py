"""Public page: find your own group and see upcoming presentations."""

from django.shortcuts import render

from groups.persistence import load_board

from .forms import StudentSearchForm
from .services import (
    DEFAULT_SCHEDULE_WINDOW,
    ScheduleWindow,
    search_by_student_name,
    upcoming_presentations,
)


def home(request):
    form = StudentSearchForm(request.GET or None)
    term = ""
    window = DEFAULT_SCHEDULE_WINDOW
    if form.is_bound:
        form.is_valid()
        term = form.cleaned_data.get("q", "")
        window = form.cleaned_data.get("range", DEFAULT_SCHEDULE_WINDOW)

    store = load_board(request).store
    context = {
        "form": form,
        "term": term,
        "window": window,
        "windows": ScheduleWindow.choices,
        "results": search_by_student_name(term, store),
        "schedule": upcoming_presentations(store, window),
    }
    return render(request, "students/home.html", context)
