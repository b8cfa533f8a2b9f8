from __future__ import annotations

from functools import cached_property

from django.contrib import messages
from django.urls import reverse_lazy
from django.views.generic import FormView

from accounts.decorators import AdminRequiredMixin
from groups.persistence import GroupBoard, load_board
from groups.services import GroupStoreError

from .forms import GenerateGroupsForm
from .services import parse_and_generate


class GenerateGroupsView(AdminRequiredMixin, FormView):
    template_name = "group_parser/generate.html"
    form_class = GenerateGroupsForm
    success_url = reverse_lazy("groups:panel")

    @cached_property
    def board(self) -> GroupBoard:
        return load_board(self.request)

    def get_form_kwargs(self):
        kwargs = super().get_form_kwargs()
        kwargs["courses"] = self.board.store.courses
        return kwargs

    def get_initial(self):
        initial = super().get_initial()
        course_id = self.request.GET.get("course")
        if course_id:
            initial["course"] = course_id
        return initial

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["roster_count"] = len(self.board.roster)
        return context

    def form_valid(self, form: GenerateGroupsForm):
        course_id = form.cleaned_data["course"]
        result = parse_and_generate(form.cleaned_data["text"], self.board.roster)
        try:
            self.board.store.replace_groups(course_id, result.groups)
        except GroupStoreError as exc:
            messages.error(self.request, str(exc))
            return super().form_valid(form)

        if self.board.save_course(course_id):
            messages.success(
                self.request,
                f"Berhasil membuat {result.groups_count} kelompok.",
            )
        else:
            messages.warning(
                self.request,
                f"{result.groups_count} kelompok dibuat tetapi gagal disimpan.",
            )
        if result.not_found_names:
            messages.warning(
                self.request,
                "Nama berikut tidak ditemukan di daftar mahasiswa: "
                + ", ".join(result.not_found_names),
            )
        if result.duplicate_names:
            messages.warning(
                self.request,
                "Nama berikut muncul lebih dari sekali dan hanya dimasukkan sekali: "
                + ", ".join(result.duplicate_names),
            )
        return super().form_valid(form)
