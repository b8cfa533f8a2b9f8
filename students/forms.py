from django import forms

from .services import DEFAULT_SCHEDULE_WINDOW, ScheduleWindow


class StudentSearchForm(forms.Form):
    q = forms.CharField(
        label="Cari Nama Saya",
        required=False,
        max_length=150,
        widget=forms.TextInput(attrs={"placeholder": "Cari Nama Saya...", "type": "search"}),
    )
    range = forms.ChoiceField(
        label="Rentang",
        choices=ScheduleWindow.choices,
        required=False,
    )

    def clean_range(self):
        return self.cleaned_data.get("range") or DEFAULT_SCHEDULE_WINDOW
