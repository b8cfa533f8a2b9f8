"""Forms for the group editing panel."""

from django import forms


class CourseForm(forms.Form):
    name = forms.CharField(label="Nama Mata Kuliah", max_length=255, required=False)
    assignment_notes = forms.CharField(
        label="Catatan Tugas", required=False, widget=forms.Textarea(attrs={"rows": 2})
    )


class GroupForm(forms.Form):
    assignment_title = forms.CharField(
        label="Judul Tugas Kelompok", max_length=255, required=False
    )
    presentation_time = forms.CharField(
        label="Tanggal Presentasi",
        max_length=32,
        required=False,
        widget=forms.DateInput(attrs={"type": "date"}),
    )


class MemberAddForm(forms.Form):
    student = forms.ChoiceField(label="Anggota", choices=())

    def __init__(self, *args, students=(), **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["student"].choices = [("", "-- Pilih Anggota --")] + [
            (student.name, student.name) for student in students
        ]


class MemberRoleForm(forms.Form):
    role = forms.CharField(label="Role", max_length=100)


class ConfirmForm(forms.Form):
    """Destructive actions need an explicit tick."""

    confirm = forms.BooleanField(
        label="Saya yakin",
        error_messages={"required": "Centang konfirmasi untuk melanjutkan."},
    )
