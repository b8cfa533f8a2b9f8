from django import forms


class GenerateGroupsForm(forms.Form):
    course = forms.ChoiceField(label="Mata Kuliah", choices=())
    text = forms.CharField(
        label="Teks Kelompok",
        help_text=(
            "Pisahkan setiap kelompok dengan baris kosong. Baris pertama adalah "
            "judul tugas, baris berikutnya nama anggota."
        ),
        widget=forms.Textarea(attrs={"rows": 14}),
    )
    confirm = forms.BooleanField(
        label="Ganti semua kelompok yang sudah ada pada mata kuliah ini",
        error_messages={"required": "Centang konfirmasi untuk mengganti kelompok."},
    )

    def __init__(self, *args, courses=(), **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["course"].choices = [
            (course.id, course.name or f"(tanpa nama) {course.id}") for course in courses
        ]
