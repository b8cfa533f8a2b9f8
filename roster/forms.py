from django import forms


class RosterForm(forms.Form):
    text = forms.CharField(
        label="Daftar Mahasiswa",
        required=False,
        strip=False,
        help_text="Satu mahasiswa per baris. Format: Nama,Email.",
        widget=forms.Textarea(attrs={"rows": 10}),
    )
