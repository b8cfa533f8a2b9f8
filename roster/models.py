"""Storage slot for the raw roster text."""

from django.db import models


class RosterText(models.Model):
    """The roster exactly as the administrator typed it."""

    DEFAULT_SLOT = "students"

    slot = models.CharField(max_length=50, unique=True, default=DEFAULT_SLOT)
    text = models.TextField(blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Daftar mahasiswa"
        verbose_name_plural = "Daftar mahasiswa"

    def __str__(self) -> str:  # pragma: no cover - simple representation
        return f"{self.slot} ({self.updated_at:%Y-%m-%d %H:%M})"
