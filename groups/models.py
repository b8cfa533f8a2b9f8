"""Per-course records holding a course and its full group list."""

from django.db import models


class CourseGroupRecord(models.Model):
    """One course with its groups stored as nested JSON."""

    course_id = models.CharField(max_length=64, unique=True)
    course_data = models.JSONField(default=dict)
    groups_data = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["created_at", "id"]
        verbose_name = "Kelompok mata kuliah"
        verbose_name_plural = "Kelompok mata kuliah"

    def __str__(self) -> str:  # pragma: no cover - simple representation
        return self.course_data.get("name") or self.course_id
