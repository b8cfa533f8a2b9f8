"""Admin configuration for groups app."""

from django.contrib import admin

from .models import CourseGroupRecord


@admin.register(CourseGroupRecord)
class CourseGroupRecordAdmin(admin.ModelAdmin):
    list_display = ("course_id", "__str__", "updated_at")
    search_fields = ("course_id",)
    readonly_fields = ("created_at", "updated_at")
