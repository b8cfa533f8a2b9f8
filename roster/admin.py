from django.contrib import admin

from .models import RosterText


@admin.register(RosterText)
class RosterTextAdmin(admin.ModelAdmin):
    list_display = ("slot", "updated_at")
    readonly_fields = ("updated_at",)
