"""URL patterns for the group editing panel."""

from django.urls import path

from . import views

app_name = "groups"

urlpatterns = [
    path("", views.panel, name="panel"),
    path("reset/", views.reset, name="reset"),
    path("export/", views.export_all, name="export_all"),
    path("courses/add/", views.course_add, name="course_add"),
    path("courses/<str:course_id>/", views.course_edit, name="course_edit"),
    path("courses/<str:course_id>/remove/", views.course_remove, name="course_remove"),
    path("courses/<str:course_id>/export/", views.export_course, name="export_course"),
    path("courses/<str:course_id>/groups/add/", views.group_add, name="group_add"),
    path("courses/<str:course_id>/groups/sort/", views.groups_sort, name="groups_sort"),
    path(
        "courses/<str:course_id>/groups/<int:group_index>/",
        views.group_edit,
        name="group_edit",
    ),
    path(
        "courses/<str:course_id>/groups/<int:group_index>/remove/",
        views.group_remove,
        name="group_remove",
    ),
    path(
        "courses/<str:course_id>/groups/<int:group_index>/members/add/",
        views.member_add,
        name="member_add",
    ),
    path(
        "courses/<str:course_id>/groups/<int:group_index>/members/<int:member_index>/",
        views.member_role,
        name="member_role",
    ),
    path(
        "courses/<str:course_id>/groups/<int:group_index>/members/<int:member_index>/remove/",
        views.member_remove,
        name="member_remove",
    ),
]
