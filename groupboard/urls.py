"""
URL configuration for the groupboard project.

The public page (search and presentation schedule) lives at the site root;
everything that edits data sits behind the static admin gate in `accounts`.
"""
from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path('', include(('students.urls', 'students'), namespace='students')),
    path('admin/', admin.site.urls),
    path('accounts/', include(('accounts.urls', 'accounts'), namespace='accounts')),
    path('panel/', include(('groups.urls', 'groups'), namespace='groups')),
    path('roster/', include(('roster.urls', 'roster'), namespace='roster')),
    path('generate/', include(('group_parser.urls', 'group_parser'), namespace='group_parser')),

    path('api/', include(('students.api.urls', 'students_api'), namespace='students_api')),
]
