from django.urls import path

from .views import ScheduleView, SearchView

urlpatterns = [
    path("search/", SearchView.as_view(), name="search"),
    path("schedule/", ScheduleView.as_view(), name="schedule"),
]
