"""URL configuration for the students app."""

from django.urls import path

from .views import home

app_name = "students"

urlpatterns = [
    path("", home, name="home"),
]
