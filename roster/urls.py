from django.urls import path

from . import views

app_name = "roster"

urlpatterns = [
    path("", views.save, name="save"),
    path("autosave/", views.autosave, name="autosave"),
]
