from django.urls import path

from .views import GenerateGroupsView

app_name = "group_parser"

urlpatterns = [
    path("", GenerateGroupsView.as_view(), name="generate"),
]
