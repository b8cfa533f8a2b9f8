from rest_framework import permissions, status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import APIView

from groups.persistence import load_board

from ..services import search_by_student_name, upcoming_presentations
from .serializers import (
    ScheduleDaySerializer,
    ScheduleQuerySerializer,
    SearchQuerySerializer,
    SearchResultSerializer,
)


class BoardUnavailable(APIException):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = "Data kelompok gagal dimuat. Coba lagi sebentar lagi."
    default_code = "board_unavailable"


def _store():
    board = load_board()
    if not board.loaded:
        raise BoardUnavailable()
    return board.store


class SearchView(APIView):
    permission_classes = [permissions.AllowAny]

    def get(self, request, *args, **kwargs):
        query = SearchQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        results = search_by_student_name(query.validated_data["q"], _store())
        return Response(SearchResultSerializer(results, many=True).data)


class ScheduleView(APIView):
    permission_classes = [permissions.AllowAny]

    def get(self, request, *args, **kwargs):
        query = ScheduleQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        days = upcoming_presentations(_store(), query.validated_data["range"])
        return Response(ScheduleDaySerializer(days, many=True).data)
