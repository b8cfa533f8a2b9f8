from rest_framework import serializers

from ..services import DEFAULT_SCHEDULE_WINDOW, ScheduleWindow


class StudentSerializer(serializers.Serializer):
    name = serializers.CharField()
    email = serializers.CharField(allow_null=True)


class MemberSerializer(serializers.Serializer):
    student = StudentSerializer()
    role = serializers.CharField()


class SearchResultSerializer(serializers.Serializer):
    course_name = serializers.CharField()
    assignment_title = serializers.CharField()
    assignment_notes = serializers.CharField()
    group_number = serializers.IntegerField()
    student_role = serializers.CharField()
    group_members = MemberSerializer(many=True)
    presentation_time = serializers.CharField()
    presentation_label = serializers.CharField(read_only=True)


class UpcomingPresentationSerializer(serializers.Serializer):
    date = serializers.DateField()
    course_name = serializers.CharField()
    assignment_title = serializers.CharField()
    group_number = serializers.IntegerField()
    group_members = MemberSerializer(many=True)


class ScheduleDaySerializer(serializers.Serializer):
    label = serializers.CharField()
    presentations = UpcomingPresentationSerializer(many=True)


class SearchQuerySerializer(serializers.Serializer):
    q = serializers.CharField(required=False, allow_blank=True, default="", trim_whitespace=False)


class ScheduleQuerySerializer(serializers.Serializer):
    range = serializers.ChoiceField(
        choices=ScheduleWindow.choices, required=False, default=DEFAULT_SCHEDULE_WINDOW
    )
