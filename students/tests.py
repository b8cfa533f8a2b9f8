"""Tests for the public search and schedule."""

from datetime import date, datetime, timedelta
from unittest import mock

from django.test import SimpleTestCase, TestCase, override_settings
from django.urls import reverse
from django.utils import timezone

from groups.persistence import LOAD_FAILED_WARNING, PersistenceError, RecordStore
from groups.services import format_display_date
from groups.tests.factories import make_entry, make_group, make_store, save_board
from roster.services import Student

from .services import ScheduleWindow, search_by_student_name, upcoming_presentations


class SearchByStudentNameTests(SimpleTestCase):
    def setUp(self):
        self.store = make_store(
            make_entry(
                "Algoritma",
                [
                    make_group("Sorting", ["Ada Lovelace", "Budi"]),
                    make_group("Graphs", ["Adam", "Citra"]),
                ],
                notes="Bawa laptop",
            ),
            make_entry("Basis Data", [make_group("ERD", ["Budi", "ada lovelace"])]),
        )
        self.store.edit_member_role(self.store.courses[1].id, 0, 1, "Ketua")

    def test_case_insensitive_substring(self):
        results = search_by_student_name("  LOVELACE ", self.store)
        self.assertEqual(
            [(r.course_name, r.group_number, r.student_role) for r in results],
            [("Algoritma", 1, "Anggota"), ("Basis Data", 1, "Ketua")],
        )
        self.assertEqual(results[0].assignment_notes, "Bawa laptop")
        self.assertEqual(
            [m.student.name for m in results[0].group_members], ["Ada Lovelace", "Budi"]
        )

    def test_one_result_per_group(self):
        results = search_by_student_name("ada", self.store)
        self.assertEqual(
            [(r.course_name, r.assignment_title) for r in results],
            [("Algoritma", "Sorting"), ("Algoritma", "Graphs"), ("Basis Data", "ERD")],
        )

    def test_every_result_contains_the_term(self):
        for term in ("a", "bu", "CIT", "xyz"):
            for result in search_by_student_name(term, self.store):
                self.assertTrue(
                    any(term.lower() in m.student.name.lower() for m in result.group_members)
                )

    def test_blank_term_finds_nothing(self):
        self.assertEqual(search_by_student_name("", self.store), [])
        self.assertEqual(search_by_student_name("   ", self.store), [])

    def test_presentation_label(self):
        store = make_store(make_entry("A", [make_group("t", ["Ada"], "2024-03-04")]))
        result = search_by_student_name("ada", store)[0]
        self.assertEqual(result.presentation_label, "Senin, 4 Maret 2024")
        store.edit_group_presentation_time(store.courses[0].id, 0, "")
        self.assertEqual(search_by_student_name("ada", store)[0].presentation_label, "Belum diatur")


@override_settings(DISPLAY_DATE_LANGUAGE="en")
class UpcomingPresentationsTests(SimpleTestCase):
    today = date(2024, 3, 4)

    def setUp(self):
        self.store = make_store(
            make_entry(
                "Algoritma",
                [
                    make_group("yesterday", presentation_time="2024-03-03"),
                    make_group("plus two", presentation_time="2024-03-06"),
                    make_group("today", presentation_time="2024-03-04"),
                    make_group("plus seven", presentation_time="2024-03-11"),
                    make_group("plus eight", presentation_time="2024-03-12"),
                    make_group("not a date", presentation_time="minggu depan"),
                    make_group("unset"),
                ],
            ),
            make_entry(
                "Basis Data",
                [
                    make_group("plus three", presentation_time="2024-03-07"),
                    make_group("plus two later", presentation_time="2024-03-06T13:00"),
                ],
            ),
        )

    def titles(self, window):
        days = upcoming_presentations(self.store, window, now=self.today)
        return [[p.assignment_title for p in day.presentations] for day in days]

    def test_today(self):
        self.assertEqual(self.titles(ScheduleWindow.TODAY), [["today"]])

    def test_next_three_days_is_inclusive(self):
        self.assertEqual(
            self.titles(ScheduleWindow.NEXT_3_DAYS),
            [["today"], ["plus two", "plus two later"], ["plus three"]],
        )

    def test_next_seven_days(self):
        self.assertEqual(
            self.titles(ScheduleWindow.NEXT_7_DAYS),
            [["today"], ["plus two", "plus two later"], ["plus three"], ["plus seven"]],
        )

    def test_all_upcoming(self):
        days = upcoming_presentations(self.store, ScheduleWindow.ALL, now=self.today)
        self.assertEqual(
            [day.label for day in days],
            [
                "Monday, 4 March 2024",
                "Wednesday, 6 March 2024",
                "Thursday, 7 March 2024",
                "Monday, 11 March 2024",
                "Tuesday, 12 March 2024",
            ],
        )
        for day in days:
            for presentation in day.presentations:
                self.assertGreaterEqual(presentation.date, self.today)

    def test_group_numbers_follow_course_order(self):
        days = upcoming_presentations(self.store, ScheduleWindow.TODAY, now=self.today)
        self.assertEqual(days[0].presentations[0].group_number, 3)

    def test_now_may_be_a_datetime(self):
        now = datetime(2024, 3, 11, 8, 0)
        days = upcoming_presentations(self.store, ScheduleWindow.TODAY, now=now)
        self.assertEqual([d.label for d in days], ["Monday, 11 March 2024"])

    def test_same_day_presentations_follow_their_time(self):
        store = make_store(
            make_entry(
                "A",
                [
                    make_group("afternoon", presentation_time="2024-03-05T13:00"),
                    make_group("morning", presentation_time="2024-03-05T08:30"),
                ],
            )
        )
        days = upcoming_presentations(store, ScheduleWindow.ALL, now=self.today)
        self.assertEqual(
            [p.assignment_title for p in days[0].presentations], ["morning", "afternoon"]
        )

    def test_unknown_window(self):
        with self.assertRaises(ValueError):
            upcoming_presentations(self.store, "fortnight", now=self.today)


class FormatDisplayDateTests(SimpleTestCase):
    def test_indonesian_long_date(self):
        self.assertEqual(format_display_date("2024-03-04"), "Senin, 4 Maret 2024")

    @override_settings(DISPLAY_DATE_LANGUAGE="en")
    def test_language_follows_settings(self):
        self.assertEqual(format_display_date("2024-03-04"), "Monday, 4 March 2024")

    def test_empty_and_unparseable_values(self):
        self.assertEqual(format_display_date(""), "")
        self.assertEqual(format_display_date(None, empty="Belum diatur"), "Belum diatur")
        self.assertEqual(format_display_date("minggu depan"), "minggu depan")


class HomeViewTests(TestCase):
    def setUp(self):
        today = timezone.localdate()
        save_board(
            make_store(
                make_entry(
                    "Algoritma",
                    [
                        make_group("Sorting", [Student("Ada Lovelace", "ada@example.com"), "Budi"], today.isoformat()),
                        make_group("Graphs", ["Citra"], (today + timedelta(days=20)).isoformat()),
                    ],
                    notes="Bawa laptop",
                    course_id="c1",
                )
            )
        )

    def test_home_is_public(self):
        response = self.client.get(reverse("students:home"))
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, "Hasil pencarian akan muncul di sini.")
        self.assertEqual(response.context["window"], ScheduleWindow.NEXT_7_DAYS)
        self.assertEqual(len(response.context["schedule"]), 1)

    def test_search_shows_group_details(self):
        response = self.client.get(reverse("students:home"), {"q": "lovelace"})
        self.assertContains(response, "Bawa laptop")
        self.assertContains(response, "Budi (Anggota)")
        self.assertEqual(len(response.context["results"]), 1)

    def test_search_without_match(self):
        response = self.client.get(reverse("students:home"), {"q": "Zainal"})
        self.assertContains(response, "Nama tidak ditemukan.")

    def test_schedule_window_from_query(self):
        response = self.client.get(reverse("students:home"), {"range": "all"})
        self.assertEqual(len(response.context["schedule"]), 2)

    def test_unknown_window_falls_back_to_default(self):
        response = self.client.get(reverse("students:home"), {"range": "fortnight"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.context["window"], ScheduleWindow.NEXT_7_DAYS)


@override_settings(DISPLAY_DATE_LANGUAGE="en")
class PublicApiTests(TestCase):
    def setUp(self):
        save_board(
            make_store(
                make_entry(
                    "Algoritma",
                    [make_group("Sorting", [Student("Ada", "ada@example.com")], timezone.localdate().isoformat())],
                )
            )
        )

    def test_search(self):
        response = self.client.get(reverse("students_api:search"), {"q": "ADA"})
        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(len(data), 1)
        self.assertEqual(data[0]["course_name"], "Algoritma")
        self.assertEqual(data[0]["student_role"], "Anggota")
        self.assertEqual(
            data[0]["group_members"],
            [{"student": {"name": "Ada", "email": "ada@example.com"}, "role": "Anggota"}],
        )

    def test_search_without_term(self):
        self.assertEqual(self.client.get(reverse("students_api:search")).json(), [])

    def test_schedule(self):
        response = self.client.get(reverse("students_api:schedule"), {"range": "today"})
        data = response.json()
        self.assertEqual(len(data), 1)
        self.assertEqual(data[0]["presentations"][0]["assignment_title"], "Sorting")
        self.assertEqual(data[0]["presentations"][0]["date"], timezone.localdate().isoformat())

    def test_schedule_rejects_unknown_window(self):
        response = self.client.get(reverse("students_api:schedule"), {"range": "fortnight"})
        self.assertEqual(response.status_code, 400)


class LoadFailureTests(TestCase):
    def failing_load(self):
        return mock.patch.object(
            RecordStore, "load_all_course_groups", side_effect=PersistenceError("down")
        )

    def test_home_shows_notice(self):
        with self.failing_load(), self.assertLogs("groups.persistence", "ERROR"):
            response = self.client.get(reverse("students:home"), {"q": "ada"})
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, LOAD_FAILED_WARNING)
        self.assertEqual(response.context["results"], [])

    def test_api_reports_unavailable(self):
        with self.failing_load(), self.assertLogs("groups.persistence", "ERROR"):
            response = self.client.get(reverse("students_api:schedule"))
        self.assertEqual(response.status_code, 503)
        self.assertEqual(response.json()["detail"], "Data kelompok gagal dimuat. Coba lagi sebentar lagi.")
