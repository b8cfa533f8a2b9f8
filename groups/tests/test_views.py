from unittest import mock

from django.contrib.messages import get_messages
from django.test import TestCase, override_settings
from django.urls import reverse

from accounts.decorators import SESSION_KEY
from groups import exports
from groups.models import CourseGroupRecord
from groups.persistence import (
    LOAD_FAILED_WARNING,
    GroupBoard,
    PersistenceError,
    RecordStore,
)
from roster.models import RosterText
from roster.services import Student

from .factories import make_entry, make_group, make_store, save_board


def messages_of(response) -> list[str]:
    return [str(message) for message in get_messages(response.wsgi_request)]


class PanelTestCase(TestCase):
    def setUp(self):
        store = make_store(
            make_entry(
                "Algoritma",
                [
                    make_group("Sorting", [Student("Ada", "ada@example.com")], group_id="g1"),
                    make_group("Graphs", group_id="g2"),
                ],
                course_id="c1",
            )
        )
        save_board(store, roster_text="Ada,ada@example.com\nBudi\nCitra")
        session = self.client.session
        session[SESSION_KEY] = True
        session.save()

    def course(self):
        return GroupBoard().store.get_entry("c1")


class PanelAccessTests(TestCase):
    def test_panel_requires_admin(self):
        response = self.client.get(reverse("groups:panel"))
        self.assertRedirects(
            response,
            f"{reverse('accounts:login')}?next=%2Fpanel%2F",
            fetch_redirect_response=False,
        )

    def test_mutations_require_admin(self):
        response = self.client.post(reverse("groups:course_add"))
        self.assertEqual(response.status_code, 302)
        self.assertFalse(CourseGroupRecord.objects.exists())


class PanelViewTests(PanelTestCase):
    def test_panel_lists_courses_groups_and_roster(self):
        response = self.client.get(reverse("groups:panel"))
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, "Kelompok 2")
        self.assertContains(response, "Budi\nCitra")
        self.assertEqual(response.context["roster_count"], 3)
        self.assertEqual(response.context["course_data"][0]["available_count"], 2)

    def test_mutations_reject_get(self):
        response = self.client.get(reverse("groups:group_add", args=["c1"]))
        self.assertEqual(response.status_code, 405)


class CourseViewTests(PanelTestCase):
    def test_add_course(self):
        response = self.client.post(reverse("groups:course_add"))
        self.assertEqual(CourseGroupRecord.objects.count(), 2)
        new_id = GroupBoard().store.courses[-1].id
        self.assertTrue(response["Location"].endswith(f"#course-{new_id}"))

    def test_edit_course(self):
        self.client.post(
            reverse("groups:course_edit", args=["c1"]),
            {"course-c1-name": "Algoritma Lanjut", "course-c1-assignment_notes": "PDF"},
        )
        course = self.course().course
        self.assertEqual((course.name, course.assignment_notes), ("Algoritma Lanjut", "PDF"))

    def test_remove_course(self):
        response = self.client.post(reverse("groups:course_remove", args=["c1"]))
        self.assertRedirects(response, reverse("groups:panel"), fetch_redirect_response=False)
        self.assertFalse(CourseGroupRecord.objects.exists())

    def test_unknown_course_reports_error(self):
        response = self.client.post(reverse("groups:group_add", args=["nope"]))
        self.assertEqual(messages_of(response), ["Mata kuliah nope tidak ditemukan."])

    def test_failed_save_warns_administrator(self):
        with mock.patch.object(GroupBoard, "save_course", return_value=False):
            response = self.client.post(reverse("groups:group_add", args=["c1"]))
        self.assertEqual(
            messages_of(response),
            ["Perubahan diterapkan tetapi gagal disimpan. Coba lagi sebentar lagi."],
        )


class GroupViewTests(PanelTestCase):
    def test_add_group(self):
        self.client.post(reverse("groups:group_add", args=["c1"]))
        self.assertEqual(len(self.course().groups), 3)

    def test_edit_group(self):
        self.client.post(
            reverse("groups:group_edit", args=["c1", 1]),
            {"group-g2-assignment_title": "Shortest paths", "group-g2-presentation_time": "2024-03-04"},
        )
        group = self.course().groups[1]
        self.assertEqual(group.assignment_title, "Shortest paths")
        self.assertEqual(group.presentation_time, "2024-03-04")

    def test_remove_group_needs_confirmation(self):
        response = self.client.post(reverse("groups:group_remove", args=["c1", 0]))
        self.assertEqual(len(self.course().groups), 2)
        self.assertIn("konfirmasi", messages_of(response)[0])

        self.client.post(reverse("groups:group_remove", args=["c1", 0]), {"confirm": "on"})
        self.assertEqual([g.id for g in self.course().groups], ["g2"])

    def test_sort_groups(self):
        self.client.post(
            reverse("groups:group_edit", args=["c1", 1]),
            {"group-g2-assignment_title": "Graphs", "group-g2-presentation_time": "2024-03-01"},
        )
        self.client.post(reverse("groups:groups_sort", args=["c1"]))
        self.assertEqual([g.id for g in self.course().groups], ["g2", "g1"])


class MemberViewTests(PanelTestCase):
    def test_add_member_from_roster(self):
        self.client.post(
            reverse("groups:member_add", args=["c1", 1]), {"member-g2-student": "Budi"}
        )
        members = self.course().groups[1].members
        self.assertEqual([(m.student.name, m.role) for m in members], [("Budi", "Anggota")])

    def test_duplicate_member_is_rejected(self):
        response = self.client.post(
            reverse("groups:member_add", args=["c1", 1]), {"member-g2-student": "Ada"}
        )
        self.assertEqual(self.course().groups[1].members, [])
        self.assertEqual(messages_of(response), ["Ada sudah terdaftar di Kelompok 1."])

    def test_student_outside_roster_is_rejected(self):
        self.client.post(
            reverse("groups:member_add", args=["c1", 1]), {"member-g2-student": "Ghost"}
        )
        self.assertEqual(self.course().groups[1].members, [])

    def test_edit_role_and_remove_member(self):
        self.client.post(reverse("groups:member_role", args=["c1", 0, 0]), {"role": "Ketua"})
        self.assertEqual(self.course().groups[0].members[0].role, "Ketua")

        self.client.post(reverse("groups:member_remove", args=["c1", 0, 0]))
        self.assertEqual(self.course().groups[0].members, [])


class ExportViewTests(PanelTestCase):
    def test_export_course(self):
        response = self.client.get(reverse("groups:export_course", args=["c1"]))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response["Content-Disposition"], 'attachment; filename="kelompok-Algoritma.csv"'
        )
        content = response.content.decode("utf-8")
        self.assertTrue(content.startswith(exports.CSV_BOM))
        self.assertIn('"Algoritma","Sorting"', content)

    def test_export_unknown_course(self):
        response = self.client.get(reverse("groups:export_course", args=["nope"]))
        self.assertEqual(response.status_code, 404)

    def test_export_all(self):
        response = self.client.get(reverse("groups:export_all"))
        self.assertIn("rekap_semua_mahasiswa.csv", response["Content-Disposition"])
        self.assertIn('"Ada","ada@example.com","Algoritma"', response.content.decode("utf-8"))


@override_settings(DEFAULT_ROSTER_TEXT="Default Student")
class ResetViewTests(PanelTestCase):
    def test_reset_needs_confirmation(self):
        self.client.post(reverse("groups:reset"))
        self.assertTrue(CourseGroupRecord.objects.exists())

    def test_reset_clears_everything(self):
        response = self.client.post(reverse("groups:reset"), {"confirm": "on"})
        self.assertEqual(messages_of(response), ["Semua data telah direset."])
        self.assertFalse(CourseGroupRecord.objects.exists())
        self.assertEqual(RosterText.objects.get().text, "Default Student")


class ExportFilenameHeaderTests(PanelTestCase):
    def rename_course(self, name):
        self.client.post(
            reverse("groups:course_edit", args=["c1"]),
            {"course-c1-name": name, "course-c1-assignment_notes": ""},
        )

    def test_quotes_in_course_name_are_escaped(self):
        self.rename_course('Algo "Dasar"')
        response = self.client.get(reverse("groups:export_course", args=["c1"]))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response["Content-Disposition"],
            'attachment; filename="kelompok-Algo_\\"Dasar\\".csv"',
        )

    def test_line_breaks_in_course_name_are_replaced(self):
        self.rename_course("Algo\nDasar")
        response = self.client.get(reverse("groups:export_course", args=["c1"]))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response["Content-Disposition"], 'attachment; filename="kelompok-Algo_Dasar.csv"'
        )

    def test_non_ascii_course_name(self):
        self.rename_course("Bahasa Jepang 日本語")
        response = self.client.get(reverse("groups:export_course", args=["c1"]))
        self.assertIn("filename*=utf-8''", response["Content-Disposition"])


class LoadFailureTests(PanelTestCase):
    def failing_load(self):
        return mock.patch.object(
            RecordStore, "load_all_course_groups", side_effect=PersistenceError("down")
        )

    def test_panel_renders_empty_with_warning(self):
        with self.failing_load(), self.assertLogs("groups.persistence", "ERROR"):
            response = self.client.get(reverse("groups:panel"))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.context["course_data"], [])
        self.assertContains(response, LOAD_FAILED_WARNING)

    def test_changes_are_not_applied(self):
        with self.failing_load(), self.assertLogs("groups.persistence", "ERROR"):
            response = self.client.post(reverse("groups:course_add"))
        self.assertRedirects(response, reverse("groups:panel"), fetch_redirect_response=False)
        self.assertEqual(
            messages_of(response), ["Perubahan tidak diterapkan karena data gagal dimuat."]
        )
        self.assertEqual(CourseGroupRecord.objects.count(), 1)

    def test_exports_redirect_to_panel(self):
        with self.failing_load(), self.assertLogs("groups.persistence", "ERROR"):
            response = self.client.get(reverse("groups:export_all"))
        self.assertRedirects(response, reverse("groups:panel"), fetch_redirect_response=False)
