from django.test import SimpleTestCase, TestCase
from django.urls import reverse

from accounts.decorators import SESSION_KEY
from group_parser.services import extract_title, parse_and_generate
from groups.models import CourseGroupRecord
from groups.persistence import GroupBoard
from groups.services import DEFAULT_MEMBER_ROLE
from roster.services import Student


class ParseAndGenerateTests(SimpleTestCase):
    def setUp(self):
        self.roster = [Student("Ada", "ada@example.com"), Student("Budi"), Student("Citra")]

    def test_blocks_become_groups(self):
        result = parse_and_generate("T1\nAda\n\nT2\nBudi", self.roster)

        self.assertEqual(result.groups_count, 2)
        first, second = result.groups
        self.assertEqual(first.assignment_title, "T1")
        self.assertEqual([m.student.name for m in first.members], ["Ada"])
        self.assertEqual(second.assignment_title, "T2")
        self.assertEqual([m.student.name for m in second.members], ["Budi"])
        self.assertEqual(result.not_found_names, [])
        self.assertFalse(result.has_warnings)

    def test_members_get_default_role_and_empty_date(self):
        result = parse_and_generate("T\nada\nBUDI", self.roster)
        group = result.groups[0]
        self.assertEqual([m.role for m in group.members], [DEFAULT_MEMBER_ROLE] * 2)
        self.assertEqual(group.presentation_time, "")
        # The roster entry is copied, not the pasted spelling.
        self.assertEqual(group.members[0].student, Student("Ada", "ada@example.com"))

    def test_title_prefix_is_stripped(self):
        result = parse_and_generate("- Materi 1 : Linear Search\nAda", self.roster)
        self.assertEqual(result.groups[0].assignment_title, "Linear Search")

    def test_unresolved_names_are_reported(self):
        result = parse_and_generate("T\nGhost", [Student("Ada")])
        self.assertEqual(result.groups, [])
        self.assertEqual(result.not_found_names, ["Ghost"])

    def test_unresolved_names_do_not_stop_other_blocks(self):
        text = "T1\nGhost\nAda\n\n\n   \nT2\nNobody\nBudi"
        result = parse_and_generate(text, self.roster)
        self.assertEqual([g.assignment_title for g in result.groups], ["T1", "T2"])
        self.assertEqual(result.not_found_names, ["Ghost", "Nobody"])

    def test_blocks_without_members_are_dropped(self):
        result = parse_and_generate("Only a title\n\nT2\nCitra", self.roster)
        self.assertEqual([g.assignment_title for g in result.groups], ["T2"])

    def test_windows_line_endings(self):
        result = parse_and_generate("T1\r\nAda\r\n\r\nT2\r\nBudi\r\n", self.roster)
        self.assertEqual([g.assignment_title for g in result.groups], ["T1", "T2"])

    def test_student_is_placed_once(self):
        result = parse_and_generate("T1\nAda\nBudi\n\nT2\nada\nCitra", self.roster)
        self.assertEqual(
            [[m.student.name for m in g.members] for g in result.groups],
            [["Ada", "Budi"], ["Citra"]],
        )
        self.assertEqual(result.duplicate_names, ["ada"])

    def test_group_ids_are_unique(self):
        result = parse_and_generate("A\nAda\n\nB\nBudi\n\nC\nCitra", self.roster)
        ids = [g.id for g in result.groups]
        self.assertEqual(len(set(ids)), 3)

    def test_empty_text(self):
        result = parse_and_generate("   \n\n", self.roster)
        self.assertEqual(result.groups, [])
        self.assertEqual(result.not_found_names, [])


class ExtractTitleTests(SimpleTestCase):
    def test_uses_text_after_last_colon(self):
        self.assertEqual(extract_title("Topik: Bagian 2: Sorting "), "Sorting")

    def test_plain_title(self):
        self.assertEqual(extract_title("  Algorithms Overview "), "Algorithms Overview")


class GenerateGroupsViewTests(TestCase):
    def setUp(self):
        self.url = reverse("group_parser:generate")
        board = GroupBoard()
        board.save_roster_text("Ada\nBudi\nCitra")
        self.course = board.store.add_course()
        board.store.edit_course_field(self.course.id, "name", "Algoritma")
        board.store.add_group(self.course.id)
        board.save_course(self.course.id)

    def login_admin(self):
        session = self.client.session
        session[SESSION_KEY] = True
        session.save()

    def test_requires_admin(self):
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, 302)
        self.assertIn(reverse("accounts:login"), response["Location"])

    def test_admin_can_view(self):
        self.login_admin()
        response = self.client.get(self.url, {"course": self.course.id})
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, "Algoritma")

    def test_confirmation_is_required(self):
        self.login_admin()
        response = self.client.post(
            self.url, {"course": self.course.id, "text": "T\nAda"}
        )
        self.assertEqual(response.status_code, 200)
        self.assertFormError(
            response.context["form"], "confirm", "Centang konfirmasi untuk mengganti kelompok."
        )
        record = CourseGroupRecord.objects.get(course_id=self.course.id)
        self.assertEqual(len(record.groups_data), 1)
        self.assertEqual(record.groups_data[0]["members"], [])

    def test_generation_replaces_groups_and_warns(self):
        self.login_admin()
        response = self.client.post(
            self.url,
            {
                "course": self.course.id,
                "text": "- Materi 1 : Sorting\nAda\nGhost\n\nGraphs\nBudi",
                "confirm": "on",
            },
            follow=True,
        )
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, "Berhasil membuat 2 kelompok.")
        self.assertContains(response, "Ghost")

        record = CourseGroupRecord.objects.get(course_id=self.course.id)
        self.assertEqual(
            [g["assignment_title"] for g in record.groups_data], ["Sorting", "Graphs"]
        )
        self.assertEqual(record.groups_data[0]["members"][0]["student"]["name"], "Ada")
