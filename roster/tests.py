from django.test import SimpleTestCase, TestCase
from django.urls import reverse

from accounts.decorators import SESSION_KEY
from roster.models import RosterText
from roster.services import Student, match_student, normalize_name, parse_roster


class ParseRosterTests(SimpleTestCase):
    def test_splits_name_and_email_on_first_comma(self):
        students = parse_roster("Ada Lovelace, ada@example.com\nBudi,1924250002,extra")
        self.assertEqual(
            students,
            [
                Student(name="Ada Lovelace", email="ada@example.com"),
                Student(name="Budi", email="1924250002,extra"),
            ],
        )

    def test_drops_blank_and_nameless_lines(self):
        text = "\n   \nAda\n , orphan@example.com\n\r\nBudi,\n"
        students = parse_roster(text)
        self.assertEqual(students, [Student("Ada"), Student("Budi")])
        self.assertIsNone(students[1].email)

    def test_parsing_is_repeatable(self):
        text = "Citra,c@example.com\nAda\nBudi,b@example.com"
        self.assertEqual(parse_roster(text), parse_roster(text))
        self.assertEqual([s.name for s in parse_roster(text)], ["Citra", "Ada", "Budi"])

    def test_only_line_feeds_and_carriage_returns_end_a_line(self):
        students = parse_roster("Ada\x0cLovelace,ada@x.id\r\nBudi\u2028Santoso\rCitra")
        self.assertEqual(
            [s.name for s in students], ["Ada\x0cLovelace", "Budi\u2028Santoso", "Citra"]
        )
        self.assertEqual(students[0].email, "ada@x.id")

    def test_empty_text(self):
        self.assertEqual(parse_roster(""), [])
        self.assertEqual(parse_roster(None), [])


class MatchStudentTests(SimpleTestCase):
    def setUp(self):
        self.roster = [Student("Ada"), Student("budi"), Student("ADA", "second@example.com")]

    def test_ignores_case_and_surrounding_whitespace(self):
        self.assertEqual(match_student("  ada  ", self.roster), Student("Ada"))
        self.assertEqual(match_student("BUDI", self.roster), Student("budi"))

    def test_first_match_wins_for_duplicate_names(self):
        self.assertIsNone(match_student("ADA", self.roster).email)

    def test_no_fuzzy_matching(self):
        self.assertIsNone(match_student("Ad", self.roster))
        self.assertIsNone(match_student("Ada L", self.roster))

    def test_normalize_name(self):
        self.assertEqual(normalize_name("  Siti Herlina "), "siti herlina")


class RosterViewTests(TestCase):
    def login_admin(self):
        session = self.client.session
        session[SESSION_KEY] = True
        session.save()

    def test_save_requires_admin(self):
        response = self.client.post(reverse("roster:save"), {"text": "Ada"})
        self.assertEqual(response.status_code, 302)
        self.assertIn(reverse("accounts:login"), response["Location"])
        self.assertFalse(RosterText.objects.exists())

    def test_save_stores_raw_text(self):
        self.login_admin()
        response = self.client.post(reverse("roster:save"), {"text": "Ada\nBudi,b@x.id\n"})
        self.assertRedirects(response, reverse("groups:panel"))
        self.assertEqual(RosterText.objects.get().text, "Ada\nBudi,b@x.id\n")

    def test_autosave_reports_student_count(self):
        self.login_admin()
        response = self.client.post(reverse("roster:autosave"), {"text": "Ada\n\nBudi"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"saved": True, "students_count": 2})

    def test_autosave_overwrites_single_slot(self):
        self.login_admin()
        self.client.post(reverse("roster:autosave"), {"text": "Ada"})
        self.client.post(reverse("roster:autosave"), {"text": "Ada\nBudi"})
        self.assertEqual(RosterText.objects.count(), 1)
        self.assertEqual(RosterText.objects.get().text, "Ada\nBudi")
