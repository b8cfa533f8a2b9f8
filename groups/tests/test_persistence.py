from unittest import mock

from django.db import DatabaseError
from django.test import TestCase, override_settings

from groups.models import CourseGroupRecord
from groups.persistence import GroupBoard, PersistenceError, RecordStore, load_board
from roster.models import RosterText
from roster.services import Student

from .factories import make_entry, make_group, make_store, save_board


class RecordStoreTests(TestCase):
    def setUp(self):
        self.records = RecordStore()

    @override_settings(DEFAULT_ROSTER_TEXT="Ada\nBudi")
    def test_missing_roster_falls_back_to_default(self):
        self.assertEqual(self.records.load_roster_text(), "Ada\nBudi")

    def test_roster_slot_is_overwritten(self):
        self.records.save_roster_text("Ada")
        self.records.save_roster_text("Budi")
        self.assertEqual(self.records.load_roster_text(), "Budi")
        self.assertEqual(RosterText.objects.count(), 1)

    def test_upsert_and_delete_course_groups(self):
        self.records.upsert_course_group("a", {"id": "a", "name": "A"}, [])
        self.records.upsert_course_group("b", {"id": "b", "name": "B"}, [])
        self.records.upsert_course_group("a", {"id": "a", "name": "A2"}, [{"id": "g"}])

        loaded = self.records.load_all_course_groups()
        self.assertEqual([item["course_id"] for item in loaded], ["a", "b"])
        self.assertEqual(loaded[0]["course_data"]["name"], "A2")
        self.assertEqual(loaded[0]["groups_data"], [{"id": "g"}])

        self.records.delete_course_groups(["a", "missing"])
        self.assertEqual(list(CourseGroupRecord.objects.values_list("course_id", flat=True)), ["b"])

    def test_database_errors_become_persistence_errors(self):
        with mock.patch.object(
            CourseGroupRecord.objects, "update_or_create", side_effect=DatabaseError("down")
        ):
            with self.assertRaises(PersistenceError):
                self.records.upsert_course_group("a", {"id": "a"}, [])


class GroupBoardTests(TestCase):
    def test_saved_board_loads_back_unchanged(self):
        store = make_store(
            make_entry(
                "Algoritma",
                [make_group("Sorting", [Student("Ada", "ada@example.com"), "Budi"], "2024-03-01")],
                notes="catatan",
                course_id="a",
            ),
            make_entry("Basis Data", course_id="b"),
        )
        store.edit_member_role("a", 0, 1, "Ketua")
        save_board(store, roster_text="Ada,ada@example.com\nBudi")

        board = GroupBoard()
        self.assertEqual(board.store.entries, store.entries)
        self.assertEqual(board.roster, [Student("Ada", "ada@example.com"), Student("Budi")])

    def test_stored_json_uses_snake_case_keys(self):
        save_board(make_store(make_entry("A", [make_group("t", ["Ada"])], course_id="a")))
        record = CourseGroupRecord.objects.get(course_id="a")
        self.assertEqual(set(record.course_data), {"id", "name", "assignment_notes"})
        self.assertEqual(
            set(record.groups_data[0]),
            {"id", "assignment_title", "presentation_time", "members"},
        )
        self.assertEqual(
            record.groups_data[0]["members"][0],
            {"student": {"name": "Ada", "email": None}, "role": "Anggota"},
        )

    def test_failed_write_keeps_in_memory_change(self):
        board = GroupBoard()
        course = board.store.add_course()
        with mock.patch.object(
            RecordStore, "upsert_course_group", side_effect=PersistenceError("down")
        ):
            with self.assertLogs("groups.persistence", "ERROR"):
                self.assertFalse(board.save_course(course.id))
        self.assertEqual(board.store.courses, [course])
        self.assertFalse(CourseGroupRecord.objects.exists())

    def test_failed_roster_write_returns_false(self):
        board = GroupBoard()
        with mock.patch.object(
            RecordStore, "save_roster_text", side_effect=PersistenceError("down")
        ):
            with self.assertLogs("groups.persistence", "ERROR"):
                self.assertFalse(board.save_roster_text("Ada"))
        self.assertEqual(board.roster_text, "Ada")

    def test_delete_courses(self):
        save_board(make_store(make_entry("A", course_id="a"), make_entry("B", course_id="b")))
        board = GroupBoard()
        board.store.remove_course("a")
        self.assertTrue(board.delete_courses(["a"]))
        self.assertEqual([c.id for c in GroupBoard().store.courses], ["b"])

    @override_settings(DEFAULT_ROSTER_TEXT="Default Student")
    def test_reset_restores_defaults(self):
        save_board(make_store(make_entry("A", course_id="a")), roster_text="Ada")

        board = GroupBoard()
        self.assertTrue(board.reset())

        self.assertFalse(CourseGroupRecord.objects.exists())
        self.assertEqual(RosterText.objects.get().text, "Default Student")
        reloaded = GroupBoard()
        self.assertEqual(reloaded.store.entries, [])
        self.assertEqual(reloaded.roster, [Student("Default Student")])


class LoadBoardTests(TestCase):
    def test_loads_saved_board(self):
        save_board(make_store(make_entry("A", course_id="a")))
        board = load_board()
        self.assertTrue(board.loaded)
        self.assertEqual([c.id for c in board.store.courses], ["a"])

    def test_falls_back_to_empty_board(self):
        save_board(make_store(make_entry("A", course_id="a")), roster_text="Ada")
        with mock.patch.object(
            RecordStore, "load_all_course_groups", side_effect=PersistenceError("down")
        ):
            with self.assertLogs("groups.persistence", "ERROR"):
                board = load_board()
        self.assertFalse(board.loaded)
        self.assertEqual(board.store.entries, [])
        self.assertEqual(board.roster_text, "")
