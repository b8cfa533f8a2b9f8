import tempfile
from io import StringIO
from pathlib import Path
from unittest import mock

from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import TestCase

from groups import exports
from groups.persistence import PersistenceError, RecordStore
from roster.services import Student

from .factories import make_entry, make_group, make_store, save_board


class ExportGroupsCommandTests(TestCase):
    def setUp(self):
        save_board(
            make_store(
                make_entry(
                    "Algoritma",
                    [make_group("Sorting", [Student("Ada", "ada@example.com")])],
                    course_id="c1",
                ),
                make_entry("Basis Data", [make_group("ERD", ["Budi"])], course_id="c2"),
            )
        )

    def test_recap_to_stdout(self):
        out = StringIO()
        call_command("export_groups", stdout=out)
        content = out.getvalue()
        self.assertTrue(content.startswith(exports.CSV_BOM + '"Nama"'))
        self.assertIn('"Ada","ada@example.com","Algoritma"', content)
        self.assertIn('"Budi","","Basis Data"', content)

    def test_single_course(self):
        out = StringIO()
        call_command("export_groups", "--course", "c2", stdout=out)
        self.assertIn('"Basis Data","ERD"', out.getvalue())
        self.assertNotIn("Algoritma", out.getvalue())

    def test_unknown_course(self):
        with self.assertRaises(CommandError):
            call_command("export_groups", "--course", "missing", stdout=StringIO())

    def test_output_directory_uses_export_filename(self):
        with tempfile.TemporaryDirectory() as tmp:
            call_command("export_groups", "--course", "c1", "--output", tmp, stdout=StringIO())
            data = (Path(tmp) / "kelompok-Algoritma.csv").read_bytes()
        self.assertTrue(data.startswith(exports.CSV_BOM.encode("utf-8")))
        self.assertIn(b"\r\n", data)
        self.assertNotIn(b"\r\r\n", data)

    def test_course_name_cannot_leave_output_directory(self):
        save_board(make_store(make_entry("Algo/../Lanjut", [make_group("x", ["Ada"])], course_id="c3")))
        with tempfile.TemporaryDirectory() as tmp:
            call_command("export_groups", "--course", "c3", "--output", tmp, stdout=StringIO())
            self.assertEqual(
                [path.name for path in Path(tmp).iterdir()], ["kelompok-Algo_.._Lanjut.csv"]
            )

    def test_load_failure_is_a_command_error(self):
        with mock.patch.object(
            RecordStore, "load_all_course_groups", side_effect=PersistenceError("down")
        ):
            with self.assertRaises(CommandError):
                call_command("export_groups", stdout=StringIO())
