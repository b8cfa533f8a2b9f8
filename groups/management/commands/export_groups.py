from __future__ import annotations

from pathlib import Path

from django.core.management.base import BaseCommand, CommandError

from groups import exports
from groups.persistence import GroupBoard, PersistenceError
from groups.services import GroupStoreError


class Command(BaseCommand):
    help = "Export group assignments as CSV, for one course or the recap of all courses"

    def add_arguments(self, parser):
        parser.add_argument(
            "--course",
            dest="course_id",
            help="Export a single course by id (default: recap of all courses)",
        )
        parser.add_argument(
            "--output",
            dest="output",
            help="Directory or file to write to (default: stdout)",
        )

    def handle(self, *args, **options):
        try:
            board = GroupBoard()
        except PersistenceError as exc:
            raise CommandError(str(exc)) from exc
        course_id = options.get("course_id")

        if course_id:
            try:
                entry = board.store.get_entry(course_id)
            except GroupStoreError as exc:
                raise CommandError(str(exc)) from exc
            filename, content = exports.export_course(entry)
        else:
            filename, content = exports.export_all(board.store)

        output = options.get("output")
        if not output:
            self.stdout.write(content, ending="")
            return

        path = Path(output)
        if path.is_dir():
            path = path / filename
        # newline="" keeps the CRLF row endings intact.
        with path.open("w", encoding="utf-8", newline="") as csv_file:
            csv_file.write(content)
        self.stdout.write(self.style.SUCCESS(f"Wrote {path}"))
