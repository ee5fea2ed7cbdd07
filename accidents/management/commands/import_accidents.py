from __future__ import annotations

from typing import Any

from django.core.management.base import BaseCommand, CommandError

from accidents.importer import ImportError, import_accidents_from_path
from accidents.validation import format_errors


class Command(BaseCommand):
    help = "Import accident records from a CSV (or Parquet) file into the accident store."

    def add_arguments(self, parser) -> None:
        parser.add_argument(
            "path",
            type=str,
            help="Path to the accident dataset file.",
        )
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Validate every row and report rejections without writing AccidentRecord rows.",
        )
        parser.add_argument(
            "--show-rejections",
            type=int,
            default=10,
            help="Maximum number of rejected rows to print (default: 10).",
        )

    def handle(self, *args: Any, **options: Any) -> None:
        path = options["path"]
        dry_run = bool(options["dry_run"])
        show = max(int(options["show_rejections"]), 0)

        try:
            imported, rejected = import_accidents_from_path(path, dry_run=dry_run)
        except ImportError as exc:
            raise CommandError(str(exc))

        for item in rejected[:show]:
            self.stdout.write(
                self.style.WARNING(f"Row {item['index']}: {format_errors(item['errors'])}")
            )
        if len(rejected) > show:
            self.stdout.write(f"... and {len(rejected) - show} more rejected rows.")

        if dry_run:
            self.stdout.write(
                self.style.SUCCESS(
                    f"Dry run complete; {len(rejected)} rows would be rejected. "
                    "No AccidentRecord rows were written."
                )
            )
            return

        self.stdout.write(
            self.style.SUCCESS(
                f"Imported {imported} AccidentRecord rows from {path} "
                f"({len(rejected)} rejected)."
            )
        )
