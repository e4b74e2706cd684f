from __future__ import annotations

from django.core.management.base import BaseCommand, CommandError  # type: ignore

from apps.imports.excel import ImportFailedError
from apps.imports.services import import_hotel_data


class Command(BaseCommand):
    help = "Import rooms, guests and bookings from Excel workbooks"

    def add_arguments(self, parser):  # type: ignore
        parser.add_argument("--rooms", metavar="PATH", help="Rooms workbook")
        parser.add_argument("--guests", metavar="PATH", help="Guests workbook")
        parser.add_argument("--bookings", metavar="PATH", help="Bookings workbook")

    def handle(self, *args, **options):  # type: ignore
        sources = {kind: options[kind] for kind in ("rooms", "guests", "bookings") if options[kind]}
        if not sources:
            raise CommandError("Give at least one of --rooms, --guests or --bookings.")

        try:
            reports = import_hotel_data(**sources)
        except ImportFailedError as exc:
            raise CommandError(str(exc)) from exc

        for kind, report in reports.items():
            self.stdout.write(
                self.style.SUCCESS(f"{kind}: {len(report.created)} imported, {len(report.errors)} rejected")
            )
            for error in report.errors:
                self.stdout.write(self.style.WARNING(f"  row {error.row}: {error.message}"))
