"""
Import properties from a CSV export of the Google-Sheets listing form.

Usage:
    python manage.py import_properties /path/to/listings.csv
    python manage.py import_properties /path/to/listings.csv --dry-run
"""

from pathlib import Path

from django.core.management.base import BaseCommand, CommandError

from imports.parsers import parse_csv, validate_properties
from imports.services import create_import_batch, import_csv_content


class Command(BaseCommand):
    help = 'Import property listings from a Google-Sheets CSV export'

    def add_arguments(self, parser):
        parser.add_argument('csv_file', type=str, help='Path to CSV file')
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Parse and validate only, without creating properties',
        )

    def handle(self, *args, **options):
        path = Path(options['csv_file'])

        self.stdout.write(f"Reading CSV file: {path}")
        try:
            raw = path.read_bytes()
        except FileNotFoundError:
            raise CommandError(f"File not found: {path}")

        try:
            content = raw.decode('utf-8-sig')
        except UnicodeDecodeError:
            raise CommandError(f"{path} is not UTF-8 encoded")

        if options['dry_run']:
            self._dry_run(content)
            return

        batch = create_import_batch('MANUAL', file_name=path.name, content=raw)
        batch.notes = 'Manual import via management command'
        batch.save(update_fields=['notes', 'updated_at'])
        self.stdout.write(f"Created import batch: {batch.batch_id}")

        try:
            outcome = import_csv_content(content, batch)
        except ValueError as e:
            batch.mark_as_failed(str(e))
            raise CommandError(f"Import failed: {e}")

        results = outcome['results']
        self.stdout.write("\n" + "=" * 60)
        self.stdout.write(self.style.SUCCESS("Import Complete"))
        self.stdout.write("=" * 60)
        self.stdout.write(f"Batch ID: {batch.batch_id}")
        self.stdout.write(f"Rows in file: {batch.records_total}")
        self.stdout.write(f"Created: {results['success']}")
        self.stdout.write(f"Failed on create: {results['failed']}")
        self.stdout.write(f"Rejected by validation: {len(outcome['validationErrors'])}")

        for error in outcome['validationErrors']:
            self.stdout.write(self.style.WARNING(
                f"  Row {error['index'] + 1} ({error['property']}): {', '.join(error['errors'])}"
            ))
        for failure in results['errors']:
            self.stdout.write(self.style.ERROR(f"  {failure['property']}: {failure['error']}"))

    def _dry_run(self, content):
        try:
            parsed = parse_csv(content)
        except ValueError as e:
            raise CommandError(str(e))

        valid, errors = validate_properties(parsed)
        self.stdout.write(self.style.WARNING("Dry run: nothing was saved"))
        self.stdout.write(f"Rows parsed: {len(parsed)}")
        self.stdout.write(f"Valid: {len(valid)}")
        self.stdout.write(f"Invalid: {len(errors)}")
        for error in errors:
            self.stdout.write(f"  Row {error['index'] + 1} ({error['property']}): {', '.join(error['errors'])}")
