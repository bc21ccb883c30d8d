"""
Create the brands customers can file claims against.

Usage:
    python manage.py seed_brands --names "Acme" "Globex"
    python manage.py seed_brands --file ./brands.txt

Existing brands are left untouched, so the command can be re-run safely.
"""

from __future__ import annotations

from pathlib import Path

from django.core.management.base import BaseCommand, CommandError

from apps.brands.models import Brand


class Command(BaseCommand):
    help = "Create brands by name, skipping the ones that already exist."

    def add_arguments(self, parser):
        parser.add_argument("--names", nargs="*", default=[], help="Brand names to create")
        parser.add_argument("--file", type=str, help="Text file with one brand name per line")

    def handle(self, *args, **options):
        names = list(options["names"])
        if options.get("file"):
            path = Path(options["file"])
            if not path.is_file():
                raise CommandError(f"File not found: {path}")
            names.extend(line.strip() for line in path.read_text(encoding="utf-8").splitlines())

        names = [name for name in dict.fromkeys(n.strip() for n in names) if name]
        if not names:
            raise CommandError("No brand names given. Use --names or --file.")

        created = 0
        for name in names:
            _, was_created = Brand.objects.get_or_create(name=name)
            if was_created:
                created += 1
                self.stdout.write(f"Created brand: {name}")

        self.stdout.write(
            self.style.SUCCESS(f"{created} brand(s) created, {len(names) - created} already present.")
        )
