"""
Management command to report stock items with incomplete packaging.

A level that names a UOM but lacks a cost price or multiplier is silently
left out of every conversion. This command lists those items.

Usage:
    python manage.py check_packaging
    python manage.py check_packaging --strict
"""

from django.core.management.base import BaseCommand, CommandError

from packman.hierarchy import LEVELS, is_defined_level, resolve_hierarchy
from packman.models import StockItem


class Command(BaseCommand):
    """Check packaging command."""

    help = 'Lists active stock items whose packaging levels are partially defined'

    def add_arguments(self, parser):
        parser.add_argument(
            '--strict',
            action='store_true',
            help='Fail (non-zero exit) when problems are found'
        )

    def handle(self, *args, **options):
        problems = 0

        for item in StockItem.objects.active().iterator():
            definition = item.as_definition()
            if not resolve_hierarchy(definition):
                self.stdout.write(f'{item}: no defined packaging level')
                problems += 1
                continue

            for name, level in zip(LEVELS, definition.levels()):
                if level is None or not level.uom:
                    continue
                if not is_defined_level(level, base=(name == 'level0')):
                    self.stdout.write(
                        f'{item}: {name} "{level.uom}" ignored '
                        f'(missing cost price or multiplier)'
                    )
                    problems += 1

        if problems and options['strict']:
            raise CommandError(f'{problems} packaging problem(s) found')

        if problems:
            self.stdout.write(self.style.WARNING(f'{problems} packaging problem(s) found'))
        else:
            self.stdout.write(self.style.SUCCESS('All packaging structures are complete'))
