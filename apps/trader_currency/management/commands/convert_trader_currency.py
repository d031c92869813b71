from pathlib import Path

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from apps.trader_currency.application.tasks import convert_trader_currency
from apps.trader_currency.infrastructure.tables.registry import TABLES_REGISTRY, TablesFormat


class Command(BaseCommand):
    help = 'Convert the configured trader and its quest rewards to the target currency'

    def add_arguments(self, parser):
        parser.add_argument(
            '--database',
            dest='database_path',
            type=str,
            default=None,
            help='Database directory or dump file (defaults to TRADER_CURRENCY["DATABASE_PATH"])'
        )
        parser.add_argument(
            '--format',
            dest='tables_format',
            type=str,
            default=TablesFormat.JSON_DIRECTORY.value,
            choices=[str(f.value) for f in TABLES_REGISTRY],
            help='Layout of the database on disk'
        )
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Convert in memory without writing the tables back'
        )
        parser.add_argument(
            '--sync',
            action='store_true',
            help='Execute synchronously instead of using Celery task queue'
        )

    def handle(self, **options):
        database_path = options['database_path'] or settings.TRADER_CURRENCY['DATABASE_PATH']
        tables_format = options['tables_format']
        dry_run = options['dry_run']

        if not Path(database_path).exists():
            raise CommandError(f'Database not found: {database_path}')

        self.stdout.write(
            self.style.SUCCESS(
                f'Converting trader currency in {database_path} ({tables_format})...'
            )
        )

        if options['sync']:
            self.stdout.write('Running in synchronous mode...')
            result = convert_trader_currency(database_path, tables_format, dry_run)

            if not result['success']:
                raise CommandError(f"Failed: {result.get('message', 'Unknown error')}")

            if not result['trader_found']:
                self.stdout.write(
                    self.style.WARNING(
                        f"Trader {result['trader_nickname']} not found, only quests were converted"
                    )
                )
            self.stdout.write(
                self.style.SUCCESS(
                    f"Rate {result['exchange_rate']} ({result['rate_source']}): "
                    f"{result['barters_converted']} barters, "
                    f"{result['rewards_converted']} rewards in {result['quests_processed']} quests"
                )
            )
            if dry_run:
                self.stdout.write(self.style.WARNING('Dry run, nothing was written'))
        else:
            self.stdout.write('Dispatching Celery task...')
            task = convert_trader_currency.delay(database_path, tables_format, dry_run)

            self.stdout.write(
                self.style.SUCCESS(
                    f'Task dispatched with ID: {task.id}'
                )
            )
            self.stdout.write(
                'Use "celery -A core inspect active" to check task status'
            )
