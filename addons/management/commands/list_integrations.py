"""
Management command to list the registered integrations.

Usage:
    python manage.py list_integrations                        # All integrations
    python manage.py list_integrations --feature=share_button
    python manage.py list_integrations --plugin=3
    python manage.py list_integrations --format=json
"""
import json

from django.core.management.base import BaseCommand

from addons.helper import get_integration_helper


class Command(BaseCommand):
    help = 'List the integrations contributed by enabled add-on plugins'

    def add_arguments(self, parser):
        parser.add_argument(
            '--feature',
            action='append',
            dest='features',
            help='Only show integrations with this feature enabled (repeatable)'
        )
        parser.add_argument(
            '--plugin',
            type=int,
            help='Only show integrations contributed by this plugin id'
        )
        parser.add_argument(
            '--format',
            choices=['table', 'json'],
            default='table',
            help='Output format (default: table)'
        )

    def handle(self, *args, **options):
        helper = get_integration_helper()
        integrations = helper.get_integration_objects(
            with_features=options['features'],
            plugin_id=options['plugin']
        )

        rows = []
        for name, integration in integrations.items():
            settings = integration.integration_settings
            rows.append({
                'name': name,
                'plugin_id': getattr(settings, 'plugin_id', None),
                'published': integration.is_published(),
                'priority': integration.get_priority(),
                'features': integration.get_enabled_features(),
            })

        if options['format'] == 'json':
            self.stdout.write(json.dumps(rows, indent=2))
            return

        if not rows:
            self.stdout.write(self.style.WARNING('No integrations found'))
            return

        self.stdout.write(f"{'Name':<24} {'Plugin':<8} {'Published':<10} {'Priority':<9} Features")
        self.stdout.write('-' * 80)
        for row in rows:
            self.stdout.write(
                f"{row['name']:<24} {str(row['plugin_id']):<8} "
                f"{'yes' if row['published'] else 'no':<10} {row['priority']:<9} "
                f"{', '.join(row['features'])}"
            )
        self.stdout.write(self.style.SUCCESS(f"\n{len(rows)} integration(s)"))
