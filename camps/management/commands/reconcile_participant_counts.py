from django.core.management.base import BaseCommand

from camps.services.camps import reconcile_participant_counts


class Command(BaseCommand):
    help = "Reset every camp's participant_count to its current number of registrations."

    def add_arguments(self, parser):
        parser.add_argument('--dry-run', action='store_true', help='Only report camps whose counter drifted.')

    def handle(self, *args, **options):
        dry_run = options['dry_run']
        drift = reconcile_participant_counts(dry_run=dry_run)
        for row in drift:
            self.stdout.write(f"camp {row['campId']}: stored={row['stored']} actual={row['actual']}")
        verb = 'would fix' if dry_run else 'fixed'
        self.stdout.write(self.style.SUCCESS(f"{verb} {len(drift)} camp counter(s)"))
