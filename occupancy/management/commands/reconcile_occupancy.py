"""
Management command to recompute room and property occupancy counters from
live tenant and room rows. Safe to run at any time; it only repairs drift.

Usage:
    python manage.py reconcile_occupancy

Also scheduled by the background scheduler (OCCUPANCY_RECONCILE_INTERVAL_MINUTES).
"""

from django.core.management.base import BaseCommand

from occupancy.services import OccupancyService


class Command(BaseCommand):
    help = 'Recompute room occupancy and property room counters'

    def handle(self, *args, **options):
        self.stdout.write(f"\n{'='*60}")
        self.stdout.write("  OCCUPANCY RECONCILIATION")
        self.stdout.write(f"{'='*60}\n")

        result = OccupancyService().reconcile_all()

        self.stdout.write(f"  Rooms checked: {result['rooms_checked']}")
        self.stdout.write(f"  Properties checked: {result['properties_checked']}")
        fixed = result['rooms_fixed'] + result['properties_fixed']
        if fixed:
            self.stdout.write(self.style.WARNING(
                f"  Repaired: {result['rooms_fixed']} room(s), {result['properties_fixed']} property(ies)"
            ))
        else:
            self.stdout.write(self.style.SUCCESS("  All counters consistent"))
        self.stdout.write(f"{'='*60}\n")
