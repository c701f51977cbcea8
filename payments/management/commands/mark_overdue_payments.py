"""
Management command to mark past-due pending payments as overdue.

Usage:
    python manage.py mark_overdue_payments [--dry-run] [--remind]

Also scheduled daily by the background scheduler.
"""

from django.core.management.base import BaseCommand
from django.utils import timezone

from payments.services import PaymentService


class Command(BaseCommand):
    help = 'Mark pending payments whose due date has passed as overdue'

    def add_arguments(self, parser):
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show what would be updated without changing records',
        )
        parser.add_argument(
            '--remind',
            action='store_true',
            help='Email a payment reminder to each affected tenant',
        )

    def handle(self, *args, **options):
        dry_run = options['dry_run']
        today = timezone.localdate()

        self.stdout.write(f"\n{'='*60}")
        self.stdout.write(f"  OVERDUE PAYMENT SWEEP - {today:%d %B %Y}")
        self.stdout.write(f"{'='*60}\n")

        if dry_run:
            self.stdout.write(self.style.WARNING("DRY RUN MODE - No records will be updated\n"))

        service = PaymentService()
        payments = service.mark_overdue(today=today, dry_run=dry_run)

        for payment in payments:
            self.stdout.write(
                f"  ! {payment.tenant.full_name} - {payment.month:%B %Y}: "
                f"Rs. {payment.total_amount} due {payment.due_date:%d %b %Y}"
            )

        if options['remind'] and not dry_run and payments:
            sent = service.send_reminders(payments)
            self.stdout.write(f"  Reminders sent: {sent}/{len(payments)}")

        self.stdout.write(f"\n{'='*60}")
        if dry_run:
            self.stdout.write(self.style.WARNING(f"  Would mark overdue: {len(payments)}"))
        else:
            self.stdout.write(self.style.SUCCESS(f"  Marked overdue: {len(payments)}"))
        self.stdout.write(f"{'='*60}\n")
