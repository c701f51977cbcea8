"""
Payment repository - aggregation queries for payments.
"""
from django.db.models import Count, QuerySet, Sum
from django.db.models.functions import ExtractMonth

from core.constants import PaymentStatus
from core.repositories import BaseRepository
from .models import Payment


class PaymentRepository(BaseRepository[Payment]):
    """Repository for Payment model"""
    model = Payment

    def get_queryset(self) -> QuerySet[Payment]:
        return Payment.objects.select_related('tenant', 'property', 'room', 'recorded_by')

    def summary(self, queryset: QuerySet[Payment]) -> list:
        """Count and total per status"""
        rows = (
            queryset.order_by()
            .values('status')
            .annotate(count=Count('id'), total_amount=Sum('total_amount'))
            .order_by('status')
        )
        return [
            {'status': row['status'], 'count': row['count'], 'total_amount': row['total_amount'] or 0}
            for row in rows
        ]

    def monthly_revenue(self, property_id, year: int) -> list:
        """Paid revenue per calendar month of payment_date"""
        rows = (
            Payment.objects.filter(
                property_id=property_id,
                status=PaymentStatus.PAID,
                payment_date__year=year,
            )
            .annotate(month_number=ExtractMonth('payment_date'))
            .values('month_number')
            .annotate(revenue=Sum('total_amount'), count=Count('id'))
            .order_by('month_number')
        )
        return [
            {'month': row['month_number'], 'revenue': row['revenue'] or 0, 'count': row['count']}
            for row in rows
        ]

    def past_due_pending(self, today):
        return self.get_queryset().filter(status=PaymentStatus.PENDING, due_date__lt=today)
