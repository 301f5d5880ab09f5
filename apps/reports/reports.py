"""
Reports Module
===============

Read-only aggregate queries over recorded sales, powering the store
dashboard and the sales report screens.

Classes:
    ReportQueries: Static methods for dashboard and sales statistics.

Example:
    Today's dashboard for a store::

        from apps.reports.reports import ReportQueries

        stats = ReportQueries.dashboard_stats(store.id)
        print(f"Revenue today: {stats['today_revenue']}")

Note:
    Date ranges are inclusive of the whole end day. All methods return plain
    dictionaries or lists ready for JSON serialization.
"""

from decimal import Decimal

from django.db.models import Count, Sum
from django.db.models.functions import Coalesce, TruncDate
from django.utils import timezone

from apps.billing.models import LineKind, Transaction, TransactionItem
from apps.customers.models import CustomerMembership
from .exceptions import InvalidDateRangeError


ZERO = Decimal('0.00')
TOP_ITEMS_LIMIT = 5


def _check_range(start_date, end_date):
    if start_date > end_date:
        raise InvalidDateRangeError("start_date must be on or before end_date")


def _sales_between(store_id, start_date, end_date):
    return Transaction.objects.filter(
        store_id=store_id,
        created_at__date__gte=start_date,
        created_at__date__lte=end_date,
    )


def _top_items(items, kind, limit):
    rows = (
        items.filter(kind=kind)
        .values('item_name')
        .annotate(count=Sum('quantity'), revenue=Sum('total_price'))
        .order_by('-revenue', 'item_name')[:limit]
    )
    return [
        {
            'name': row['item_name'],
            'count': row['count'],
            'revenue': row['revenue'],
        }
        for row in rows
    ]


class ReportQueries:
    """
    Aggregate queries for the reports endpoints.

    Methods:
        dashboard_stats: Headline numbers for a single day.
        sales_report: Totals and best sellers for a date range.
        daily_revenue: Revenue per day for charts.
    """

    @staticmethod
    def dashboard_stats(store_id, on_date=None):
        """
        Headline numbers for the store dashboard.

        Args:
            store_id (UUID): Store to report on.
            on_date (date, optional): Day to summarise. Defaults to today.

        Returns:
            dict: A dictionary containing:
                - date (date): The summarised day.
                - today_revenue (Decimal): Sum of transaction totals.
                - today_transactions (int): Number of transactions.
                - today_customers (int): Distinct customers who bought.
                - services_sold (int): Service units sold.
                - active_members (int): Customers with a membership of this
                  store valid on the day.
        """
        on_date = on_date or timezone.localdate()
        sales = _sales_between(store_id, on_date, on_date)

        totals = sales.aggregate(
            revenue=Coalesce(Sum('total_amount'), ZERO),
            transactions=Count('id'),
            customers=Count('customer', distinct=True),
        )

        services_sold = TransactionItem.objects.filter(
            transaction__in=sales,
            kind=LineKind.SERVICE,
        ).aggregate(total=Coalesce(Sum('quantity'), 0))['total']

        active_members = CustomerMembership.objects.filter(
            plan__store_id=store_id,
            is_active=True,
            start_date__lte=on_date,
            end_date__gte=on_date,
        ).values('customer').distinct().count()

        return {
            'date': on_date,
            'today_revenue': totals['revenue'],
            'today_transactions': totals['transactions'],
            'today_customers': totals['customers'],
            'services_sold': services_sold,
            'active_members': active_members,
        }

    @staticmethod
    def sales_report(store_id, start_date, end_date, limit=TOP_ITEMS_LIMIT):
        """
        Sales totals and best sellers for a date range.

        Args:
            store_id (UUID): Store to report on.
            start_date (date): First day included.
            end_date (date): Last day included.
            limit (int): Number of top services and products returned.

        Returns:
            dict: Totals (revenue, transaction_count, total_tax,
            total_discount, total_redeemed) plus ``top_services`` and
            ``top_products`` lists of ``{name, count, revenue}`` ordered by
            revenue.

        Raises:
            InvalidDateRangeError: If start_date is after end_date.
        """
        _check_range(start_date, end_date)
        sales = _sales_between(store_id, start_date, end_date)

        totals = sales.aggregate(
            revenue=Coalesce(Sum('total_amount'), ZERO),
            transaction_count=Count('id'),
            total_tax=Coalesce(Sum('tax_amount'), ZERO),
            total_discount=Coalesce(Sum('discount_amount'), ZERO),
            total_redeemed=Coalesce(Sum('redemption_value'), ZERO),
        )

        items = TransactionItem.objects.filter(transaction__in=sales)

        return {
            'start_date': start_date,
            'end_date': end_date,
            **totals,
            'top_services': _top_items(items, LineKind.SERVICE, limit),
            'top_products': _top_items(items, LineKind.PRODUCT, limit),
        }

    @staticmethod
    def daily_revenue(store_id, start_date, end_date):
        """Revenue and transaction count per day; days without sales are omitted."""
        _check_range(start_date, end_date)

        rows = (
            _sales_between(store_id, start_date, end_date)
            .annotate(day=TruncDate('created_at'))
            .values('day')
            .annotate(revenue=Sum('total_amount'), transactions=Count('id'))
            .order_by('day')
        )
        return [
            {
                'date': row['day'],
                'revenue': row['revenue'],
                'transactions': row['transactions'],
            }
            for row in rows
        ]
