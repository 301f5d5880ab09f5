"""
Serializers for reports app.

Input serializers validate query parameters; response serializers document
the payloads returned by :class:`apps.reports.reports.ReportQueries`.
"""

from datetime import timedelta

from django.utils import timezone
from rest_framework import serializers


DEFAULT_RANGE_DAYS = 30


# =============================================================================
# Input Serializers (Query Parameter Validation)
# =============================================================================

class DashboardQuerySerializer(serializers.Serializer):
    """
    Query Parameters:
        store (UUID): Store to summarise
        date (date): Day to summarise, defaults to today
    """

    store = serializers.UUIDField()
    date = serializers.DateField(required=False)


class DateRangeQuerySerializer(serializers.Serializer):
    """
    Validate store and date range query parameters.

    Used by: sales_report, daily_revenue

    Note:
        Missing end_date means today; missing start_date means the
        30 days ending on end_date. An inverted range is left for the
        report to reject.
    """

    store = serializers.UUIDField()
    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)

    def validate(self, attrs):
        end_date = attrs.get('end_date') or timezone.localdate()
        attrs['end_date'] = end_date
        attrs.setdefault('start_date', end_date - timedelta(days=DEFAULT_RANGE_DAYS - 1))
        return attrs


# =============================================================================
# Response Serializers (API Documentation)
# =============================================================================

class DashboardStatsSerializer(serializers.Serializer):
    date = serializers.DateField()
    today_revenue = serializers.DecimalField(max_digits=14, decimal_places=2)
    today_transactions = serializers.IntegerField()
    today_customers = serializers.IntegerField()
    services_sold = serializers.IntegerField()
    active_members = serializers.IntegerField()


class TopItemSerializer(serializers.Serializer):
    name = serializers.CharField()
    count = serializers.IntegerField()
    revenue = serializers.DecimalField(max_digits=14, decimal_places=2)


class SalesReportSerializer(serializers.Serializer):
    start_date = serializers.DateField()
    end_date = serializers.DateField()
    revenue = serializers.DecimalField(max_digits=14, decimal_places=2)
    transaction_count = serializers.IntegerField()
    total_tax = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_discount = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_redeemed = serializers.DecimalField(max_digits=14, decimal_places=2)
    top_services = TopItemSerializer(many=True)
    top_products = TopItemSerializer(many=True)


class DailyRevenuePointSerializer(serializers.Serializer):
    date = serializers.DateField()
    revenue = serializers.DecimalField(max_digits=14, decimal_places=2)
    transactions = serializers.IntegerField()


class DailyRevenueResponseSerializer(serializers.Serializer):
    start_date = serializers.DateField()
    end_date = serializers.DateField()
    data = DailyRevenuePointSerializer(many=True)


class ErrorSerializer(serializers.Serializer):
    """Error response."""
    error = serializers.CharField()
