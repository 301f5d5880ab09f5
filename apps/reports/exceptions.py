"""
Domain exceptions for reports app.

These are raised by :mod:`apps.reports.reports` when a request cannot be
answered, and mapped to HTTP 400 responses by the views.

Exception Hierarchy:
    ReportsServiceError (base)
    └── InvalidDateRangeError

Usage:
    from apps.reports.exceptions import InvalidDateRangeError

    if start_date > end_date:
        raise InvalidDateRangeError("start_date must be before end_date")
"""


class ReportsServiceError(Exception):
    """
    Base exception for all reports errors.

    Views catch this to turn any report failure into a 400::

        try:
            data = ReportQueries.sales_report(store_id, start, end)
        except ReportsServiceError as e:
            return Response({'error': str(e)}, status=400)
    """

    pass


class InvalidDateRangeError(ReportsServiceError):
    """Raised when a report's start date falls after its end date."""

    pass
