"""Invoice number generation."""

from datetime import date

from django.conf import settings
from django.db.models.functions import Length

from ..models import Transaction


def invoice_prefix(on_date: date) -> str:
    return f"{settings.POS_INVOICE_PREFIX}-{on_date:%Y%m%d}"


def next_invoice_number(*, store_id, on_date: date) -> str:
    """
    Next invoice number of a store for a day, e.g. ``INV-20250314-0007``.

    The sequence restarts at 0001 every day and continues from the highest
    number already issued for that store and day. Callers must hold a lock
    on the store row so two checkouts cannot draw the same number.
    """
    prefix = invoice_prefix(on_date)

    last = (
        Transaction.objects
        .filter(store_id=store_id, invoice_number__startswith=f"{prefix}-")
        # Past 9999 the sequence gains a digit, so longer numbers sort first
        .order_by(Length('invoice_number').desc(), '-invoice_number')
        .values_list('invoice_number', flat=True)
        .first()
    )

    sequence = 1
    if last:
        sequence = int(last.rsplit('-', 1)[-1]) + 1

    return f"{prefix}-{sequence:04d}"
