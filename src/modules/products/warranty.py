"""Warranty period arithmetic."""

from __future__ import annotations

from datetime import date

from dateutil.relativedelta import relativedelta


def warranty_expiry(purchase_date: date, months: int) -> date:
    """Add *months* calendar months to *purchase_date*.

    The day is clamped to the last day of the target month, so
    2024-01-31 + 1 month is 2024-02-29, never a day rolled over into
    March.
    """
    return purchase_date + relativedelta(months=months)
