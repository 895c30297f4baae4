"""Translation of storage-level uniqueness violations.

Each backend words a duplicate-key error differently: PostgreSQL and
MySQL name the violated constraint, SQLite lists the ``table.column``
tuple.  ``UNIQUE_VIOLATIONS`` maps every known marker to the
human-readable message shown to the caller.  Other integrity failures
(NOT NULL, foreign key, check constraints) are not conflicts and are
left for the caller to re-raise.
"""

from __future__ import annotations

from typing import Optional

from django.db import IntegrityError

from modules.core.exceptions import Conflict, DuplicateEmail

# Fragments present in every backend's duplicate-key message (SQLite:
# "UNIQUE constraint failed", PostgreSQL: "duplicate key value violates
# unique constraint", MySQL: "Duplicate entry") or in our own index names.
UNIQUE_MARKERS = ("unique", "duplicate", "uniq_")

UNIQUE_VIOLATIONS: list[tuple[tuple[str, ...], type[Conflict], str]] = [
    (
        ("users_email", "users.email"),
        DuplicateEmail,
        "This email is already registered.",
    ),
    (
        ("sellers_user_id", "sellers.user_id"),
        Conflict,
        "This user already has a seller profile.",
    ),
    (
        (
            "uniq_product_customer_seller_order",
            "registered_products.seller_order_id",
        ),
        Conflict,
        "This product has already been registered by you for this seller "
        "and order.",
    ),
    (
        ("uniq_active_claim_per_product", "warranty_claims.registered_product_id"),
        Conflict,
        "An active claim already exists for this product.",
    ),
]


def is_unique_violation(exc: IntegrityError) -> bool:
    text = str(exc).lower()
    return any(marker in text for marker in UNIQUE_MARKERS)


def translate_integrity_error(exc: IntegrityError) -> Optional[Conflict]:
    """Return the ``Conflict`` matching the constraint named in *exc*.

    ``None`` when *exc* is not a uniqueness violation.
    """
    if not is_unique_violation(exc):
        return None
    text = str(exc)
    for markers, error_class, message in UNIQUE_VIOLATIONS:
        if any(marker in text for marker in markers):
            return error_class(message)
    return Conflict()
