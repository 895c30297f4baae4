"""Warranty claim domain constants.

Any status may follow any status.  The structural rules are that DENIED
needs response notes and that a product has at most one claim outside
``TERMINAL_STATES`` at a time.
"""

from django.db import models


class ClaimStatus(models.TextChoices):
    REQUESTED = "REQUESTED", "Requested"
    ACCEPTED = "ACCEPTED", "Accepted"
    DENIED = "DENIED", "Denied"
    IN_PROGRESS = "IN_PROGRESS", "In progress"
    RESOLVED = "RESOLVED", "Resolved"


TERMINAL_STATES: frozenset[str] = frozenset({ClaimStatus.RESOLVED, ClaimStatus.DENIED})
