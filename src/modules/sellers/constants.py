"""Seller domain constants."""

from django.db import models


class ContractStatus(models.TextChoices):
    PENDING = "PENDING", "Pending"
    ACTIVE = "ACTIVE", "Active"
    DEACTIVATED = "DEACTIVATED", "Deactivated"
    TERMINATED = "TERMINATED", "Terminated"
