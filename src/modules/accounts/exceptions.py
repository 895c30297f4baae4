"""Account domain exceptions.

Raised by the Service Layer; mapped to HTTP by the core exception handler.
"""

from __future__ import annotations

from modules.core.exceptions import Conflict, Forbidden, NotFound


class AccountNotFound(NotFound):
    default_message = "User not found."


class AdminAlreadyRegistered(Conflict):
    default_message = (
        "An administrator account already exists. Admin registration can "
        "only be done once."
    )


class SelfStatusChange(Forbidden):
    default_message = "Admin cannot change their own active status."
