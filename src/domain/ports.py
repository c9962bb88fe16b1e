"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from infrastructure. Adapters implement these protocols.
"""

from enum import Enum
from typing import Protocol

from .models import AccountRecord, MailMessage


class VerificationState(str, Enum):
    """
    Registration verification states.

    State Transitions (forward-only, short-circuiting):
    - START -> USERNAME_CHECKED (username available)
    - USERNAME_CHECKED -> EMAIL_CHECKED (email available)
    - EMAIL_CHECKED -> EMAIL_SENT (mail provider accepted the message)
    - any non-terminal state -> REJECTED

    Terminal States:
    - EMAIL_SENT: Verification email dispatched
    - REJECTED: Registration refused, see RejectionReason
    """

    START = "START"
    USERNAME_CHECKED = "USERNAME_CHECKED"
    EMAIL_CHECKED = "EMAIL_CHECKED"
    EMAIL_SENT = "EMAIL_SENT"
    REJECTED = "REJECTED"


class RejectionReason(str, Enum):
    """
    Why a registration was rejected.

    The value is a stable machine-readable code; ``message`` is the
    human-readable text shown to the user.
    """

    USERNAME_TAKEN = "username_taken"
    EMAIL_TAKEN = "email_taken"
    DISPATCH_FAILED = "dispatch_failed"

    @property
    def message(self) -> str:
        return _REJECTION_MESSAGES[self]


_REJECTION_MESSAGES = {
    RejectionReason.USERNAME_TAKEN: "Username exists",
    RejectionReason.EMAIL_TAKEN: "Email already used",
    RejectionReason.DISPATCH_FAILED: (
        "Could not send verification email; please check email address"
    ),
}


class AccountRepository(Protocol):
    """Port interface for read-only account lookups."""

    def find_by_username(self, username: str) -> AccountRecord | None:
        """
        Find the account claiming a username.

        Args:
            username: Username exactly as supplied (no normalization)

        Returns:
            The matching AccountRecord, or None if the username is free
        """
        ...

    def find_by_email(self, email: str) -> AccountRecord | None:
        """
        Find the account claiming an email address.

        Args:
            email: Email exactly as supplied (no normalization)

        Returns:
            The matching AccountRecord, or None if the email is free
        """
        ...


class MailSender(Protocol):
    """Port interface for email delivery."""

    def send(self, message: MailMessage) -> None:
        """
        Deliver a composed message.

        Args:
            message: Fully composed verification email

        Raises:
            DispatchError: If the message could not be handed off
        """
        ...
