"""
Domain exceptions - Semantic error types for registration verification.

This module defines domain-specific exceptions that communicate
business rule violations without leaking infrastructure details.
"""

from .ports import RejectionReason


class RegistrationError(Exception):
    """Base class for registration domain errors."""

    pass


class InvalidRegistration(RegistrationError):
    """
    Registration details were rejected.

    Single error category for every rejection cause. Callers branch on
    ``reason`` rather than on the message text.
    """

    def __init__(self, reason: RejectionReason) -> None:
        super().__init__(reason.message)
        self.reason = reason


class DispatchError(RegistrationError):
    """
    Verification email could not be handed to the mail provider.

    Raised by mail sender adapters. The message is always the user-safe
    dispatch failure text; the transport cause is logged, not attached.
    """

    def __init__(self) -> None:
        super().__init__(RejectionReason.DISPATCH_FAILED.message)
