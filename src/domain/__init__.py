"""
Domain layer - Pure business logic with zero framework imports.

This package contains the registration verification logic: availability
checks, verification email composition and the orchestrating state
machine. It defines its own port interfaces for infrastructure
abstraction, ensuring true hexagonal architecture decoupling.
"""

from .availability import AvailabilityChecker
from .composer import VerificationEmailComposer
from .exceptions import DispatchError, InvalidRegistration, RegistrationError
from .models import AccountRecord, MailCredentials, MailMessage, RegistrationRequest
from .ports import AccountRepository, MailSender, RejectionReason, VerificationState
from .registration import RegistrationVerifier, VerificationResult, verify_registration

__all__ = [
    "AccountRecord",
    "AccountRepository",
    "AvailabilityChecker",
    "DispatchError",
    "InvalidRegistration",
    "MailCredentials",
    "MailMessage",
    "MailSender",
    "RegistrationError",
    "RegistrationRequest",
    "RegistrationVerifier",
    "RejectionReason",
    "VerificationEmailComposer",
    "VerificationResult",
    "VerificationState",
    "verify_registration",
]
