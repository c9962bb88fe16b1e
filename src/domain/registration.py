"""
Registration verification - checks availability and dispatches the email.

This module contains the core business logic for the registration
verification step of signup: confirm that nobody already holds the
requested username or email, then send a verification link.

Verification State Machine (Forward-Only Transitions)
=====================================================

States:
- START: Verifier constructed, nothing checked yet
- USERNAME_CHECKED: No account holds the username
- EMAIL_CHECKED: No account holds the email
- EMAIL_SENT: Terminal success, mail provider accepted the message
- REJECTED: Terminal failure, see RejectionReason

Valid Transitions:
    START -> USERNAME_CHECKED         (username available)
    START -> REJECTED                 (USERNAME_TAKEN)
    USERNAME_CHECKED -> EMAIL_CHECKED (email available)
    USERNAME_CHECKED -> REJECTED      (EMAIL_TAKEN)
    EMAIL_CHECKED -> EMAIL_SENT       (dispatch succeeded)
    EMAIL_CHECKED -> REJECTED         (DISPATCH_FAILED)

Note: These checks only pre-screen. Uniqueness at account creation time
is enforced by the persistence layer (UNIQUE constraints), not here.
"""

import logging
from dataclasses import dataclass, field

from .availability import AvailabilityChecker
from .composer import VerificationEmailComposer
from .exceptions import DispatchError, InvalidRegistration
from .models import RegistrationRequest
from .ports import AccountRepository, MailSender, RejectionReason, VerificationState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VerificationResult:
    """
    Outcome of a registration verification.

    Either EMAIL_SENT with no reason, or REJECTED with the reason.
    """

    state: VerificationState
    reason: RejectionReason | None = None

    @classmethod
    def sent(cls) -> "VerificationResult":
        return cls(state=VerificationState.EMAIL_SENT)

    @classmethod
    def rejected(cls, reason: RejectionReason) -> "VerificationResult":
        return cls(state=VerificationState.REJECTED, reason=reason)

    @property
    def ok(self) -> bool:
        return self.state is VerificationState.EMAIL_SENT

    @property
    def message(self) -> str:
        if self.reason is None:
            return "Verification email sent"
        return self.reason.message

    @property
    def error(self) -> InvalidRegistration | None:
        """The rejection as an InvalidRegistration, or None on success."""
        if self.reason is None:
            return None
        return InvalidRegistration(self.reason)

    def raise_for_rejection(self) -> None:
        """
        Raise InvalidRegistration if the registration was rejected.

        For callers that prefer exception flow over inspecting the result.
        """
        error = self.error
        if error is not None:
            raise error


@dataclass
class RegistrationVerifier:
    """
    Single-use verification of one registration request.

    Construct with the request and collaborators, then call() once.
    The current state is exposed as ``state`` for inspection.
    """

    request: RegistrationRequest
    accounts: AccountRepository
    mail_sender: MailSender
    composer: VerificationEmailComposer = field(default_factory=VerificationEmailComposer)
    state: VerificationState = field(default=VerificationState.START, init=False)

    def call(self) -> VerificationResult:
        """
        Run the availability checks and send the verification email.

        Returns:
            VerificationResult - EMAIL_SENT, or REJECTED with the reason

        Raises:
            RuntimeError: If this verifier has already been called
        """
        if self.state is not VerificationState.START:
            raise RuntimeError("RegistrationVerifier can only be called once")

        checker = AvailabilityChecker(self.accounts)

        if not checker.username_available(self.request.username):
            return self._reject(RejectionReason.USERNAME_TAKEN)
        self.state = VerificationState.USERNAME_CHECKED

        if not checker.email_available(self.request.email):
            return self._reject(RejectionReason.EMAIL_TAKEN)
        self.state = VerificationState.EMAIL_CHECKED

        message = self.composer.compose(self.request)
        try:
            self.mail_sender.send(message)
        except DispatchError:
            return self._reject(RejectionReason.DISPATCH_FAILED)

        self.state = VerificationState.EMAIL_SENT
        logger.info("Verification email sent for registration")
        return VerificationResult.sent()

    __call__ = call

    def _reject(self, reason: RejectionReason) -> VerificationResult:
        logger.info("Registration rejected: %s (from %s)", reason.value, self.state.value)
        self.state = VerificationState.REJECTED
        return VerificationResult.rejected(reason)


def verify_registration(
    request: RegistrationRequest,
    *,
    accounts: AccountRepository,
    mail_sender: MailSender,
    composer: VerificationEmailComposer | None = None,
) -> VerificationResult:
    """
    Verify a registration request and send its verification email.

    Convenience entry point wrapping a one-off RegistrationVerifier.
    """
    verifier = RegistrationVerifier(
        request=request,
        accounts=accounts,
        mail_sender=mail_sender,
        composer=composer or VerificationEmailComposer(),
    )
    return verifier.call()
