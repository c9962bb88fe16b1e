"""
Unit tests for RegistrationVerifier domain logic.

Tests domain logic with fake and mocked ports to verify:
- Check ordering and short-circuiting
- Rejection reasons and messages
- Dispatch failure absorption
- Single-use semantics
"""

from unittest.mock import Mock

import pytest

from src.domain.composer import VerificationEmailComposer
from src.domain.exceptions import DispatchError, InvalidRegistration
from src.domain.models import AccountRecord, RegistrationRequest
from src.domain.ports import RejectionReason, VerificationState
from src.domain.registration import RegistrationVerifier, VerificationResult, verify_registration


class TestSuccessfulVerification:
    """Both fields unique - email is dispatched."""

    def test_returns_email_sent(self, alice, accounts, mail_sender) -> None:
        """Unclaimed username and email yield EMAIL_SENT."""
        result = verify_registration(alice, accounts=accounts, mail_sender=mail_sender)

        assert result.ok is True
        assert result.state is VerificationState.EMAIL_SENT
        assert result.reason is None
        assert result.error is None

    def test_sends_exactly_one_email(self, alice, accounts, mail_sender) -> None:
        """Mail transport is invoked exactly once."""
        verify_registration(alice, accounts=accounts, mail_sender=mail_sender)

        assert len(mail_sender.sent) == 1

    def test_message_addressed_to_request_email(self, alice, accounts, mail_sender) -> None:
        """Message recipient equals the request email."""
        verify_registration(alice, accounts=accounts, mail_sender=mail_sender)

        assert mail_sender.sent[0].to == "alice@x.com"

    def test_message_bodies_contain_verification_url(
        self, alice, accounts, mail_sender
    ) -> None:
        """Both bodies carry the verification URL."""
        verify_registration(alice, accounts=accounts, mail_sender=mail_sender)

        message = mail_sender.sent[0]
        assert "https://app/verify/abc" in message.text
        assert "https://app/verify/abc" in message.html

    def test_uses_injected_composer(self, alice, accounts, mail_sender) -> None:
        """A custom composer controls sender and subject."""
        composer = VerificationEmailComposer(app_name="Acme", sender="hello@acme.test")

        verify_registration(alice, accounts=accounts, mail_sender=mail_sender, composer=composer)

        assert mail_sender.sent[0].sender == "hello@acme.test"
        assert mail_sender.sent[0].subject == "Acme Registration Verification"

    def test_repeated_calls_send_again(self, alice, accounts, mail_sender) -> None:
        """Checks are repeatable; every successful call sends a new email."""
        verify_registration(alice, accounts=accounts, mail_sender=mail_sender)
        verify_registration(alice, accounts=accounts, mail_sender=mail_sender)

        assert len(mail_sender.sent) == 2


class TestUsernameTaken:
    """Username already claimed."""

    def test_rejected_with_username_taken(self, alice, accounts, mail_sender) -> None:
        """Existing username rejects with USERNAME_TAKEN."""
        accounts.add("alice", "someone-else@x.com")

        result = verify_registration(alice, accounts=accounts, mail_sender=mail_sender)

        assert result.ok is False
        assert result.state is VerificationState.REJECTED
        assert result.reason is RejectionReason.USERNAME_TAKEN
        assert result.message == "Username exists"

    def test_no_email_sent(self, alice, accounts, mail_sender) -> None:
        """Transport is never called when the username is taken."""
        accounts.add("alice", "someone-else@x.com")

        verify_registration(alice, accounts=accounts, mail_sender=mail_sender)

        assert mail_sender.sent == []

    def test_email_not_looked_up(self, alice, accounts, mail_sender) -> None:
        """Username rejection short-circuits before the email lookup."""
        accounts.add("alice", "alice@x.com")

        verify_registration(alice, accounts=accounts, mail_sender=mail_sender)

        assert accounts.lookups == [("username", "alice")]


class TestEmailTaken:
    """Username free, email already claimed."""

    def test_rejected_with_email_taken(self, alice, accounts, mail_sender) -> None:
        """Existing email rejects with EMAIL_TAKEN."""
        accounts.add("bob", "alice@x.com")

        result = verify_registration(alice, accounts=accounts, mail_sender=mail_sender)

        assert result.reason is RejectionReason.EMAIL_TAKEN
        assert result.message == "Email already used"

    def test_no_email_sent(self, alice, accounts, mail_sender) -> None:
        """Transport is never called when the email is taken."""
        accounts.add("bob", "alice@x.com")

        verify_registration(alice, accounts=accounts, mail_sender=mail_sender)

        assert mail_sender.sent == []

    def test_lookup_order(self, alice, accounts, mail_sender) -> None:
        """Username is checked before email."""
        accounts.add("bob", "alice@x.com")

        verify_registration(alice, accounts=accounts, mail_sender=mail_sender)

        assert accounts.lookups == [("username", "alice"), ("email", "alice@x.com")]


class TestDispatchFailed:
    """Mail transport fails."""

    def test_rejected_with_dispatch_failed(self, alice, accounts, failing_mail_sender) -> None:
        """DispatchError becomes DISPATCH_FAILED."""
        result = verify_registration(
            alice, accounts=accounts, mail_sender=failing_mail_sender
        )

        assert result.reason is RejectionReason.DISPATCH_FAILED
        assert result.message == (
            "Could not send verification email; please check email address"
        )
        assert failing_mail_sender.attempts == 1

    def test_dispatch_error_not_raised(self, alice, accounts) -> None:
        """DispatchError is absorbed, not propagated."""
        sender = Mock()
        sender.send.side_effect = DispatchError()

        result = verify_registration(alice, accounts=accounts, mail_sender=sender)

        assert result.ok is False

    def test_unexpected_sender_error_propagates(self, alice, accounts) -> None:
        """Only DispatchError is translated; programming errors surface."""
        sender = Mock()
        sender.send.side_effect = TypeError("bug")

        with pytest.raises(TypeError):
            verify_registration(alice, accounts=accounts, mail_sender=sender)


class TestExactMatchLookups:
    """Values reach the account store unmodified."""

    def test_values_passed_verbatim(self, accounts, mail_sender) -> None:
        """No trimming or case folding before lookup."""
        request = RegistrationRequest(
            username="  Alice ",
            email="Alice@X.com ",
            verification_url="https://app/verify/abc",
        )

        verify_registration(request, accounts=accounts, mail_sender=mail_sender)

        assert accounts.lookups == [("username", "  Alice "), ("email", "Alice@X.com ")]

    def test_case_differs_is_available(self, accounts, mail_sender) -> None:
        """A differently-cased username is treated as unclaimed."""
        accounts.add("alice", "alice@x.com")
        request = RegistrationRequest(
            username="ALICE",
            email="ALICE@x.com",
            verification_url="https://app/verify/abc",
        )

        result = verify_registration(request, accounts=accounts, mail_sender=mail_sender)

        assert result.ok is True


class TestVerifierStateMachine:
    """State transitions of a single verifier."""

    def test_initial_state_is_start(self, alice, accounts, mail_sender) -> None:
        verifier = RegistrationVerifier(alice, accounts, mail_sender)
        assert verifier.state is VerificationState.START

    def test_state_after_success(self, alice, accounts, mail_sender) -> None:
        verifier = RegistrationVerifier(alice, accounts, mail_sender)
        verifier.call()
        assert verifier.state is VerificationState.EMAIL_SENT

    def test_state_after_rejection(self, alice, accounts, mail_sender) -> None:
        accounts.add("alice", "alice@x.com")
        verifier = RegistrationVerifier(alice, accounts, mail_sender)
        verifier.call()
        assert verifier.state is VerificationState.REJECTED

    def test_callable(self, alice, accounts, mail_sender) -> None:
        """Verifier can be invoked directly."""
        verifier = RegistrationVerifier(alice, accounts, mail_sender)
        assert verifier().ok is True

    def test_single_use(self, alice, accounts, mail_sender) -> None:
        """Second call on the same verifier raises RuntimeError."""
        verifier = RegistrationVerifier(alice, accounts, mail_sender)
        verifier.call()

        with pytest.raises(RuntimeError):
            verifier.call()

        assert len(mail_sender.sent) == 1

    def test_works_with_mocked_repository(self, alice, mail_sender) -> None:
        """Any object satisfying AccountRepository is accepted."""
        repo = Mock()
        repo.find_by_username.return_value = AccountRecord("alice", "a@x.com")

        result = RegistrationVerifier(alice, repo, mail_sender).call()

        assert result.reason is RejectionReason.USERNAME_TAKEN
        repo.find_by_username.assert_called_once_with("alice")
        repo.find_by_email.assert_not_called()


class TestVerificationResult:
    """Result helpers."""

    def test_sent_message(self) -> None:
        assert VerificationResult.sent().message == "Verification email sent"

    def test_raise_for_rejection_on_success_is_noop(self) -> None:
        VerificationResult.sent().raise_for_rejection()

    def test_raise_for_rejection_raises_invalid_registration(self) -> None:
        result = VerificationResult.rejected(RejectionReason.EMAIL_TAKEN)

        with pytest.raises(InvalidRegistration) as exc_info:
            result.raise_for_rejection()

        assert exc_info.value.reason is RejectionReason.EMAIL_TAKEN
        assert str(exc_info.value) == "Email already used"

    def test_error_carries_reason(self) -> None:
        result = VerificationResult.rejected(RejectionReason.DISPATCH_FAILED)
        assert isinstance(result.error, InvalidRegistration)
        assert result.error.reason is RejectionReason.DISPATCH_FAILED
