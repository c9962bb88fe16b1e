"""
Domain value objects for registration verification.

All values are immutable. None of them is persisted by this service.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class RegistrationRequest:
    """Candidate registration supplied by the caller."""

    username: str
    email: str
    verification_url: str


@dataclass(frozen=True)
class AccountRecord:
    """Existing account as seen through the account store (read-only)."""

    username: str
    email: str


@dataclass(frozen=True)
class MailMessage:
    """Verification email, built once per call."""

    sender: str
    to: str
    subject: str
    text: str
    html: str

    def as_form(self) -> dict[str, str]:
        """Form fields expected by the transactional email provider."""
        return {
            "from": self.sender,
            "to": self.to,
            "subject": self.subject,
            "text": self.text,
            "html": self.html,
        }


@dataclass(frozen=True)
class MailCredentials:
    """
    Mail provider credentials, loaded once at startup.

    The api key is excluded from repr() so the object can appear in logs
    and tracebacks without exposing the secret.
    """

    api_key: str = field(repr=False)
    domain: str
    api_base_url: str = "https://api.mailgun.net"

    @property
    def messages_url(self) -> str:
        return f"{self.api_base_url.rstrip('/')}/v3/{self.domain}/messages"
