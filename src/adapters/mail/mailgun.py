"""
Mailgun mail sender adapter - Implements MailSender protocol.

Sends the verification email through Mailgun's HTTP API using httpx.

Wire contract:
    POST {api_base_url}/v3/{domain}/messages
    Authorization: Basic base64("api:{api_key}")
    Body (form-encoded): from, to, subject, text, html

Every transport failure (connection error, timeout, non-2xx response,
unusable provider URL) is logged here and surfaced to the domain as a
DispatchError carrying only the user-safe message. No retries are attempted.
"""

import logging
from base64 import b64encode

import httpx

from src.domain.exceptions import DispatchError
from src.domain.models import MailCredentials, MailMessage

logger = logging.getLogger(__name__)


def basic_auth_header(credentials: MailCredentials) -> str:
    """Build the Basic Authorization header value for the provider."""
    token = b64encode(f"api:{credentials.api_key}".encode()).decode()
    return f"Basic {token}"


class MailgunMailSender:
    """
    Implements MailSender protocol via the Mailgun messages endpoint.

    Uses structural subtyping - no explicit inheritance from Protocol.
    An httpx.Client may be injected (tests use httpx.MockTransport);
    otherwise one is created with the configured timeout.
    """

    def __init__(
        self,
        credentials: MailCredentials,
        timeout_seconds: float = 10.0,
        client: httpx.Client | None = None,
    ) -> None:
        """
        Initialize sender with provider credentials.

        Args:
            credentials: Mailgun api key and sending domain
            timeout_seconds: Request timeout applied by the transport
            client: Optional pre-configured httpx client
        """
        self._credentials = credentials
        self._client = client or httpx.Client(timeout=timeout_seconds)

    def send(self, message: MailMessage) -> None:
        """
        POST the message to Mailgun.

        Args:
            message: Composed verification email

        Raises:
            DispatchError: On any transport or provider failure
        """
        url = self._credentials.messages_url
        try:
            response = self._client.post(
                url,
                data=message.as_form(),
                headers={"Authorization": basic_auth_header(self._credentials)},
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                "Mailgun rejected verification email: HTTP %s from %s",
                e.response.status_code,
                url,
            )
            raise DispatchError() from None
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error(
                "Mailgun request failed: %s: %s (%s)",
                type(e).__name__,
                e,
                url,
            )
            raise DispatchError() from None

        logger.info("Verification email accepted by Mailgun (HTTP %s)", response.status_code)

    def close(self) -> None:
        self._client.close()
