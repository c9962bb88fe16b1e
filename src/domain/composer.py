"""
Verification email composer.

Produces the fixed HTML/plain-text message pair for a registration.
The verification URL is interpolated as supplied; callers must only
pass URLs they generated themselves.
"""

from dataclasses import dataclass

from .models import MailMessage, RegistrationRequest

DEFAULT_APP_NAME = "Credence"
DEFAULT_SENDER = "noreply@credence-app.com"

_HTML_TEMPLATE = (
    "<H1>{app} App Registration Received</H1>\n"
    '<p>Please <a href="{url}">click here</a>\n'
    "to validate your email.\n"
    "You will be asked to set a password to activate your account.</p>\n"
)

_TEXT_TEMPLATE = (
    "{app} Registration Received\n"
    "\n"
    "Please use the following url to validate your email:\n"
    "\n"
    "{url}\n"
    "\n"
    "You will be asked to set a password to activate your account.\n"
)


@dataclass(frozen=True)
class VerificationEmailComposer:
    """
    Builds the verification MailMessage for a registration request.

    Output depends only on the request's email and verification URL, so
    composing the same request twice yields identical bodies.
    """

    app_name: str = DEFAULT_APP_NAME
    sender: str = DEFAULT_SENDER

    def compose(self, request: RegistrationRequest) -> MailMessage:
        url = request.verification_url
        return MailMessage(
            sender=self.sender,
            to=request.email,
            subject=f"{self.app_name} Registration Verification",
            text=_TEXT_TEMPLATE.format(app=self.app_name, url=url),
            html=_HTML_TEMPLATE.format(app=self.app_name, url=url),
        )
