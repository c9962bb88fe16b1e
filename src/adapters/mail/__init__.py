"""Mail sender adapters - Console and Mailgun implementations."""

from .console import ConsoleMailSender
from .mailgun import MailgunMailSender

__all__ = ["ConsoleMailSender", "MailgunMailSender"]
