"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- In-memory account store implementing AccountRepository
- Recording and failing mail senders implementing MailSender
- A sample registration request
"""

import pytest

from src.domain.models import RegistrationRequest
from tests.fakes import FailingMailSender, InMemoryAccountRepository, RecordingMailSender


@pytest.fixture
def accounts() -> InMemoryAccountRepository:
    return InMemoryAccountRepository()


@pytest.fixture
def mail_sender() -> RecordingMailSender:
    return RecordingMailSender()


@pytest.fixture
def failing_mail_sender() -> FailingMailSender:
    return FailingMailSender()


@pytest.fixture
def alice() -> RegistrationRequest:
    return RegistrationRequest(
        username="alice",
        email="alice@x.com",
        verification_url="https://app/verify/abc",
    )
