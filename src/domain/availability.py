"""
Availability checks against the account store.

Lookups are exact-match on the values supplied by the caller. No
case-folding or trimming is applied here.
"""

from dataclasses import dataclass

from .ports import AccountRepository


@dataclass
class AvailabilityChecker:
    """Answers whether a username or email is still unclaimed."""

    accounts: AccountRepository

    def username_available(self, username: str) -> bool:
        return self.accounts.find_by_username(username) is None

    def email_available(self, email: str) -> bool:
        return self.accounts.find_by_email(email) is None
