"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
"""

from pydantic import BaseModel, EmailStr, Field

from src.domain.models import RegistrationRequest
from src.domain.ports import RejectionReason


class RegisterRequest(BaseModel):
    """Request model for registration verification."""

    username: str = Field(..., min_length=1, max_length=64, description="Requested username")
    email: EmailStr
    verification_url: str = Field(
        ...,
        pattern=r"^https?://\S+$",
        max_length=2048,
        description="Link the user follows to confirm their email",
    )

    def to_domain(self) -> RegistrationRequest:
        return RegistrationRequest(
            username=self.username,
            email=str(self.email),
            verification_url=self.verification_url,
        )


class RegisterResponse(BaseModel):
    """Response model for a dispatched verification email."""

    message: str
    email: str


class RejectionResponse(BaseModel):
    """Response model for a rejected registration."""

    detail: str
    reason: RejectionReason
