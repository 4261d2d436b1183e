"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
Password strength and length are checked by the domain layer, not here,
so every rule violation surfaces as a domain error.
"""

from pydantic import BaseModel, EmailStr, Field

from src.domain.models import Account


class RegisterRequest(BaseModel):
    """Request model for account registration."""

    name: str = Field(..., min_length=1, max_length=64, description="Unique display name")
    email: EmailStr
    password: str
    confirm_password: str


class LoginRequest(BaseModel):
    """Request model for email and password login."""

    email: EmailStr
    password: str


class AccountResponse(BaseModel):
    """Public view of an account (never includes the password hash)."""

    name: str
    email: str
    is_admin: bool
    is_owner: bool

    @classmethod
    def from_account(cls, account: Account) -> "AccountResponse":
        return cls(
            name=account.name,
            email=account.email,
            is_admin=account.is_admin,
            is_owner=account.is_owner,
        )


class AvailabilityResponse(BaseModel):
    """Pre-submission uniqueness checks for the sign-up form."""

    email_taken: bool | None = None
    name_taken: bool | None = None


class ResetStartRequest(BaseModel):
    """Request model for starting a password reset."""

    email: EmailStr


class ResetStartResponse(BaseModel):
    """Response model for a started password reset."""

    message: str
    flow_id: str
    state: str
    expires_in_seconds: int


class CodeRequest(BaseModel):
    """Request model for verification code submission."""

    code: str = Field(
        ...,
        min_length=6,
        max_length=16,
        description="6-digit verification code, separators are ignored",
    )


class NewPasswordRequest(BaseModel):
    """Request model for the new password step."""

    new_password: str
    confirm_password: str


class FlowStateResponse(BaseModel):
    """Current state of a reset flow."""

    message: str
    state: str


class ErrorResponse(BaseModel):
    """Standard error response model."""

    detail: str
