"""Authentication schemas."""

from datetime import datetime

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, Field, field_validator


class UserRegister(BaseModel):
    """User registration request."""

    name: str = Field(..., max_length=255)
    email: str = Field(..., max_length=255)
    password: str = Field(..., max_length=128)

    @field_validator("email")
    @classmethod
    def check_email_format(cls, value: str) -> str:
        """Reject malformed addresses but keep the submitted spelling.

        Login matches the email exactly, so the stored value must be the one
        the user typed.
        """
        try:
            validate_email(value, check_deliverability=False)
        except EmailNotValidError as e:
            raise ValueError(f"value is not a valid email address: {e}") from None
        return value


class UserLogin(BaseModel):
    """User login request.

    Fields are optional here so that a missing value is reported by the
    authenticator with the same message as a blank one.
    """

    email: str | None = Field(None, max_length=255)
    password: str | None = Field(None, max_length=128)


class UserResponse(BaseModel):
    """Public user view. Never carries the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(..., serialization_alias="_id")
    name: str
    email: str


class UserCreatedResponse(UserResponse):
    """User view returned after registration."""

    created_at: datetime = Field(..., serialization_alias="createdAt")


class MessageResponse(BaseModel):
    """Plain message response."""

    message: str
