"""
Auth and profile request models.

Field limits mirror the database columns (see
`showlist.infrastructure.database.models`).
"""

from pydantic import BaseModel, EmailStr, Field, field_validator

from showlist.core.config.constants import (
    BIO_MAX_LENGTH,
    BIO_MIN_LENGTH,
    COUNTRY_MAX_LENGTH,
    COUNTRY_MIN_LENGTH,
    PASSWORD_MIN_LENGTH,
)


def _required_text(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("must not be blank")
    return value


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=PASSWORD_MIN_LENGTH, max_length=128)
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)

    model_config = {
        "json_schema_extra": {
            "example": {
                "email": "ada@example.com",
                "password": "analytical",
                "first_name": "Ada",
                "last_name": "Lovelace",
            }
        }
    }

    @field_validator("first_name", "last_name")
    @classmethod
    def strip_names(cls, v: str) -> str:
        return _required_text(v)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)


class OnboardRequest(BaseModel):
    bio: str = Field(..., min_length=BIO_MIN_LENGTH, max_length=BIO_MAX_LENGTH)
    country: str = Field(..., min_length=COUNTRY_MIN_LENGTH, max_length=COUNTRY_MAX_LENGTH)

    @field_validator("bio")
    @classmethod
    def strip_bio(cls, v: str) -> str:
        return _required_text(v)

    @field_validator("country")
    @classmethod
    def normalize_country(cls, v: str) -> str:
        return _required_text(v).upper()


class ProfileUpdateRequest(BaseModel):
    """Full replacement of the editable profile fields."""

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    bio: str = Field(..., min_length=BIO_MIN_LENGTH, max_length=BIO_MAX_LENGTH)
    country: str = Field(..., min_length=COUNTRY_MIN_LENGTH, max_length=COUNTRY_MAX_LENGTH)

    @field_validator("first_name", "last_name", "bio")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return _required_text(v)

    @field_validator("country")
    @classmethod
    def normalize_country(cls, v: str) -> str:
        return _required_text(v).upper()
