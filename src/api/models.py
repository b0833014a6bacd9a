"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
Required-field rules live in the domain so that a missing name or email gets
the domain's message rather than a schema error; every field is optional here.
"""

from pydantic import BaseModel, Field, field_validator

from src.domain.ports import RegistrationRequest


class RegisterRequest(BaseModel):
    """Request model for event registration."""

    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    address: str | None = Field(None, description="Freeform postal address, requires country")
    country: str | None = Field(None, description="Country of the postal address, requires address")
    newsletter: bool | None = Field(False, description="Subscribe to the newsletter")

    @field_validator("first_name", "last_name", "email", "address", "country", mode="before")
    @classmethod
    def coerce_scalar(cls, value: object) -> object:
        """
        Accept numbers and booleans where text is expected.

        Falsy scalars (0, false) count as missing, truthy ones become text.
        """
        if isinstance(value, bool | int | float):
            return str(value) if value else None
        return value

    def to_domain(self) -> RegistrationRequest:
        """Convert to the domain request type."""
        return RegistrationRequest(
            first_name=self.first_name,
            last_name=self.last_name,
            email=self.email,
            newsletter=bool(self.newsletter),
            address=self.address,
            country=self.country,
        )


class RegisterResponse(BaseModel):
    """Response model for successful registration."""

    address: bool
    verified: bool | None = Field(None, description="Present only when an address was supplied")


class ErrorResponse(BaseModel):
    """Standard error response model."""

    error: str
