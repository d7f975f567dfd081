"""
Request Schemas
===============
Pydantic models for the auth endpoint request bodies.
"""

from typing import Any, Dict, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic import ValidationError as PydanticValidationError

from smartschools_auth.errors import ValidationError

T = TypeVar("T", bound=BaseModel)


class RequestOtpBody(BaseModel):
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    email: Optional[str] = None


class VerifyOtpBody(BaseModel):
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    email: Optional[str] = None
    otp: Optional[str] = None

    @field_validator("otp", mode="before")
    @classmethod
    def coerce_numeric_otp(cls, v: Any) -> Any:
        """Clients may send the code as a JSON number."""
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


class TokenResponse(BaseModel):
    token: str


class MessageResponse(BaseModel):
    message: str


def parse_body(model: Type[T], data: Dict[str, Any]) -> T:
    """
    Validate a decoded body against a schema.

    Raises:
        ValidationError: Field types do not match the schema
    """
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        fields = sorted({str(err["loc"][0]) for err in e.errors() if err.get("loc")})
        raise ValidationError(
            f"Invalid field(s): {', '.join(fields)}" if fields else "Invalid request body",
            details=e.errors(),
        )
