from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, Field, field_validator


def _reject_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be blank")
    return value


def _check_email_syntax(value: str) -> str:
    """Reject malformed addresses but hand back *value* exactly as given.

    email-validator's normalized form lowercases the domain and applies NFC
    to the local part; storing that would merge addresses that the exact
    match in UserService keeps apart.
    """
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError as exc:
        raise ValueError(str(exc)) from exc
    return value


# --- User ---

class UserRequest(BaseModel):
    """Payload for creating a user or replacing its name and email."""

    name: str = Field(min_length=1, max_length=100)
    email: str = Field(max_length=255)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        return _reject_blank(value)

    @field_validator("email")
    @classmethod
    def email_syntax(cls, value: str) -> str:
        return _check_email_syntax(value)


class UserResponse(BaseModel):
    id: int
    name: str
    email: str
    model_config = ConfigDict(from_attributes=True)


# --- Post ---

class PostRequest(BaseModel):
    """Payload for creating a post or replacing its title and content.

    The owner is never part of the body: it comes from the URL on creation
    and cannot be changed afterwards.
    """

    title: str = Field(min_length=1, max_length=200)
    content: str = Field(min_length=1)

    @field_validator("title", "content")
    @classmethod
    def not_blank(cls, value: str) -> str:
        return _reject_blank(value)


class PostResponse(BaseModel):
    id: int
    user_id: int
    title: str
    content: str
    model_config = ConfigDict(from_attributes=True)


# --- Misc ---

class HealthResponse(BaseModel):
    status: str
    version: str


class ErrorResponse(BaseModel):
    detail: str
    code: str
