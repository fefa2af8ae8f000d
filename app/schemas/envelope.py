"""The single response envelope shared by every endpoint."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.models.user import Role


class UserSummary(BaseModel):
    """User as exposed over the API (never includes the password)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: str
    city: str
    role: Role


class Envelope(BaseModel):
    """
    Uniform response body: status code, optional error/message text,
    optional token pair and optional single user or list of users.

    Serialized with camelCase keys; fields left as None are omitted.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    status_code: int
    error: str | None = None
    message: str | None = None
    token: str | None = None
    refresh_token: str | None = None
    expiration_time: str | None = None
    name: str | None = None
    city: str | None = None
    role: Role | None = None
    email: str | None = None
    user: UserSummary | None = Field(default=None, alias="ourUsers")
    users: list[UserSummary] | None = Field(default=None, alias="ourUsersList")
