"""ORM model for application users (credentials, profile and role)."""

import enum

from sqlalchemy import Column, Enum, Integer, String

from app.models.base import Base


class Role(str, enum.Enum):
    """Closed set of roles a user can hold; values are stored as-is."""

    ADMIN = "ADMIN"
    USER = "USER"


class User(Base):
    """
    User account: login identity (email), profile fields and a single role.

    The password is only ever stored as a bcrypt hash in password_hash.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    name = Column(String(255), nullable=False, default="")
    city = Column(String(255), nullable=False, default="")
    password_hash = Column(String(255), nullable=False)
    role = Column(
        Enum(Role, native_enum=False, length=16, validate_strings=True),
        nullable=False,
        default=Role.USER,
    )
