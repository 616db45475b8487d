import re
from datetime import datetime
from typing import Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import field_validator

from storerate.model.base_schema import APIModel
from storerate.model.user import Role

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 16
PASSWORD_SPECIAL_CHARS = re.compile(r'[!@#$%^&*(),.?":{}|<>]')
NAME_MIN_LENGTH = 20
NAME_MAX_LENGTH = 60
ADDRESS_MAX_LENGTH = 400


def check_email(value: str) -> str:
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        raise ValueError("Invalid email address")
    return value


def check_password(value: str) -> str:
    """Apply the password complexity rules, failing on the first broken one."""
    if len(value) < PASSWORD_MIN_LENGTH:
        raise ValueError(f"Password must be at least {PASSWORD_MIN_LENGTH} characters")
    if len(value) > PASSWORD_MAX_LENGTH:
        raise ValueError(f"Password must be at most {PASSWORD_MAX_LENGTH} characters")
    if not re.search(r"[A-Z]", value):
        raise ValueError("Password must contain at least one uppercase letter")
    if not PASSWORD_SPECIAL_CHARS.search(value):
        raise ValueError("Password must contain at least one special character")
    return value


def check_name(value: str) -> str:
    if len(value) < NAME_MIN_LENGTH:
        raise ValueError(f"Name must be at least {NAME_MIN_LENGTH} characters")
    if len(value) > NAME_MAX_LENGTH:
        raise ValueError(f"Name must be at most {NAME_MAX_LENGTH} characters")
    return value


def check_address(value: Optional[str]) -> Optional[str]:
    if value is not None and len(value) > ADDRESS_MAX_LENGTH:
        raise ValueError(f"Address must be at most {ADDRESS_MAX_LENGTH} characters")
    return value


class UserCreate(APIModel):
    email: str
    password: str
    name: str
    address: Optional[str] = None
    role: Role = Role.USER

    @field_validator("email")
    @classmethod
    def email_valid(cls, value: str) -> str:
        return check_email(value)

    @field_validator("password")
    @classmethod
    def password_valid(cls, value: str) -> str:
        return check_password(value)

    @field_validator("name")
    @classmethod
    def name_valid(cls, value: str) -> str:
        return check_name(value)

    @field_validator("address")
    @classmethod
    def address_valid(cls, value: Optional[str]) -> Optional[str]:
        return check_address(value)


class UserResponse(APIModel):
    id: int
    email: str
    name: str
    address: Optional[str] = None
    role: Role
    created_at: Optional[datetime] = None


class UserLogin(APIModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def email_valid(cls, value: str) -> str:
        return check_email(value)


class PasswordChange(APIModel):
    # complexity is checked after the current password is re-verified
    current_password: str
    new_password: str
