"""
CRM - Modèles Auth & Utilisateurs
"""

import re
from pydantic import Field, field_validator

from .common import CrmModel, check_email


# 8+ caractères, minuscule, majuscule, chiffre, caractère spécial
PASSWORD_PATTERN = re.compile(r'^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)(?=.*[\W_]).{8,}$')
PASSWORD_RULE = ("Password must be at least 8 characters long and include uppercase, "
                 "lowercase, number, and special character.")


def check_password(value: str) -> str:
    if not PASSWORD_PATTERN.match(value or ""):
        raise ValueError(PASSWORD_RULE)
    return value


class UserRegister(CrmModel):
    name: str = Field(min_length=1)
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def validate_email(cls, v):
        if not v:
            raise ValueError("Email is required")
        return check_email(v).lower()

    @field_validator("password")
    @classmethod
    def validate_password(cls, v):
        return check_password(v)


class UserLogin(CrmModel):
    email: str
    password: str


class VerifyEmail(CrmModel):
    verification_code: str = Field(min_length=1)


class ForgotPassword(CrmModel):
    email: str


class ResetPassword(CrmModel):
    password: str

    @field_validator("password")
    @classmethod
    def validate_password(cls, v):
        return check_password(v)
