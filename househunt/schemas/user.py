# househunt/schemas/user.py
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr
from pydantic.alias_generators import to_camel


class UserOut(BaseModel):
    """
    Public-facing user data. Never carries the password hash.
    """
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    id: int
    name: str
    email: str
    phone: Optional[str] = None
    role: str
    status: Optional[str] = None


class UserContact(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str


class RegisterRequest(BaseModel):
    # everything optional here: missing fields are reported as 400 by the
    # registration service, not as a 422 from request parsing
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    password: Optional[str] = None
    role: Optional[str] = None
    phone: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None
