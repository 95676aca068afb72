# househunt/schemas/auth.py
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from househunt.schemas.user import UserOut


class RegisterResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    message: str = "Registration successful"
    user: UserOut
    # None for owners until an admin approves them
    token: Optional[str] = None
    token_payload: Optional[Dict[str, Any]] = None


class LoginResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    message: str = "Login successful"
    token: str
    token_payload: Dict[str, Any]
