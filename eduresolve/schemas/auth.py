from typing import Optional, Literal
from pydantic import BaseModel, EmailStr, ConfigDict
from pydantic.alias_generators import to_camel

from eduresolve.db.models import UserRole


class UserCreateModel(BaseModel):
    name: str
    email: EmailStr
    password: str
    confirm_password: str

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "name": "Alice Student",
                "email": "alice@uni.edu",
                "password": "pw123",
                "confirmPassword": "pw123",
            }
        },
    )


class UserLoginModel(BaseModel):
    email: EmailStr
    password: str

    model_config = {
        "json_schema_extra": {
            "example": {
                "email": "alice@uni.edu",
                "password": "pw123",
            }
        }
    }


class UserPublic(BaseModel):
    id: str
    name: str
    email: EmailStr
    role: UserRole

    model_config = ConfigDict(from_attributes=True)


class TokenUser(BaseModel):
    id: str
    name: Optional[str] = None
    email: EmailStr
    role: Optional[UserRole] = None
    access_token: Optional[str] = None
    token_type: Optional[str] = "bearer"


class RegisterResponseModel(BaseModel):
    status: bool
    message: str
    data: UserPublic


class LoginResponseModel(BaseModel):
    status: bool
    message: str
    access_token: str
    token_type: str = "bearer"
    data: UserPublic


class LogoutResponseModel(BaseModel):
    status: bool
    message: str


class SessionStateModel(BaseModel):
    authenticated: bool
    view: Literal["login", "student", "admin"]
    user: Optional[UserPublic] = None
    access_token: Optional[str] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
