from pydantic import BaseModel, EmailStr, Field

from app.schemas.job import CamelModel


class UserRegister(BaseModel):
    name: str = Field(min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(min_length=6)


class UserLogin(BaseModel):
    # Missing values are reported as 400 by the route, not as a schema error
    email: str | None = None
    password: str | None = None


class UserUpdate(CamelModel):
    email: EmailStr | None = None
    name: str | None = Field(default=None, max_length=50)
    last_name: str | None = Field(default=None, max_length=20)
    location: str | None = Field(default=None, max_length=20)


class UserResponse(CamelModel):
    email: str
    last_name: str
    location: str
    name: str
    token: str


class AuthResponse(BaseModel):
    user: UserResponse
