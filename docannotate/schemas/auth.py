
from pydantic import EmailStr, Field
from docannotate.config import settings
from docannotate.schemas.base import ApiModel

class RegisterIn(ApiModel):
    username: str = Field(min_length=3, max_length=50, pattern=r"^[A-Za-z0-9_.-]+$")
    password: str = Field(min_length=settings.min_password_length, max_length=256)
    email: EmailStr | None = None

class LoginIn(ApiModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)

class UserOut(ApiModel):
    id: str
    username: str
    email: str | None = None

class AuthOut(ApiModel):
    user: UserOut
    access_token: str
    token_type: str = "bearer"
