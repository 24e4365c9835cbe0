from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class Credentials(BaseModel):
    """Register / login body. The mobile client sends `emailOrPhone`."""
    model_config = ConfigDict(populate_by_name=True)

    email_or_phone: Optional[str] = Field(default=None, alias="emailOrPhone")
    password: Optional[str] = None


class PasswordReset(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email_or_phone: Optional[str] = Field(default=None, alias="emailOrPhone")
    new_password: Optional[str] = ""
    confirm_password: Optional[str] = ""


class RegisterResult(BaseModel):
    user_id: int


class LoginResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: int
    email_or_phone: str = Field(alias="emailOrPhone")
    access_token: str
    token_type: str = "bearer"


class ProfileUpdate(BaseModel):
    user_id: Optional[int] = None
    name: Optional[str] = None
    age: Optional[int] = None
    sex: Optional[str] = ""
    height: Optional[str] = ""
    phone: Optional[str] = ""
    email: Optional[str] = None
    profile_picture: Optional[str] = ""

    @field_validator("height", mode="before")
    @classmethod
    def height_as_text(cls, v):
        # Height is stored as entered; the app sends it as text or a number
        if isinstance(v, (int, float)):
            return str(v)
        return v


class Profile(BaseModel):
    user_id: int
    name: str = ""
    age: int = 0
    sex: str = ""
    height: str = "0"
    phone: str = ""
    email: str = ""
    profile_picture: str = ""

    @classmethod
    def from_user(cls, user) -> "Profile":
        return cls(
            user_id=user.id,
            name=user.name or "",
            age=user.age or 0,
            sex=user.sex or "",
            height=user.height or "0",
            phone=user.phone or "",
            email=user.email or "",
            profile_picture=user.profile_picture or "",
        )


class TokenPayload(BaseModel):
    sub: Optional[int] = None
