# taskboard/models/user.py

from typing import Annotated, Optional
from pydantic import AfterValidator, BaseModel, ConfigDict, EmailStr, Field

from taskboard.core.security.passwords import MAX_PASSWORD_BYTES


def _password_fits(value: str) -> str:
    if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
    return value


Password = Annotated[str, Field(min_length=1), AfterValidator(_password_fits)]


class UserCreate(BaseModel):
    """Registration payload"""
    username: str = Field(min_length=1)
    email: EmailStr
    password: Password


class UserUpdate(BaseModel):
    """
    Partial user update. A password here is re-hashed; omitted fields
    stay as they are.
    """
    username: Optional[str] = Field(default=None, min_length=1)
    email: Optional[EmailStr] = None
    password: Optional[Password] = None


class UserRecord(BaseModel):
    """User as stored, including the password hash"""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    username: str
    email: str
    password_hash: str = Field(alias="password")


class UserPublic(BaseModel):
    """User as returned to callers; never carries secret material"""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    username: str
    email: str

    @classmethod
    def from_record(cls, record: UserRecord) -> "UserPublic":
        return cls(id=record.id, username=record.username, email=record.email)


class UserCreated(BaseModel):
    message: str = "User created successfully"
    user: UserPublic
