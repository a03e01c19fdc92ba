from datetime import datetime
from typing import Any
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator

def _strip(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value

class UserCreate(BaseModel):
    """Schema para registro de usuário. A senha é mantida exatamente como digitada."""
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    username: str = Field(..., min_length=1, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=6)
    confirm_password: str | None = Field(None, description="Se informado, deve ser igual à senha")

    @field_validator("first_name", "last_name", "username", "email", mode="before")
    @classmethod
    def strip_identity(cls, value: Any) -> Any:
        return _strip(value)

    @model_validator(mode="after")
    def passwords_match(self) -> "UserCreate":
        if self.confirm_password is not None and self.confirm_password != self.password:
            raise ValueError("As senhas não coincidem")
        return self

class UserLogin(BaseModel):
    """Schema para login de usuário."""
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

    @field_validator("username", mode="before")
    @classmethod
    def strip_username(cls, value: Any) -> Any:
        return _strip(value)

class UserResponse(BaseModel):
    """Schema para resposta de usuário (nunca inclui a senha)."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    last_name: str
    username: str
    email: str
    created_at: datetime

class SessionResponse(BaseModel):
    """Schema da resposta de login/registro."""
    access_token: str
    token_type: str = "bearer"
    user: UserResponse

class Message(BaseModel):
    message: str
