from pydantic import BaseModel, EmailStr, ConfigDict
from datetime import datetime

class UserCreate(BaseModel):
    email: EmailStr
    password: str
    name: str

class UserResponse(BaseModel):
    id: int
    email: str
    name: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

class UserRecord(UserResponse):
    """User tel que stocké (avec le hash, jamais renvoyé au client)"""
    password_hash: str

class LoginRequest(BaseModel):
    # pas d'EmailStr ici : un email mal formé doit donner InvalidCredentials
    email: str
    password: str
