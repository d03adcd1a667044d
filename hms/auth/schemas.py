"""
User Schemas - Pydantic models for the authentication endpoints.
"""
from typing import Optional
from pydantic import BaseModel

class UserRegister(BaseModel):
    """
    Registration Schema

    Fields:
    - username: Unique login name
    - email: Unique email address (stored lower-cased)
    - password: Plain text password (hashed before storage)
    """
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None

class UserLogin(BaseModel):
    """
    Login Schema

    Fields:
    - identifier: Username or email
    - password: Plain text password
    """
    identifier: Optional[str] = None
    password: Optional[str] = None

class ForgotPassword(BaseModel):
    identifier: Optional[str] = None

class ResetPassword(BaseModel):
    token: Optional[str] = None
    password: Optional[str] = None

class UserResponse(BaseModel):
    id: int
    username: str
    email: str

    class Config:
        """Configuration for Pydantic model to enable ORM mode"""
        from_attributes = True

class LoginResponse(BaseModel):
    message: str
    user: UserResponse
