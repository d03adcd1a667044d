"""
Authentication routes for the hospital dashboard.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..config import Settings, get_settings
from ..database import get_db
from .schemas import UserRegister, UserLogin, ForgotPassword, ResetPassword, LoginResponse
from .service import register_user, login_user, forgot_password, reset_password

# Create API router
router = APIRouter(tags=["Authentication"])

@router.post("/register", status_code=status.HTTP_201_CREATED, summary="User Registration")
async def register_route(payload: UserRegister, db: Session = Depends(get_db)):
    register_user(db, payload.model_dump())
    return {"message": "User registered successfully"}

@router.post("/login", response_model=LoginResponse, summary="User Login")
async def login_route(payload: UserLogin, db: Session = Depends(get_db)):
    """
    Log in with a username or email.
    """
    user = login_user(db, payload.identifier, payload.password)
    return {"message": "Login successful", "user": user}

@router.post("/forgot", summary="Request Password Reset")
async def forgot_route(
    payload: ForgotPassword,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings)
):
    """
    Issue a password reset token valid for ``reset_token_ttl_minutes``.
    """
    return forgot_password(db, payload.identifier, settings.app_url, settings.reset_token_ttl_minutes)

@router.post("/reset", summary="Reset Password with Token")
async def reset_route(payload: ResetPassword, db: Session = Depends(get_db)):
    reset_password(db, payload.token, payload.password)
    return {"message": "Password reset successful"}
