"""
Authentication Service - Registration, login and password reset.
"""
from typing import Any, Dict, Mapping
from sqlalchemy.orm import Session
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
import logging

from ..core import validators
from ..core.security import (
    hash_password,
    verify_password,
    generate_secure_reset_token,
    hash_token,
    get_token_expiry_time,
    utcnow
)
from ..exceptions import AuthenticationError, ConflictError, NotFoundError, StoreError, ValidationError
from .models import User

# Set up logging
logger = logging.getLogger(__name__)

def _normalize(value: Any) -> str:
    return (value or "").strip()

def _find_by_identifier(db: Session, identifier: str) -> User:
    return (
        db.query(User)
        .filter(or_(User.username == identifier, User.email == identifier.lower()))
        .first()
    )

def register_user(db: Session, data: Mapping[str, Any]) -> User:
    """
    Register a new user.

    Args:
        db: Database session
        data: username, email and password

    Returns:
        User: The created user

    Raises:
        ValidationError: If a field is missing or the email is malformed
        ConflictError: If the username or email is already taken
    """
    validators.check_required(data, ("username", "email", "password"), "Missing required fields")
    username = _normalize(data["username"])
    email = validators.check("email", validators.email, _normalize(data["email"]).lower())

    existing = db.query(User).filter(or_(User.username == username, User.email == email)).first()
    if existing:
        logger.warning(f"Registration failed: {username} / {email} already taken")
        raise ConflictError("Username or email already taken")

    user = User(username=username, email=email, password_hash=hash_password(data["password"]))
    db.add(user)
    try:
        db.commit()
        db.refresh(user)
    except IntegrityError:
        db.rollback()
        raise ConflictError("Username or email already taken")
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error registering user {username}: {str(e)}")
        raise StoreError("Server error registering user")
    logger.info(f"User {user.id} registered as {username}")
    return user

def login_user(db: Session, identifier: str, password: str) -> User:
    """
    Check credentials.

    Args:
        db: Database session
        identifier: Username or email
        password: Plain text password

    Returns:
        User: The authenticated user

    Raises:
        ValidationError: If a field is missing
        AuthenticationError: If no user matches or the password is wrong
    """
    identifier = _normalize(identifier)
    if not identifier or not password:
        raise ValidationError("Missing required fields")

    user = _find_by_identifier(db, identifier)
    if not user or not verify_password(password, user.password_hash):
        logger.warning(f"Login failed for {identifier}")
        raise AuthenticationError("Invalid credentials")
    logger.info(f"User {user.id} logged in")
    return user

def forgot_password(db: Session, identifier: str, app_url: str, ttl_minutes: int) -> Dict[str, Any]:
    """
    Issue a password reset token.

    Only a hash of the token is stored. The reset link is written to the log;
    delivering it to the user is left to the deployment.

    Raises:
        NotFoundError: If no user matches the identifier
    """
    identifier = _normalize(identifier)
    if not identifier:
        raise ValidationError("Missing required fields")

    user = _find_by_identifier(db, identifier)
    if not user:
        raise NotFoundError("User not found")

    token = generate_secure_reset_token()
    user.reset_token = hash_token(token)
    user.reset_expires = get_token_expiry_time(ttl_minutes)
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error storing reset token for user {user.id}: {str(e)}")
        raise StoreError("Server error requesting password reset")

    reset_url = f"{app_url.rstrip('/')}/reset.html?token={token}"
    logger.info(f"Password reset link for {user.email} (expires {user.reset_expires:%Y-%m-%d %H:%M} UTC): {reset_url}")
    return {"message": "Password reset link issued"}

def reset_password(db: Session, token: str, password: str) -> None:
    """
    Set a new password using an unexpired reset token.

    Raises:
        ValidationError: If a field is missing, or the token is unknown or expired
    """
    if not token or not password:
        raise ValidationError("Missing required fields")

    user = (
        db.query(User)
        .filter(User.reset_token == hash_token(token), User.reset_expires > utcnow())
        .first()
    )
    if not user:
        raise ValidationError("Invalid or expired token", field="token")

    user.password_hash = hash_password(password)
    user.reset_token = None
    user.reset_expires = None
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error resetting password for user {user.id}: {str(e)}")
        raise StoreError("Server error resetting password")
    logger.info(f"Password reset for user {user.id}")
