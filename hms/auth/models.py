"""
User Model - Staff accounts for the hospital dashboard.
"""
from sqlalchemy import Column, Integer, String, DateTime, func
from ..database import Base

class User(Base):
    """
    User Model - Stores login credentials

    Fields:
    - id: Primary key
    - username: Unique login name
    - email: Unique, lower-cased email address
    - password_hash: bcrypt hash of the password
    - reset_token: SHA-256 hash of the outstanding password reset token
    - reset_expires: When the reset token stops being valid
    - created_at: Registration time
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(100), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    reset_token = Column(String(64), nullable=True, index=True)
    reset_expires = Column(DateTime, nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    def __repr__(self):
        """String representation of the User model"""
        return f"<User(id={self.id}, username='{self.username}')>"
