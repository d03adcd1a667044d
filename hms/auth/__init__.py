"""
Authentication module for the hospital dashboard.

This module provides:
- User registration
- Login by username or email
- Password reset tokens
"""
