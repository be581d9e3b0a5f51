"""
Result objects for the authentication service layer.

Using dataclasses to return structured results from service methods
instead of mixed tuples or dicts.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class LoginResult:
    """Result of login attempt."""

    success: bool
    user: Optional[Any] = None  # CustomUser instance
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    error: Optional[str] = None
    error_code: Optional[str] = None
    message: Optional[str] = None


@dataclass
class RegisterResult:
    """Result of user registration attempt."""

    success: bool
    user: Optional[Any] = None  # CustomUser instance
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    error: Optional[str] = None
    error_code: Optional[str] = None
    errors: Optional[Dict[str, str]] = None  # Field-level errors
    message: Optional[str] = None
