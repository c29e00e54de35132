"""
Admin authentication helpers.

The directory has a single administrator whose username and password
come from the settings.  There is no session or token: every admin
request carries the credentials with HTTP Basic authentication and is
checked on its own.  The ``ADMIN_GATE`` setting switches the check on
for admin routes; the login endpoint always verifies credentials so
clients can validate them before unlocking the admin views.
"""

import hmac
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from .config import settings


security = HTTPBasic(auto_error=False)


def verify_admin_credentials(username: str, password: str) -> bool:
    """Compare the given credentials with the configured admin account.

    Both comparisons always run and use constant time so the response
    does not reveal which half was wrong.
    """
    user_ok = hmac.compare_digest(
        (username or "").encode("utf-8"), settings.admin_username.encode("utf-8")
    )
    password_ok = hmac.compare_digest(
        (password or "").encode("utf-8"), settings.admin_password.encode("utf-8")
    )
    return user_ok and password_ok


def require_admin(
    credentials: Optional[HTTPBasicCredentials] = Depends(security),
) -> Optional[str]:
    """Dependency guarding admin routes.

    Returns the admin username, or ``None`` when the gate is disabled.
    Raises HTTP 401 when the gate is enabled and the request carries
    no or wrong credentials.
    """
    if not settings.admin_gate:
        return None
    if credentials is None or not verify_admin_credentials(
        credentials.username, credentials.password
    ):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password.",
            headers={"WWW-Authenticate": "Basic"},
        )
    return credentials.username
