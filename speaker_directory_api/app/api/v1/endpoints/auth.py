"""
Admin sign-in endpoint.

There is no session: the endpoint only tells the client whether the
credentials are right.  The client then sends them with HTTP Basic
authentication on every admin request.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, HTTPException, status

from speaker_directory_api.app.core.security import verify_admin_credentials


router = APIRouter()


@router.post("/login")
async def login(body: Optional[Dict[str, Any]] = Body(None)) -> Dict[str, Any]:
    """Check ``{"username": ..., "password": ...}`` against the admin account."""
    body = body if isinstance(body, dict) else {}
    username = body.get("username")
    password = body.get("password")
    if not isinstance(username, str) or not isinstance(password, str):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing username or password")
    if not verify_admin_credentials(username, password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password.",
            headers={"WWW-Authenticate": "Basic"},
        )
    return {"ok": True}
