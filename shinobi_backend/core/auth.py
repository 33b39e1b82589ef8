# shinobi_backend/core/auth.py
# Caller identity for protected endpoints. Session handling happens upstream;
# this service trusts the X-User-Id header set by the gateway.

from typing import Optional
from fastapi import Header, HTTPException


def get_current_user_id(x_user_id: Optional[str] = Header(default=None)) -> str:
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return x_user_id
