"""Request dependencies for mock backend"""

from typing import Optional

from fastapi import Header

from ..errors import APIError


async def require_user(authorization: Optional[str] = Header(None)) -> str:
    """
    Resolve the calling user from a bearer token.

    The mock trusts any non-empty token and uses it as the user id.
    """
    if not authorization or not authorization.startswith("Bearer "):
        raise APIError(401, "Not authorized, no token")

    token = authorization[len("Bearer "):].strip()
    if not token:
        raise APIError(401, "Not authorized, token failed")
    return token


def ok(data, message: Optional[str] = None) -> dict:
    """Success envelope"""
    body = {"success": True, "data": data}
    if message:
        body["message"] = message
    return body
