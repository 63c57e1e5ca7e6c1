import secrets

from fastapi import Header, HTTPException, Request

from src.config.settings import settings


async def require_admin(x_admin_key: str | None = Header(default=None)) -> None:
    """Guard for admin routes. Open when no admin key is configured."""
    if not settings.admin_api_key:
        return
    if not x_admin_key or not secrets.compare_digest(x_admin_key, settings.admin_api_key):
        raise HTTPException(status_code=401, detail="Invalid admin key")


async def json_object_body(request: Request) -> dict:
    """Request body as a JSON object.

    A missing, malformed or non-object body reads as empty so the route
    answers it with its own 400 instead of a 422.
    """
    try:
        body = await request.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}
