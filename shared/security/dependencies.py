from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer

from .jwt_handler import verify_access_token

# Documents the Bearer scheme in OpenAPI; the header itself is parsed below.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login", auto_error=False)


def extract_token(request: Request) -> str | None:
    """
    Accepts ``Authorization: Bearer <token>`` and the bare ``Authorization: <token>``
    form older storefront builds send.
    """
    header = request.headers.get("Authorization", "").strip()
    if not header:
        return None
    scheme, _, credentials = header.partition(" ")
    if scheme.lower() == "bearer":
        return credentials.strip() or None
    return header


async def get_current_user(request: Request, _: str | None = Depends(oauth2_scheme)) -> str:
    """Validates the access token and returns the user id (``sub``)."""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    token = extract_token(request)
    payload = verify_access_token(token) if token else None
    if not payload or payload.get("sub") is None:
        raise credentials_exception

    # Read back by the rate limiter key function.
    request.state.user_id = payload["sub"]
    return payload["sub"]
