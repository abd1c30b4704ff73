from datetime import datetime, timedelta, timezone
import logging

from fastapi import Request, HTTPException, status
from jose import jwt, JWTError
import bcrypt
import uuid

from config import JWT_SECRET, JWT_ALGORITHM, JWT_EXPIRY_HOURS

logger = logging.getLogger(__name__)


def hash_password(password: str) -> str:
    """Hash a plain-text password using bcrypt."""
    # Ensure it doesn't exceed 72 bytes to prevent bcrypt ValueError
    pw_bytes = password.encode('utf-8')[:72]
    hashed = bcrypt.hashpw(pw_bytes, bcrypt.gensalt())
    return hashed.decode('utf-8')


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain-text password against a bcrypt hash."""
    try:
        pw_bytes = plain_password.encode('utf-8')[:72]
        hash_bytes = hashed_password.encode('utf-8')
        return bcrypt.checkpw(pw_bytes, hash_bytes)
    except ValueError as e:
        logger.warning(f"Bcrypt verification error: {e}")
        return False


def create_token(data: dict) -> str:
    """Create a JWT token with an expiry claim and a unique JTI."""
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + timedelta(hours=JWT_EXPIRY_HOURS)
    jti = str(uuid.uuid4())
    to_encode.update({"exp": expire, "jti": jti})
    return jwt.encode(to_encode, JWT_SECRET, algorithm=JWT_ALGORITHM)


def verify_token(token: str) -> dict | None:
    """Decode and verify a JWT token. Returns the payload or None on failure."""
    try:
        payload = jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
        return payload
    except JWTError:
        return None


def get_optional_user(request: Request) -> int | None:
    """
    FastAPI dependency for endpoints that work anonymously but persist data
    for signed-in users. Returns the user_id, or None without a valid token.
    """
    auth_header = request.headers.get("Authorization")
    if not auth_header or not auth_header.startswith("Bearer "):
        return None
    payload = verify_token(auth_header.split(" ", 1)[1])
    if payload is None:
        return None
    return payload.get("user_id")


async def get_current_user(request: Request) -> int:
    """
    FastAPI dependency — extracts the Bearer token from the Authorization
    header, verifies it, and returns the user_id.
    Raises HTTP 401 if the token is missing or invalid.
    """
    auth_header = request.headers.get("Authorization")
    if not auth_header or not auth_header.startswith("Bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token = auth_header.split(" ", 1)[1]
    payload = verify_token(token)
    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user_id = payload.get("user_id")
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token payload missing required claims",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return user_id
