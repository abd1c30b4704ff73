# ---------- routes/auth_routes.py ----------
import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from pydantic import BaseModel
from typing import Optional

from auth import hash_password, verify_password, create_token
from database import get_db
from models.user import User

router = APIRouter(prefix="/api/v1/auth", tags=["Auth"])
logger = logging.getLogger(__name__)


# ── Pydantic schemas ──────────────────────────────────────────────
class RegisterRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None
    name: Optional[str] = None


class LoginRequest(BaseModel):
    email: str
    password: str


def _public_user(user: User) -> dict:
    return {
        "id": user.id,
        "email": user.email,
        "name": user.name,
        "createdAt": user.created_at.isoformat() if user.created_at else None,
    }


# ── Routes ────────────────────────────────────────────────────────
@router.post("/register", status_code=201)
async def register(body: RegisterRequest, db: Session = Depends(get_db)):
    """Create an account. The display name defaults to the email's local part."""
    if not body.email or not body.password:
        raise HTTPException(status_code=400, detail="Email and password are required")

    try:
        if db.query(User).filter_by(email=body.email).first():
            raise HTTPException(status_code=409, detail="User already exists")

        user = User(
            email=body.email,
            name=body.name or body.email.split("@")[0],
            hashed_password=hash_password(body.password),
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return {"user": _public_user(user), "message": "User created successfully"}
    except HTTPException:
        raise
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Registration error: {e}")
        raise HTTPException(status_code=500, detail="Something went wrong")


@router.post("/login")
async def login(body: LoginRequest, db: Session = Depends(get_db)):
    """Authenticate with email + password and return a bearer token."""
    user = db.query(User).filter_by(email=body.email).first()
    if not user or not verify_password(body.password, user.hashed_password):
        raise HTTPException(status_code=401, detail="Invalid email or password")

    token = create_token({"user_id": user.id, "email": user.email})
    return {"status": "success", "data": {"token": token, "user": _public_user(user)}}
