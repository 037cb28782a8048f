"""Basic credential check for the mobile login screen."""
import hashlib
import hmac
import secrets
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from fieldforce.db import get_db
from fieldforce.envelope import fail, ok
from fieldforce.logger import get_logger
from fieldforce.models import User
from fieldforce.schemas import LoginRequest

logger = get_logger(__name__)

router = APIRouter(tags=["Auth"])

INVALID_CREDENTIALS = "Invalid credentials"
HASH_ALGORITHM = "pbkdf2_sha256"
HASH_ITERATIONS = 260000


def hash_password(password: str, salt: Optional[str] = None, iterations: int = HASH_ITERATIONS) -> str:
    salt = salt or secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode(), salt.encode(), iterations).hex()
    return f"{HASH_ALGORITHM}${iterations}${salt}${digest}"


def verify_password(password: str, hashed: str) -> bool:
    try:
        algorithm, iterations, salt, _ = hashed.split("$")
        rounds = int(iterations)
    except (AttributeError, ValueError):
        return False
    if algorithm != HASH_ALGORITHM:
        return False
    return hmac.compare_digest(hash_password(password, salt, rounds), hashed)


@router.post("/auth/login")
def login(payload: LoginRequest, db: Session = Depends(get_db)) -> JSONResponse:
    stmt = select(User).where(
        or_(User.salesman_login_id == payload.login_id, User.email == payload.login_id)
    )
    user = db.execute(stmt.limit(1)).scalars().first()
    if user is None or not user.hashed_password or not verify_password(payload.password, user.hashed_password):
        logger.warning("login rejected", extra={"login_id": payload.login_id})
        return fail(INVALID_CREDENTIALS, 401)

    logger.info("login succeeded", extra={"user_id": user.id})
    return ok(user.to_public_dict(), "Login successful")
