from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import select
from sqlalchemy.orm import Session

from fieldforce.db import get_db
from fieldforce.envelope import fail, ok
from fieldforce.models import Dealer, User

router = APIRouter(tags=["Users"])

USER_NOT_FOUND = "User not found"


@router.get("/users/{user_id}")
def get_user(user_id: int, db: Session = Depends(get_db)) -> JSONResponse:
    user = db.get(User, user_id)
    if user is None:
        return fail(USER_NOT_FOUND, 404)
    return ok(user.to_public_dict())


@router.get("/users/{user_id}/dealers")
def get_user_dealers(user_id: int, db: Session = Depends(get_db)) -> JSONResponse:
    if db.get(User, user_id) is None:
        return fail(USER_NOT_FOUND, 404)
    rows = db.execute(
        select(Dealer).where(Dealer.user_id == user_id).order_by(Dealer.name)
    ).scalars().all()
    return ok([row.to_dict() for row in rows])
