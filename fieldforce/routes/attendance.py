"""Daily attendance: one check-in then at most one check-out per user and date."""
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from fieldforce.crud import CrudConfig, register_fetch_routes
from fieldforce.db import get_db
from fieldforce.envelope import fail, internal_error, ok
from fieldforce.logger import get_logger
from fieldforce.models import SalesmanAttendance
from fieldforce.schemas import CheckInRequest, CheckOutRequest

logger = get_logger(__name__)

router = APIRouter(tags=["Attendance"])

DUPLICATE_CHECK_IN = "User has already checked in today"
NO_OPEN_CHECK_IN = "No check-in record found for today or user has already checked out"


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _find_attendance(db: Session, user_id: int, attendance_date, open_only: bool = False):
    stmt = select(SalesmanAttendance).where(
        SalesmanAttendance.user_id == user_id,
        SalesmanAttendance.attendance_date == attendance_date,
    )
    if open_only:
        stmt = stmt.where(SalesmanAttendance.out_time_timestamp.is_(None))
    return db.execute(stmt.limit(1)).scalars().first()


@router.post("/attendance/check-in", status_code=201)
def check_in(payload: CheckInRequest, db: Session = Depends(get_db)) -> JSONResponse:
    try:
        if _find_attendance(db, payload.user_id, payload.attendance_date):
            logger.warning(
                "duplicate check-in",
                extra={"user_id": payload.user_id, "attendance_date": str(payload.attendance_date)},
            )
            return fail(DUPLICATE_CHECK_IN, 400)

        now = _now()
        attendance = SalesmanAttendance(
            user_id=payload.user_id,
            attendance_date=payload.attendance_date,
            location_name=payload.location_name,
            in_time_timestamp=now,
            out_time_timestamp=None,
            in_time_image_captured=payload.in_time_image_captured,
            out_time_image_captured=False,
            in_time_image_url=payload.in_time_image_url,
            out_time_image_url=None,
            in_time_latitude=payload.in_time_latitude,
            in_time_longitude=payload.in_time_longitude,
            in_time_accuracy=payload.in_time_accuracy,
            in_time_speed=payload.in_time_speed,
            in_time_heading=payload.in_time_heading,
            in_time_altitude=payload.in_time_altitude,
            out_time_latitude=None,
            out_time_longitude=None,
            out_time_accuracy=None,
            out_time_speed=None,
            out_time_heading=None,
            out_time_altitude=None,
            created_at=now,
            updated_at=now,
        )
        db.add(attendance)
        db.commit()
        db.refresh(attendance)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("attendance check-in failed: %s", exc)
        return internal_error("Failed to check in", exc)

    return ok(attendance.to_dict(), "Check-in successful", status_code=201)


@router.post("/attendance/check-out")
def check_out(payload: CheckOutRequest, db: Session = Depends(get_db)) -> JSONResponse:
    try:
        attendance = _find_attendance(db, payload.user_id, payload.attendance_date, open_only=True)
        if attendance is None:
            logger.warning(
                "check-out without open check-in",
                extra={"user_id": payload.user_id, "attendance_date": str(payload.attendance_date)},
            )
            return fail(NO_OPEN_CHECK_IN, 404)

        now = _now()
        attendance.out_time_timestamp = now
        attendance.out_time_image_captured = payload.out_time_image_captured
        attendance.out_time_image_url = payload.out_time_image_url
        attendance.out_time_latitude = payload.out_time_latitude
        attendance.out_time_longitude = payload.out_time_longitude
        attendance.out_time_accuracy = payload.out_time_accuracy
        attendance.out_time_speed = payload.out_time_speed
        attendance.out_time_heading = payload.out_time_heading
        attendance.out_time_altitude = payload.out_time_altitude
        attendance.updated_at = now
        db.commit()
        db.refresh(attendance)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("attendance check-out failed: %s", exc)
        return internal_error("Failed to check out", exc)

    return ok(attendance.to_dict(), "Check-out successful")


register_fetch_routes(
    router,
    CrudConfig(
        endpoint="salesman-attendance",
        model=SalesmanAttendance,
        schema=CheckInRequest,
        label="Salesman Attendance",
        tags=("Attendance",),
    ),
)
