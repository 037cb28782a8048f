"""Daily visit reports: coerce the loose form payload before the generic pipeline."""
from datetime import date, datetime, timezone
from typing import Any, Optional
from uuid import uuid4

from fastapi import APIRouter

from fieldforce.crud import CrudConfig, register_create_route, register_fetch_routes
from fieldforce.models import DailyVisitReport
from fieldforce.schemas import DailyVisitReportCreate

router = APIRouter()


def _now() -> datetime:
    return datetime.now(timezone.utc)


def split_brands(value: str) -> list[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


def coerce_payload(payload: dict[str, Any]) -> dict[str, Any]:
    payload = dict(payload)
    if isinstance(payload.get("brandSelling"), str):
        payload["brandSelling"] = split_brands(payload["brandSelling"])
    return payload


def _as_date(value: datetime) -> date:
    return value.date()


def _as_datetime(value: Optional[datetime]) -> Optional[datetime]:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def to_row_values(report: DailyVisitReportCreate) -> dict[str, Any]:
    values = report.model_dump(exclude_none=True)
    values["report_date"] = _as_date(report.report_date)
    values["check_in_time"] = _as_datetime(report.check_in_time)
    values["check_out_time"] = _as_datetime(report.check_out_time)
    return values


DVR_CONFIG = CrudConfig(
    endpoint="daily-visit-reports",
    model=DailyVisitReport,
    schema=DailyVisitReportCreate,
    label="Daily Visit Report",
    computed={"createdAt": _now, "updatedAt": _now},
    prepare=coerce_payload,
    transform=to_row_values,
    id_factory=lambda: str(uuid4()),
    include_received=True,
    tags=("Daily Visit Reports",),
)

register_create_route(router, DVR_CONFIG)
register_fetch_routes(router, DVR_CONFIG)
