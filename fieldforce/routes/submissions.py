from datetime import datetime, timezone

from fastapi import APIRouter

from fieldforce.crud import CrudConfig, register_create_route, register_fetch_routes
from fieldforce.models import (
    Brand,
    CollectionReport,
    CompetitionReport,
    DailyTask,
    Ddp,
    Dealer,
    DealerBrandMapping,
    PermanentJourneyPlan,
    SalesmanLeaveApplication,
    SalesOrder,
    TechnicalVisitReport,
)
from fieldforce.schemas import (
    BrandCreate,
    CollectionReportCreate,
    CompetitionReportCreate,
    DailyTaskCreate,
    DdpCreate,
    DealerBrandMappingCreate,
    DealerCreate,
    LeaveApplicationCreate,
    PjpCreate,
    SalesOrderCreate,
    TechnicalVisitReportCreate,
)

router = APIRouter()


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _today() -> str:
    return datetime.now(timezone.utc).date().isoformat()


TIMESTAMPS = {"createdAt": _now_iso, "updatedAt": _now_iso}

SUBMISSIONS = [
    CrudConfig(
        endpoint="dealer-brand-mapping",
        model=DealerBrandMapping,
        schema=DealerBrandMappingCreate,
        label="Dealer Brand Mapping",
    ),
    CrudConfig(
        endpoint="collection-reports",
        model=CollectionReport,
        schema=CollectionReportCreate,
        label="Collection Report",
        computed=TIMESTAMPS,
    ),
    CrudConfig(
        endpoint="ddp",
        model=Ddp,
        schema=DdpCreate,
        label="Dealer Development Process",
        computed={"creationDate": _today},
    ),
    CrudConfig(
        endpoint="dealers",
        model=Dealer,
        schema=DealerCreate,
        label="Dealer",
        computed=TIMESTAMPS,
    ),
    CrudConfig(
        endpoint="competition-reports",
        model=CompetitionReport,
        schema=CompetitionReportCreate,
        label="Competition Report",
        computed=TIMESTAMPS,
    ),
    CrudConfig(
        endpoint="pjp",
        model=PermanentJourneyPlan,
        schema=PjpCreate,
        label="Permanent Journey Plan",
        computed=TIMESTAMPS,
    ),
    CrudConfig(
        endpoint="daily-tasks",
        model=DailyTask,
        schema=DailyTaskCreate,
        label="Daily Task",
        computed=TIMESTAMPS,
    ),
    CrudConfig(
        endpoint="leave-applications",
        model=SalesmanLeaveApplication,
        schema=LeaveApplicationCreate,
        label="Leave Application",
        computed=TIMESTAMPS,
    ),
    CrudConfig(
        endpoint="sales-orders",
        model=SalesOrder,
        schema=SalesOrderCreate,
        label="Sales Order",
        computed=TIMESTAMPS,
    ),
    CrudConfig(
        endpoint="technical-visit-reports",
        model=TechnicalVisitReport,
        schema=TechnicalVisitReportCreate,
        label="Technical Visit Report",
        computed=TIMESTAMPS,
    ),
    CrudConfig(
        endpoint="brands",
        model=Brand,
        schema=BrandCreate,
        label="Brand",
    ),
]

for config in SUBMISSIONS:
    register_create_route(router, config)
    register_fetch_routes(router, config)
