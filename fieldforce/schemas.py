from datetime import date, datetime
from decimal import Decimal
from typing import Annotated, Literal, Optional, get_args

from pydantic import BaseModel, BeforeValidator, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

PjpStatus = Literal["planned", "active", "completed", "cancelled"]
OrderUnit = Literal["MT", "KG", "Bags"]
PJP_STATUS = get_args(PjpStatus)
UNITS = get_args(OrderUnit)


def _blank_to_none(value):
    return None if value == "" else value


BlankUrl = Annotated[Optional[str], BeforeValidator(_blank_to_none)]


class WireModel(BaseModel):
    model_config = {"alias_generator": to_camel, "populate_by_name": True}


class CheckInRequest(WireModel):
    model_config = {"json_schema_extra": {"example": {'userId': 1, 'attendanceDate': '2024-05-01', 'locationName': 'Guwahati', 'inTimeImageCaptured': True, 'inTimeImageUrl': 'https://img.example.com/in.jpg', 'inTimeLatitude': 26.1445, 'inTimeLongitude': 91.7362}}}
    user_id: int = Field(gt=0)
    attendance_date: date
    location_name: str = Field(min_length=1, max_length=500)
    in_time_image_captured: bool = False
    in_time_image_url: BlankUrl = Field(default=None, max_length=500)
    in_time_latitude: Decimal
    in_time_longitude: Decimal
    in_time_accuracy: Optional[Decimal] = None
    in_time_speed: Optional[Decimal] = None
    in_time_heading: Optional[Decimal] = None
    in_time_altitude: Optional[Decimal] = None


class CheckOutRequest(WireModel):
    model_config = {"json_schema_extra": {"example": {'userId': 1, 'attendanceDate': '2024-05-01', 'outTimeImageCaptured': True, 'outTimeImageUrl': 'https://img.example.com/out.jpg', 'outTimeLatitude': 26.1445, 'outTimeLongitude': 91.7362}}}
    user_id: int = Field(gt=0)
    attendance_date: date
    out_time_image_captured: bool = False
    out_time_image_url: BlankUrl = Field(default=None, max_length=500)
    out_time_latitude: Decimal
    out_time_longitude: Decimal
    out_time_accuracy: Optional[Decimal] = None
    out_time_speed: Optional[Decimal] = None
    out_time_heading: Optional[Decimal] = None
    out_time_altitude: Optional[Decimal] = None


class DailyVisitReportCreate(WireModel):
    """Looser than the table: dates may be date-only or full timestamps and
    optional text fields may arrive as empty strings."""

    user_id: int = Field(gt=0)
    report_date: datetime
    dealer_type: str = Field(max_length=50)
    dealer_name: Optional[str] = Field(default=None, max_length=255)
    sub_dealer_name: Optional[str] = Field(default=None, max_length=255)
    location: str = Field(max_length=500)
    latitude: Decimal
    longitude: Decimal
    visit_type: str = Field(max_length=50)
    dealer_total_potential: Decimal
    dealer_best_potential: Decimal
    brand_selling: list[str] = Field(min_length=1)
    contact_person: Optional[str] = Field(default=None, max_length=255)
    contact_person_phone_no: Optional[str] = Field(default=None, max_length=20)
    today_order_mt: Decimal
    today_collection_rupees: Decimal
    overdue_amount: Optional[Decimal] = None
    feedbacks: str = Field(max_length=500)
    solution_by_salesperson: Optional[str] = Field(default=None, max_length=500)
    any_remarks: Optional[str] = Field(default=None, max_length=500)
    check_in_time: datetime
    check_out_time: Optional[datetime] = None
    in_time_image_url: Optional[str] = Field(default=None, max_length=500)
    out_time_image_url: Optional[str] = Field(default=None, max_length=500)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator(
        "dealer_name",
        "sub_dealer_name",
        "contact_person",
        "contact_person_phone_no",
        "overdue_amount",
        "solution_by_salesperson",
        "any_remarks",
        "check_out_time",
        "in_time_image_url",
        "out_time_image_url",
        mode="before",
    )
    @classmethod
    def _blank_as_null(cls, value):
        return _blank_to_none(value)


class DealerBrandMappingCreate(WireModel):
    model_config = {"json_schema_extra": {"example": {'dealerId': '4f1c2a9e-0000-4000-8000-000000000001', 'brandId': 3, 'capacityMt': 120.5}}}
    dealer_id: str = Field(min_length=1, max_length=36)
    brand_id: int = Field(gt=0)
    capacity_mt: Decimal = Field(ge=0)


class CollectionReportCreate(WireModel):
    model_config = {"json_schema_extra": {"example": {'dvrId': '4f1c2a9e-0000-4000-8000-000000000002', 'collectedAmount': 25000, 'collectedOnDate': '2024-05-01', 'weeklyTarget': 100000}}}
    dvr_id: str = Field(min_length=1, max_length=36)
    collected_amount: Decimal = Field(ge=0)
    collected_on_date: date
    weekly_target: Optional[Decimal] = None
    till_date_achievement: Optional[Decimal] = None
    yesterday_target: Optional[Decimal] = None
    yesterday_achievement: Optional[Decimal] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class DdpCreate(WireModel):
    user_id: int = Field(gt=0)
    dealer_id: str = Field(min_length=1, max_length=36)
    creation_date: Optional[date] = None
    status: str = Field(min_length=1)
    obstacle: Optional[str] = None


class DealerCreate(WireModel):
    user_id: int = Field(gt=0)
    type: str = Field(min_length=1, max_length=50)
    parent_dealer_id: Optional[str] = Field(default=None, max_length=36)
    name: str = Field(min_length=3, max_length=255)
    region: str = Field(min_length=1, max_length=100)
    area: str = Field(min_length=2, max_length=255)
    phone_no: str = Field(pattern=r"^\d{10}$")
    address: str = Field(min_length=10, max_length=500)
    total_potential: Decimal = Field(gt=0)
    best_potential: Decimal = Field(gt=0)
    brand_selling: list[str] = Field(min_length=1)
    feedbacks: str = Field(min_length=1, max_length=500)
    remarks: Optional[str] = Field(default=None, max_length=500)
    latitude: Optional[Decimal] = None
    longitude: Optional[Decimal] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CompetitionReportCreate(WireModel):
    user_id: int = Field(gt=0)
    report_date: date
    brand_name: str = Field(min_length=1, max_length=255)
    billing: str = Field(pattern=r"^[0-9.]+$")
    nod: str = Field(pattern=r"^[0-9]+$")
    retail: str = Field(pattern=r"^[0-9.]+$")
    schemes_yes_no: Literal["Yes", "No"]
    avg_scheme_cost: Decimal = Field(ge=0)
    remarks: Optional[str] = Field(default=None, max_length=500)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class PjpCreate(WireModel):
    user_id: int = Field(gt=0)
    created_by_id: int = Field(gt=0)
    plan_date: date
    area_to_be_visited: str = Field(min_length=1, max_length=500)
    description: Optional[str] = Field(default=None, max_length=500)
    status: PjpStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class DailyTaskCreate(WireModel):
    user_id: int = Field(gt=0)
    assigned_by_user_id: int = Field(gt=0)
    task_date: date
    visit_type: str = Field(min_length=1, max_length=50)
    related_dealer_id: Optional[str] = Field(default=None, max_length=36)
    site_name: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = Field(default=None, max_length=500)
    pjp_id: Optional[str] = Field(default=None, max_length=36)
    status: Optional[str] = Field(default=None, max_length=50)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class LeaveApplicationCreate(WireModel):
    user_id: int = Field(gt=0)
    leave_type: str = Field(min_length=1, max_length=100)
    start_date: date
    end_date: date
    reason: str = Field(min_length=1, max_length=500)
    status: Optional[str] = Field(default=None, max_length=50)
    admin_remarks: Optional[str] = Field(default=None, max_length=500)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @model_validator(mode="after")
    def _check_range(self):
        if self.end_date < self.start_date:
            raise ValueError("endDate must not be before startDate")
        return self


class SalesOrderCreate(WireModel):
    user_id: int = Field(gt=0)
    dealer_id: str = Field(min_length=1, max_length=36)
    dvr_id: Optional[str] = Field(default=None, max_length=36)
    quantity: Decimal = Field(gt=0)
    unit: OrderUnit
    order_total: Decimal = Field(ge=0)
    advance_payment: Optional[Decimal] = Field(default=None, ge=0)
    pending_payment: Optional[Decimal] = Field(default=None, ge=0)
    estimated_delivery: Optional[date] = None
    remarks: Optional[str] = Field(default=None, max_length=500)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class LoginRequest(WireModel):
    model_config = {"json_schema_extra": {"example": {"loginId": "EMP-0001", "password": "secret"}}}
    login_id: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1)

    @field_validator("login_id")
    @classmethod
    def _strip_login_id(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("loginId must not be blank")
        return value


class BrandCreate(WireModel):
    name: str = Field(min_length=1, max_length=255)


InfluencerType = Literal["Contractor", "Engineer", "Architect", "Mason", "Builder", "Petty Contractor"]
QualityComplaint = Literal["Slow Setting", "Low weight", "Colour issues", "Cracks", "Miscellaneous"]
PromotionalActivity = Literal[
    "Mason Meet",
    "Table meet / Counter meet",
    "Mega mason meet",
    "Engineer meet",
    "Consumer Camp",
    "Miscellaneous",
]
ChannelPartnerVisit = Literal["Dealer Visit", "Sub dealer", "Authorized retailers", "Other Brand counters"]


class TechnicalVisitReportCreate(WireModel):
    user_id: int = Field(gt=0)
    report_date: date
    visit_type: str = Field(min_length=1, max_length=50)
    site_name_concerned_person: str = Field(min_length=1, max_length=255)
    phone_no: str = Field(pattern=r"^\d{10}$")
    email_id: Optional[str] = Field(default=None, max_length=255)
    influencer_type: Optional[InfluencerType] = None
    quality_complaint: Optional[QualityComplaint] = None
    promotional_activity: Optional[PromotionalActivity] = None
    channel_partner_visit: Optional[ChannelPartnerVisit] = None
    site_visit_brand_in_use: list[str] = Field(min_length=1)
    client_remarks: str = Field(min_length=1, max_length=500)
    salesperson_remarks: str = Field(min_length=1, max_length=500)
    check_in_time: datetime
    check_out_time: Optional[datetime] = None
    in_time_image_url: BlankUrl = Field(default=None, max_length=500)
    out_time_image_url: BlankUrl = Field(default=None, max_length=500)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
