from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from uuid import uuid4

from sqlalchemy import (
    BigInteger,
    Boolean,
    Date,
    DateTime,
    Integer,
    JSON,
    Numeric,
    String,
    Text,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from fieldforce.db import Base

ID_TYPE = BigInteger().with_variant(Integer, "sqlite")
JSON_TYPE = JSON().with_variant(JSONB, "postgresql")
COORD_TYPE = Numeric(10, 7)


def _uuid() -> str:
    return str(uuid4())


class SalesmanAttendance(Base):
    __tablename__ = "salesman_attendance"

    id: Mapped[int] = mapped_column(ID_TYPE, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    attendance_date: Mapped[date] = mapped_column(Date, nullable=False)
    location_name: Mapped[str] = mapped_column(String(500), nullable=False)
    in_time_timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    out_time_timestamp: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))
    in_time_image_captured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    out_time_image_captured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    in_time_image_url: Mapped[Optional[str]] = mapped_column(String(500))
    out_time_image_url: Mapped[Optional[str]] = mapped_column(String(500))
    in_time_latitude: Mapped[Decimal] = mapped_column(COORD_TYPE, nullable=False)
    in_time_longitude: Mapped[Decimal] = mapped_column(COORD_TYPE, nullable=False)
    in_time_accuracy: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2))
    in_time_speed: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2))
    in_time_heading: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2))
    in_time_altitude: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2))
    out_time_latitude: Mapped[Optional[Decimal]] = mapped_column(COORD_TYPE)
    out_time_longitude: Mapped[Optional[Decimal]] = mapped_column(COORD_TYPE)
    out_time_accuracy: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2))
    out_time_speed: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2))
    out_time_heading: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2))
    out_time_altitude: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


class DailyVisitReport(Base):
    __tablename__ = "daily_visit_reports"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    user_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    report_date: Mapped[date] = mapped_column(Date, nullable=False)
    dealer_type: Mapped[str] = mapped_column(String(50), nullable=False)
    dealer_name: Mapped[Optional[str]] = mapped_column(String(255))
    sub_dealer_name: Mapped[Optional[str]] = mapped_column(String(255))
    location: Mapped[str] = mapped_column(String(500), nullable=False)
    latitude: Mapped[Decimal] = mapped_column(COORD_TYPE, nullable=False)
    longitude: Mapped[Decimal] = mapped_column(COORD_TYPE, nullable=False)
    visit_type: Mapped[str] = mapped_column(String(50), nullable=False)
    dealer_total_potential: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    dealer_best_potential: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    brand_selling: Mapped[list] = mapped_column(JSON_TYPE, nullable=False)
    contact_person: Mapped[Optional[str]] = mapped_column(String(255))
    contact_person_phone_no: Mapped[Optional[str]] = mapped_column(String(20))
    today_order_mt: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    today_collection_rupees: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    overdue_amount: Mapped[Optional[Decimal]] = mapped_column(Numeric(12, 2))
    feedbacks: Mapped[str] = mapped_column(String(500), nullable=False)
    solution_by_salesperson: Mapped[Optional[str]] = mapped_column(String(500))
    any_remarks: Mapped[Optional[str]] = mapped_column(String(500))
    check_in_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    check_out_time: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))
    in_time_image_url: Mapped[Optional[str]] = mapped_column(String(500))
    out_time_image_url: Mapped[Optional[str]] = mapped_column(String(500))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


class DealerBrandMapping(Base):
    __tablename__ = "dealer_brand_mapping"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    dealer_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    brand_id: Mapped[int] = mapped_column(Integer, nullable=False)
    capacity_mt: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)


class CollectionReport(Base):
    __tablename__ = "collection_reports"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    dvr_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    collected_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    collected_on_date: Mapped[date] = mapped_column(Date, nullable=False)
    weekly_target: Mapped[Optional[Decimal]] = mapped_column(Numeric(12, 2))
    till_date_achievement: Mapped[Optional[Decimal]] = mapped_column(Numeric(12, 2))
    yesterday_target: Mapped[Optional[Decimal]] = mapped_column(Numeric(12, 2))
    yesterday_achievement: Mapped[Optional[Decimal]] = mapped_column(Numeric(12, 2))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


class Ddp(Base):
    __tablename__ = "dealer_development_process"

    id: Mapped[int] = mapped_column(ID_TYPE, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    dealer_id: Mapped[str] = mapped_column(String(36), nullable=False)
    creation_date: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[str] = mapped_column(Text, nullable=False)
    obstacle: Mapped[Optional[str]] = mapped_column(Text)


class Dealer(Base):
    __tablename__ = "dealers"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    user_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    type: Mapped[str] = mapped_column(String(50), nullable=False)
    parent_dealer_id: Mapped[Optional[str]] = mapped_column(String(36))
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    region: Mapped[str] = mapped_column(String(100), nullable=False)
    area: Mapped[str] = mapped_column(String(255), nullable=False)
    phone_no: Mapped[str] = mapped_column(String(20), nullable=False)
    address: Mapped[str] = mapped_column(String(500), nullable=False)
    total_potential: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    best_potential: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    brand_selling: Mapped[list] = mapped_column(JSON_TYPE, nullable=False)
    feedbacks: Mapped[str] = mapped_column(String(500), nullable=False)
    remarks: Mapped[Optional[str]] = mapped_column(String(500))
    latitude: Mapped[Optional[Decimal]] = mapped_column(COORD_TYPE)
    longitude: Mapped[Optional[Decimal]] = mapped_column(COORD_TYPE)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


class CompetitionReport(Base):
    __tablename__ = "competition_reports"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    user_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    report_date: Mapped[date] = mapped_column(Date, nullable=False)
    brand_name: Mapped[str] = mapped_column(String(255), nullable=False)
    billing: Mapped[str] = mapped_column(String(100), nullable=False)
    nod: Mapped[str] = mapped_column(String(100), nullable=False)
    retail: Mapped[str] = mapped_column(String(100), nullable=False)
    schemes_yes_no: Mapped[str] = mapped_column(String(10), nullable=False)
    avg_scheme_cost: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    remarks: Mapped[Optional[str]] = mapped_column(String(500))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


class PermanentJourneyPlan(Base):
    __tablename__ = "permanent_journey_plans"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    user_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    created_by_id: Mapped[int] = mapped_column(Integer, nullable=False)
    plan_date: Mapped[date] = mapped_column(Date, nullable=False)
    area_to_be_visited: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(String(500))
    status: Mapped[str] = mapped_column(String(50), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


class DailyTask(Base):
    __tablename__ = "daily_tasks"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    user_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    assigned_by_user_id: Mapped[int] = mapped_column(Integer, nullable=False)
    task_date: Mapped[date] = mapped_column(Date, nullable=False)
    visit_type: Mapped[str] = mapped_column(String(50), nullable=False)
    related_dealer_id: Mapped[Optional[str]] = mapped_column(String(36))
    site_name: Mapped[Optional[str]] = mapped_column(String(255))
    description: Mapped[Optional[str]] = mapped_column(String(500))
    pjp_id: Mapped[Optional[str]] = mapped_column(String(36))
    status: Mapped[str] = mapped_column(String(50), nullable=False, default="Assigned")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


class SalesmanLeaveApplication(Base):
    __tablename__ = "salesman_leave_applications"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    user_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    leave_type: Mapped[str] = mapped_column(String(100), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    reason: Mapped[str] = mapped_column(String(500), nullable=False)
    status: Mapped[str] = mapped_column(String(50), nullable=False, default="Pending")
    admin_remarks: Mapped[Optional[str]] = mapped_column(String(500))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


class SalesOrder(Base):
    __tablename__ = "sales_orders"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    user_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    dealer_id: Mapped[str] = mapped_column(String(36), nullable=False)
    dvr_id: Mapped[Optional[str]] = mapped_column(String(36))
    quantity: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    unit: Mapped[str] = mapped_column(String(20), nullable=False)
    order_total: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    advance_payment: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=0)
    pending_payment: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=0)
    estimated_delivery: Mapped[Optional[date]] = mapped_column(Date)
    remarks: Mapped[Optional[str]] = mapped_column(String(500))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(ID_TYPE, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    first_name: Mapped[Optional[str]] = mapped_column(String(100))
    last_name: Mapped[Optional[str]] = mapped_column(String(100))
    role: Mapped[str] = mapped_column(String(50), nullable=False, default="salesperson")
    company_id: Mapped[Optional[int]] = mapped_column(Integer, index=True)
    salesman_login_id: Mapped[Optional[str]] = mapped_column(String(255), unique=True)
    hashed_password: Mapped[Optional[str]] = mapped_column(String(255))
    phone_number: Mapped[Optional[str]] = mapped_column(String(20))
    region: Mapped[Optional[str]] = mapped_column(String(100))
    area: Mapped[Optional[str]] = mapped_column(String(255))
    status: Mapped[str] = mapped_column(String(50), nullable=False, default="active")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    def to_public_dict(self) -> dict:
        data = self.to_dict()
        data.pop("hashedPassword", None)
        return data


class Brand(Base):
    __tablename__ = "brands"

    id: Mapped[int] = mapped_column(ID_TYPE, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)


class TechnicalVisitReport(Base):
    __tablename__ = "technical_visit_reports"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    user_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    report_date: Mapped[date] = mapped_column(Date, nullable=False)
    visit_type: Mapped[str] = mapped_column(String(50), nullable=False)
    site_name_concerned_person: Mapped[str] = mapped_column(String(255), nullable=False)
    phone_no: Mapped[str] = mapped_column(String(20), nullable=False)
    email_id: Mapped[Optional[str]] = mapped_column(String(255))
    influencer_type: Mapped[Optional[str]] = mapped_column(String(100))
    quality_complaint: Mapped[Optional[str]] = mapped_column(String(100))
    promotional_activity: Mapped[Optional[str]] = mapped_column(String(100))
    channel_partner_visit: Mapped[Optional[str]] = mapped_column(String(100))
    site_visit_brand_in_use: Mapped[list] = mapped_column(JSON_TYPE, nullable=False)
    client_remarks: Mapped[str] = mapped_column(String(500), nullable=False)
    salesperson_remarks: Mapped[str] = mapped_column(String(500), nullable=False)
    check_in_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    check_out_time: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))
    in_time_image_url: Mapped[Optional[str]] = mapped_column(String(500))
    out_time_image_url: Mapped[Optional[str]] = mapped_column(String(500))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
