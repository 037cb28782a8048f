"""
Generic create/fetch route factory ("AutoCRUD").

One ``CrudConfig`` per entity describes the table, its validator and the
server-computed fields; ``register_create_route`` turns it into a
``POST /<endpoint>`` route performing validate, merge computed fields,
insert and respond. Specialised handlers plug into the same flow through
the ``prepare``/``transform``/``id_factory`` hooks instead of duplicating it.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Mapping, Optional, TypeVar

from fastapi import APIRouter, Body, Depends, Query
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from fieldforce.db import Base, get_db
from fieldforce.envelope import fail, internal_error, ok, violations
from fieldforce.logger import get_logger

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=Base)
SchemaT = TypeVar("SchemaT", bound=BaseModel)


@dataclass(frozen=True)
class CrudConfig(Generic[ModelT, SchemaT]):
    endpoint: str
    model: type[ModelT]
    schema: type[SchemaT]
    label: str
    # wire name -> zero-argument producer, evaluated per request
    computed: Mapping[str, Callable[[], Any]] = field(default_factory=dict)
    prepare: Optional[Callable[[dict[str, Any]], dict[str, Any]]] = None
    transform: Optional[Callable[[SchemaT], dict[str, Any]]] = None
    id_factory: Optional[Callable[[], Any]] = None
    include_received: bool = False
    tags: tuple[str, ...] = ()


def build_candidate(config: CrudConfig, body: Mapping[str, Any]) -> dict[str, Any]:
    """Raw body first, computed fields last so clients cannot override them."""
    candidate = dict(body)
    if config.prepare is not None:
        candidate = config.prepare(candidate)
    for name, produce in config.computed.items():
        candidate[name] = produce()
    return candidate


def create_record(db: Session, config: CrudConfig, body: Mapping[str, Any]) -> JSONResponse:
    candidate = build_candidate(config, body)
    try:
        parsed = config.schema.model_validate(candidate)
    except ValidationError as exc:
        logger.info(
            "validation failed",
            extra={"entity": config.label, "error_count": exc.error_count()},
        )
        return fail(
            "Validation failed",
            400,
            violations(exc.errors(), include_received=config.include_received),
        )

    if config.transform is not None:
        values = config.transform(parsed)
    else:
        values = parsed.model_dump(exclude_none=True)
    if config.id_factory is not None:
        values["id"] = config.id_factory()

    record = config.model(**values)
    try:
        db.add(record)
        db.commit()
        db.refresh(record)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("create %s failed: %s", config.label, exc)
        return internal_error(f"Failed to create {config.label}", exc)

    logger.info("created record", extra={"entity": config.label})
    return ok(record.to_dict(), f"{config.label} created successfully", status_code=201)


def register_create_route(router: APIRouter, config: CrudConfig) -> None:
    def create(body: dict[str, Any] = Body(...), db: Session = Depends(get_db)) -> JSONResponse:
        return create_record(db, config, body)

    create.__name__ = f"create_{config.endpoint.replace('-', '_')}"
    router.add_api_route(
        f"/{config.endpoint}",
        create,
        methods=["POST"],
        status_code=201,
        tags=list(config.tags) or [config.label],
        summary=f"Create {config.label}",
    )


def _paginate_by_offset(query, limit: int, cursor: Optional[int]) -> tuple[list[Any], Optional[int]]:
    offset = cursor or 0
    rows = query.offset(offset).limit(limit + 1).all()
    next_cursor = None
    if len(rows) > limit:
        next_cursor = offset + limit
        rows = rows[:limit]
    return rows, next_cursor


def register_fetch_routes(router: APIRouter, config: CrudConfig) -> None:
    model = config.model
    slug = config.endpoint.replace("-", "_")

    def list_records(
        user_id: Optional[int] = Query(default=None, alias="userId"),
        limit: int = Query(default=50, ge=1, le=500),
        cursor: Optional[int] = Query(default=None, ge=0),
        db: Session = Depends(get_db),
    ) -> JSONResponse:
        query = db.query(model)
        if user_id is not None and hasattr(model, "user_id"):
            query = query.filter(model.user_id == user_id)
        rows, next_cursor = _paginate_by_offset(query.order_by(model.id), limit, cursor)
        return ok(
            [row.to_dict() for row in rows],
            meta={"page": {"limit": limit, "cursor": next_cursor}},
        )

    def get_record(record_id: str, db: Session = Depends(get_db)) -> JSONResponse:
        key: Any = record_id
        if model.__table__.c.id.type.python_type is int:
            if not record_id.isdigit():
                return fail(f"{config.label} not found", 404)
            key = int(record_id)
        record = db.get(model, key)
        if record is None:
            return fail(f"{config.label} not found", 404)
        return ok(record.to_dict())

    list_records.__name__ = f"list_{slug}"
    get_record.__name__ = f"get_{slug}"
    tags = list(config.tags) or [config.label]
    router.add_api_route(f"/{config.endpoint}", list_records, methods=["GET"], tags=tags)
    router.add_api_route(f"/{config.endpoint}/{{record_id}}", get_record, methods=["GET"], tags=tags)
