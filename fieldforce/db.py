from collections.abc import Iterator
from typing import Any

from fastapi.encoders import jsonable_encoder
from pydantic.alias_generators import to_camel
from sqlalchemy import create_engine, inspect
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from fieldforce.config import settings

engine = create_engine(settings.database_url, pool_pre_ping=True)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


class Base(DeclarativeBase):
    def to_dict(self) -> dict[str, Any]:
        """Column values keyed by their camelCase wire names."""
        return {
            to_camel(attr.key): jsonable_encoder(getattr(self, attr.key))
            for attr in inspect(self).mapper.column_attrs
        }


def get_db() -> Iterator[Session]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None) -> None:
    # registers every table on Base.metadata
    import fieldforce.models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
