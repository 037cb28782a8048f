import argparse
from typing import Optional, Sequence

from sqlalchemy import create_engine, text
from sqlalchemy.exc import SQLAlchemyError

from fieldforce.config import settings
from fieldforce.db import init_db


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Check the field force database connection")
    parser.add_argument("--database-url", default=settings.database_url)
    parser.add_argument("--create-tables", action="store_true", help="create missing tables after connecting")
    args = parser.parse_args(argv)

    print(f"DATABASE_URL={args.database_url}")
    engine = create_engine(args.database_url, pool_pre_ping=True)
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        print("DB connection OK")
        if args.create_tables:
            init_db(bind=engine)
            print("Tables created")
    except SQLAlchemyError as exc:
        print("DB connection FAILED")
        print(exc)
        return 1
    finally:
        engine.dispose()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
