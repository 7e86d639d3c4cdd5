import asyncio
import logging
from decimal import Decimal
from typing import Any, Sequence

import asyncpg
from sqlalchemy import event
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import declarative_base
from fastapi import Request

from .config import settings
from .exceptions import StoreConstraintError, StoreOperationError

logger = logging.getLogger("lightbnb_db")

Base = declarative_base()

# Numeric columns accept text parameters ("50", "4.5") as well as numbers;
# the server does the cast, the way it does for untyped text parameters.
TEXT_PARAMETER_CODECS = {
    "int2": int,
    "int4": int,
    "int8": int,
    "numeric": Decimal,
}

# Raised by the driver before SQLAlchemy gets a connection to wrap them on:
# refused or unreachable host, connect timeout, rejected login.
CONNECTION_ERRORS = (OSError, asyncio.TimeoutError, asyncpg.PostgresError)


async def _register_text_parameter_codecs(connection) -> None:
    for type_name, decoder in TEXT_PARAMETER_CODECS.items():
        await connection.set_type_codec(
            type_name,
            schema="pg_catalog",
            encoder=str,
            decoder=decoder,
            format="text",
        )


class Database:
    """
    Pooled connection to the LightBnB store.

    Built once by the caller at startup and handed to every function in
    ``crud``. Each ``execute`` call is one complete statement on its own
    connection, committed before the rows are returned.
    """

    def __init__(self, url: str, **engine_kwargs: Any):
        self.engine: AsyncEngine = create_async_engine(url, **engine_kwargs)
        if self.engine.dialect.driver == "asyncpg":
            event.listen(self.engine.sync_engine, "connect", self._on_connect)

    @staticmethod
    def _on_connect(dbapi_connection, connection_record) -> None:
        dbapi_connection.run_async(_register_text_parameter_codecs)

    async def execute(self, query: str, params: Sequence[Any] = ()) -> list[dict]:
        """
        Runs a single statement with positional ($1, $2 ...) parameters.

        Returns every row as a dict keyed by column name, or an empty list
        when the statement produces no rows. Store failures are raised as
        StoreOperationError.
        """
        try:
            async with self.engine.begin() as conn:
                result = await conn.exec_driver_sql(query, tuple(params))
                if not result.returns_rows:
                    return []
                # Duplicate column names (joined tables) keep the last value.
                keys = list(result.keys())
                return [dict(zip(keys, row)) for row in result.all()]
        except IntegrityError as e:
            logger.error(f"Constraint violation: {e.orig}")
            raise StoreConstraintError(str(e.orig), statement=query) from e
        except SQLAlchemyError as e:
            logger.error(f"Store operation failed: {e}")
            raise StoreOperationError(str(e), statement=query) from e
        except CONNECTION_ERRORS as e:
            logger.error(f"Could not reach the store: {e!r}")
            raise StoreOperationError(f"Could not reach the store: {e}", statement=query) from e

    async def dispose(self) -> None:
        await self.engine.dispose()


def create_database() -> Database:
    return Database(settings.DATABASE_URL, echo=settings.SQL_ECHO)


def get_db(request: Request) -> Database:
    return request.app.state.db
