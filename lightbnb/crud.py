import logging
from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel

from . import models, queries, schemas
from .database import Database

logger = logging.getLogger("lightbnb_crud")

Record = dict[str, Any]


def _first_or_none(rows: list[Record]) -> Optional[Record]:
    return rows[0] if rows else None


def _as_mapping(data: Union[Mapping[str, Any], BaseModel]) -> Mapping[str, Any]:
    if isinstance(data, BaseModel):
        return data.model_dump()
    return data


# --- Users ---

async def get_user_with_email(db: Database, email: str) -> Optional[Record]:
    """
    Get a single user given their email.
    Returns None when no user has that email.
    """
    rows = await db.execute(queries.GET_USER_WITH_EMAIL, [email])
    return _first_or_none(rows)


async def get_user_with_id(db: Database, user_id: Union[int, str]) -> Optional[Record]:
    rows = await db.execute(queries.GET_USER_WITH_ID, [user_id])
    return _first_or_none(rows)


async def add_user(db: Database, user: Union[schemas.UserCreate, Mapping[str, Any]]) -> Optional[Record]:
    """
    Inserts a user and returns the stored row.
    A duplicate email raises StoreConstraintError.
    """
    query, params = queries.build_insert(models.User.__tablename__, queries.USER_INSERT_COLUMNS, _as_mapping(user))
    rows = await db.execute(query, params)
    return _first_or_none(rows)


# --- Reservations ---

async def get_all_reservations(db: Database, guest_id: Union[int, str], limit: int = 10) -> list[Record]:
    """
    Reservations of one guest merged with their property, earliest first.
    """
    rows = await db.execute(queries.GET_ALL_RESERVATIONS, [guest_id, limit])
    logger.debug(f"Found {len(rows)} reservations for guest {guest_id}")
    return rows


# --- Properties ---

async def get_all_properties(
    db: Database,
    options: Union[schemas.PropertySearch, Mapping[str, Any], None] = None,
    limit: int = 10,
) -> list[Record]:
    query, params = queries.build_property_search(options, limit)
    return await db.execute(query, params)


async def add_property(db: Database, property: Union[schemas.PropertyCreate, Mapping[str, Any]]) -> Optional[Record]:
    """
    Inserts a listing and returns the stored row.
    Fields are matched to columns by name.
    """
    query, params = queries.build_insert(models.Property.__tablename__, queries.PROPERTY_INSERT_COLUMNS, _as_mapping(property))
    rows = await db.execute(query, params)
    return _first_or_none(rows)
