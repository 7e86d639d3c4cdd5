"""
SQL statements for the LightBnB data-access layer.

Every statement uses positional ($1, $2 ...) placeholders; values are always
bound, never interpolated into the SQL text.
"""
import logging
from typing import Any, Callable, Mapping, NamedTuple, Union

from . import models
from .schemas import PropertySearch

logger = logging.getLogger("lightbnb_queries")


GET_USER_WITH_EMAIL = "SELECT * FROM users WHERE email = $1;"

GET_USER_WITH_ID = "SELECT * FROM users WHERE id = $1;"

GET_ALL_RESERVATIONS = """
SELECT reservations.*, properties.*, AVG(property_reviews.rating) AS average_rating
FROM reservations
JOIN properties ON reservations.property_id = properties.id
JOIN property_reviews ON properties.id = property_reviews.property_id
WHERE reservations.guest_id = $1
GROUP BY reservations.id, properties.id
ORDER BY reservations.start_date
LIMIT $2;
"""

PROPERTY_SEARCH_BASE = """
SELECT properties.*, AVG(property_reviews.rating) AS average_rating
FROM properties
JOIN property_reviews ON properties.id = property_reviews.property_id
"""


def insert_columns(model, server_side: tuple[str, ...] = ()) -> tuple[str, ...]:
    """
    Columns an INSERT binds for ``model``, in table declaration order.
    The primary key and ``server_side`` columns are left to their defaults.
    """
    return tuple(
        column.name
        for column in model.__table__.columns
        if not column.primary_key and column.name not in server_side
    )


# Column list and placeholders of the INSERT statements are both generated
# from these tuples.
USER_INSERT_COLUMNS = insert_columns(models.User)

PROPERTY_INSERT_COLUMNS = insert_columns(models.Property, server_side=("active",))


class SearchCondition(NamedTuple):
    field: str
    sql: str  # "{}" is replaced by the placeholder
    to_param: Callable[[Any], Any]


# Conditions are always emitted in this order, whatever order the caller
# filled the search fields in. Bounds compare as numeric so "4.5" binds too.
PROPERTY_SEARCH_CONDITIONS = (
    SearchCondition("city", "city LIKE {}", lambda value: f"%{value}%"),
    SearchCondition("minimum_price_per_night", "cost_per_night >= {}::numeric", str),
    SearchCondition("maximum_price_per_night", "cost_per_night <= {}::numeric", str),
    # Filters review rows before grouping: average_rating is then the average
    # of the matching reviews only, not of all the property's reviews.
    SearchCondition("minimum_rating", "rating >= {}::numeric", str),
    SearchCondition("owner_id", "owner_id = {}", str),
)


def build_insert(table: str, columns: tuple[str, ...], values: Mapping[str, Any]) -> tuple[str, list]:
    """
    Builds ``INSERT ... RETURNING *`` for the given columns.

    Values are looked up by column name, so the caller's key order does not
    matter. Missing columns bind NULL; keys outside ``columns`` are ignored.
    """
    placeholders = ", ".join(f"${position}" for position in range(1, len(columns) + 1))
    query = f"INSERT INTO {table} ({', '.join(columns)}) VALUES ({placeholders}) RETURNING *;"
    params = [values.get(column) for column in columns]
    return query, params


def build_property_search(
    options: Union[PropertySearch, Mapping[str, Any], None] = None,
    limit: int = 10,
) -> tuple[str, list]:
    """
    Builds the property search statement and its parameter list.

    The first condition present opens the WHERE clause and every following
    one is joined with AND. The limit is always the last parameter and is
    passed through as given. Plain mappings are read as-is, without type
    checks; values only reach the store as bound parameters.
    """
    if options is None:
        options = {}
    elif isinstance(options, PropertySearch):
        options = options.model_dump()

    params: list = []
    query = PROPERTY_SEARCH_BASE

    for condition in PROPERTY_SEARCH_CONDITIONS:
        value = options.get(condition.field)
        if not value:
            continue
        params.append(condition.to_param(value))
        keyword = "AND" if len(params) > 1 else "WHERE"
        query += f"{keyword} {condition.sql.format(f'${len(params)}')} "

    params.append(limit)
    query += f"\nGROUP BY properties.id\nORDER BY cost_per_night\nLIMIT ${len(params)};\n"

    logger.debug(f"Property search: {query} {params}")
    return query, params
