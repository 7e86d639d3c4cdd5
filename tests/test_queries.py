import re
import pytest

from lightbnb import queries
from lightbnb.queries import build_property_search, build_insert
from lightbnb.schemas import PropertySearch
from lightbnb import models


ALL_FILTERS = {
    "city": "Vancouver",
    "minimum_price_per_night": 50,
    "maximum_price_per_night": 300,
    "minimum_rating": 4,
    "owner_id": 7,
}

# (field, SQL fragment it produces) in the order the statement must list them
CONDITION_ORDER = [
    ("city", "city LIKE"),
    ("minimum_price_per_night", "cost_per_night >="),
    ("maximum_price_per_night", "cost_per_night <="),
    ("minimum_rating", "rating >="),
    ("owner_id", "owner_id ="),
]


def placeholders(query: str) -> list[int]:
    return [int(n) for n in re.findall(r"\$(\d+)", query)]


# --- Property search builder ---

def test_no_filters_has_no_where_clause():
    query, params = build_property_search(PropertySearch(), limit=10)

    assert "WHERE" not in query
    assert "AND" not in query
    assert params == [10]
    assert "GROUP BY properties.id" in query
    assert "ORDER BY cost_per_night" in query
    assert query.rstrip().endswith("LIMIT $1;")


def test_none_options_behaves_like_empty_search():
    assert build_property_search(None) == build_property_search(PropertySearch())


def test_default_limit_is_ten():
    _, params = build_property_search({})
    assert params == [10]


@pytest.mark.parametrize("field, value", list(ALL_FILTERS.items()))
def test_single_filter_opens_where_without_and(field, value):
    """Any one field on its own must start the WHERE clause."""
    query, params = build_property_search({field: value}, limit=5)

    assert query.count("WHERE") == 1
    assert " AND " not in query
    assert len(params) == 2
    assert params[-1] == 5


def test_scenario_city_and_minimum_price():
    query, params = build_property_search({"city": "van", "minimum_price_per_night": 50}, limit=20)

    assert "WHERE city LIKE $1 AND cost_per_night >= $2" in query
    assert "LIMIT $3" in query
    assert params == ["%van%", "50", 20]


def test_all_filters_chain_in_fixed_order():
    query, params = build_property_search(ALL_FILTERS, limit=10)

    positions = [query.index(fragment) for _, fragment in CONDITION_ORDER]
    assert positions == sorted(positions)
    assert query.count("WHERE") == 1
    assert query.count(" AND ") == 4
    assert params == ["%Vancouver%", "50", "300", "4", "7", 10]


def test_caller_field_order_does_not_change_output():
    reversed_filters = dict(reversed(list(ALL_FILTERS.items())))

    assert build_property_search(reversed_filters) == build_property_search(ALL_FILTERS)


def test_later_filter_opens_where_when_earlier_ones_are_absent():
    query, params = build_property_search({"maximum_price_per_night": 200, "owner_id": 3})

    assert "WHERE cost_per_night <= $1::numeric AND owner_id = $2" in query
    assert params == ["200", "3", 10]


def test_param_count_matches_placeholders():
    for count in range(len(CONDITION_ORDER) + 1):
        fields = {field: ALL_FILTERS[field] for field, _ in CONDITION_ORDER[:count]}
        query, params = build_property_search(fields, limit=3)

        assert len(params) == count + 1
        assert placeholders(query) == list(range(1, len(params) + 1))


def test_builder_is_deterministic():
    search = PropertySearch(**ALL_FILTERS)
    assert build_property_search(search, 15) == build_property_search(search, 15)


def test_falsy_values_add_no_condition():
    query, params = build_property_search({"city": "", "minimum_price_per_night": 0})

    assert "WHERE" not in query
    assert params == [10]


def test_limit_is_passed_through_unvalidated():
    _, params = build_property_search({}, limit=-1)
    assert params == [-1]


def test_unknown_keys_are_ignored():
    query, params = build_property_search({"city": "van", "sort": "DROP TABLE users"})

    assert "DROP" not in query
    assert params == ["%van%", 10]


def test_values_are_never_interpolated():
    query, _ = build_property_search({"city": "x'; DELETE FROM users; --"})
    assert "DELETE" not in query


# --- INSERT builder ---

def test_insert_maps_values_by_column_name():
    user = {"password": "hash", "email": "a@b.c", "name": "Ann"}
    query, params = build_insert("users", queries.USER_INSERT_COLUMNS, user)

    assert query == "INSERT INTO users (name, email, password) VALUES ($1, $2, $3) RETURNING *;"
    assert params == ["Ann", "a@b.c", "hash"]


def test_insert_binds_missing_columns_as_null():
    _, params = build_insert("users", queries.USER_INSERT_COLUMNS, {"name": "Ann"})
    assert params == ["Ann", None, None]


def test_insert_columns_follow_table_declaration():
    assert queries.USER_INSERT_COLUMNS == ("name", "email", "password")
    assert queries.PROPERTY_INSERT_COLUMNS == (
        "owner_id", "title", "description", "thumbnail_photo_url", "cover_photo_url",
        "cost_per_night", "parking_spaces", "number_of_bathrooms", "number_of_bedrooms",
        "country", "street", "city", "province", "post_code",
    )


def test_insert_columns_skip_primary_key_and_server_defaults():
    assert "id" not in queries.PROPERTY_INSERT_COLUMNS
    assert "active" not in queries.PROPERTY_INSERT_COLUMNS
    assert queries.insert_columns(models.Reservation) == ("start_date", "end_date", "property_id", "guest_id")


# --- Filter values ---

def test_fractional_rating_is_accepted():
    """An average rating bound such as 4.5 is a valid filter."""
    query, params = build_property_search({"minimum_rating": 4.5})

    assert "WHERE rating >= $1::numeric" in query
    assert params == ["4.5", 10]


def test_fractional_rating_from_search_model():
    _, params = build_property_search(PropertySearch(minimum_rating=4.5, maximum_price_per_night=199.99))
    assert params == ["199.99", "4.5", 10]


def test_mapping_values_are_not_type_checked():
    _, params = build_property_search({"city": 123, "owner_id": "7"})
    assert params == ["%123%", "7", 10]
