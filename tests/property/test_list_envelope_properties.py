"""Property tests for list envelope resolution.

Any sequence the backend returns, in any of the supported envelope shapes,
resolves to the same items; anything without a sequence resolves to nothing.
"""

from __future__ import annotations

from hypothesis import assume, given, settings
from hypothesis import strategies as st

from portal_client.api.envelope import (
    EnvelopeMismatch,
    ItemPayload,
    ListPayload,
    parse_array,
    parse_item,
    parse_resource_list,
)


# --- Strategies ---

scalars = st.one_of(
    st.none(),
    st.booleans(),
    st.integers(min_value=-1000, max_value=1000),
    st.text(max_size=20),
)
records = st.dictionaries(
    keys=st.text(alphabet="abcdefghijklmnopqrstuvwxyz", min_size=1, max_size=8),
    values=scalars,
    max_size=5,
)
item_lists = st.lists(records, max_size=10)
resource_keys = st.from_regex(r"[a-z]{3,12}", fullmatch=True).filter(lambda k: k not in ("data", "pagination"))
paginations = st.fixed_dictionaries(
    {
        "page": st.integers(min_value=1, max_value=50),
        "limit": st.integers(min_value=1, max_value=100),
        "total": st.integers(min_value=0, max_value=5000),
        "pages": st.integers(min_value=0, max_value=50),
    }
)


# --- Resource list shapes ---

@settings(max_examples=100)
@given(items=item_lists, key=resource_keys, pagination=paginations)
def test_every_known_shape_resolves_to_items(items: list, key: str, pagination: dict) -> None:
    shapes = [
        items,
        {"data": items},
        {"success": True, "data": items, "pagination": pagination},
        {"success": True, "data": {"data": items, "pagination": pagination}},
        {"success": True, "data": {key: items, "pagination": pagination}},
    ]

    for body in shapes:
        result = parse_resource_list(body, key)
        assert isinstance(result, ListPayload), body
        assert result.items == items


@settings(max_examples=100)
@given(items=item_lists, key=resource_keys, pagination=paginations)
def test_pagination_is_carried_alongside_items(items: list, key: str, pagination: dict) -> None:
    result = parse_resource_list({"data": {key: items, "pagination": pagination}}, key)

    assert isinstance(result, ListPayload)
    assert result.pagination is not None
    assert result.pagination.model_dump() == pagination


@settings(max_examples=100)
@given(data_items=item_lists, keyed_items=item_lists, key=resource_keys)
def test_data_takes_precedence_over_resource_key(data_items: list, keyed_items: list, key: str) -> None:
    result = parse_resource_list({"data": {"data": data_items, key: keyed_items}}, key)

    assert isinstance(result, ListPayload)
    assert result.items == data_items


@settings(max_examples=100)
@given(payload=records, key=resource_keys)
def test_mapping_without_sequence_is_a_mismatch(payload: dict, key: str) -> None:
    # records only hold scalars, so no value can be a list
    assert isinstance(parse_resource_list({"data": payload}, key), EnvelopeMismatch)


@settings(max_examples=100)
@given(value=scalars, key=resource_keys)
def test_scalar_payload_is_a_mismatch(value: object, key: str) -> None:
    assert isinstance(parse_resource_list({"data": value}, key), EnvelopeMismatch)


# --- Array and item contracts ---

@settings(max_examples=100)
@given(items=item_lists)
def test_array_flat_and_nested_agree(items: list) -> None:
    flat = parse_array({"success": True, "data": items})
    nested = parse_array({"success": True, "data": {"data": items}})

    assert isinstance(flat, ListPayload)
    assert isinstance(nested, ListPayload)
    assert flat.items == nested.items == items


@settings(max_examples=100)
@given(item=records)
def test_item_wrapped_once_or_twice_unwraps_to_same_value(item: dict) -> None:
    assume("data" not in item)

    once = parse_item({"success": True, "data": item})
    twice = parse_item({"success": True, "data": {"data": item}})

    assert once == twice == ItemPayload(item)


@settings(max_examples=100)
@given(item=records)
def test_bare_item_is_returned_as_is(item: dict) -> None:
    assume("data" not in item)
    assert parse_item(item) == ItemPayload(item)
