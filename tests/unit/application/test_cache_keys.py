"""Unit tests for KeyBuilder and argument normalization."""
from __future__ import annotations

import dataclasses
import datetime
import decimal
import enum
import uuid

import pytest
from hypothesis import given
from hypothesis import strategies as st

from aerocache.application.cache import KeyBuilder, bind_arguments, normalize
from aerocache.kernel.errors import KeyNormalizationError


class Status(str, enum.Enum):
    ACTIVE = "active"


@dataclasses.dataclass
class Window:
    start: datetime.date
    end: datetime.date


class _Model:
    def __init__(self, **fields: object) -> None:
        self._fields = fields

    def model_dump(self) -> dict[str, object]:
        return dict(self._fields)


# ---------------------------------------------------------------------------
# entity keys and tags
# ---------------------------------------------------------------------------

class TestEntityKey:
    def test_format(self) -> None:
        assert KeyBuilder().entity_key("supplier", "42") == "entity:supplier:42"

    def test_namespaced_by_type(self) -> None:
        keys = KeyBuilder()
        assert keys.entity_key("supplier", "1") != keys.entity_key("customer", "1")

    def test_prefix_applies_to_keys_not_tags(self) -> None:
        keys = KeyBuilder("aero:")
        assert keys.entity_key("supplier", 7) == "aero:entity:supplier:7"
        assert keys.entity_tag("supplier", 7) == "entity:supplier:7"
        assert keys.tag_key("supplier:list") == "aero:tag:supplier:list"


# ---------------------------------------------------------------------------
# query keys
# ---------------------------------------------------------------------------

class TestQueryKey:
    def test_argument_order_does_not_matter(self) -> None:
        keys = KeyBuilder()
        assert keys.query_key("supplier", "find_all", {"a": 1, "b": 2}) == keys.query_key(
            "supplier", "find_all", {"b": 2, "a": 1}
        )

    def test_nested_mapping_order_does_not_matter(self) -> None:
        keys = KeyBuilder()
        k1 = keys.query_key("supplier", "find_all", {"options": {"filter": {"status": "a", "type": "b"}, "page": 1}})
        k2 = keys.query_key("supplier", "find_all", {"options": {"page": 1, "filter": {"type": "b", "status": "a"}}})
        assert k1 == k2

    def test_different_args_differ(self) -> None:
        keys = KeyBuilder()
        assert keys.query_key("supplier", "find_all", {"status": "active"}) != keys.query_key(
            "supplier", "find_all", {"status": "inactive"}
        )

    def test_different_methods_differ(self) -> None:
        keys = KeyBuilder()
        assert keys.query_key("supplier", "search", {"q": "x"}) != keys.query_key(
            "supplier", "get_by_status", {"q": "x"}
        )

    def test_service_method_boundary_is_unambiguous(self) -> None:
        keys = KeyBuilder()
        k1 = keys.query_key("a.b", "c", {})
        k2 = keys.query_key("a", "b.c", {})
        assert k1 != k2

    def test_integer_and_string_values_differ(self) -> None:
        keys = KeyBuilder()
        assert keys.query_key("s", "m", {"page": 1}) != keys.query_key("s", "m", {"page": "1"})

    def test_integer_and_string_mapping_keys_differ(self) -> None:
        keys = KeyBuilder()
        assert keys.query_key("s", "m", {"f": {1: "a"}}) != keys.query_key("s", "m", {"f": {"1": "a"}})

    def test_reserved_key_cannot_mimic_a_marked_mapping(self) -> None:
        keys = KeyBuilder()
        marked = {"f": {1: "a"}}
        mimic = {"f": {"__mapping__": [[1, "a"]]}}
        assert keys.query_key("s", "m", marked) != keys.query_key("s", "m", mimic)

    def test_dataclass_and_equivalent_dict_differ(self) -> None:
        keys = KeyBuilder()
        window = Window(datetime.date(2026, 1, 1), datetime.date(2026, 2, 1))
        as_dict = {"start": "2026-01-01", "end": "2026-02-01"}
        assert keys.query_key("s", "m", {"w": window}) != keys.query_key("s", "m", {"w": as_dict})

    def test_readable_prefix_and_full_digest(self) -> None:
        key = KeyBuilder("aero:").query_key("supplier", "search", {"query": "bolt"})
        prefix, digest = key.rsplit(":", 1)
        assert prefix == "aero:query:supplier.search"
        assert len(digest) == 64

    def test_none_args_equal_empty_args(self) -> None:
        keys = KeyBuilder()
        assert keys.query_key("s", "m") == keys.query_key("s", "m", {})

    @given(st.dictionaries(st.text(max_size=8), st.integers() | st.text(max_size=8), max_size=6))
    def test_insertion_order_never_changes_key(self, args: dict[str, object]) -> None:
        keys = KeyBuilder()
        reversed_args = dict(reversed(list(args.items())))
        assert keys.query_key("svc", "op", args) == keys.query_key("svc", "op", reversed_args)


# ---------------------------------------------------------------------------
# normalize
# ---------------------------------------------------------------------------

class TestNormalize:
    def test_primitives_pass_through(self) -> None:
        assert normalize(None) is None
        assert normalize(True) is True
        assert normalize(3) == 3
        assert normalize(1.5) == 1.5
        assert normalize("x") == "x"

    def test_enum_uses_value(self) -> None:
        assert normalize(Status.ACTIVE) == "active"

    def test_temporal_and_decimal_values(self) -> None:
        ident = uuid.UUID("12345678-1234-5678-1234-567812345678")
        assert normalize(datetime.date(2026, 1, 2)) == "2026-01-02"
        assert normalize(decimal.Decimal("1.10")) == "1.10"
        assert normalize(ident) == str(ident)

    def test_tuple_and_list_are_equivalent(self) -> None:
        assert normalize((1, 2)) == normalize([1, 2])

    def test_sets_are_sorted(self) -> None:
        assert normalize({"b", "a", "c"}) == ["a", "b", "c"]

    def test_dataclass_and_model_carry_their_type(self) -> None:
        window = Window(datetime.date(2026, 1, 1), datetime.date(2026, 2, 1))
        assert normalize(window) == {
            "__object__": [f"{__name__}.Window", {"end": "2026-02-01", "start": "2026-01-01"}]
        }
        assert normalize(_Model(b=1, a=2)) == {"__object__": [f"{__name__}._Model", {"a": 2, "b": 1}]}

    def test_enum_keys_use_their_value(self) -> None:
        assert normalize({Status.ACTIVE: 1}) == {"active": 1}

    def test_non_string_keys_are_marked(self) -> None:
        assert normalize({2: "b", 1: "a"}) == {"__mapping__": [[1, "a"], [2, "b"]]}

    def test_unsupported_type_raises(self) -> None:
        with pytest.raises(KeyNormalizationError) as exc_info:
            normalize(object())
        assert exc_info.value.value_type == "object"

    def test_nan_raises(self) -> None:
        with pytest.raises(KeyNormalizationError):
            normalize(float("nan"))

    def test_query_key_propagates_normalization_error(self) -> None:
        with pytest.raises(KeyNormalizationError):
            KeyBuilder().query_key("s", "m", {"callback": lambda: None})


# ---------------------------------------------------------------------------
# bind_arguments
# ---------------------------------------------------------------------------

class TestBindArguments:
    def test_positional_and_keyword_bind_identically(self) -> None:
        async def find_all(options=None, page=1):  # noqa: ANN001, ANN202
            ...

        assert bind_arguments(find_all, ({"x": 1},), {}) == bind_arguments(find_all, (), {"options": {"x": 1}})

    def test_defaults_applied(self) -> None:
        async def search(query, options=None):  # noqa: ANN001, ANN202
            ...

        assert bind_arguments(search, ("bolt",), {}) == {"query": "bolt", "options": None}

    def test_var_keyword_flattened(self) -> None:
        async def find(**criteria):  # noqa: ANN003, ANN202
            ...

        assert bind_arguments(find, (), {"status": "active"}) == {"status": "active"}

    def test_bad_call_raises_type_error(self) -> None:
        async def find_by_id(supplier_id):  # noqa: ANN001, ANN202
            ...

        with pytest.raises(TypeError):
            bind_arguments(find_by_id, (), {})
