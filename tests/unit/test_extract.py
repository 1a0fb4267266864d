"""Tests for record declarations and body extraction."""

from dataclasses import dataclass
from typing import List

import pytest

from lbaasclient.decode import (
    BOOLEAN,
    INTEGER,
    NUMBER,
    REFERENCE_LIST,
    TEXT_LIST,
    Nested,
    Record,
    decode_record,
    extract_many,
    extract_one,
    wire_field,
)
from lbaasclient.exceptions import DecodeError, MalformedError, NotFoundError
from lbaasclient.networking.lbaas_v2.pools import Member, Pool, SessionPersistence


@dataclass
class Sample(Record):
    name: str = wire_field("name")
    enabled: bool = wire_field("enabled", BOOLEAN)
    count: int = wire_field("count", INTEGER)
    ratio: float = wire_field("ratio", NUMBER)
    tags: List[str] = wire_field("tags", TEXT_LIST)
    refs: list = wire_field("refs", REFERENCE_LIST)
    undeclared: str = "kept"


class TestExtractMany:
    def test_pools_collection(self) -> None:
        body = {
            "pools": [{"id": "p1", "name": "N", "admin_state_up": True}],
            "pools_links": [],
        }

        pools = extract_many(body, "pools", Pool)

        assert len(pools) == 1
        assert pools[0].id == "p1"
        assert pools[0].name == "N"
        assert pools[0].admin_state_up is True

    def test_missing_plural_key_is_empty(self) -> None:
        assert extract_many({"pools_links": []}, "pools", Pool) == []

    def test_empty_bytes_body_is_empty(self) -> None:
        assert extract_many(b"", "pools", Pool) == []

    def test_non_list_collection_is_malformed(self) -> None:
        with pytest.raises(MalformedError) as excinfo:
            extract_many({"pools": {"id": "p1"}}, "pools", Pool)

        assert excinfo.value.path == "pools"

    def test_opaque_body_is_malformed(self) -> None:
        with pytest.raises(MalformedError):
            extract_many(b"<html>oops</html>", "pools", Pool)

    def test_error_path_points_at_item(self) -> None:
        body = {"members": [{"weight": 1}, {"weight": 2.5}]}

        with pytest.raises(MalformedError) as excinfo:
            extract_many(body, "members", Member)

        assert excinfo.value.path == "members[1].weight"
        assert excinfo.value.value == 2.5


class TestExtractOne:
    def test_singular_key(self, load_body) -> None:
        pool = extract_one(load_body("pool_get"), "pool", Pool)

        assert pool.id == "72741b06-df4d-4715-b142-276b6bce75ab"
        assert pool.lb_method == "ROUND_ROBIN"
        assert pool.persistence == SessionPersistence("APP_COOKIE", "my_cookie")

    def test_missing_singular_key_is_not_found(self) -> None:
        with pytest.raises(NotFoundError) as excinfo:
            extract_one({"pools": []}, "pool", Pool)

        assert excinfo.value.key == "pool"
        assert not isinstance(excinfo.value, MalformedError)
        assert isinstance(excinfo.value, DecodeError)

    def test_null_singular_value_is_not_found(self) -> None:
        with pytest.raises(NotFoundError):
            extract_one({"pool": None}, "pool", Pool)

    def test_optional_lookup_returns_none(self) -> None:
        assert extract_one({}, "pool", Pool, required=False) is None

    def test_non_mapping_resource_is_malformed(self) -> None:
        with pytest.raises(MalformedError):
            extract_one({"pool": ["p1"]}, "pool", Pool)


class TestReferenceStubs:
    def test_member_stubs_preserved_verbatim(self) -> None:
        body = {"pool": {"id": "p1", "members": [{"id": "m1"}, {"id": "m2"}]}}

        pool = extract_one(body, "pool", Pool)

        assert pool.members == [{"id": "m1"}, {"id": "m2"}]

    def test_stub_siblings_survive(self) -> None:
        body = {"refs": [{"id": "r1", "weight": 3}]}

        assert decode_record(body, Sample).refs == [{"id": "r1", "weight": 3}]

    def test_bare_ids_become_stubs(self) -> None:
        assert decode_record({"refs": ["r1"]}, Sample).refs == [{"id": "r1"}]

    def test_stubs_are_copies(self) -> None:
        stub = {"id": "r1", "extra": {"nested": True}}
        body = {"refs": [stub]}

        record = decode_record(body, Sample)
        record.refs[0]["extra"]["nested"] = False

        assert stub["extra"]["nested"] is True

    def test_numeric_stub_entry_is_malformed(self) -> None:
        with pytest.raises(MalformedError) as excinfo:
            decode_record({"refs": [{"id": "r1"}, 7]}, Sample)

        assert excinfo.value.path == "refs[1]"


class TestFieldKinds:
    def test_absent_fields_take_zero_values(self) -> None:
        record = decode_record({}, Sample)

        assert record == Sample()
        assert (record.name, record.enabled, record.count, record.ratio) == (
            "",
            False,
            0,
            0.0,
        )
        assert record.tags == [] and record.refs == []

    def test_null_fields_take_zero_values(self) -> None:
        record = decode_record({"name": None, "count": None, "refs": None}, Sample)

        assert record.name == ""
        assert record.count == 0
        assert record.refs == []

    def test_unknown_wire_keys_are_ignored(self) -> None:
        record = decode_record({"name": "x", "surprise": 1}, Sample)

        assert record.name == "x"
        assert record.undeclared == "kept"

    def test_fractional_integer_is_rejected(self) -> None:
        with pytest.raises(MalformedError, match="fractional"):
            extract_one({"member": {"weight": 2.5}}, "member", Member)

    def test_integral_float_is_accepted(self) -> None:
        assert decode_record({"count": 2.0}, Sample).count == 2

    @pytest.mark.parametrize("value", [True, "3", [3]])
    def test_non_numbers_are_rejected_for_integers(self, value) -> None:
        with pytest.raises(MalformedError):
            decode_record({"count": value}, Sample)

    def test_number_accepts_int(self) -> None:
        assert decode_record({"ratio": 1}, Sample).ratio == 1.0

    def test_text_rejects_numbers(self) -> None:
        with pytest.raises(MalformedError) as excinfo:
            decode_record({"name": 5}, Sample)

        assert "expected string" in str(excinfo.value)

    def test_boolean_rejects_strings(self) -> None:
        with pytest.raises(MalformedError):
            decode_record({"enabled": "true"}, Sample)

    def test_text_list_rejects_mixed_items(self) -> None:
        with pytest.raises(MalformedError) as excinfo:
            decode_record({"tags": ["a", 1]}, Sample)

        assert excinfo.value.path == "tags[1]"

    def test_nested_record(self) -> None:
        @dataclass
        class Holder(Record):
            persistence: SessionPersistence = wire_field(
                "session_persistence", Nested(SessionPersistence)
            )

        holder = decode_record({"session_persistence": {"type": "SOURCE_IP"}}, Holder)

        assert holder.persistence.type == "SOURCE_IP"
        assert holder.persistence.cookie_name == ""
        assert decode_record({"session_persistence": None}, Holder).persistence == (
            SessionPersistence()
        )

    def test_nested_non_mapping_is_malformed(self) -> None:
        with pytest.raises(MalformedError):
            decode_record({"session_persistence": "SOURCE_IP"}, Pool)


class TestRecord:
    def test_from_wire_and_to_dict(self) -> None:
        member = Member.from_wire({"id": "m1", "weight": 5, "address": "10.0.0.8"})

        data = member.to_dict()

        assert data["id"] == "m1"
        assert data["weight"] == 5
        assert data["address"] == "10.0.0.8"
        assert data["protocol_port"] == 0

    def test_observer_sees_each_decoded_record(self) -> None:
        events = []
        body = {"members": [{"id": "m1"}, {"id": "m2"}]}

        extract_many(
            body, "members", Member, observer=lambda n, d: events.append(d["path"])
        )

        assert events == ["members[0]", "members[1]"]

    def test_decode_is_a_copy(self) -> None:
        body = {"pool": {"id": "p1", "members": [{"id": "m1"}]}}

        pool = extract_one(body, "pool", Pool)
        pool.members.append({"id": "m2"})

        assert body["pool"]["members"] == [{"id": "m1"}]
