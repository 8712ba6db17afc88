"""
Tests for GET modifier encoding.

The controller reads modifiers as query parameters; their order and the
trailing ``&`` of each segment are part of the wire format.
"""

import pytest

from arubaos_api.modifiers import (
    DataType,
    FilterOperator,
    GetModifiers,
    Paginate,
    Sort,
    SortOrder,
    encode_get_modifiers,
    filter_condition,
)

ACL_FILTER = [
    {"acl_sess.accname": {"$nin": ["-acl"]}},
    {"OBJECT": {"$eq": ["acl_sess.accname"]}},
]


# =============================================================================
# SINGLE SEGMENT TESTS
# =============================================================================


class TestSingleSegments:
    """Tests for each modifier rendered on its own."""

    def test_empty_modifiers_encode_to_empty_string(self):
        """Test that no modifiers produce no fragment."""
        assert GetModifiers().to_query() == ""

    def test_none_encodes_to_empty_string(self):
        """Test that absent modifiers produce no fragment."""
        assert encode_get_modifiers(None) == ""

    def test_filter_is_compact_json(self):
        """Test filter is serialized verbatim without whitespace."""
        query = GetModifiers(filter=ACL_FILTER).to_query()

        assert query == (
            'filter=[{"acl_sess.accname":{"$nin":["-acl"]}},'
            '{"OBJECT":{"$eq":["acl_sess.accname"]}}]&'
        )

    def test_filter_operands_are_percent_encoded(self):
        """Test query delimiters inside operands cannot break the parameter."""
        modifiers = GetModifiers(filter=[{"netdst.dstname": {"$eq": ["a#b&c+d=e f"]}}])

        assert modifiers.to_query() == (
            'filter=[{"netdst.dstname":{"$eq":["a%23b%26c%2Bd%3De%20f"]}}]&'
        )

    def test_empty_filter_is_sent(self):
        """Test an empty filter list is still rendered."""
        assert GetModifiers(filter=[]).to_query() == "filter=[]&"

    def test_empty_data_type_is_sent(self):
        """Test an empty data type list renders an empty type parameter."""
        assert GetModifiers(data_type=[]).to_query() == "type=&"

    def test_empty_lists_keep_order(self):
        """Test empty filter and type lists keep their positions."""
        modifiers = GetModifiers(filter=[], data_type=[], count=2)

        assert modifiers.to_query() == "filter=[]&type=&count=2&"

    def test_sort_ascending(self):
        """Test ascending sort uses a plus prefix."""
        assert GetModifiers(sort=Sort(key="testKey")).to_query() == "sort=+testKey&"

    def test_sort_descending(self):
        """Test descending sort uses a minus prefix."""
        modifiers = GetModifiers(sort=Sort(key="testKey", oper=SortOrder.DESCENDING))

        assert modifiers.to_query() == "sort=-testKey&"

    def test_data_type_keeps_caller_order(self):
        """Test data types are comma-joined in the order given."""
        modifiers = GetModifiers(data_type=[DataType.PENDING, DataType.COMMITTED])

        assert modifiers.to_query() == "type=pending,committed&"

    def test_data_type_accepts_strings(self):
        """Test plain strings are coerced to DataType."""
        modifiers = GetModifiers(data_type=["meta-n-data"])

        assert modifiers.data_type == [DataType.META_N_DATA]
        assert modifiers.to_query() == "type=meta-n-data&"

    def test_unknown_data_type_raises_error(self):
        """Test values outside the enumeration are rejected."""
        with pytest.raises(ValueError):
            GetModifiers(data_type=["everything"])

    def test_count(self):
        """Test a count is rendered as-is."""
        assert GetModifiers(count=5).to_query() == "count=5&"

    def test_zero_count_is_treated_as_absent(self):
        """Test that count=0 is not sent."""
        assert GetModifiers(count=0).to_query() == ""

    def test_paginate_with_total(self):
        """Test pagination with a running total."""
        modifiers = GetModifiers(paginate=Paginate(limit=5, offset=5, total=5))

        assert modifiers.to_query() == "offset=5&limit=5&total=5&"

    def test_paginate_without_total(self):
        """Test pagination without a total omits the segment."""
        modifiers = GetModifiers(paginate=Paginate(limit=5, offset=5))

        assert modifiers.to_query() == "offset=5&limit=5&"

    def test_paginate_zero_total_is_treated_as_absent(self):
        """Test that total=0 is not sent."""
        modifiers = GetModifiers(paginate=Paginate(limit=5, offset=1, total=0))

        assert modifiers.to_query() == "offset=1&limit=5&"


# =============================================================================
# ORDERING TESTS
# =============================================================================


class TestSegmentOrder:
    """Tests for the fixed segment order."""

    def test_all_modifiers_in_fixed_order(self):
        """Test filter, sort, type, count and pagination appear in that order."""
        modifiers = GetModifiers(
            paginate=Paginate(limit=5, offset=5, total=5),
            count=5,
            data_type=[DataType.COMMITTED, DataType.PENDING],
            sort=Sort(key="testKey", oper="+"),
            filter=ACL_FILTER,
        )

        assert modifiers.to_query() == (
            'filter=[{"acl_sess.accname":{"$nin":["-acl"]}},'
            '{"OBJECT":{"$eq":["acl_sess.accname"]}}]&'
            "sort=+testKey&"
            "type=committed,pending&"
            "count=5&"
            "offset=5&limit=5&total=5&"
        )

    def test_data_type_comes_before_count(self):
        """Test type is emitted before count even though count is simpler."""
        modifiers = GetModifiers(count=3, data_type=[DataType.USER])

        assert modifiers.to_query() == "type=user&count=3&"


# =============================================================================
# PLAIN MAPPING TESTS
# =============================================================================


class TestFromDict:
    """Tests for building modifiers from plain mappings."""

    def test_from_dict_matches_dataclass_form(self):
        """Test the mapping form encodes like the dataclass form."""
        data = {
            "filter": ACL_FILTER,
            "sort": {"oper": "-", "key": "accname"},
            "count": 2,
            "dataType": ["committed"],
            "paginate": {"limit": 10, "offset": 1},
        }

        assert GetModifiers.from_dict(data).to_query() == GetModifiers(
            filter=ACL_FILTER,
            sort=Sort(key="accname", oper=SortOrder.DESCENDING),
            count=2,
            data_type=[DataType.COMMITTED],
            paginate=Paginate(limit=10, offset=1),
        ).to_query()

    def test_from_dict_accepts_snake_case_data_type(self):
        """Test data_type is accepted as well as dataType."""
        modifiers = GetModifiers.from_dict({"data_type": ["local"]})

        assert modifiers.to_query() == "type=local&"

    def test_from_dict_rejects_unknown_keys(self):
        """Test typos in modifier names are reported."""
        with pytest.raises(ValueError, match="Unknown GET modifiers: limit"):
            GetModifiers.from_dict({"limit": 5})

    def test_encode_accepts_mapping(self):
        """Test encode_get_modifiers converts mappings."""
        assert encode_get_modifiers({"count": 7}) == "count=7&"

    def test_empty_mapping_encodes_to_empty_string(self):
        """Test an empty mapping behaves like no modifiers."""
        assert encode_get_modifiers({}) == ""


# =============================================================================
# FILTER HELPER TESTS
# =============================================================================


class TestFilterCondition:
    """Tests for the filter_condition() helper."""

    def test_builds_single_key_entry(self):
        """Test a filter entry maps one field to one operator."""
        entry = filter_condition("netdst.dstname", FilterOperator.EQ, ["wan"])

        assert entry == {"netdst.dstname": {"$eq": ["wan"]}}

    def test_accepts_operator_string(self):
        """Test operators may be given as their wire strings."""
        assert filter_condition("a.b", "$gte", 3) == {"a.b": {"$gte": 3}}

    def test_rejects_unknown_operator(self):
        """Test operators outside the supported set are rejected."""
        with pytest.raises(ValueError):
            filter_condition("a.b", "$regex", "x")

    def test_enum_operators_serialize_as_values(self):
        """Test enum keys inside a filter are written as plain strings."""
        modifiers = GetModifiers(filter=[{"a.b": {FilterOperator.NIN: [1, 2]}}])

        assert modifiers.to_query() == 'filter=[{"a.b":{"$nin":[1,2]}}]&'
