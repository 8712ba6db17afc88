"""
GET modifiers: filtering, sorting, counting, data types and pagination.

The controller accepts these as query parameters on configuration reads.
``GetModifiers.to_query()`` renders them as a query-string fragment in a
fixed order (filter, sort, type, count, pagination), each segment ending in
``&`` so the session parameters can be appended directly:

    >>> GetModifiers(count=5).to_query()
    'count=5&'
    >>> GetModifiers(paginate=Paginate(limit=5, offset=5)).to_query()
    'offset=5&limit=5&'

Filters are kept as plain JSON-like mappings because the controller's object
schema is open-ended:

    filter=[
        {"acl_sess.accname": {"$nin": ["-acl"]}},
        {"OBJECT": {"$eq": ["acl_sess.accname"]}},
    ]
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any
from urllib.parse import quote

# A single filter entry: {field_path: {operator: operand}}
FilterEntry = dict[str, dict[str, Any]]

# JSON punctuation left readable in the filter parameter; everything else,
# including & # + = inside operands, is percent-encoded.
_FILTER_SAFE_CHARS = "[]{}:,\"$."


# =============================================================================
# ENUMERATIONS
# =============================================================================


class FilterOperator(str, Enum):
    """Comparison applied to a filtered field."""

    EQ = "$eq"
    NEQ = "$neq"
    GT = "$gt"
    GTE = "$gte"
    LT = "$lt"
    LTE = "$lte"
    IN = "$in"
    NIN = "$nin"


class SortOrder(str, Enum):
    """Sort direction, rendered as a prefix of the sort key."""

    ASCENDING = "+"
    DESCENDING = "-"


class DataType(str, Enum):
    """Kind of configuration data a read should return."""

    NON_DEFAULT = "non-default"
    DEFAULT = "default"
    LOCAL = "local"
    USER = "user"
    SYSTEM = "system"
    PENDING = "pending"
    COMMITTED = "committed"
    INHERITED = "inherited"
    META_N_DATA = "meta-n-data"
    META_ONLY = "meta-only"


# =============================================================================
# MODIFIER PARTS
# =============================================================================


@dataclass(frozen=True)
class Sort:
    """Sort the result on a single field."""

    key: str
    oper: SortOrder = SortOrder.ASCENDING

    def __post_init__(self) -> None:
        object.__setattr__(self, "oper", SortOrder(self.oper))


@dataclass(frozen=True)
class Paginate:
    """
    Fetch results one page at a time.

    Attributes:
        limit: Page size.
        offset: Index of the first item of the page.
        total: Running total returned by a previous page, if known. A total
            of 0 is not sent.
    """

    limit: int
    offset: int
    total: int | None = None


def filter_condition(field_path: str, operator: FilterOperator | str, value: Any) -> FilterEntry:
    """
    Build one filter entry.

    Example:
        >>> filter_condition("netdst.dstname", FilterOperator.EQ, ["wan"])
        {'netdst.dstname': {'$eq': ['wan']}}
    """
    return {field_path: {FilterOperator(operator).value: value}}


def _plain(value: Any) -> Any:
    """Replace enum members by their values so the filter serializes cleanly."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Mapping):
        return {_plain(k): _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


# =============================================================================
# GET MODIFIERS
# =============================================================================


@dataclass
class GetModifiers:
    """
    Query refinements for a configuration read.

    All fields are optional; an instance with no fields set encodes to the
    empty string.

    Attributes:
        filter: Ordered filter entries, serialized as compact JSON with
            operands percent-encoded.
        sort: Single-field sort.
        count: Ask for the number of instances instead of their details.
            0 is treated as unset.
        data_type: Data types to return, joined in the order given.
        paginate: Page window.
    """

    filter: list[FilterEntry] | None = None
    sort: Sort | None = None
    count: int | None = None
    data_type: Sequence[DataType | str] | None = None
    paginate: Paginate | None = None

    def __post_init__(self) -> None:
        if self.data_type is not None:
            self.data_type = [DataType(item) for item in self.data_type]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> GetModifiers:
        """
        Create from a plain mapping.

        Accepts ``filter``, ``sort`` (``{"oper": "+", "key": ...}``),
        ``count``, ``dataType`` or ``data_type``, and ``paginate``
        (``{"limit": ..., "offset": ..., "total": ...}``).

        Raises:
            ValueError: On unknown keys or enumeration values.
        """
        known = {"filter", "sort", "count", "dataType", "data_type", "paginate"}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown GET modifiers: {', '.join(sorted(unknown))}")

        sort = data.get("sort")
        if isinstance(sort, Mapping):
            sort = Sort(key=sort["key"], oper=sort.get("oper", SortOrder.ASCENDING))

        paginate = data.get("paginate")
        if isinstance(paginate, Mapping):
            paginate = Paginate(
                limit=paginate["limit"],
                offset=paginate["offset"],
                total=paginate.get("total"),
            )

        return cls(
            filter=data.get("filter"),
            sort=sort,
            count=data.get("count"),
            data_type=data.get("data_type", data.get("dataType")),
            paginate=paginate,
        )

    def to_query(self) -> str:
        """
        Render the modifiers as a query-string fragment.

        Segments are emitted in the order filter, sort, type, count,
        pagination, and only when set. Empty filter and type lists are still
        sent. The filter JSON is percent-encoded apart from its punctuation.
        Every segment ends with ``&``.

        Returns:
            str: The fragment, or "" when nothing is set.
        """
        params = ""

        if self.filter is not None:
            filter_json = json.dumps(_plain(self.filter), separators=(",", ":"))
            params += f"filter={quote(filter_json, safe=_FILTER_SAFE_CHARS)}&"

        if self.sort:
            params += f"sort={self.sort.oper.value}{self.sort.key}&"

        if self.data_type is not None:
            params += "type=" + ",".join(item.value for item in self.data_type) + "&"

        # Zero means "unset" for count and total
        if self.count:
            params += f"count={self.count}&"

        if self.paginate:
            params += f"offset={self.paginate.offset}&limit={self.paginate.limit}&"
            if self.paginate.total:
                params += f"total={self.paginate.total}&"

        return params


def encode_get_modifiers(modifiers: GetModifiers | Mapping[str, Any] | None) -> str:
    """
    Encode GET modifiers, accepting either a ``GetModifiers`` or a mapping.

    Returns "" when ``modifiers`` is None.
    """
    if modifiers is None:
        return ""
    if not isinstance(modifiers, GetModifiers):
        modifiers = GetModifiers.from_dict(modifiers)
    return modifiers.to_query()
