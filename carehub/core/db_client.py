"""In-memory record store with CRUD operations.

The store is created once per application session and injected into the
service layer. Records are plain dictionaries keyed by collection; every
record carries ``id``, ``created`` and ``updated`` fields. Callers always
receive deep copies, so mutating a returned record never changes the store.
"""

import copy
import json
import logging
import re
import uuid
from datetime import UTC, datetime
from typing import Any

from carehub.core.config import constants


logger = logging.getLogger(__name__)


COLLECTIONS = (
    "houses",
    "members",
    "work_orders",
    "appointments",
    "maintenance_tasks",
    "inventory_items",
)


class DatabaseError(Exception):
    """Raised when a store operation fails."""


class RecordNotFoundError(DatabaseError):
    """Raised when a record does not exist in its collection."""


def _validate_collection_name(collection: str) -> None:
    """Validate that a collection name is well formed and known to the store."""
    if not re.match(r"^[a-zA-Z_][a-zA-Z0-9_]*$", collection):
        msg = f"Invalid collection name: {collection}. Only alphanumeric characters and underscores are allowed."
        raise DatabaseError(msg)
    if collection not in COLLECTIONS:
        msg = f"Unknown collection: {collection}"
        raise DatabaseError(msg)


def sanitize_param(value: str | int | float | bool | None) -> str:
    """Escape a value for safe embedding in a filter expression via json.dumps."""
    return json.dumps(str(value))[1:-1]


def _now_iso() -> str:
    return datetime.now(UTC).isoformat().replace("+00:00", "Z")


def _new_record_id() -> str:
    return uuid.uuid4().hex[:15]


def _serialize(data: dict[str, Any]) -> dict[str, Any]:
    """Convert datetimes to ISO strings so stored records stay JSON-shaped."""
    converted = {}
    for key, val in data.items():
        if isinstance(val, datetime):
            converted[key] = val.isoformat().replace("+00:00", "Z")
        else:
            converted[key] = copy.deepcopy(val)
    return converted


_COMPARISON_RE = re.compile(r"""^(\w+)\s*(!=|>=|<=|=|>|<|~)\s*(['"])(.*)\3$""")


def _split_and_conditions(filter_query: str) -> list[str]:
    """Split filter query by && while preserving parenthesized groups."""
    parts = []
    current = ""
    paren_depth = 0

    for char in filter_query:
        if char == "(":
            paren_depth += 1
        elif char == ")":
            paren_depth -= 1

        current += char

        if paren_depth == 0 and current.endswith("&&"):
            parts.append(current[:-2].strip())
            current = ""

    if current.strip():
        parts.append(current.strip())

    return parts


def _field_as_text(record: dict[str, Any], field: str) -> str:
    value = record.get(field)
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _evaluate_comparison(comparison: str, record: dict[str, Any]) -> bool:
    """Evaluate a single ``field op "value"`` comparison against a record."""
    match = _COMPARISON_RE.match(comparison.strip())
    if not match:
        msg = f"Invalid filter syntax: {comparison}"
        raise DatabaseError(msg)

    field, op, _, value = match.groups()
    actual = _field_as_text(record, field)

    if op == "=":
        return actual == value
    if op == "!=":
        return actual != value
    if op == "~":
        # Case-insensitive contains
        return value.lower() in actual.lower()
    if op == ">":
        return actual > value
    if op == "<":
        return actual < value
    if op == ">=":
        return actual >= value
    return actual <= value


def matches_filter(filter_query: str, record: dict[str, Any]) -> bool:
    """Evaluate a filter expression against a record.

    Supports ``=``, ``!=``, ``~`` (case-insensitive contains) and ordered
    comparisons, ``&&`` conjunctions and parenthesized ``||`` groups, e.g.
    ``house_id = "abc" && (status = "open" || status = "in_progress")``.
    """
    if not filter_query:
        return True

    for raw_part in _split_and_conditions(filter_query):
        part = raw_part.strip()
        if part.startswith("(") and part.endswith(")"):
            or_parts = [p.strip() for p in part[1:-1].split("||")]
            if not any(_evaluate_comparison(p, record) for p in or_parts):
                return False
        elif not _evaluate_comparison(part, record):
            return False
    return True


def _apply_sort(records: list[dict[str, Any]], sort: str) -> list[dict[str, Any]]:
    """Sort records by a field; prefix with - for descending, + or nothing for ascending."""
    if not sort:
        return records

    sort = sort.strip()
    if not re.match(r"^[-+]?[A-Za-z_][A-Za-z0-9_]*$", sort):
        logger.warning("Invalid sort parameter, using default", extra={"sort": sort})
        return records

    reverse = sort.startswith("-")
    field = sort.lstrip("-+")

    return sorted(records, key=lambda r: _field_as_text(r, field).casefold(), reverse=reverse)


class RecordStore:
    """Session-scoped in-memory store of records grouped by collection."""

    def __init__(self) -> None:
        self._collections: dict[str, dict[str, dict[str, Any]]] = {name: {} for name in COLLECTIONS}

    async def create_record(self, *, collection: str, data: dict[str, Any]) -> dict[str, Any]:
        """Insert a new record and return it with its assigned id.

        A caller-supplied ``id`` in ``data`` is kept (used by the demo seed);
        otherwise a fresh id is generated.

        Raises:
            DatabaseError: If the collection is unknown, the data is not a
                dictionary, or the id is already taken
        """
        _validate_collection_name(collection)
        if not isinstance(data, dict):
            raise DatabaseError(f"Data must be a dictionary, got {type(data)}")

        records = self._collections[collection]
        record_id = str(data.get("id") or _new_record_id())
        if record_id in records:
            raise DatabaseError(f"Record already exists in {collection}: {record_id}")

        now = _now_iso()
        record = {**_serialize(data), "id": record_id, "created": now, "updated": now}
        records[record_id] = record

        logger.info("Created record", extra={"collection": collection, "record_id": record_id})
        return copy.deepcopy(record)

    async def get_record(self, *, collection: str, record_id: str) -> dict[str, Any]:
        """Fetch a single record by ID.

        Raises:
            RecordNotFoundError: If the record does not exist
        """
        _validate_collection_name(collection)
        record = self._collections[collection].get(record_id)
        if record is None:
            raise RecordNotFoundError(f"Record not found in {collection}: {record_id}")

        logger.debug("Retrieved record", extra={"collection": collection, "record_id": record_id})
        return copy.deepcopy(record)

    async def update_record(self, *, collection: str, record_id: str, data: dict[str, Any]) -> dict[str, Any]:
        """Merge ``data`` into a record and return the updated record.

        Raises:
            DatabaseError: If the payload is empty or tries to change the id
            RecordNotFoundError: If the record does not exist
        """
        if not data:
            raise DatabaseError("Empty update payload")
        if "id" in data and data["id"] != record_id:
            raise DatabaseError("Record id cannot be changed")

        _validate_collection_name(collection)
        record = self._collections[collection].get(record_id)
        if record is None:
            raise RecordNotFoundError(f"Record not found in {collection}: {record_id}")

        record.update(_serialize(data))
        record["updated"] = _now_iso()

        logger.info("Updated record", extra={"collection": collection, "record_id": record_id})
        return copy.deepcopy(record)

    async def list_records(
        self,
        *,
        collection: str,
        page: int = 1,
        per_page: int = constants.MAX_PAGE_SIZE,
        filter_query: str = "",
        sort: str = "",
    ) -> list[dict[str, Any]]:
        """List records with optional filtering, sorting, and pagination."""
        _validate_collection_name(collection)
        if page < 1 or per_page < 1:
            raise DatabaseError(f"Invalid pagination: page={page}, per_page={per_page}")

        records = [r for r in self._collections[collection].values() if matches_filter(filter_query, r)]
        records = _apply_sort(records, sort)

        offset = (page - 1) * per_page
        page_records = records[offset : offset + per_page]

        logger.debug("Listed records", extra={"collection": collection, "count": len(page_records)})
        return [copy.deepcopy(r) for r in page_records]

    async def get_first_record(self, *, collection: str, filter_query: str) -> dict[str, Any] | None:
        """Return the first record matching the filter, or None."""
        records = await self.list_records(collection=collection, filter_query=filter_query, per_page=1)
        return records[0] if records else None

    async def count_records(self, *, collection: str, filter_query: str = "") -> int:
        """Count records matching the filter."""
        _validate_collection_name(collection)
        return sum(1 for r in self._collections[collection].values() if matches_filter(filter_query, r))
