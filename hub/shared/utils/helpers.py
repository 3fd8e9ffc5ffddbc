# 📄 File: hub/shared/utils/helpers.py

# 🧭 Purpose (Layman Explanation):
# Small shared tools: reading the current time the same way everywhere,
# creating random session identifiers, and removing repeated items from lists.

# 🧪 Purpose (Technical Summary):
# General purpose utility functions for UTC timestamps, token identifier
# generation, and order-preserving list deduplication used by the entity
# reconciliation and permission snapshot code paths.

# 🔗 Dependencies:
# - uuid: Random identifier generation
# - datetime: Timestamps
# - typing: Type hints

# 🔄 Connected Modules / Calls From:
# Used by: ORM timestamp columns, entity and auth domain models, auth service

from datetime import datetime, timezone
from typing import Any, Callable, Iterable, List, Optional, TypeVar
from uuid import uuid4

T = TypeVar("T")


def utc_now() -> datetime:
    """
    Current UTC time as a naive datetime.

    All persisted timestamps are naive UTC so that comparisons behave the
    same on SQLite and PostgreSQL ``timestamp without time zone`` columns.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def generate_uuid() -> str:
    """Generate a random UUID4 string."""
    return str(uuid4())


def deduplicate_list(
    data: Iterable[T],
    key: Optional[Callable[[T], Any]] = None,
) -> List[T]:
    """
    Remove duplicates from an iterable, keeping the first occurrence.

    Args:
        data: Items to deduplicate
        key: Function to extract comparison key

    Returns:
        Deduplicated list in first-seen order
    """
    seen_keys = set()
    result = []
    for item in data:
        item_key = item if key is None else key(item)
        if item_key not in seen_keys:
            seen_keys.add(item_key)
            result.append(item)
    return result
