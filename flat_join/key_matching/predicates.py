"""Plain-function identifier predicates."""

from __future__ import annotations

from typing import Any


def equals(child_id: Any, parent_id: Any) -> bool:
    """Return True when the child carries exactly the parent's identifier."""
    return bool(child_id == parent_id)


def starts_with(child_id: Any, parent_id: Any) -> bool:
    """Return True when the child identifier begins with the parent identifier.

    Only string identifiers can match; any other type never does.
    """
    if not isinstance(child_id, str) or not isinstance(parent_id, str):
        return False
    return child_id.startswith(parent_id)
