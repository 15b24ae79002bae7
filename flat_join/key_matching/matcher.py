"""Separator-aware matching of hierarchical record keys."""

from __future__ import annotations

from typing import Any


class KeyPrefixMatcher:
    """Match child keys of the form ``<parent key><sep><rest>``.

    Unlike a bare prefix test this does not let ``t1`` claim ``t10-v1``.
    """

    def __init__(self, sep: str = "-") -> None:
        super().__init__()
        if not sep:
            msg = "sep must not be empty"
            raise ValueError(msg)
        self.sep = sep

    def __call__(self, child_id: Any, parent_id: Any) -> bool:
        """Return True when ``child_id`` sits directly or deeper under ``parent_id``."""
        if not isinstance(child_id, str) or not isinstance(parent_id, str):
            return False
        prefix = f"{parent_id}{self.sep}"
        return child_id.startswith(prefix) and len(child_id) > len(prefix)

    def child_key(self, parent_id: str, *parts: str) -> str:
        """Build a child key under ``parent_id`` from one or more parts."""
        if not parent_id:
            msg = "parent_id must not be empty"
            raise ValueError(msg)
        if not parts:
            msg = "at least one key part is required"
            raise ValueError(msg)
        for part in parts:
            if not part:
                msg = "key parts must not be empty"
                raise ValueError(msg)
            if self.sep in part:
                msg = "key parts must not contain separator"
                raise ValueError(msg)
        return self.sep.join((parent_id, *parts))

    def parent_key(self, child_id: str) -> str:
        """Return the key of the closest parent of ``child_id``."""
        parent, found, rest = child_id.rpartition(self.sep)
        if not found or not parent or not rest:
            msg = f"key has no parent segment: {child_id}"
            raise ValueError(msg)
        return parent

    def __repr__(self) -> str:
        return f"KeyPrefixMatcher(sep={self.sep!r})"
