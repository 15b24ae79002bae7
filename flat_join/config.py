"""Joiner configuration."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any


if TYPE_CHECKING:
    from collections.abc import Callable


class OrphanPolicy(StrEnum):
    """What to do with a record that has no current parent to attach to."""

    DROP = "drop"
    FAIL = "fail"


@dataclass(frozen=True, slots=True)
class JoinConfig:
    """How records relate to each other, independent of the fields produced.

    Parameters
    ----------
    identifier_field
        Attribute holding each record's key, present on every record kind.
    discriminator_field
        Attribute holding each record's kind, present on every record kind.
    matches
        Pure predicate ``matches(child_key, parent_key)`` deciding whether a
        record belongs to the current parent.
    on_orphan
        ``"drop"`` (default) silently skips orphans, ``"fail"`` aborts the call.
    strict_grouping
        Fail when an orphan would have matched an earlier, superseded parent.
    """

    identifier_field: str
    discriminator_field: str
    matches: Callable[[Any, Any], bool]
    on_orphan: OrphanPolicy = OrphanPolicy.DROP
    strict_grouping: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.identifier_field, str) or not self.identifier_field:
            msg = "identifier_field must be a non-empty string"
            raise ValueError(msg)
        if not isinstance(self.discriminator_field, str) or not self.discriminator_field:
            msg = "discriminator_field must be a non-empty string"
            raise ValueError(msg)
        if self.identifier_field == self.discriminator_field:
            msg = "identifier_field and discriminator_field must differ"
            raise ValueError(msg)
        if not callable(self.matches):
            msg = "matches must be callable"
            raise TypeError(msg)
        try:
            policy = OrphanPolicy(self.on_orphan)
        except ValueError:
            msg = f"on_orphan must be one of {[p.value for p in OrphanPolicy]}, got {self.on_orphan!r}"
            raise ValueError(msg) from None
        # frozen dataclass: normalise the plain string form to the enum
        object.__setattr__(self, "on_orphan", policy)

    @property
    def fails_on_orphan(self) -> bool:
        """Return True when orphans abort the join."""
        return self.on_orphan is OrphanPolicy.FAIL
