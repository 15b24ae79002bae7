"""Errors raised while joining flat record sequences."""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, Any


if TYPE_CHECKING:
    from collections.abc import Mapping


class JoinErrorKind(StrEnum):
    """Tag identifying which structural problem a ``JoinError`` reports."""

    ORPHANED_RECORD = "orphaned_record"
    UNMAPPED_CHILD_KIND = "unmapped_child_kind"
    SUPERSEDED_PARENT = "superseded_parent"
    MISSING_FIELD = "missing_field"
    UNKNOWN_KIND = "unknown_kind"


class JoinError(Exception):
    """Base class for failures of a join call.

    Every error is a tagged variant: ``kind`` names the problem and
    ``as_dict`` returns the payload, so callers that prefer result values
    over exceptions can pass the error along as plain data.
    """

    kind: JoinErrorKind

    def __init__(self, message: str, *, record: Mapping[str, Any] | None = None, index: int | None = None) -> None:
        super().__init__(message)
        self.record = record
        self.index = index

    def _extra(self) -> dict[str, Any]:
        return {}

    def as_dict(self) -> dict[str, Any]:
        """Return the tagged form of this error."""
        payload: dict[str, Any] = {"kind": str(self.kind), "message": str(self)}
        if self.index is not None:
            payload["index"] = self.index
        if self.record is not None:
            payload["record"] = dict(self.record)
        payload.update(self._extra())
        return payload


class OrphanedRecordError(JoinError):
    """A non-parent record matched no current parent while orphans must fail."""

    kind = JoinErrorKind.ORPHANED_RECORD

    def __init__(self, record: Mapping[str, Any], index: int) -> None:
        msg = f"orphaned record detected at index {index} and the orphan policy is 'fail'"
        super().__init__(msg, record=record, index=index)


class UnmappedChildKindError(JoinError):
    """A record matched the current parent but its kind has no output field."""

    kind = JoinErrorKind.UNMAPPED_CHILD_KIND

    def __init__(self, record: Mapping[str, Any], index: int, child_kind: Any) -> None:
        msg = f"record at index {index} has kind {child_kind!r} which is missing from the child field map"
        super().__init__(msg, record=record, index=index)
        self.child_kind = child_kind

    def _extra(self) -> dict[str, Any]:
        return {"child_kind": self.child_kind}


class SupersededParentError(JoinError):
    """An orphan would have matched a parent that an earlier record superseded.

    Only raised when the joiner runs with ``strict_grouping`` enabled; it
    signals input that breaks the grouping precondition.
    """

    kind = JoinErrorKind.SUPERSEDED_PARENT

    def __init__(self, record: Mapping[str, Any], index: int, parent_index: int) -> None:
        msg = (
            f"record at index {index} belongs to the parent at index {parent_index}, "
            "which was already superseded; input is not grouped by parent"
        )
        super().__init__(msg, record=record, index=index)
        self.parent_index = parent_index

    def _extra(self) -> dict[str, Any]:
        return {"parent_index": self.parent_index}


class MissingFieldError(JoinError):
    """A record lacks the identifier or discriminator attribute."""

    kind = JoinErrorKind.MISSING_FIELD

    def __init__(self, record: Mapping[str, Any], index: int, field: str) -> None:
        msg = f"record at index {index} has no {field!r} field"
        super().__init__(msg, record=record, index=index)
        self.field = field

    def _extra(self) -> dict[str, Any]:
        return {"field": self.field}


class UnknownKindError(JoinError):
    """A join plan names a kind outside the declared set of record kinds."""

    kind = JoinErrorKind.UNKNOWN_KIND

    def __init__(self, unknown: Any, known: frozenset[Any]) -> None:
        msg = f"unknown record kind {unknown!r}; expected one of {sorted(map(repr, known))}"
        super().__init__(msg)
        self.unknown = unknown
        self.known = known

    def _extra(self) -> dict[str, Any]:
        return {"unknown": self.unknown}
