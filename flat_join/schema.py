"""Runtime description of the shape a join produces."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .errors import UnknownKindError


if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from .joiner import Joiner


JoinedRecord = dict[str, Any]
"""A parent record's attributes plus one list per declared child kind."""


class JoinPlan:
    """Validated pairing of a primary kind with its child field map.

    A plan stands in for the statically computed output type: building one
    rejects child maps that could never produce a well-formed result, and
    its ``fields`` list is the exact set of list attributes every joined
    record will carry.
    """

    def __init__(
        self,
        primary_kind: Any,
        child_fields: Mapping[Any, str],
        *,
        identifier_field: str,
        discriminator_field: str,
        known_kinds: Iterable[Any] | None = None,
    ) -> None:
        super().__init__()
        if primary_kind in child_fields:
            msg = f"primary kind {primary_kind!r} must not appear in the child field map"
            raise ValueError(msg)
        for child_kind, field_name in child_fields.items():
            if not isinstance(field_name, str) or not field_name:
                msg = f"field name for kind {child_kind!r} must be a non-empty string"
                raise ValueError(msg)
            if field_name in (identifier_field, discriminator_field):
                msg = f"field name {field_name!r} would shadow the identifier or discriminator field"
                raise ValueError(msg)

        if known_kinds is not None:
            known = frozenset(known_kinds)
            for kind in (primary_kind, *child_fields):
                if kind not in known:
                    raise UnknownKindError(kind, known)

        self.primary_kind = primary_kind
        self.child_fields: dict[Any, str] = dict(child_fields)
        # several kinds may share one field; keep first-seen order
        self.fields: tuple[str, ...] = tuple(dict.fromkeys(self.child_fields.values()))

    def new_record(self, parent: Mapping[str, Any]) -> JoinedRecord:
        """Copy a parent record and add an empty list for every declared field."""
        joined = dict(parent)
        for field_name in self.fields:
            joined[field_name] = []
        return joined

    def field_for(self, child_kind: Any) -> str | None:
        """Return the output field for a child kind, or None when undeclared."""
        return self.child_fields.get(child_kind)

    def bind(self, joiner: Joiner) -> BoundPlan:
        """Attach this plan to a joiner so it can be called on records directly."""
        return BoundPlan(self, joiner)

    def __repr__(self) -> str:
        return f"JoinPlan(primary_kind={self.primary_kind!r}, child_fields={self.child_fields!r})"


class BoundPlan:
    """A plan paired with the joiner that executes it."""

    def __init__(self, plan: JoinPlan, joiner: Joiner) -> None:
        super().__init__()
        self.plan = plan
        self._joiner = joiner

    def __call__(self, records: Sequence[Mapping[str, Any]]) -> list[JoinedRecord]:
        """Join records using the bound plan."""
        return self._joiner.run(records, self.plan)
