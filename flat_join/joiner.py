"""Single-pass join of flat, parent-grouped record sequences.

The joiner only ever compares a record against the nearest preceding
parent. That keeps the pass linear with constant extra state, and it is
correct exactly when the input is grouped: every parent is immediately
followed by its own children before the next parent begins. Arranging the
input that way is the caller's job; ``strict_grouping`` can detect some
violations at extra cost on the orphan path.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .config import JoinConfig
from .errors import MissingFieldError, OrphanedRecordError, SupersededParentError, UnmappedChildKindError
from .schema import JoinPlan


if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from .schema import BoundPlan, JoinedRecord


logger = logging.getLogger(__name__)

_MISSING = object()


def _field(record: Mapping[str, Any], field: str, index: int) -> Any:
    value = record.get(field, _MISSING)
    if value is _MISSING:
        raise MissingFieldError(record, index, field)
    return value


class Joiner:
    """Reusable join function bound to one ``JoinConfig``."""

    def __init__(self, config: JoinConfig) -> None:
        super().__init__()
        if not isinstance(config, JoinConfig):
            msg = f"config must be a JoinConfig, got {type(config).__name__}"
            raise TypeError(msg)
        self.config = config

    def plan(
        self,
        primary_kind: Any,
        child_fields: Mapping[Any, str],
        known_kinds: Iterable[Any] | None = None,
    ) -> BoundPlan:
        """Validate a primary kind and child field map once for repeated joins."""
        return JoinPlan(
            primary_kind,
            child_fields,
            identifier_field=self.config.identifier_field,
            discriminator_field=self.config.discriminator_field,
            known_kinds=known_kinds,
        ).bind(self)

    def __call__(
        self,
        records: Sequence[Mapping[str, Any]],
        primary_kind: Any,
        child_fields: Mapping[Any, str],
    ) -> list[JoinedRecord]:
        """Nest every child record under the parent record that precedes it."""
        return self.plan(primary_kind, child_fields)(records)

    def run(self, records: Sequence[Mapping[str, Any]], plan: JoinPlan) -> list[JoinedRecord]:
        """Execute a validated plan over ``records``."""
        id_field = self.config.identifier_field
        kind_field = self.config.discriminator_field
        matches = self.config.matches

        result: list[JoinedRecord] = []
        # (input index, identifier) of each parent, only kept for strict grouping
        parents: list[tuple[int, Any]] = []
        current: JoinedRecord | None = None
        current_id: Any = None
        attached = 0
        dropped = 0

        for index, record in enumerate(records):
            kind = _field(record, kind_field, index)

            if kind == plan.primary_kind:
                current = plan.new_record(record)
                current_id = _field(record, id_field, index)
                result.append(current)
                if self.config.strict_grouping:
                    parents.append((index, current_id))
                continue

            record_id = _field(record, id_field, index)
            if current is not None and matches(record_id, current_id):
                field_name = plan.field_for(kind)
                if field_name is None:
                    raise UnmappedChildKindError(record, index, kind)
                current[field_name].append(record)
                attached += 1
                continue

            if self.config.strict_grouping:
                # the last entry is the current parent, already rejected
                for parent_index, parent_id in parents[:-1]:
                    if matches(record_id, parent_id):
                        raise SupersededParentError(record, index, parent_index)
            if self.config.fails_on_orphan:
                raise OrphanedRecordError(record, index)
            logger.debug("dropping orphaned %r record at index %d", kind, index)
            dropped += 1

        logger.debug(
            "joined %d %r parents with %d children, %d orphans dropped",
            len(result),
            plan.primary_kind,
            attached,
            dropped,
        )
        return result


def create_joiner(config: JoinConfig | None = None, **options: Any) -> Joiner:
    """Build a reusable joiner.

    Pass either a ready ``JoinConfig`` or its fields as keyword arguments::

        joiner = create_joiner(identifier_field="id", discriminator_field="type", matches=starts_with)
    """
    if config is None:
        config = JoinConfig(**options)
    elif options:
        msg = "pass either a JoinConfig or keyword options, not both"
        raise TypeError(msg)
    return Joiner(config)


def join(
    records: Sequence[Mapping[str, Any]],
    primary_kind: Any,
    child_fields: Mapping[Any, str],
    config: JoinConfig | None = None,
    **options: Any,
) -> list[JoinedRecord]:
    """One-off form of ``create_joiner(config)(records, primary_kind, child_fields)``."""
    return create_joiner(config, **options)(records, primary_kind, child_fields)
