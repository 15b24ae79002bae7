"""Interface for ``python -m flat_join``."""

from __future__ import annotations

import json
import logging
import sys
from argparse import ArgumentParser, ArgumentTypeError
from typing import TYPE_CHECKING, Any

from ._version import version
from .config import JoinConfig, OrphanPolicy
from .errors import JoinError
from .joiner import create_joiner
from .key_matching import KeyPrefixMatcher, equals, starts_with


if TYPE_CHECKING:
    from collections.abc import Callable, Sequence


__all__ = ["main"]

logger = logging.getLogger("flat_join")

_MATCHERS = ("equals", "starts-with", "prefix")
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _child_field(value: str) -> tuple[str, str]:
    kind, found, field_name = value.partition("=")
    if not found or not kind or not field_name:
        msg = f"expected KIND=FIELD, got {value!r}"
        raise ArgumentTypeError(msg)
    return kind, field_name


def _build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="flat_join",
        description="Nest child records under their parent records in a grouped JSON array.",
    )
    _ = parser.add_argument("-v", "--version", action="version", version=version)
    _ = parser.add_argument("file", nargs="?", default="-", help="JSON array of records, '-' for stdin (default)")
    _ = parser.add_argument("--primary", required=True, help="discriminator value of parent records")
    _ = parser.add_argument(
        "--child",
        dest="children",
        action="append",
        type=_child_field,
        default=[],
        metavar="KIND=FIELD",
        help="collect records of KIND into list FIELD; repeatable",
    )
    _ = parser.add_argument("--id-field", default="id", help="identifier attribute (default: %(default)s)")
    _ = parser.add_argument("--type-field", default="type", help="discriminator attribute (default: %(default)s)")
    _ = parser.add_argument(
        "--match",
        choices=_MATCHERS,
        default="starts-with",
        help="how child identifiers relate to parent identifiers (default: %(default)s)",
    )
    _ = parser.add_argument("--sep", default="-", help="key separator for --match prefix (default: %(default)s)")
    _ = parser.add_argument(
        "--on-orphan",
        choices=[policy.value for policy in OrphanPolicy],
        default=OrphanPolicy.DROP.value,
        help="orphan policy (default: %(default)s)",
    )
    _ = parser.add_argument(
        "--strict",
        action="store_true",
        help="fail when a record belongs to an already superseded parent",
    )
    _ = parser.add_argument("--indent", type=int, default=None, help="indent the JSON output")
    _ = parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=_LOG_LEVELS,
        default="WARNING",
        help="logging level (default: %(default)s)",
    )
    return parser


def _matcher(name: str, sep: str) -> Callable[[Any, Any], bool]:
    if name == "equals":
        return equals
    if name == "starts-with":
        return starts_with
    return KeyPrefixMatcher(sep)


def _load_records(path: str) -> Any:
    if path == "-":
        return json.load(sys.stdin)
    with open(path, encoding="utf-8") as handle:
        return json.load(handle)


def main(args: Sequence[str] | None = None) -> int:
    """Run the command line interface and return its exit status."""
    parser = _build_parser()
    options = parser.parse_args(args)
    logging.basicConfig(level=options.log_level, format="%(levelname)s %(name)s: %(message)s")

    try:
        config = JoinConfig(
            identifier_field=options.id_field,
            discriminator_field=options.type_field,
            matches=_matcher(options.match, options.sep),
            on_orphan=options.on_orphan,
            strict_grouping=options.strict,
        )
        plan = create_joiner(config).plan(options.primary, dict(options.children))
    except ValueError as exc:
        parser.error(str(exc))

    try:
        records = _load_records(options.file)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        logger.error("cannot read records from %s: %s", options.file, exc)
        return 1
    if not isinstance(records, list) or not all(isinstance(record, dict) for record in records):
        logger.error("input must be a JSON array of objects")
        return 1

    try:
        joined = plan(records)
    except JoinError as exc:
        print(json.dumps(exc.as_dict(), default=str), file=sys.stderr)
        return 1

    print(json.dumps(joined, indent=options.indent))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
