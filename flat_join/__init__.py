"""flat-join - nest child records under their parents in one linear pass"""

from ._version import version as __version__
from .config import JoinConfig, OrphanPolicy
from .errors import (
    JoinError,
    JoinErrorKind,
    MissingFieldError,
    OrphanedRecordError,
    SupersededParentError,
    UnknownKindError,
    UnmappedChildKindError,
)
from .joiner import Joiner, create_joiner, join
from .key_matching import KeyPrefixMatcher, equals, starts_with
from .schema import BoundPlan, JoinedRecord, JoinPlan


__all__ = [
    "BoundPlan",
    "JoinConfig",
    "JoinError",
    "JoinErrorKind",
    "JoinPlan",
    "JoinedRecord",
    "Joiner",
    "KeyPrefixMatcher",
    "MissingFieldError",
    "OrphanPolicy",
    "OrphanedRecordError",
    "SupersededParentError",
    "UnknownKindError",
    "UnmappedChildKindError",
    "__version__",
    "create_joiner",
    "equals",
    "join",
    "starts_with",
]
