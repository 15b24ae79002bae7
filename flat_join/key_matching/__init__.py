"""Identifier predicates for deciding which parent a record belongs to."""

from .matcher import KeyPrefixMatcher
from .predicates import equals, starts_with


__all__ = ["KeyPrefixMatcher", "equals", "starts_with"]
