"""
Property name suggestions using RapidFuzz.

Clean API:
- compute_matches(name, descriptors) - Sorted names that may be meant by `name`
- build_error_message(name, matches) - "Did you mean ...?" sentence
- PropertyMatches.for_property(name, descriptors) - Both of the above in one object

Candidates come from exact alias metadata on a property's backing field or
accessors, or from a case-insensitive Levenshtein distance between the
requested name and the property name.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from rapidfuzz.distance import Levenshtein

logger = logging.getLogger(__name__)

DEFAULT_MAX_DISTANCE = 2


class MatchSource(StrEnum):
    """Rule that produced a candidate."""

    field_alias = "field_alias"
    name_distance = "name_distance"
    write_alias = "write_alias"
    read_alias = "read_alias"


@dataclass(frozen=True)
class Member:
    """A backing field or accessor, optionally carrying an alias."""

    name: str
    alias: str | None = None


@dataclass(frozen=True)
class PropertyDescriptor:
    """A settable/gettable property of a record type.

    Attributes:
        name: Property name, unique within its type
        read_accessor: Getter, if any
        write_accessor: Setter, if any
        backing_field: Field holding the value, if any
    """

    name: str
    read_accessor: Any = None
    write_accessor: Any = None
    backing_field: Any = None


@dataclass(frozen=True)
class PropertyMatch:
    """A single candidate and the rule that found it."""

    name: str
    source: MatchSource
    distance: int | None = None  # only for name_distance

    def __str__(self) -> str:
        if self.source == MatchSource.name_distance:
            return f"'{self.name}' (distance {self.distance})"
        return f"'{self.name}' ({self.source.value})"


AliasLookup = Callable[[Any], str | None]


def default_alias_of(member: Any) -> str | None:
    """Return the alias attached to a field or accessor, or None."""
    return getattr(member, "alias", None)


def _fold(value: str) -> list[str]:
    # Fold per character so the sequence length never changes
    return [char.lower() for char in value]


def string_distance(s1: str, s2: str) -> int:
    """
    Case-insensitive Levenshtein distance between two strings.

    Insertions, deletions and substitutions each cost 1. Characters are
    lower-cased one at a time before comparison.
    """
    if not s1:
        return len(s2)
    if not s2:
        return len(s1)
    return Levenshtein.distance(_fold(s1), _fold(s2))


def _has_alias(member: Any, target_name: str, alias_of: AliasLookup) -> bool:
    if member is None:
        return False
    return alias_of(member) == target_name


def _match_descriptor(
    target_name: str,
    descriptor: PropertyDescriptor,
    max_distance: int,
    alias_of: AliasLookup,
) -> list[PropertyMatch]:
    """Apply the matching rules to one descriptor."""
    if _has_alias(descriptor.backing_field, target_name, alias_of):
        return [PropertyMatch(descriptor.name, MatchSource.field_alias)]

    found: list[PropertyMatch] = []

    if descriptor.write_accessor is not None:
        distance = string_distance(target_name, descriptor.name)
        if distance <= max_distance:
            found.append(PropertyMatch(descriptor.name, MatchSource.name_distance, distance))
        elif _has_alias(descriptor.write_accessor, target_name, alias_of):
            found.append(PropertyMatch(descriptor.name, MatchSource.write_alias))

    # A read alias is checked even when the write accessor already matched
    if _has_alias(descriptor.read_accessor, target_name, alias_of):
        found.append(PropertyMatch(descriptor.name, MatchSource.read_alias))

    return found


def explain_matches(
    target_name: str,
    descriptors: Iterable[PropertyDescriptor],
    max_distance: int = DEFAULT_MAX_DISTANCE,
    *,
    deduplicate: bool = False,
    alias_of: AliasLookup = default_alias_of,
) -> list[PropertyMatch]:
    """
    Find properties that may be meant by `target_name`, with the reason for each.

    Args:
        target_name: The invalid or unmapped property name
        descriptors: Property descriptors of the target type, in any order
        max_distance: Maximum edit distance for a name match (negative disables it)
        deduplicate: If True, keep only the first match per property name
        alias_of: Returns the alias of a field or accessor, or None

    Returns:
        Matches sorted by property name
    """
    candidates: list[PropertyMatch] = []
    scanned = 0
    for descriptor in descriptors:
        scanned += 1
        candidates.extend(_match_descriptor(target_name, descriptor, max_distance, alias_of))

    candidates.sort(key=lambda match: match.name)

    if deduplicate:
        seen: set[str] = set()
        unique = []
        for match in candidates:
            if match.name not in seen:
                seen.add(match.name)
                unique.append(match)
        candidates = unique

    logger.debug(
        "Matched '%s' against %d properties: %d candidates", target_name, scanned, len(candidates)
    )
    return candidates


def compute_matches(
    target_name: str,
    descriptors: Iterable[PropertyDescriptor],
    max_distance: int = DEFAULT_MAX_DISTANCE,
    *,
    deduplicate: bool = False,
    alias_of: AliasLookup = default_alias_of,
) -> list[str]:
    """
    Sorted property names that may be meant by `target_name`.

    Example:
        descriptors = [PropertyDescriptor("adress", write_accessor=Member("set_adress"))]
        compute_matches("address", descriptors)
        # Returns: ['adress']
    """
    return [
        match.name
        for match in explain_matches(
            target_name,
            descriptors,
            max_distance,
            deduplicate=deduplicate,
            alias_of=alias_of,
        )
    ]


def build_error_message(property_name: str, possible_matches: Sequence[str]) -> str:
    """Render the error sentence for an invalid property and its candidates."""
    parts = [f"Bean property '{property_name}' is not writable or has an invalid setter method. "]

    if not possible_matches:
        parts.append("Does the parameter type of the setter match the return type of the getter?")
        return "".join(parts)

    parts.append("Did you mean ")
    last = len(possible_matches) - 1
    for i, match in enumerate(possible_matches):
        parts.append(f"'{match}")
        if i < last - 1:
            parts.append("', ")
        elif i == last - 1:
            parts.append("', or ")
    parts.append("'?")
    return "".join(parts)


class InvalidPropertyError(ValueError):
    """Exception raised when a property name cannot be bound.

    Attributes:
        property_name: The name that could not be bound
        matches: The PropertyMatches computed for it
    """

    def __init__(self, message: str, matches: PropertyMatches):
        super().__init__(message)
        self.property_name = matches.property_name
        self.matches = matches

    @property
    def possible_matches(self) -> tuple[str, ...]:
        """Suggested property names, sorted."""
        return self.matches.possible_matches


class PropertyMatches:
    """Possible matches for one invalid property name."""

    def __init__(self, property_name: str, matches: Iterable[PropertyMatch]):
        self.property_name = property_name
        self.matches = tuple(matches)

    @classmethod
    def for_property(
        cls,
        property_name: str,
        descriptors: Iterable[PropertyDescriptor],
        max_distance: int = DEFAULT_MAX_DISTANCE,
        *,
        deduplicate: bool = False,
        alias_of: AliasLookup = default_alias_of,
    ) -> PropertyMatches:
        """Compute matches for `property_name` among `descriptors`."""
        matches = explain_matches(
            property_name,
            descriptors,
            max_distance,
            deduplicate=deduplicate,
            alias_of=alias_of,
        )
        return cls(property_name, matches)

    @property
    def possible_matches(self) -> tuple[str, ...]:
        return tuple(match.name for match in self.matches)

    @property
    def has_matches(self) -> bool:
        return len(self.matches) > 0

    def build_error_message(self) -> str:
        return build_error_message(self.property_name, self.possible_matches)

    def raise_error(self) -> None:
        """Raise InvalidPropertyError carrying these matches."""
        raise InvalidPropertyError(self.build_error_message(), self)

    def __repr__(self) -> str:
        return f"PropertyMatches({self.property_name!r}, {list(self.possible_matches)!r})"
