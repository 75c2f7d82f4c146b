"""
Fuzzy Property Match - Suggest property names for invalid or unmapped fields.

Simple API:
    from fuzzy_property_match import PropertyDescriptor, Member, PropertyMatches

    descriptors = [
        PropertyDescriptor("adress", write_accessor=Member("set_adress")),
        PropertyDescriptor("email", backing_field=Member("email", alias="email_address")),
    ]

    # Low-level: sorted candidate names
    compute_matches("address", descriptors)  # ['adress']

    # High-level: candidates plus the error sentence
    matches = PropertyMatches.for_property("address", descriptors)
    matches.build_error_message()

Uses:
- Levenshtein distance from RapidFuzz (case-insensitive, per character)
- Exact alias metadata on backing fields and accessors
"""

__version__ = "0.1.0"

from .matches import (
    DEFAULT_MAX_DISTANCE,
    InvalidPropertyError,
    MatchSource,
    Member,
    PropertyDescriptor,
    PropertyMatch,
    PropertyMatches,
    build_error_message,
    compute_matches,
    default_alias_of,
    explain_matches,
    string_distance,
)

__all__ = [
    "compute_matches",
    "explain_matches",
    "string_distance",
    "build_error_message",
    "PropertyMatches",
    "PropertyMatch",
    "PropertyDescriptor",
    "Member",
    "MatchSource",
    "InvalidPropertyError",
    "DEFAULT_MAX_DISTANCE",
    "default_alias_of",
    "__version__",
]
