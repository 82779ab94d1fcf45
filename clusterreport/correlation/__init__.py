"""Correlation of merged event streams to resource groups.

Exports:
    GroupMatcher      -- Strategy deciding whether an event message concerns a group.
    SubstringMatcher  -- Default strategy: the group name appears anywhere in the message.
    TokenMatcher      -- Stricter strategy: the group name appears as a whole token.
    build_matcher     -- Resolve a strategy by name.
    correlate         -- Timestamps of a stream's events that concern a group.
    most_recent_or_na -- Newest such timestamp, or NA.
"""

from clusterreport.correlation.correlator import correlate, most_recent_or_na
from clusterreport.correlation.matcher import (
    DEFAULT_MATCHER,
    GroupMatcher,
    SubstringMatcher,
    TokenMatcher,
    build_matcher,
)

__all__ = [
    "DEFAULT_MATCHER",
    "GroupMatcher",
    "SubstringMatcher",
    "TokenMatcher",
    "build_matcher",
    "correlate",
    "most_recent_or_na",
]
