"""Group matching strategies.

Cluster event messages are free text; the only link between an event and a
resource group is the group name appearing somewhere in that text.
``SubstringMatcher`` is the historical rule and stays the default even though
a group named ``SQL`` also claims every event that mentions ``SQL2``.
``TokenMatcher`` requires the name to stand alone.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod


class GroupMatcher(ABC):
    """Decides whether an event message concerns a resource group."""

    name: str = ""

    def __init__(self, ignore_case: bool = False) -> None:
        self.ignore_case = ignore_case

    @abstractmethod
    def matches(self, message: str, group_name: str) -> bool:
        """Return True if *message* refers to *group_name*."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(ignore_case={self.ignore_case})"


class SubstringMatcher(GroupMatcher):
    """Matches when the group name occurs anywhere in the message."""

    name = "substring"

    def matches(self, message: str, group_name: str) -> bool:
        if self.ignore_case:
            return group_name.casefold() in message.casefold()
        return group_name in message


class TokenMatcher(GroupMatcher):
    """Matches when the group name is not part of a longer name.

    The characters on either side of the match must not be word characters,
    ``-`` or ``.``, which are common in group and host names.
    """

    name = "token"

    _BOUNDARY = r"[\w.-]"

    def matches(self, message: str, group_name: str) -> bool:
        if not group_name:
            return False
        flags = re.IGNORECASE if self.ignore_case else 0
        pattern = rf"(?<!{self._BOUNDARY}){re.escape(group_name)}(?!{self._BOUNDARY})"
        return re.search(pattern, message, flags) is not None


_STRATEGIES: dict[str, type[GroupMatcher]] = {
    SubstringMatcher.name: SubstringMatcher,
    TokenMatcher.name: TokenMatcher,
}

DEFAULT_MATCHER: GroupMatcher = SubstringMatcher()


def build_matcher(strategy: str = "substring", ignore_case: bool = False) -> GroupMatcher:
    """Return the matcher registered under *strategy*.

    Raises:
        ValueError: if *strategy* is not a known strategy name.
    """
    try:
        cls = _STRATEGIES[strategy.lower()]
    except KeyError:
        raise ValueError(f"Unknown match strategy: {strategy!r}. Must be one of {sorted(_STRATEGIES)}") from None
    return cls(ignore_case=ignore_case)
