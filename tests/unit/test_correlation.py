"""Tests for group matchers and the correlator."""

from __future__ import annotations

import pytest

from clusterreport.correlation import (
    DEFAULT_MATCHER,
    SubstringMatcher,
    TokenMatcher,
    build_matcher,
    correlate,
    most_recent_or_na,
)
from clusterreport.models.events import EventCategory
from clusterreport.models.report import NA

from tests.helpers import make_record, make_stream, ts


class TestSubstringMatcher:
    def test_default_is_substring(self) -> None:
        assert isinstance(DEFAULT_MATCHER, SubstringMatcher)
        assert DEFAULT_MATCHER.ignore_case is False

    def test_matches_anywhere(self) -> None:
        matcher = SubstringMatcher()
        assert matcher.matches("Clustered role 'SQL Server (MSSQL)' is online", "SQL Server")

    def test_case_sensitive_by_default(self) -> None:
        assert not SubstringMatcher().matches("clustered role 'fileserver' online", "FileServer")

    def test_ignore_case(self) -> None:
        assert SubstringMatcher(ignore_case=True).matches("clustered role 'fileserver' online", "FileServer")

    def test_longer_name_also_matches(self) -> None:
        # Known hazard: "DB" claims events for "DB2"
        assert SubstringMatcher().matches("Clustered role 'DB2' failed", "DB")


class TestTokenMatcher:
    def test_exact_name_matches(self) -> None:
        assert TokenMatcher().matches("Clustered role 'DB' failed", "DB")

    def test_longer_name_does_not_match(self) -> None:
        matcher = TokenMatcher()
        assert not matcher.matches("Clustered role 'DB2' failed", "DB")
        assert not matcher.matches("Clustered role 'App-DB' failed", "DB")
        assert not matcher.matches("Clustered role 'db.corp' failed", "db")

    def test_regex_characters_are_literal(self) -> None:
        matcher = TokenMatcher()
        assert matcher.matches("role 'SQL (Prod)' online", "SQL (Prod)")
        assert not matcher.matches("role 'SQLxProdx' online", "SQL.Prod.")

    def test_empty_name_never_matches(self) -> None:
        assert not TokenMatcher().matches("anything", "")

    def test_ignore_case(self) -> None:
        assert TokenMatcher(ignore_case=True).matches("role 'db' online", "DB")


class TestBuildMatcher:
    def test_known_strategies(self) -> None:
        assert isinstance(build_matcher("substring"), SubstringMatcher)
        assert isinstance(build_matcher("TOKEN", ignore_case=True), TokenMatcher)
        assert build_matcher("token", ignore_case=True).ignore_case is True

    def test_unknown_strategy(self) -> None:
        with pytest.raises(ValueError, match="Unknown match strategy"):
            build_matcher("regex")


class TestCorrelate:
    def test_returns_matching_timestamps_newest_first(self) -> None:
        stream = make_stream(
            EventCategory.CAME_ONLINE,
            make_record("G1 online", ts(8)),
            make_record("G2 online", ts(9)),
            make_record("G1 online", ts(10), node="N2"),
        )
        assert correlate(stream, "G1") == [ts(10), ts(8)]

    def test_no_match_is_empty(self) -> None:
        stream = make_stream(EventCategory.CAME_ONLINE, make_record("G2 online", ts(9)))
        assert correlate(stream, "G1") == []

    def test_uses_given_matcher(self) -> None:
        stream = make_stream(
            EventCategory.ENTERED_ERROR,
            make_record("role 'DB2' failed", ts(11)),
            make_record("role 'DB' failed", ts(7)),
        )
        assert correlate(stream, "DB") == [ts(11), ts(7)]
        assert correlate(stream, "DB", TokenMatcher()) == [ts(7)]


class TestMostRecentOrNA:
    def test_empty_stream_gives_na(self) -> None:
        assert most_recent_or_na(make_stream(EventCategory.WENT_OFFLINE), "G1") is NA

    def test_unmatched_group_gives_na(self) -> None:
        stream = make_stream(EventCategory.WENT_OFFLINE, make_record("G2 offline", ts(9)))
        assert most_recent_or_na(stream, "G1") is NA

    def test_most_recent_across_nodes(self) -> None:
        stream = make_stream(
            EventCategory.WENT_OFFLINE,
            make_record("G1 offline", ts(7), node="N2"),
            make_record("G1 offline", ts(11), node="N3"),
            make_record("G1 offline", ts(9), node="N1"),
        )
        assert most_recent_or_na(stream, "G1") == ts(11)

    def test_agrees_with_correlate(self) -> None:
        stream = make_stream(
            EventCategory.ENTERED_DEGRADED,
            make_record("G1 degraded", ts(5)),
            make_record("G1 degraded", ts(6)),
        )
        assert most_recent_or_na(stream, "G1") == correlate(stream, "G1")[0]

    def test_substring_hazard_is_preserved(self) -> None:
        stream = make_stream(EventCategory.ENTERED_ERROR, make_record("Clustered role 'DB2' failed", ts(12)))
        assert most_recent_or_na(stream, "DB") == ts(12)
        assert most_recent_or_na(stream, "DB", TokenMatcher()) is NA
