"""Tests for properties module."""

import logging
from datetime import datetime, timezone

import pytest

from gh_release_prs.models import PullRequestInfo
from gh_release_prs.properties import retrieve_property


@pytest.fixture
def pr():
    return PullRequestInfo(
        number=7,
        title="Fix crash",
        html_url="https://github.com/octo/repo/pull/7",
        base_branch="main",
        branch=None,
        created_at=datetime(2025, 6, 1, tzinfo=timezone.utc),
        merged_at=datetime(2025, 6, 2, tzinfo=timezone.utc),
        repo_name="octo/repo",
        labels={"bug", "--rcba-merged"},
        body="Fixes the crash on startup",
        assignees=["alice", "bob"],
        status="merged",
    )


def _warnings(caplog):
    return [r for r in caplog.records if r.levelno == logging.WARNING]


class TestRetrieveProperty:
    """Tests for retrieve_property function."""

    def test_string_property(self, pr):
        assert retrieve_property(pr, "title", "category") == "Fix crash"

    def test_labels_are_joined(self, pr):
        """Label sets are joined with commas in sorted order."""
        value = retrieve_property(pr, "labels", "category")

        assert set(value.split(",")) == {"bug", "--rcba-merged"}
        assert value == "--rcba-merged,bug"

    def test_list_is_joined_in_order(self, pr):
        assert retrieve_property(pr, "assignees", "template") == "alice,bob"

    def test_empty_list_is_empty_string(self, pr):
        assert retrieve_property(pr, "requested_reviewers", "template") == ""

    def test_unknown_property_falls_back_to_body(self, pr, caplog):
        """Unknown names return the body and warn exactly once."""
        with caplog.at_level(logging.WARNING):
            value = retrieve_property(pr, "reactions", "transformer")

        assert value == "Fixes the crash on startup"
        warnings = _warnings(caplog)
        assert len(warnings) == 1
        assert "reactions" in warnings[0].getMessage()
        assert "transformer" in warnings[0].getMessage()

    def test_unset_property_falls_back_to_body(self, pr, caplog):
        """A property without a value also falls back to the body."""
        with caplog.at_level(logging.WARNING):
            value = retrieve_property(pr, "branch", "transformer")

        assert value == "Fixes the crash on startup"
        assert len(_warnings(caplog)) == 1

    def test_camel_case_alias(self, pr, caplog):
        """Configuration names like baseBranch resolve without a warning."""
        with caplog.at_level(logging.WARNING):
            value = retrieve_property(pr, "baseBranch", "template")

        assert value == "main"
        assert _warnings(caplog) == []

    def test_datetime_is_iso_formatted(self, pr):
        assert retrieve_property(pr, "mergedAt", "template") == "2025-06-02T00:00:00+00:00"

    def test_number_is_stringified(self, pr):
        assert retrieve_property(pr, "number", "template") == "7"
