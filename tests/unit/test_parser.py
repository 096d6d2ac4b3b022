"""Tests for commit message parsing."""

from __future__ import annotations

from nextver.config.models import CommitsConfig
from nextver.core.commits import CommitRecord, classify
from nextver.core.version import BumpSeverity
from nextver.vcs.parser import filter_reverted_commits, parse_commit_message


class TestParseHeader:
    """Tests for header parsing."""

    def test_parse_simple_feat(self, commits_config: CommitsConfig):
        """Parse a simple feat commit."""
        record = parse_commit_message("feat: add new feature", commits_config)

        assert record.type == "feat"
        assert record.scope is None
        assert record.subject == "add new feature"
        assert record.header == "feat: add new feature"
        assert not record.is_breaking

    def test_parse_with_scope(self, commits_config: CommitsConfig):
        """Parse commit with scope."""
        record = parse_commit_message("fix(api): handle null response", commits_config)

        assert record.type == "fix"
        assert record.scope == "api"
        assert record.subject == "handle null response"

    def test_parse_non_conventional(self, commits_config: CommitsConfig):
        """A free-form message has no type."""
        record = parse_commit_message("Updated the readme file", commits_config)

        assert record.type is None
        assert record.subject is None
        assert record.header == "Updated the readme file"

    def test_empty_message(self, commits_config: CommitsConfig):
        record = parse_commit_message("", commits_config, sha="abc")

        assert record == CommitRecord(hash="abc")

    def test_custom_correspondence(self):
        """Extra capture groups land in fields."""
        config = CommitsConfig(
            header_pattern=r"^\[(\w+-\d+)\] (\w*): (.*)$",
            header_correspondence=["ticket", "type", "subject"],
        )
        record = parse_commit_message("[PROJ-7] feat: add export", config)

        assert record.type == "feat"
        assert record.subject == "add export"
        assert record.get("ticket") == "PROJ-7"
        assert record.fields == {"ticket": "PROJ-7"}


class TestParseNotes:
    """Tests for breaking change notes."""

    def test_breaking_with_exclamation(self, commits_config: CommitsConfig):
        """A ! header adds a breaking note with the subject as text."""
        record = parse_commit_message("feat!: redesign API", commits_config)

        assert record.is_breaking
        assert record.type == "feat"
        assert record.notes[0].title == "BREAKING CHANGE"
        assert record.notes[0].text == "redesign API"

    def test_breaking_with_scope_and_exclamation(self, commits_config: CommitsConfig):
        record = parse_commit_message("feat(core)!: change config format", commits_config)

        assert record.is_breaking
        assert record.scope == "core"

    def test_breaking_in_footer(self, commits_config: CommitsConfig):
        """A BREAKING CHANGE footer becomes a note."""
        message = "feat: new feature\n\nSome details.\n\nBREAKING CHANGE: old API removed"
        record = parse_commit_message(message, commits_config)

        assert len(record.notes) == 1
        assert record.notes[0].text == "old API removed"
        assert record.body == "Some details."
        assert record.footer == "BREAKING CHANGE: old API removed"

    def test_hyphenated_keyword_is_not_a_default(self, commits_config: CommitsConfig):
        """A BREAKING-CHANGE footer is plain footer text unless configured."""
        record = parse_commit_message("fix: x\n\nBREAKING-CHANGE: removed y", commits_config)

        assert record.notes == ()
        assert record.body == "BREAKING-CHANGE: removed y"
        assert classify([record]).severity == BumpSeverity.PATCH

    def test_hyphenated_keyword_opt_in(self):
        config = CommitsConfig(note_keywords=["BREAKING CHANGE", "BREAKING-CHANGE"])
        record = parse_commit_message("fix: x\n\nBREAKING-CHANGE: removed y", config)

        assert record.notes[0].title == "BREAKING-CHANGE"
        assert classify([record]).severity == BumpSeverity.MAJOR

    def test_keyword_without_colon(self, commits_config: CommitsConfig):
        """Whitespace after the keyword also starts a note."""
        record = parse_commit_message("fix: x\n\nBREAKING CHANGE removed y", commits_config)

        assert len(record.notes) == 1
        assert record.notes[0].title == "BREAKING CHANGE"
        assert record.notes[0].text == "removed y"
        assert record.body is None

    def test_keyword_prefix_of_word_is_not_a_note(self, commits_config: CommitsConfig):
        record = parse_commit_message("fix: x\n\nBREAKING CHANGES ahead", commits_config)

        assert record.notes == ()

    def test_footer_note_wins_over_exclamation(self, commits_config: CommitsConfig):
        """A ! header does not add a second note next to a footer note."""
        record = parse_commit_message("feat!: x\n\nBREAKING CHANGE: details", commits_config)

        assert len(record.notes) == 1
        assert record.notes[0].text == "details"

    def test_multiline_and_multiple_notes(self, commits_config: CommitsConfig):
        message = (
            "refactor: drop legacy\n\n"
            "BREAKING CHANGE: first\ncontinues here\n"
            "BREAKING CHANGE: second"
        )
        record = parse_commit_message(message, commits_config)

        assert [n.text for n in record.notes] == ["first\ncontinues here", "second"]

    def test_keyword_in_body_text_is_not_a_note(self, commits_config: CommitsConfig):
        """Keywords only count at the start of a line."""
        record = parse_commit_message(
            "docs: explain\n\nThis is not a BREAKING CHANGE: really", commits_config
        )

        assert record.notes == ()

    def test_custom_keywords(self):
        config = CommitsConfig(note_keywords=["BREAKS"])
        record = parse_commit_message("fix: x\n\nBREAKS: everything", config)

        assert record.notes[0].title == "BREAKS"

    def test_breaking_header_disabled(self):
        config = CommitsConfig(breaking_header_pattern=None)
        record = parse_commit_message("feat!: x", config)

        assert record.notes == ()
        assert record.type is None


class TestParseMetadata:
    """Tests for mentions, references and reverts."""

    def test_mentions(self, commits_config: CommitsConfig):
        record = parse_commit_message("fix: x\n\nThanks @alice and @bob-smith", commits_config)

        assert record.mentions == ("alice", "bob-smith")

    def test_email_is_not_a_mention(self, commits_config: CommitsConfig):
        record = parse_commit_message("fix: x\n\nContact dev@example.com", commits_config)

        assert record.mentions == ()

    def test_references(self, commits_config: CommitsConfig):
        message = "fix: crash on start #12\n\nCloses acme/app#34"
        record = parse_commit_message(message, commits_config)

        first, second = record.references
        assert first.issue == "12"
        assert first.raw == "#12"
        assert first.action is None
        assert second.action == "Closes"
        assert second.owner == "acme"
        assert second.repository == "app"
        assert second.issue == "34"
        assert second.raw == "acme/app#34"
        assert second.prefix == "#"

    def test_revert(self, commits_config: CommitsConfig):
        message = 'Revert "feat: add export"\n\nThis reverts commit 1a2b3c4d.'
        record = parse_commit_message(message, commits_config)

        assert record.type is None
        assert record.revert == {"header": "feat: add export", "hash": "1a2b3c4d"}

    def test_sha_is_kept(self, commits_config: CommitsConfig):
        record = parse_commit_message("fix: x", commits_config, sha="deadbeef")

        assert record.hash == "deadbeef"


class TestFilterRevertedCommits:
    """Tests for filter_reverted_commits()."""

    def test_revert_cancels_commit(self, commits_config: CommitsConfig):
        """A feature and its revert both disappear."""
        feat = parse_commit_message("feat: add export", commits_config, sha="1a2b3c4d5e6f")
        fix = parse_commit_message("fix: typo", commits_config, sha="99aa")
        revert = parse_commit_message(
            'Revert "feat: add export"\n\nThis reverts commit 1a2b3c4d5e6f.',
            commits_config,
            sha="77bb",
        )

        kept = filter_reverted_commits([revert, fix, feat])

        assert kept == [fix]
        assert classify(kept).severity == BumpSeverity.PATCH

    def test_short_hash_matches(self, commits_config: CommitsConfig):
        feat = parse_commit_message("feat: add export", commits_config, sha="1a2b3c4d5e6f")
        revert = parse_commit_message(
            'Revert "feat: add export"\n\nThis reverts commit 1a2b3c4.', commits_config
        )

        assert filter_reverted_commits([revert, feat]) == []

    def test_revert_of_older_release_is_kept(self, commits_config: CommitsConfig):
        """A revert whose target is not in range stays."""
        revert = parse_commit_message(
            'Revert "feat: add export"\n\nThis reverts commit 1a2b3c4.', commits_config
        )
        fix = parse_commit_message("fix: typo", commits_config, sha="99aa")

        assert filter_reverted_commits([revert, fix]) == [revert, fix]

    def test_header_must_match(self, commits_config: CommitsConfig):
        feat = parse_commit_message("feat: something else", commits_config, sha="1a2b3c4")
        revert = parse_commit_message(
            'Revert "feat: add export"\n\nThis reverts commit 1a2b3c4.', commits_config
        )

        assert filter_reverted_commits([revert, feat]) == [revert, feat]
