"""Unit tests for the FieldMatcher engine.

Tests the FieldMatcher service for:
- Exact / alias / partial matches through the packaged alias table
- Candidate and variation ordering with strict-improvement replacement
- Failure-as-absence: empty profile, empty candidates, no classification
- Value lookup and profile snapshot isolation
- Construction from an AppConfig
"""

import pytest

from formfill.config.models import AliasRecord, AppConfig
from formfill.matching import FieldMatcher, MatchResult, MatchType


@pytest.fixture
def profile():
    return {
        "first_name": "Jane",
        "email": "jane@example.com",
        "expected_salary": "90000",
        "phone_country_code": "+91",
    }


@pytest.fixture
def matcher(profile):
    return FieldMatcher(profile)


class TestReferenceScenarios:
    """Scenarios that pin down the matching contract."""

    def test_alias_to_expected_salary(self):
        matcher = FieldMatcher({"expected_salary": "90000"})

        result = matcher.find_match("Expected CTC *")

        assert result == MatchResult("expected_salary", MatchType.EXACT, 100)
        assert matcher.get_value(result.stored_key) == "90000"

    def test_tokenization_near_miss_is_not_bridged(self):
        """'first_name' and 'firstname' are different normalized forms; nothing links them."""
        matcher = FieldMatcher({"firstName": "Jane"})

        assert matcher.find_match("First Name", ["fname"]) is None

    def test_dial_code_alias(self):
        matcher = FieldMatcher({"phone_country_code": "+91"})

        result = matcher.find_match("Dial Code")

        assert result == MatchResult("phone_country_code", MatchType.EXACT, 100)

    def test_punctuation_only_key_takes_aliases(self):
        table = [AliasRecord(concept="country_code", aliases=["Dial Code"])]
        matcher = FieldMatcher({"***": "x"}, alias_table=table)

        result = matcher.find_match("Dial Code")

        assert result == MatchResult("***", MatchType.EXACT, 100)
        assert matcher.get_value(result.stored_key) == "x"

    def test_empty_profile(self):
        matcher = FieldMatcher({})

        assert matcher.find_match("Email", ["email", "E-mail"]) is None


class TestFindMatch:
    """Tests for FieldMatcher.find_match()."""

    def test_exact_match(self, matcher):
        result = matcher.find_match("Email")

        assert result.stored_key == "email"
        assert result.match_type is MatchType.EXACT
        assert result.confidence == 100

    def test_fallback_exact_beats_primary_partial(self, matcher):
        result = matcher.find_match("Work Email Address", ["email"])

        assert result == MatchResult("email", MatchType.EXACT, 100)

    def test_primary_partial_when_fallbacks_miss(self, matcher):
        result = matcher.find_match("Work Email Address", ["zzz"])

        assert result == MatchResult("email", MatchType.CONTAINS, 70)

    def test_affix_stripped_variation(self, matcher):
        """'input_email' is only a suffix match; its stripped form 'email' is exact."""
        result = matcher.find_match("input-email")

        assert result == MatchResult("email", MatchType.EXACT, 100)

    def test_first_candidate_wins_ties(self):
        matcher = FieldMatcher({"abc": "1", "def": "2"}, alias_table=[])

        assert matcher.find_match("abc_zzzzzzzz", ["def_zzzzzzzz"]).stored_key == "abc"
        assert matcher.find_match("def_zzzzzzzz", ["abc_zzzzzzzz"]).stored_key == "def"

    def test_empty_candidates_skipped(self, matcher):
        assert matcher.find_match("***", ["", None, "  "]) is None
        assert matcher.find_match(None, ["***", "email"]).stored_key == "email"

    def test_no_classification(self, matcher):
        assert matcher.find_match("favourite colour") is None

    def test_confidence_bounds(self, matcher):
        labels = ["Email", "E-mail", "Your email address please", "first", "salary", "Dial", "code"]
        for label in labels:
            result = matcher.find_match(label)
            if result is not None:
                assert 0 <= result.confidence <= 100

    def test_repeated_calls_agree(self, matcher):
        first = matcher.find_match("Expected CTC", ["salary"])
        for _ in range(3):
            assert matcher.find_match("Expected CTC", ["salary"]) == first


class TestGetValue:
    """Tests for FieldMatcher.get_value()."""

    def test_known_key(self, matcher):
        assert matcher.get_value("first_name") == "Jane"

    def test_unknown_key(self, matcher):
        assert matcher.get_value("nope") == ""


class TestSnapshot:
    """The matcher works on a private copy of the profile."""

    def test_later_profile_changes_ignored(self, profile):
        matcher = FieldMatcher(profile)
        profile["email"] = "changed@example.com"
        profile["city"] = "Pune"

        assert matcher.get_value("email") == "jane@example.com"
        assert matcher.find_match("city") is None

    def test_profile_view_is_read_only(self, matcher):
        with pytest.raises(TypeError):
            matcher.profile["email"] = "x"  # type: ignore[index]

    def test_index_built_once(self, matcher):
        assert matcher.index is matcher.index
        assert matcher.index["expected_ctc"] == "expected_salary"


class TestFromConfig:
    """Tests for FieldMatcher.from_config()."""

    def test_configured_aliases_only(self):
        config = AppConfig(
            use_default_aliases=False,
            aliases=[AliasRecord(concept="email", aliases=["E-mail Address"])],
        )
        matcher = FieldMatcher.from_config({"email": "j@x.io", "phone_country_code": "+91"}, config)

        assert matcher.find_match("E-mail Address") == MatchResult("email", MatchType.EXACT, 100)
        assert matcher.find_match("Dial Code") is None

    def test_configured_aliases_added_after_defaults(self):
        config = AppConfig(aliases=[AliasRecord(concept="github", aliases=["GitHub Profile"])])
        matcher = FieldMatcher.from_config({"github": "jane", "phone_country_code": "+91"}, config)

        assert matcher.find_match("GitHub Profile").stored_key == "github"
        assert matcher.find_match("Dial Code").stored_key == "phone_country_code"
