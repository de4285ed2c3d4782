"""Tests for negated description rewriting."""

import pytest

from assertree.negation import NEGATION_RULES, NegationRule, negate_description


@pytest.mark.parametrize(
    "description, negated",
    [
        ("is equal to 5", "is not equal to 5"),
        ("is not null", "is null"),
        ("is None", "is not None"),
        ("contains 3", "does not contain 3"),
        ("starts with 'ab'", "does not start with 'ab'"),
        ("ends with 'yz'", "does not end with 'yz'"),
        ("matches /a+/", "does not match /a+/"),
        ("throws ValueError", "does not throw ValueError"),
        ("has length 3", "does not have length 3"),
        ("foo bar", "does not match: foo bar"),
    ],
)
def test_negate_description(description, negated):
    assert negate_description(description) == negated


def test_only_leading_phrase_is_rewritten():
    assert negate_description("is a list that is empty") == "is not a list that is empty"


def test_whole_words_only():
    # "isolated" starts with "is" but not with the word "is"
    assert negate_description("isolated") == "does not match: isolated"
    assert negate_description("hash is 3") == "does not match: hash is 3"


def test_description_not_at_start_falls_back():
    assert negate_description("%s contains the elements [1]") == (
        "does not match: %s contains the elements [1]"
    )


def test_first_matching_rule_wins():
    rules = [
        NegationRule.compile(r"^has\b", "lacks"),
        NegationRule.compile(r"^has\b", "does not have"),
    ]
    assert negate_description("has 3 elements", rules) == "lacks 3 elements"


def test_custom_rules_replace_defaults():
    rules = [NegationRule.compile(r"^was\b", "was not")]
    assert negate_description("was called", rules) == "was not called"
    assert negate_description("is equal to 1", rules) == "does not match: is equal to 1"


def test_is_not_rule_precedes_is_rule():
    patterns = [rule.pattern.pattern for rule in NEGATION_RULES]
    assert patterns.index(r"^is not\b") < patterns.index(r"^is\b")


def test_rule_apply_returns_none_without_match():
    rule = NegationRule.compile(r"^contains\b", "does not contain")
    assert rule.apply("has 3") is None
    assert rule.apply("contains 3") == "does not contain 3"


def test_negating_the_fallback_strips_it():
    assert negate_description(negate_description("foo bar")) == "foo bar"
    assert negate_description(negate_description("is equal to 5")) == "is equal to 5"
