import json

from scentmatch.analysis.models import RecoveryTier
from scentmatch.analysis.parser import parse_analysis_detailed
from scentmatch.analysis.repair import (
    balance_delimiters,
    collapse_backslashes,
    drop_invalid_escapes,
    escape_embedded_quotes,
    remove_trailing_commas,
    repair_structure,
)

BACKSLASH = "\\"


# ── Escapes ──────────────────────────────────────────────────────────────


def test_collapse_backslashes_leaves_single_backslash():
    assert collapse_backslashes("a" + BACKSLASH * 3 + "n") == "a" + BACKSLASH + "n"
    assert collapse_backslashes("a" + BACKSLASH + "n") == "a" + BACKSLASH + "n"


def test_drop_invalid_escapes_keeps_valid_sequences():
    text = '{"mood": "caf\\e\\n\\"ok\\""}'
    assert drop_invalid_escapes(text) == '{"mood": "cafe\\n\\"ok\\""}'


def test_drop_invalid_escapes_rewrites_escaped_key():
    assert drop_invalid_escapes('{"tra\\its": {"sexy": 7}}') == '{"traits": {"sexy": 7}}'


def test_runaway_backslashes_are_repaired():
    raw = '{"analysis": {"mood": "calm' + BACKSLASH * 5 + ' and bright"}}'
    outcome = parse_analysis_detailed(raw)
    assert outcome.tier == RecoveryTier.REPAIRED
    assert outcome.record.analysis.mood == "calm and bright"


def test_invalid_escape_in_value_is_repaired():
    outcome = parse_analysis_detailed('{"analysis": {"mood": "caf\\e vibes"}}')
    assert outcome.tier == RecoveryTier.REPAIRED
    assert outcome.record.analysis.mood == "cafe vibes"


def test_escaped_key_is_repaired():
    outcome = parse_analysis_detailed('{"tra\\its": {"sexy": 7, "cute": 2}}')
    assert outcome.tier == RecoveryTier.REPAIRED
    assert (outcome.record.traits.sexy, outcome.record.traits.cute) == (7, 2)


# ── Quotes ───────────────────────────────────────────────────────────────


def test_escape_embedded_quotes():
    text = '{"mood": "a "quiet" storm", "aura": "soft"}'
    assert escape_embedded_quotes(text) == '{"mood": "a \\"quiet\\" storm", "aura": "soft"}'


def test_escape_embedded_quotes_handles_long_values():
    count = 50_000
    text = '{"mood": "' + 'a"b' * count + '"}'
    repaired = escape_embedded_quotes(text)
    assert repaired == '{"mood": "' + 'a\\"b' * count + '"}'
    assert json.loads(repaired)["mood"] == 'a"b' * count


def test_quote_before_whitespace_then_boundary_closes_string():
    assert escape_embedded_quotes('{"mood": "calm"   \n , "x": 1}') == '{"mood": "calm"   \n , "x": 1}'


# ── Delimiters ───────────────────────────────────────────────────────────


class TestBalanceDelimiters:
    def test_missing_closers_are_appended_innermost_first(self):
        assert balance_delimiters('{"a": [1, {"b": 2') == '{"a": [1, {"b": 2}]}'

    def test_missing_openers_are_prepended(self):
        assert balance_delimiters('"a": 1}') == '{"a": 1}'
        assert balance_delimiters("1]}") == "{[1]}"

    def test_unterminated_string_is_closed_first(self):
        assert balance_delimiters('{"mood": "calm') == '{"mood": "calm"}'

    def test_delimiters_inside_strings_are_ignored(self):
        assert balance_delimiters('{"mood": "x{y]"') == '{"mood": "x{y]"}'

    def test_balanced_text_is_unchanged(self):
        text = '{"a": [1, 2], "b": {"c": "}"}}'
        assert balance_delimiters(text) == text


def test_truncated_string_value_is_repaired():
    outcome = parse_analysis_detailed('{"analysis": {"aura": "soft", "mood": "calm and bri')
    assert outcome.tier == RecoveryTier.REPAIRED
    assert outcome.record.analysis.aura == "soft"
    assert outcome.record.analysis.mood.startswith("calm and bri")


def test_remove_trailing_commas():
    assert remove_trailing_commas('{"a": [1, 2, ], "b": 3 ,}') == '{"a": [1, 2 ], "b": 3 }'


def test_repair_structure_runs_every_step():
    raw = '{"tra\\its": {"sexy": 7,}, "analysis": {"mood": "a "b" c'
    repaired = repair_structure(raw)
    assert json.loads(repaired) == {"traits": {"sexy": 7}, "analysis": {"mood": 'a "b" c'}}
