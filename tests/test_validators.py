"""
Tests for the ValidatorNormalizer.
"""

import re

import pytest

from schema_builder.core.schema.registry import ValidatorInfo, ValidatorKind
from schema_builder.core.schema.validators import ValidatorNormalizer, pattern_to_js


class TestValidatorNormalizer:
    """Tests for ValidatorNormalizer class."""

    @pytest.fixture
    def normalizer(self):
        return ValidatorNormalizer()

    def test_inclusion(self, normalizer):
        """Allowed values are kept as declared."""
        records = normalizer.normalize([
            ValidatorInfo("inclusion", {"in": ["draft", "published"]}),
        ])
        assert records == [{"includes": ["draft", "published"]}]

    def test_inclusion_within(self, normalizer):
        records = normalizer.normalize([ValidatorInfo("inclusion", {"within": range(1, 6)})])
        assert records == [{"includes": range(1, 6)}]

    def test_presence(self, normalizer):
        records = normalizer.normalize([ValidatorInfo("presence")])
        assert records == [{"required": True}]

    def test_format(self, normalizer):
        records = normalizer.normalize([
            ValidatorInfo("format", {"with": re.compile(r"\A[a-z]+\Z", re.IGNORECASE)}),
        ])
        assert records == [{"format": {"source": "^[a-z]+$", "options": "i"}}]

    def test_length_options_verbatim(self, normalizer):
        records = normalizer.normalize([
            ValidatorInfo("length", {"minimum": 2, "maximum": 255}),
        ])
        assert records == [{"length": {"minimum": 2, "maximum": 255}}]

    def test_numericality_options_verbatim(self, normalizer):
        records = normalizer.normalize([
            ValidatorInfo(ValidatorKind.NUMERICALITY, {"greater_than": 0}),
        ])
        assert records == [{"numeric": {"greater_than": 0}}]

    def test_unknown_kinds_dropped(self, normalizer):
        """Rules without a canonical mapping are silently dropped."""
        records = normalizer.normalize([
            ValidatorInfo("uniqueness", {"scope": "account_id"}),
            ValidatorInfo("presence"),
            ValidatorInfo("confirmation"),
        ])
        assert records == [{"required": True}]

    def test_order_preserved(self, normalizer):
        records = normalizer.normalize([
            ValidatorInfo("length", {"maximum": 10}),
            ValidatorInfo("presence"),
        ])
        assert [next(iter(r)) for r in records] == ["length", "required"]

    def test_on_skip_callback(self, normalizer):
        skipped = []
        normalizer.normalize(
            [ValidatorInfo("uniqueness"), ValidatorInfo("presence")],
            on_skip=skipped.append,
        )
        assert [v.kind for v in skipped] == ["uniqueness"]

    def test_normalize_one_unknown(self, normalizer):
        assert normalizer.normalize_one(ValidatorInfo("acceptance")) is None


class TestPatternToJs:
    """Tests for regex conversion."""

    def test_plain_string(self):
        assert pattern_to_js(r"^\d{5}$") == {"source": r"^\d{5}$", "options": ""}

    def test_flags(self):
        pattern = re.compile(r"^a.b$", re.MULTILINE | re.DOTALL | re.IGNORECASE)
        assert pattern_to_js(pattern)["options"] == "ims"

    def test_named_groups(self):
        result = pattern_to_js(r"(?P<year>\d{4})-(?P=year)")
        assert result["source"] == r"(?<year>\d{4})-\k<year>"

    def test_escaped_backslash_kept(self):
        """An escaped backslash before A is not an anchor."""
        assert pattern_to_js(r"\\A")["source"] == r"\\A"

    def test_string_anchors_kept_under_multiline(self):
        """With "m", ^ and $ match per line, so string anchors use lookarounds."""
        result = pattern_to_js(re.compile(r"\Aabc\Z|^x$", re.MULTILINE))
        assert result == {
            "source": r"(?<![\s\S])abc(?![\s\S])|^x$",
            "options": "m",
        }
