"""
Validator Normalizer

Maps validation rules declared on a column to canonical constraint
records. Rule kinds without a canonical mapping are dropped.
"""

import re
from typing import Any, Callable, Iterable

from schema_builder.core.schema.registry import ValidatorInfo, ValidatorKind


# Python regex flag -> JavaScript flag letter
JS_REGEX_FLAGS = (
    (re.IGNORECASE, "i"),
    (re.MULTILINE, "m"),
    (re.DOTALL, "s"),
)

# String anchors; under the "m" flag JavaScript ^/$ match at every line
JS_STRING_ANCHORS = (
    (re.compile(r"(?<!\\)\\A"), "^"),
    (re.compile(r"(?<!\\)\\Z"), "$"),
)
JS_MULTILINE_STRING_ANCHORS = (
    (re.compile(r"(?<!\\)\\A"), r"(?<![\\s\\S])"),
    (re.compile(r"(?<!\\)\\Z"), r"(?![\\s\\S])"),
)

# Python-only syntax -> JavaScript equivalent
JS_REGEX_SYNTAX = (
    (re.compile(r"\(\?P<"), "(?<"),
    (re.compile(r"\(\?P=(\w+)\)"), r"\\k<\1>"),
)


def pattern_to_js(pattern: str | re.Pattern, flags: int = 0) -> dict[str, str]:
    """
    Render a regex as a {source, options} pair usable from JavaScript.

    Args:
        pattern: Pattern text or compiled pattern
        flags: Extra re flags when `pattern` is text

    Returns:
        Dict with "source" and "options" keys
    """
    if isinstance(pattern, re.Pattern):
        flags |= pattern.flags
        source = pattern.pattern
    else:
        source = pattern

    anchors = JS_MULTILINE_STRING_ANCHORS if flags & re.MULTILINE else JS_STRING_ANCHORS
    for syntax, replacement in (*anchors, *JS_REGEX_SYNTAX):
        source = syntax.sub(replacement, source)

    options = "".join(letter for flag, letter in JS_REGEX_FLAGS if flags & flag)
    return {"source": source, "options": options}


def _inclusion(options: dict[str, Any]) -> dict[str, Any]:
    values = options.get("in", options.get("within"))
    return {"includes": values}


def _presence(options: dict[str, Any]) -> dict[str, Any]:
    return {"required": True}


def _format(options: dict[str, Any]) -> dict[str, Any]:
    return {"format": pattern_to_js(options.get("with", ""), options.get("flags", 0))}


def _length(options: dict[str, Any]) -> dict[str, Any]:
    return {"length": dict(options)}


def _numericality(options: dict[str, Any]) -> dict[str, Any]:
    return {"numeric": dict(options)}


CONSTRAINT_BUILDERS: dict[str, Callable[[dict[str, Any]], dict[str, Any]]] = {
    ValidatorKind.INCLUSION.value: _inclusion,
    ValidatorKind.PRESENCE.value: _presence,
    ValidatorKind.FORMAT.value: _format,
    ValidatorKind.LENGTH.value: _length,
    ValidatorKind.NUMERICALITY.value: _numericality,
}


class ValidatorNormalizer:
    """
    Converts declared validation rules to constraint records.

    Example:
        >>> normalizer = ValidatorNormalizer()
        >>> normalizer.normalize([ValidatorInfo("numericality", {"greater_than": 0})])
        [{'numeric': {'greater_than': 0}}]
    """

    def normalize(
        self,
        validators: Iterable[ValidatorInfo],
        on_skip: Callable[[ValidatorInfo], None] | None = None,
    ) -> list[dict[str, Any]]:
        """
        Normalize rules in declared order, dropping unrecognized kinds.

        Args:
            validators: Declared rules for one column
            on_skip: Optional callback for rules with no canonical mapping

        Returns:
            List of constraint records
        """
        records = []
        for validator in validators:
            record = self.normalize_one(validator)
            if record is not None:
                records.append(record)
            elif on_skip:
                on_skip(validator)
        return records

    def normalize_one(self, validator: ValidatorInfo) -> dict[str, Any] | None:
        """Normalize a single rule, or return None if its kind is unknown."""
        kind = getattr(validator.kind, "value", validator.kind)
        builder = CONSTRAINT_BUILDERS.get(kind)
        if builder is None:
            return None
        return builder(validator.options)
