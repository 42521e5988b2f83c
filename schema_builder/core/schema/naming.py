"""
Naming Utilities

Presentation helpers for turning class and column names into
identifiers and human-readable labels.
"""

import re


# Plural forms that no suffix rule produces
IRREGULAR_PLURALS = {
    "person": "people",
    "man": "men",
    "woman": "women",
    "child": "children",
    "mouse": "mice",
    "goose": "geese",
    "foot": "feet",
    "tooth": "teeth",
    "ox": "oxen",
}

UNCOUNTABLE_WORDS = frozenset({
    "equipment",
    "information",
    "rice",
    "money",
    "species",
    "series",
    "fish",
    "sheep",
    "news",
    "metadata",
})

# (pattern, replacement), first match wins
PLURAL_RULES = [
    (re.compile(r"(quiz)$", re.I), r"\1zes"),
    (re.compile(r"(matr|vert|ind)(?:ix|ex)$", re.I), r"\1ices"),
    (re.compile(r"(alias|status|bus|campus)$", re.I), r"\1es"),
    (re.compile(r"(x|ch|ss|sh|z)$", re.I), r"\1es"),
    (re.compile(r"([^aeiouy]|qu)y$", re.I), r"\1ies"),
    (re.compile(r"(?:([^f])fe|([lr])f)$", re.I), r"\1\2ves"),
    (re.compile(r"sis$", re.I), "ses"),
    (re.compile(r"([ti])um$", re.I), r"\1a"),
    (re.compile(r"s$", re.I), "s"),
    (re.compile(r"$"), "s"),
]

_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_WORD_BOUNDARY = re.compile(r"([a-z\d])([A-Z])")


def underscore(name: str) -> str:
    """
    Convert a CamelCase class name to snake_case.

    Namespace separators ("::" or ".") become "/".

        >>> underscore("BlogPost")
        'blog_post'
        >>> underscore("HTTPRequest")
        'http_request'
    """
    word = name.replace("::", "/").replace(".", "/")
    word = _ACRONYM_BOUNDARY.sub(r"\1_\2", word)
    word = _WORD_BOUNDARY.sub(r"\1_\2", word)
    return word.replace("-", "_").lower()


def humanize(name: str) -> str:
    """
    Turn a snake_case name into a label: "created_at" -> "Created at".

    A trailing "_id" is dropped, so "owner_id" -> "Owner".
    """
    word = re.sub(r"_id$", "", name)
    word = word.replace("_", " ").strip()
    if not word:
        return name
    return word[0].upper() + word[1:].lower()


def titleize(name: str) -> str:
    """Capitalize every word: "BlogPost" -> "Blog Post"."""
    words = humanize(underscore(name).replace("/", " ")).split()
    return " ".join(w[0].upper() + w[1:] for w in words)


def pluralize(phrase: str) -> str:
    """Pluralize the last word of a phrase, preserving its leading case."""
    head, _, word = phrase.rpartition(" ")
    if not word or word.lower() in UNCOUNTABLE_WORDS:
        return phrase

    lower = word.lower()
    if lower in IRREGULAR_PLURALS:
        plural = IRREGULAR_PLURALS[lower]
        plural = word[0] + plural[1:] if word[0].isupper() else plural
    else:
        plural = word
        for pattern, replacement in PLURAL_RULES:
            if pattern.search(word):
                plural = pattern.sub(replacement, word, count=1)
                break

    return f"{head} {plural}" if head else plural


def slugify(name: str) -> str:
    """URL-safe identifier for a model name: "Admin::User" -> "admin_user"."""
    return re.sub(r"[^a-z0-9_]+", "_", underscore(name)).strip("_")
