"""Naming-convention helpers used to derive prefixes and relation names."""

from __future__ import annotations

import re
from typing import Any


_CAMEL_ACRONYM = re.compile(r"([A-Z]+)([A-Z][a-z])")
_CAMEL_BOUNDARY = re.compile(r"([a-z\d])([A-Z])")
_NON_WORD = re.compile(r"[^A-Za-z0-9]+")
_REPEATED_UNDERSCORE = re.compile(r"__+")

# Last word of a snake_case or camelCase identifier.
_WORD_TAIL = re.compile(r"(?P<head>.*?)(?P<tail>[A-Z]?[a-z]+)$")

_UNCOUNTABLE = frozenset(
    {
        "data",
        "equipment",
        "feedback",
        "fish",
        "information",
        "metadata",
        "money",
        "news",
        "series",
        "sheep",
        "species",
    }
)

_IRREGULAR = {
    "child": "children",
    "foot": "feet",
    "goose": "geese",
    "knife": "knives",
    "leaf": "leaves",
    "life": "lives",
    "man": "men",
    "mouse": "mice",
    "ox": "oxen",
    "person": "people",
    "tooth": "teeth",
    "wife": "wives",
    "woman": "women",
}

_PLURAL_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"(matr|vert|ind)(ix|ex)$", re.IGNORECASE), r"\1ices"),
    (re.compile(r"sis$", re.IGNORECASE), "ses"),
    (re.compile(r"([^aeiouy])y$", re.IGNORECASE), r"\1ies"),
    (re.compile(r"(s|x|z|ch|sh)$", re.IGNORECASE), r"\1es"),
)


def snake_case(name: str) -> str:
    """Convert ``BlogPost``, ``blogPost`` or ``Blog Post`` to ``blog_post``."""
    text = _CAMEL_ACRONYM.sub(r"\1_\2", name.strip())
    text = _CAMEL_BOUNDARY.sub(r"\1_\2", text)
    text = _NON_WORD.sub("_", text)
    return _REPEATED_UNDERSCORE.sub("_", text).strip("_").lower()


def camel_case(name: str) -> str:
    """Convert ``blog_post`` or ``BlogPost`` to ``blogPost``."""
    first, *rest = snake_case(name).split("_")
    return first + "".join(part.title() for part in rest)


def pluralize(word: str) -> str:
    """Pluralize the last word of a snake_case or camelCase identifier."""
    if not word:
        return word

    match = _WORD_TAIL.match(word)
    if match is None:
        return f"{word}s"

    head, tail = match["head"], match["tail"]
    lowered = tail.lower()
    if lowered in _UNCOUNTABLE:
        return word
    if lowered in _IRREGULAR:
        plural = _IRREGULAR[lowered]
        if tail[0].isupper():
            plural = plural.capitalize()
        return head + plural

    for pattern, replacement in _PLURAL_RULES:
        if pattern.search(tail):
            return head + pattern.sub(replacement, tail)
    return f"{word}s"


def basename(kind: Any) -> str:
    """Return the short type name of an entity kind (``app.models.User`` -> ``User``)."""
    if isinstance(kind, type):
        return kind.__name__
    name = str(kind).rsplit(".", 1)[-1]
    if not name:
        msg = f"cannot derive a basename from entity kind: {kind!r}"
        raise ValueError(msg)
    return name
