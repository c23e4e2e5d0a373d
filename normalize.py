"""Comparable keys for free-text airport names and country names."""

import re

_NAME_TOKENS = re.compile(r"international|airport|air base|airfield|aerodrome", re.IGNORECASE)
# Longest phrase first so "democratic republic of" is not cut down to "democratic"
_COUNTRY_PHRASES = re.compile(
    r"people's democratic republic of|democratic republic of|republic of|kingdom of",
    re.IGNORECASE,
)
_NON_ALNUM = re.compile(r"[^a-z0-9\s]")
_WHITESPACE = re.compile(r"\s+")


def _normalize_once(text: str, strip_patterns: tuple[re.Pattern, ...]) -> str:
    text = text.lower()
    for pattern in strip_patterns:
        text = pattern.sub("", text)
    text = _NON_ALNUM.sub("", text)
    return _WHITESPACE.sub(" ", text).strip()


def _normalize(text, strip_patterns: tuple[re.Pattern, ...]) -> str:
    if not text or not isinstance(text, str):
        return ""
    # Removing punctuation can expose a new strip token ("air.port"); repeat until stable.
    key = _normalize_once(text, strip_patterns)
    while True:
        again = _normalize_once(key, strip_patterns)
        if again == key:
            return key
        key = again


def normalize_name(text: str | None) -> str:
    """
    Lowercase, drop generic airport words, keep only ASCII letters, digits and
    single spaces. "Los Angeles International Airport" -> "los angeles".
    """
    return _normalize(text, (_NAME_TOKENS,))


def normalize_country(text: str | None) -> str:
    """Like normalize_name, also dropping "republic of" style prefixes."""
    return _normalize(text, (_COUNTRY_PHRASES, _NAME_TOKENS))
