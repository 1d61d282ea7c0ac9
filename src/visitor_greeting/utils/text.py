"""Text helpers for model output."""

import regex

_KEYCAP = "\u20e3"

# Extended grapheme cluster (UAX #29)
_GRAPHEME = regex.compile(r"\X")


def first_grapheme(text: str) -> str:
    """Return the first user-perceived character of ``text``.

    Emoji sequences (variation selectors, skin tones, ZWJ sequences,
    keycaps, flag pairs) count as one character.
    """
    match = _GRAPHEME.match(text)
    return match.group() if match else ""


def normalize_emoji(value: object) -> str:
    """Reduce a model-supplied emoji field to at most one emoji.

    Non-strings, blanks and values whose first grapheme is a letter or
    digit (the model wrote words instead of an emoji) become "".
    """
    if not isinstance(value, str):
        return ""
    value = value.strip()
    if not value:
        return ""

    grapheme = first_grapheme(value)
    if grapheme[0].isalnum() and _KEYCAP not in grapheme:
        return ""
    return grapheme
