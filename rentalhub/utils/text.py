# rentalhub/utils/text.py
import re

# Letter runs or digit runs; anything else separates words
_WORD_RE = re.compile(r"[^\W\d_]+|\d+")
_SENTENCE_BREAK_RE = re.compile(r"(?<=[.!?])\s+")


def capitalize(value: str) -> str:
    """First character upper, the rest lower."""
    return value[:1].upper() + value[1:].lower()


def start_case(value) -> str:
    """Property names are stored this way so "SUNSET villas" and
    "sunset-villas" collide on the per-landlord uniqueness check.

        >>> start_case("  sunset   VILLAS-block2 ")
        'Sunset Villas Block 2'
    """
    words = _WORD_RE.findall(str(value or "").lower())
    return " ".join(capitalize(w) for w in words)


def to_sentence_case(value) -> str:
    """
        >>> to_sentence_case("A GREAT place. NEAR the lake!  quiet")
        'A great place. Near the lake! Quiet'
    """
    text = str(value or "").lower().strip()
    if not text:
        return ""
    return " ".join(capitalize(s) for s in _SENTENCE_BREAK_RE.split(text))
