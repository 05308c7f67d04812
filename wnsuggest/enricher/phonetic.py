"""
Phonetic encoders for the optional phonetic output feature.

Encoders are plain callables registered by name. ``soundex`` is built in.
"""

import logging
from typing import Callable, Dict, List

logger = logging.getLogger(__name__)

PhoneticEncoder = Callable[[str], str]

_SOUNDEX_CODES = {
    **dict.fromkeys("BFPV", "1"),
    **dict.fromkeys("CGJKQSXZ", "2"),
    **dict.fromkeys("DT", "3"),
    "L": "4",
    **dict.fromkeys("MN", "5"),
    "R": "6",
}


def soundex(term: str) -> str:
    """
    American Soundex code of a term, e.g. ``soundex("Robert") == "R163"``.

    Non-letters are ignored; a term without letters encodes to "".
    Consonants separated only by H or W collapse into one code.
    """
    letters = [c for c in term.upper() if "A" <= c <= "Z"]
    if not letters:
        return ""

    code = letters[0]
    previous = _SOUNDEX_CODES.get(letters[0], "")
    for letter in letters[1:]:
        if letter in "HW":
            continue
        digit = _SOUNDEX_CODES.get(letter, "")
        if digit and digit != previous:
            code += digit
            if len(code) == 4:
                break
        previous = digit
    return code.ljust(4, "0")


_encoders: Dict[str, PhoneticEncoder] = {"soundex": soundex}


def register_encoder(name: str, encoder: PhoneticEncoder):
    """Make an encoder available under a configuration name."""
    if not callable(encoder):
        raise ValueError(f"Phonetic encoder {name!r} is not callable")
    if name in _encoders:
        logger.warning("Replacing phonetic encoder %r", name)
    _encoders[name] = encoder


def get_encoder(name: str) -> PhoneticEncoder:
    try:
        return _encoders[name]
    except KeyError:
        raise ValueError(
            f"Unknown phonetic encoding {name!r}; available: {available_encoders()}"
        ) from None


def available_encoders() -> List[str]:
    return sorted(_encoders)
