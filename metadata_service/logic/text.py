"""String helpers used to widen and loosen game name matching."""
import re
import unicodedata

_COMBINING_MARKS = re.compile(r"[\u0300-\u036f]")
_NON_ASCII = re.compile(r"[^\x00-\x7f]")

_ROMAN_NUMERALS = (
    (1000, "M"),
    (900, "CM"),
    (500, "D"),
    (400, "CD"),
    (100, "C"),
    (90, "XC"),
    (50, "L"),
    (40, "XL"),
    (10, "X"),
    (9, "IX"),
    (5, "V"),
    (4, "IV"),
    (1, "I"),
)


def to_ascii(text: str) -> str:
    """Strip diacritics, then drop anything left outside ASCII. 'Pokémon' -> 'Pokemon'."""
    decomposed = unicodedata.normalize("NFD", text)
    return _NON_ASCII.sub("", _COMBINING_MARKS.sub("", decomposed))


def to_roman(number: int) -> str:
    """Greedy subtractive Roman numeral. Zero gives an empty string."""
    result = []
    for value, symbol in _ROMAN_NUMERALS:
        count, number = divmod(number, value)
        result.append(symbol * count)
    return "".join(result)
