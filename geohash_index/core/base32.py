"""
Conversion between integers and the geohash base 32 alphabet.

The alphabet drops a, i, l and o to avoid confusion with digits.
"""
from geohash_index.utils.exceptions import (
    InvalidAlphabetCharacterError,
    InvalidHashError,
    InvalidLengthError,
)


BASE32 = "0123456789bcdefghjkmnpqrstuvwxyz"

_CHAR_INDEX = {char: idx for idx, char in enumerate(BASE32)}


def char_from_index(index: int) -> str:
    """Return the alphabet character for a 5-bit group (0-31)."""
    if not 0 <= index < len(BASE32):
        raise InvalidAlphabetCharacterError("base32 index must be in [0, 31]", value=index)
    return BASE32[index]


def index_from_char(char: str) -> int:
    """
    Return the 5-bit group of an alphabet character.

    Raises:
        InvalidAlphabetCharacterError: If ``char`` is not one of the 32 symbols
    """
    try:
        return _CHAR_INDEX[char]
    except (KeyError, TypeError):
        raise InvalidAlphabetCharacterError("not a base32 character", value=char) from None


def encode_signed_long(value: int, length: int = 12) -> str:
    """
    Encode an integer in base 32, left padded with '0' to ``length``.

    Digits are produced from the negated magnitude so positive and negative
    inputs share one path; a '-' is prefixed for negative values.

    Args:
        value: Integer to encode
        length: Minimum number of digits

    Returns:
        Base 32 string

    Raises:
        InvalidLengthError: If length < 1

    Example:
        >>> encode_signed_long(33, 3)
        '011'
        >>> encode_signed_long(-33, 3)
        '-011'
    """
    if length < 1:
        raise InvalidLengthError("length must be greater than zero", value=length)

    negative = value < 0
    if not negative:
        value = -value

    digits = []
    while value <= -32:
        digits.append(BASE32[-value % 32])
        value = -(-value // 32)
    digits.append(BASE32[-value])

    result = ''.join(reversed(digits)).rjust(length, '0')
    if negative:
        return '-' + result
    return result


def decode_signed_long(text: str) -> int:
    """
    Decode a base 32 string produced by :func:`encode_signed_long`.

    Raises:
        InvalidHashError: If the string has no digits
        InvalidAlphabetCharacterError: If a digit is outside the alphabet
    """
    negative = text.startswith('-')
    digits = text[1:] if negative else text
    if not digits:
        raise InvalidHashError("base32 string has no digits", value=text)

    result = 0
    for char in digits:
        result = result * 32 + index_from_char(char)

    return -result if negative else result
