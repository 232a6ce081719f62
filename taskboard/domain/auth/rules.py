from __future__ import annotations

import unicodedata
from typing import Callable

MIN_USERNAME_LENGTH = 6
MIN_PASSWORD_LENGTH = 8
PASSWORD_SPECIAL_CHARS = frozenset("$@!")
_ASCII_DIGITS = frozenset("0123456789")
# letter numbers and the vowel signs of abugidas are alphabetic too
_ALPHABETIC_MARK_CATEGORIES = frozenset(("Nl", "Mn", "Mc"))


def _is_ascii_digit(c: str) -> bool:
    return c in _ASCII_DIGITS


def _is_alphabetic(c: str) -> bool:
    return c.isalpha() or unicodedata.category(c) in _ALPHABETIC_MARK_CATEGORIES


def _is_allowed_username_char(c: str) -> bool:
    return _is_alphabetic(c) or _is_ascii_digit(c) or c == "_"


def _is_allowed_password_char(c: str) -> bool:
    return _is_alphabetic(c) or _is_ascii_digit(c) or c in PASSWORD_SPECIAL_CHARS


def _any_char(s: str, pred: Callable[[str], bool]) -> bool:
    return any(pred(c) for c in s)


def _encoded_length(s: str) -> int:
    return len(s.encode("utf-8"))


def validate_username(username: str) -> bool:
    """
    At least 6 bytes of UTF-8; letters (any script), ASCII digits and underscores only.

    >>> validate_username("user123465")
    True
    >>> validate_username("m")
    False
    """
    return _encoded_length(username) >= MIN_USERNAME_LENGTH and all(
        _is_allowed_username_char(c) for c in username
    )


def validate_password(password: str) -> bool:
    """
    At least 8 bytes of UTF-8 drawn from letters, ASCII digits and `$@!`, with at
    least one lowercase letter, one uppercase letter, one digit and one of `$@!`.
    """
    return (
        _encoded_length(password) >= MIN_PASSWORD_LENGTH
        and all(_is_allowed_password_char(c) for c in password)
        and _any_char(password, str.islower)
        and _any_char(password, str.isupper)
        and _any_char(password, _is_ascii_digit)
        and _any_char(password, lambda c: c in PASSWORD_SPECIAL_CHARS)
    )
