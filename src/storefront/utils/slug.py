"""Slug generation utilities."""

import random
import re

from slugify import smart_truncate

# Vietnamese diacritic variants folded onto their base Latin letter.
_DIACRITIC_FAMILIES: dict[str, str] = {
    "a": "áàảãạăắằẳẵặâấầẩẫậ",
    "e": "éèẻẽẹêếềểễệ",
    "i": "íìỉĩị",
    "o": "óòỏõọôốồổỗộơớờởỡợ",
    "u": "úùủũụưứừửữự",
    "y": "ýỳỷỹỵ",
    "d": "đ",
}

_DIACRITIC_TABLE = str.maketrans(
    {char: base for base, chars in _DIACRITIC_FAMILIES.items() for char in chars}
)

_DISALLOWED_CHARS = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE_RUN = re.compile(r"\s+")
_HYPHEN_RUN = re.compile(r"-+")

RANDOM_SUFFIX_MIN = 100000
RANDOM_SUFFIX_MAX = 999999


def normalize(text: str) -> str:
    """
    Convert free-form text into a URL-safe slug.

    Args:
        text: The text to convert (Vietnamese diacritics are folded to ASCII)

    Returns:
        A lowercase, hyphenated slug. Empty if the text has no letters or digits.

    Examples:
        >>> normalize("Áo Thun Đẹp")
        'ao-thun-dep'
        >>> normalize("  Hello   World!!  ")
        'hello-world'
    """
    slug = text.lower().strip().translate(_DIACRITIC_TABLE)
    slug = _DISALLOWED_CHARS.sub("", slug)
    slug = _WHITESPACE_RUN.sub("-", slug)
    slug = _HYPHEN_RUN.sub("-", slug)
    return slug.strip("-")


def with_random_suffix(text: str) -> str:
    """
    Create a slug with a random 6-digit suffix.

    The suffix only makes collisions unlikely; callers still rely on the
    unique index on the slug column and retry on conflict.

    Examples:
        >>> with_random_suffix("Áo Thun")  # doctest: +SKIP
        'ao-thun-482913'
    """
    suffix = random.randint(RANDOM_SUFFIX_MIN, RANDOM_SUFFIX_MAX)
    return f"{normalize(text)}-{suffix}"


def with_suffix(text: str, suffix: int | str) -> str:
    """
    Create a slug with a caller-supplied suffix, e.g. a primary key.

    Examples:
        >>> with_suffix("Áo Thun", 123)
        'ao-thun-123'
    """
    return f"{normalize(text)}-{suffix}"


def truncate(slug: str, max_length: int) -> str:
    """
    Shorten a slug on a hyphen boundary, keeping word order.

    A single word longer than ``max_length`` is cut mid-word.
    """
    return smart_truncate(
        slug, max_length=max_length, word_boundary=True, separator="-", save_order=True
    )


def with_bounded_suffix(text: str, suffix: int | str, max_length: int) -> str:
    """
    Create a suffixed slug no longer than ``max_length``.

    Only the base slug is shortened; the suffix is always kept whole.

    Examples:
        >>> with_bounded_suffix("Áo Thun Đẹp Mùa Hè", 42, 14)
        'ao-thun-dep-42'
    """
    reserved = len(str(suffix)) + 1
    return with_suffix(truncate(normalize(text), max_length - reserved), suffix)
