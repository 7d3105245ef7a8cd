"""Utility functions package."""

from storefront.utils.slug import (
    normalize,
    truncate,
    with_bounded_suffix,
    with_random_suffix,
    with_suffix,
)

__all__ = ["normalize", "truncate", "with_bounded_suffix", "with_random_suffix", "with_suffix"]
