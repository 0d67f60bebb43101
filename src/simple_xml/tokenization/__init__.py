"""Tag header tokenization for simple-xml."""

from .splitter import iter_unquoted, split_unquoted

__all__ = [
    "iter_unquoted",
    "split_unquoted",
]
