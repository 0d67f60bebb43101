"""Quote-aware splitting of tag headers.

A tag header is the text between ``<`` and ``>``. Splitting it on spaces
would break ``name="a b"`` apart, so double-quoted runs are kept whole.
There is no escaping of quotes inside quotes, and an unterminated quote
simply runs to the end of the text.
"""

from typing import Iterator, Tuple

QUOTE = '"'


def iter_unquoted(
    text: str, separators: str = " ", base: int = 0
) -> Iterator[Tuple[int, str]]:
    """Yield ``(offset, token)`` pairs for ``text`` split outside quotes.

    Args:
        text: Text to split
        separators: Every character in this string separates tokens
        base: Offset added to each reported token position

    Consecutive separators produce empty tokens, mirroring ``str.split``
    with an explicit separator.
    """
    start = 0
    in_quotes = False
    for index, char in enumerate(text):
        if char == QUOTE:
            in_quotes = not in_quotes
        elif not in_quotes and char in separators:
            yield base + start, text[start:index]
            start = index + 1
    yield base + start, text[start:]


def split_unquoted(text: str, separators: str = " ") -> Iterator[str]:
    """Lazily split ``text`` on ``separators``, keeping quoted runs intact.

    >>> list(split_unquoted('tag attr="a b"'))
    ['tag', 'attr="a b"']
    """
    for _, token in iter_unquoted(text, separators):
        yield token
