"""
Shared naming types and scanning helpers.

Every convention parser is built from small readers that take the remaining
text and return ``(rest, value)`` on success or ``None`` on failure. Readers
never mutate anything, so a failed alternative can simply be abandoned and
the next one tried on the same text.
"""

from enum import Enum
from typing import Any, Callable, Iterator, List, Optional, Tuple, TypeVar

T = TypeVar('T')

ParseResult = Optional[Tuple[str, T]]
Reader = Callable[[str], ParseResult]


class NamingConvention(Enum):
    """File naming conventions understood by the parsers."""
    UNKNOWN = "Unknown"
    TOSEC = "TOSEC"
    NOINTRO = "No-Intro"
    GOODTOOLS = "GoodTools"

    @classmethod
    def from_name(cls, name: str) -> 'NamingConvention':
        """Look up a convention by a loose, case-insensitive name."""
        key = name.strip().lower().replace('-', '').replace('_', '')
        for convention in cls:
            if convention.value.lower().replace('-', '') == key:
                return convention
        raise ValueError(f"Unknown naming convention: {name}")


class FlagType(Enum):
    """Delimiters of a free-form flag."""
    PARENTHESIZED = "paren"
    BRACKETED = "bracket"


class NamingError(Exception):
    """Base class for file name parsing errors."""
    pass


class ParseError(NamingError):
    """A name could not be tokenized in the requested convention."""

    def __init__(self, convention: NamingConvention, name: str):
        super().__init__(
            f'The name "{name}" could not be parsed properly in the '
            f'{convention.value} naming convention'
        )
        self.convention = convention
        self.name = name


class TokenizedName:
    """
    Ordered token stream produced by one of the convention parsers.

    Subclasses set ``convention`` and ``title_type`` and implement ``__str__``
    to reconstruct the file name.
    """

    convention = NamingConvention.UNKNOWN
    title_type: type = type(None)

    def __init__(self, tokens=None):
        self.tokens: List[Any] = list(tokens or [])

    def __iter__(self) -> Iterator[Any]:
        return iter(self.tokens)

    def __len__(self) -> int:
        return len(self.tokens)

    def __getitem__(self, index):
        return self.tokens[index]

    def __eq__(self, other) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.tokens == other.tokens

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.tokens!r})"

    @property
    def title(self) -> Optional[str]:
        """The first Title token's text, if any."""
        for token in self.tokens:
            if isinstance(token, self.title_type):
                return token.value
        return None


# Character classes. Catalog names are matched against ASCII classes only;
# str.isdigit() and friends would accept other scripts.

def is_digit(char: str) -> bool:
    return '0' <= char <= '9'


def is_alpha(char: str) -> bool:
    return ('a' <= char <= 'z') or ('A' <= char <= 'Z')


def is_alnum(char: str) -> bool:
    return is_digit(char) or is_alpha(char)


def is_lower(char: str) -> bool:
    return 'a' <= char <= 'z'


def is_upper(char: str) -> bool:
    return 'A' <= char <= 'Z'


def tag(text: str, literal: str) -> Optional[str]:
    """Return the text after ``literal`` if the text starts with it."""
    if text.startswith(literal):
        return text[len(literal):]
    return None


def one_of_tags(text: str, literals) -> ParseResult[str]:
    """Match the first literal in ``literals`` that prefixes the text."""
    for literal in literals:
        if text.startswith(literal):
            return text[len(literal):], literal
    return None


def take_while(text: str, predicate: Callable[[str], bool],
               minimum: int = 0, maximum: Optional[int] = None) -> ParseResult[str]:
    """
    Take the longest prefix whose characters satisfy ``predicate``.

    At most ``maximum`` characters are taken; fewer than ``minimum`` is a failure.
    """
    limit = len(text) if maximum is None else min(len(text), maximum)
    end = 0
    while end < limit and predicate(text[end]):
        end += 1
    if end < minimum:
        return None
    return text[end:], text[:end]


def take_till1(text: str, stop: str) -> ParseResult[str]:
    """Take one or more characters up to (not including) any of ``stop``."""
    return take_while(text, lambda c: c not in stop, minimum=1)


def take_until(text: str, needle: str) -> ParseResult[str]:
    """Take everything before the first occurrence of ``needle``."""
    index = text.find(needle)
    if index < 0:
        return None
    return text[index:], text[:index]


def take_up_to(text: str, reader: Reader) -> Optional[Tuple[str, str, Any]]:
    """
    Find the first position at which ``reader`` succeeds.

    Returns ``(rest, front, value)`` where ``front`` is the text skipped
    before the reader matched. The position just past the end is not tried.
    """
    for index in range(len(text)):
        result = reader(text[index:])
        if result is not None:
            rest, value = result
            return rest, text[:index], value
    return None


def take_year(text: str) -> ParseResult[str]:
    """Read a 4 character year: 19 or 20 followed by two digits or X placeholders."""
    rest = tag(text, '19')
    if rest is None:
        rest = tag(text, '20')
    if rest is None:
        return None
    result = take_while(rest, lambda c: is_digit(c) or c in 'Xx', minimum=2, maximum=2)
    if result is None:
        return None
    return result[0], text[:4]


def enclosed(text: str, opening: str, closing: str, inner: Reader) -> ParseResult:
    """Run ``inner`` between an opening and closing delimiter."""
    rest = tag(text, opening)
    if rest is None:
        return None
    result = inner(rest)
    if result is None:
        return None
    rest, value = result
    rest = tag(rest, closing)
    if rest is None:
        return None
    return rest, value


def in_parens(text: str, inner: Reader) -> ParseResult:
    return enclosed(text, '(', ')', inner)


def in_brackets(text: str, inner: Reader) -> ParseResult:
    return enclosed(text, '[', ']', inner)


def exact_parens(text: str, values) -> ParseResult[str]:
    """Match a parenthesized tag whose whole content is one of ``values``."""
    for value in values:
        rest = tag(text, f'({value})')
        if rest is not None:
            return rest, value
    return None


def parens_text(text: str) -> ParseResult[str]:
    """Read ``(...)`` with non-empty content."""
    return in_parens(text, lambda rest: take_till1(rest, ')'))


def brackets_text(text: str) -> ParseResult[str]:
    """Read ``[...]`` with non-empty content."""
    return in_brackets(text, lambda rest: take_till1(rest, ']'))
