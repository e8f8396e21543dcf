"""
TOSEC token types, strict normalization and name reconstruction.

Tokens appear in a ``TOSECName`` in the order they were read from the file
name. Warning tokens record deviations from the TOSEC Naming Convention and
always precede the token they are associated with; some of them (marked
lexical below) change how the following token is written back out.
"""

import sys
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, NamedTuple, Optional, Tuple

from romnames.naming.common import FlagType, NamingConvention, TokenizedName
from romnames.naming.region import Region


class WarnKind(Enum):
    """Kinds of TOSEC warnings, in sort order."""
    ZZZ_UNKNOWN = 0                   # lexical, writes "ZZZ-UNK-"
    MALFORMED_DATE_PLACEHOLDER = 1    # e.g. 19XX
    MALFORMED_DEVELOPMENT_STATUS = 2  # e.g. Beta
    UNDELIMITED_DATE = 3              # lexical, e.g. 20001231
    MISSING_DATE = 4
    MISSING_PUBLISHER = 5
    MISSING_SPACE = 6                 # lexical, retracts a space
    UNEXPECTED_SPACE = 7              # lexical, writes a space
    BY_PUBLISHER = 8                  # lexical, "by <publisher>"
    PUBLISHER_BEFORE_DATE = 9
    GOODTOOLS_REGION_CODE = 10
    VERSION_IN_FLAG = 11              # lexical, "(v1.0)"
    NOT_EOF = 12                      # lexical, the unparsed remainder


class LanguageKind(Enum):
    SINGLE = 0
    DOUBLE = 1
    COUNT = 2


class MediaPart(NamedTuple):
    """One part of a media flag such as ``Disc 1 of 2``."""
    kind: str
    number: str
    total: Optional[str] = None


DUMP_INFO_CODES = ("cr", "f", "h", "m", "p", "t", "tr", "o", "u", "v", "b", "a", "!")

_DUMP_INFO_PRIORITY = {code: index for index, code in enumerate(DUMP_INFO_CODES)}

_LAST = sys.maxsize


def _optional(value) -> tuple:
    """Sort key for optional values; None sorts first."""
    return (0, "") if value is None else (1, value)


class TOSECToken:
    """Base class of TOSEC tokens; orders tokens by canonical field order."""

    priority = _LAST

    def content_key(self) -> tuple:
        return ()

    def sort_key(self) -> tuple:
        return (self.priority, self.content_key())

    def __lt__(self, other):
        if not isinstance(other, TOSECToken):
            return NotImplemented
        return self.sort_key() < other.sort_key()


@dataclass(frozen=True)
class Title(TOSECToken):
    value: str
    priority = 0

    def content_key(self):
        return (self.value,)


@dataclass(frozen=True)
class Version(TOSECToken):
    """A version such as ``v1.0a`` or ``Rev 1``."""
    kind: str
    major: str
    minor: Optional[str] = None
    priority = 1

    def content_key(self):
        return (self.kind, self.major, _optional(self.minor))


@dataclass(frozen=True)
class Demo(TOSECToken):
    """``(demo)`` or ``(demo-kiosk)``."""
    kind: Optional[str] = None
    priority = 2

    def content_key(self):
        return (_optional(self.kind),)


@dataclass(frozen=True)
class Date(TOSECToken):
    year: str
    month: Optional[str] = None
    day: Optional[str] = None
    priority = 3

    def content_key(self):
        return (self.year, _optional(self.month), _optional(self.day))


@dataclass(frozen=True)
class Publisher(TOSECToken):
    """Publishers separated by `` - ``; None for ``(-)``."""
    names: Optional[Tuple[str, ...]] = None
    priority = 4

    def content_key(self):
        return _optional(self.names)


@dataclass(frozen=True)
class System(TOSECToken):
    value: str
    priority = 5

    def content_key(self):
        return (self.value,)


@dataclass(frozen=True)
class Video(TOSECToken):
    value: str
    priority = 6

    def content_key(self):
        return (self.value,)


@dataclass(frozen=True)
class Regions(TOSECToken):
    """
    A region flag.

    ``strs`` holds the codes as spelled in the name. GoodTools codes found in
    ``ZZZ-UNK-`` names may expand to several regions, so ``strs`` and
    ``regions`` need not line up one to one.
    """
    strs: Tuple[str, ...]
    regions: Tuple[Region, ...] = field(default=(), compare=False)
    priority = 7

    def content_key(self):
        return (self.strs,)


@dataclass(frozen=True)
class Languages(TOSECToken):
    """``(en)``, ``(en-ja)`` or ``(M6)``."""
    kind: LanguageKind
    values: Tuple[str, ...]
    priority = 8

    def content_key(self):
        return (self.kind.value, self.values)


@dataclass(frozen=True)
class Copyright(TOSECToken):
    value: str
    priority = 9

    def content_key(self):
        return (self.value,)


@dataclass(frozen=True)
class Development(TOSECToken):
    value: str
    priority = 10

    def content_key(self):
        return (self.value,)


@dataclass(frozen=True)
class Media(TOSECToken):
    parts: Tuple[MediaPart, ...]
    priority = 11

    def content_key(self):
        return tuple((p.kind, p.number, _optional(p.total)) for p in self.parts)


@dataclass(frozen=True)
class DumpInfo(TOSECToken):
    """
    A dump info flag such as ``[!]`` or ``[f1 Fix Fixer]``.

    ``[more info]`` flags are ``Flag`` tokens instead.
    """
    code: str
    number: Optional[str] = None
    info: Optional[str] = None
    priority = 13

    def content_key(self):
        return (_DUMP_INFO_PRIORITY.get(self.code, _LAST),
                _optional(self.number), _optional(self.info))


@dataclass(frozen=True)
class Flag(TOSECToken):
    flag_type: FlagType
    value: str

    @property
    def priority(self):
        return 12 if self.flag_type is FlagType.PARENTHESIZED else 14

    def content_key(self):
        return (self.value,)


@dataclass(frozen=True)
class Warn(TOSECToken):
    kind: WarnKind
    value: Optional[str] = None

    def content_key(self):
        return (self.kind.value, _optional(self.value))


def is_warning(token, kind: WarnKind) -> bool:
    return isinstance(token, Warn) and token.kind is kind


_DEVELOPMENT_SPELLINGS = {
    "Alpha": "alpha",
    "Beta": "beta",
    "Preview": "preview",
    "Pre-Release": "pre-release",
    "Proto": "proto",
    "Prototype": "proto",
}


def _strict_token(token: TOSECToken) -> TOSECToken:
    if isinstance(token, Publisher) and token.names is not None:
        return Publisher(tuple(sorted(token.names)))
    if isinstance(token, Date) and token.year == "19XX":
        return replace(token, year="19xx")
    if isinstance(token, Development) and token.value in _DEVELOPMENT_SPELLINGS:
        return Development(_DEVELOPMENT_SPELLINGS[token.value])
    if isinstance(token, Regions):
        return Regions(tuple(region.code for region in token.regions), token.regions)
    return token


class TOSECName(TokenizedName):
    """
    A TOSEC format file name.

    Parsed names are not guaranteed to conform to the convention but can be
    made to with ``into_strict``.
    """

    convention = NamingConvention.TOSEC
    title_type = Title

    def without_trailing(self) -> 'TOSECName':
        """Drop the unparsed remainder, if any."""
        return TOSECName(t for t in self.tokens if not is_warning(t, WarnKind.NOT_EOF))

    def into_strict(self) -> 'TOSECName':
        """
        Normalize to a strictly conforming name.

        Missing date and publisher get placeholders, tokens are put into
        canonical order, spellings are normalized and warnings are dropped.
        """
        tokens = [_strict_token(t) for t in self.tokens if not isinstance(t, Warn)]
        if not any(isinstance(t, Date) for t in tokens):
            tokens.append(Date("19xx"))
        if not any(isinstance(t, Publisher) for t in tokens):
            tokens.append(Publisher(None))
        tokens.sort(key=TOSECToken.sort_key)
        return TOSECName(tokens)

    def __str__(self) -> str:
        return render_tokens(self.tokens).strip()


class TOSECMultiSetName:
    """
    A multi-image set such as ``A (1987)(X) & B (1987)(Y)-(PD)``.

    Each name keeps its own tokens; flags after the final ``-`` are shared.
    """

    def __init__(self, names: List[List[TOSECToken]], globals_: List[TOSECToken]):
        self.names = [list(tokens) for tokens in names]
        self.globals = list(globals_)

    def __len__(self) -> int:
        return len(self.names)

    def __eq__(self, other) -> bool:
        if not isinstance(other, TOSECMultiSetName):
            return NotImplemented
        return self.names == other.names and self.globals == other.globals

    def __repr__(self) -> str:
        return f"TOSECMultiSetName({self.names!r}, {self.globals!r})"

    def get_single(self, index: int) -> Optional[TOSECName]:
        """Strict name of the ``index``th image with the shared flags applied."""
        if not 0 <= index < len(self.names):
            return None
        return TOSECName(self.names[index] + self.globals).into_strict()

    def __str__(self) -> str:
        names = ' & '.join(render_tokens(tokens).rstrip() for tokens in self.names)
        if self.globals:
            names = f"{names}-{render_tokens(self.globals)}"
        return names.strip()


def _previous(tokens, index):
    return tokens[index - 1] if index > 0 else None


def render_tokens(tokens) -> str:
    """Write tokens back out in TOSEC syntax, without trimming."""
    buf: List[str] = []
    for index, token in enumerate(tokens):
        previous = _previous(tokens, index)

        if isinstance(token, Title):
            buf.append(f"{token.value} ")
        elif isinstance(token, Version):
            text = token.kind + (" " if token.kind == "Rev" else "") + token.major
            if token.minor is not None:
                text += f".{token.minor}"
            if is_warning(previous, WarnKind.VERSION_IN_FLAG):
                text = f"({text})"
            buf.append(f"{text} ")
        elif isinstance(token, Demo):
            suffix = f"-{token.kind}" if token.kind is not None else ""
            buf.append(f"(demo{suffix}) ")
        elif isinstance(token, Date):
            if is_warning(previous, WarnKind.UNDELIMITED_DATE):
                buf.append(f"({previous.value})")
            else:
                parts = [p for p in (token.year, token.month, token.day) if p is not None]
                buf.append(f"({'-'.join(parts)})")
        elif isinstance(token, Publisher):
            names = ' - '.join(token.names) if token.names is not None else '-'
            if is_warning(previous, WarnKind.BY_PUBLISHER):
                buf.append(f"by {names} ")
            else:
                buf.append(f"({names})")
        elif isinstance(token, (System, Video, Copyright, Development)):
            buf.append(f"({token.value})")
        elif isinstance(token, Regions):
            buf.append(f"({'-'.join(token.strs)})")
        elif isinstance(token, Languages):
            if token.kind is LanguageKind.COUNT:
                buf.append(f"(M{token.values[0]})")
            else:
                buf.append(f"({'-'.join(token.values)})")
        elif isinstance(token, DumpInfo):
            text = token.code + (token.number or "")
            if token.info is not None:
                text += f" {token.info}"
            buf.append(f"[{text}]")
        elif isinstance(token, Media):
            parts = []
            for part in token.parts:
                text = f"{part.kind} {part.number}"
                if part.total is not None:
                    text += f" of {part.total}"
                parts.append(text)
            buf.append(f"({' '.join(parts)})")
        elif isinstance(token, Flag):
            if token.flag_type is FlagType.PARENTHESIZED:
                buf.append(f"({token.value})")
            else:
                buf.append(f"[{token.value}]")
        elif isinstance(token, Warn):
            if token.kind is WarnKind.ZZZ_UNKNOWN:
                buf.append("ZZZ-UNK-")
            elif token.kind is WarnKind.MISSING_SPACE:
                if buf and buf[-1].endswith(" "):
                    buf[-1] = buf[-1][:-1]
            elif token.kind is WarnKind.UNEXPECTED_SPACE:
                buf.append(" ")
            elif token.kind is WarnKind.NOT_EOF:
                buf.append(token.value)
    return ''.join(buf)
