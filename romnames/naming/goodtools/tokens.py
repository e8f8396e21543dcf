"""GoodTools token types and name reconstruction."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from romnames.naming.common import FlagType, NamingConvention, TokenizedName
from romnames.naming.region import Region


class TranslationStatus(Enum):
    RECENT = "+"
    OUTDATED = "-"


@dataclass(frozen=True)
class Title:
    value: str


@dataclass(frozen=True)
class Regions:
    strs: Tuple[str, ...]
    regions: Tuple[Region, ...] = field(default=(), compare=False)


@dataclass(frozen=True)
class Year:
    value: str


@dataclass(frozen=True)
class MultiLanguage:
    """``(M3)``"""
    count: str


@dataclass(frozen=True)
class Translation:
    """``[T+Eng]`` or ``[T-Fre]``."""
    status: TranslationStatus
    value: str


@dataclass(frozen=True)
class Version:
    """
    A version flag.

    ``prefix`` is the literal opening (``V``, ``V ``, ``V_`` or ``REV``), so
    ``(V 1502)`` and ``(V1502)`` stay distinguishable.
    """
    prefix: str
    major: str
    minor: Optional[str] = None


@dataclass(frozen=True)
class Volume:
    value: str


@dataclass(frozen=True)
class NInOne:
    """A compilation flag such as ``(4-in-1)``."""
    items: Tuple[str, ...]
    separator: Optional[str] = None


@dataclass(frozen=True)
class DumpCode:
    """
    A dump code such as ``[!]``, ``[a1]``, ``[h2IR00]`` or ``[b02-Unknown Song 2]``.

    Arguments after ``+`` may start with a number, kept in ``argnum``.
    """
    code: str
    number: Optional[str] = None
    kind: Optional[str] = None
    separator: Optional[str] = None
    argnum: Optional[str] = None
    args: Optional[str] = None


@dataclass(frozen=True)
class GameHack:
    """``(Hack)`` or ``(SMB1 Hack)``."""
    game: Optional[str] = None


@dataclass(frozen=True)
class Media:
    kind: str
    number: str
    total: Optional[str] = None


@dataclass(frozen=True)
class Flag:
    flag_type: FlagType
    value: str


def is_bracketed(token) -> bool:
    if isinstance(token, (Translation, DumpCode)):
        return True
    return isinstance(token, Flag) and token.flag_type is FlagType.BRACKETED


def _version_separator(major: str) -> str:
    if major == "Final":
        return "_"
    if major == "WIP":
        return ""
    return "."


class GoodToolsName(TokenizedName):
    """A GoodTools format file name."""

    convention = NamingConvention.GOODTOOLS
    title_type = Title

    def __str__(self) -> str:
        buf = []
        previous = None
        for token in self.tokens:
            # Adjacent bracket groups are written without a space between them.
            if is_bracketed(token) and previous is not None and not is_bracketed(previous):
                buf.append(" ")
            previous = token

            if isinstance(token, Title):
                buf.append(token.value)
            elif isinstance(token, Regions):
                buf.append(f" ({','.join(token.strs)})")
            elif isinstance(token, Year):
                buf.append(f" ({token.value})")
            elif isinstance(token, MultiLanguage):
                buf.append(f" (M{token.count})")
            elif isinstance(token, Translation):
                buf.append(f"[T{token.status.value}{token.value}]")
            elif isinstance(token, Version):
                text = token.prefix + token.major
                if token.minor is not None:
                    text += _version_separator(token.major) + token.minor
                buf.append(f" ({text})")
            elif isinstance(token, Volume):
                buf.append(f" (Vol {token.value})")
            elif isinstance(token, NInOne):
                buf.append(f" ({(token.separator or '').join(token.items)})")
            elif isinstance(token, DumpCode):
                parts = (token.number, token.kind, token.separator, token.argnum, token.args)
                buf.append(f"[{token.code}{''.join(p for p in parts if p is not None)}]")
            elif isinstance(token, GameHack):
                game = f"{token.game} " if token.game is not None else ""
                buf.append(f" ({game}Hack)")
            elif isinstance(token, Media):
                total = f" of {token.total}" if token.total is not None else ""
                buf.append(f" ({token.kind} {token.number}{total})")
            elif isinstance(token, Flag):
                if token.flag_type is FlagType.PARENTHESIZED:
                    buf.append(f" ({token.value})")
                else:
                    buf.append(f"[{token.value}]")
        return ''.join(buf).strip()
