"""No-Intro token types and name reconstruction."""

from dataclasses import dataclass, field
from typing import NamedTuple, Optional, Tuple

from romnames.naming.common import FlagType, NamingConvention, TokenizedName
from romnames.naming.region import Region


class VersionEntry(NamedTuple):
    """
    One version inside a version flag.

    ``(v1.07, PS3 v1.70)`` holds two entries; the second has ``prefix``
    ``PS3`` and ``separator`` ``", "``.
    """
    kind: str
    major: str
    minor: Optional[str] = None
    prefix: Optional[str] = None
    suffixes: Optional[Tuple[str, ...]] = None
    separator: Optional[str] = None


@dataclass(frozen=True)
class Title:
    value: str


@dataclass(frozen=True)
class Regions:
    strs: Tuple[str, ...]
    regions: Tuple[Region, ...] = field(default=(), compare=False)


@dataclass(frozen=True)
class Version:
    versions: Tuple[VersionEntry, ...]


@dataclass(frozen=True)
class Release:
    """A development status such as ``(Beta 2)`` or ``(Sample)``."""
    status: str
    extra: Optional[str] = None


@dataclass(frozen=True)
class Media:
    kind: str
    number: str


@dataclass(frozen=True)
class Scene:
    """A scene release number such as ``1234 - `` or ``z123 - ``."""
    number: str
    prefix: Optional[str] = None


@dataclass(frozen=True)
class Languages:
    """Language codes with their optional variant, e.g. ``("Zh", "Hant")``."""
    languages: Tuple[Tuple[str, Optional[str]], ...]


@dataclass(frozen=True)
class Flag:
    flag_type: FlagType
    value: str


def _render_version(entry: VersionEntry) -> str:
    text = entry.separator or ""
    if entry.prefix is not None:
        text += f"{entry.prefix} "
    text += entry.kind
    if entry.kind not in ("", "v"):
        text += " "
    text += entry.major
    if entry.minor is not None:
        text += f".{entry.minor}"
    if entry.suffixes:
        text += " " + " ".join(entry.suffixes)
    return text


class NoIntroName(TokenizedName):
    """A No-Intro format file name."""

    convention = NamingConvention.NOINTRO
    title_type = Title

    def __str__(self) -> str:
        buf = []
        for token in self.tokens:
            if isinstance(token, Title):
                if buf and not buf[-1].endswith(" - "):
                    buf.append(" ")
                buf.append(token.value)
            elif isinstance(token, Regions):
                buf.append(f" ({', '.join(token.strs)})")
            elif isinstance(token, Flag):
                if token.flag_type is FlagType.PARENTHESIZED:
                    buf.append(f" ({token.value})")
                else:
                    buf.append(f" [{token.value}]")
            elif isinstance(token, Version):
                buf.append(f" ({''.join(_render_version(v) for v in token.versions)})")
            elif isinstance(token, Release):
                extra = f" {token.extra}" if token.extra is not None else ""
                buf.append(f" ({token.status}{extra})")
            elif isinstance(token, Media):
                buf.append(f" ({token.kind} {token.number})")
            elif isinstance(token, Scene):
                buf.append(f"{token.prefix or ''}{token.number} - ")
            elif isinstance(token, Languages):
                codes = [code if variant is None else f"{code}-{variant}"
                         for code, variant in token.languages]
                buf.append(f" ({','.join(codes)})")
        return ''.join(buf).strip()
