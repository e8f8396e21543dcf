"""
Parser for the No-Intro naming convention.

No-Intro names are maintained strictly: the region flag must directly follow
the title, and a name that does not fit the convention is rejected with a
ParseError instead of being read leniently.
"""

import logging
from typing import List, Optional

from romnames.naming.common import (
    FlagType,
    NamingConvention,
    ParseError,
    ParseResult,
    in_parens,
    is_alnum,
    is_alpha,
    is_digit,
    is_upper,
    one_of_tags,
    parens_text,
    tag,
    take_until,
    take_up_to,
    take_while,
)
from romnames.naming.nointro.tokens import (
    Flag,
    Languages,
    Media,
    NoIntroName,
    Regions,
    Release,
    Scene,
    Title,
    Version,
    VersionEntry,
)
from romnames.naming.region import RegionError, resolve_nointro

logger = logging.getLogger(__name__)

RELEASE_STATUSES = ("Demo", "Beta", "Sample", "Prototype", "Proto")


def parse_region_tag(text: str) -> ParseResult[Regions]:
    result = parens_text(text)
    if result is None:
        return None
    rest, region_str = result
    try:
        strs, regions = resolve_nointro(region_str)
    except RegionError as e:
        logger.debug(f"Not a No-Intro region: '{region_str}' ({e})")
        return None
    return rest, Regions(tuple(strs), tuple(regions))


def _bracket_flag(text: str, value: str) -> ParseResult[Flag]:
    rest = tag(text, f"[{value}]")
    if rest is None:
        return None
    return rest, Flag(FlagType.BRACKETED, value)


def parse_baddump_tag(text: str) -> ParseResult[Flag]:
    return _bracket_flag(text, "b")


def parse_bios_tag(text: str) -> ParseResult[Flag]:
    return _bracket_flag(text, "BIOS")


def _optional_tag(text: str, literal: str) -> str:
    rest = tag(text, literal)
    return text if rest is None else rest


def _skip_space(text: str) -> str:
    return _optional_tag(text, " ")


# Versions

def _parse_revision(text: str) -> ParseResult[VersionEntry]:
    rest = tag(text, "Rev ")
    if rest is None:
        return None
    result = take_while(rest, is_alnum, minimum=1)
    if result is None:
        return None
    rest, major = result
    rest = _optional_tag(rest, ".")
    rest, minor = take_while(rest, is_alnum)
    return rest, VersionEntry("Rev", major, minor or None)


def _parse_prefixed(text: str) -> ParseResult[VersionEntry]:
    rest = tag(text, "v")
    if rest is None:
        return None
    result = take_while(rest, is_digit, minimum=1)
    if result is None:
        return None
    rest, major = result
    minor = None
    after_dot = tag(rest, ".")
    if after_dot is not None:
        rest, minor = take_while(after_dot, lambda c: c.isalnum() or c in '.-')
    suffixes = None
    after_alt = tag(rest, " Alt")
    if after_alt is not None:
        rest, suffixes = after_alt, ("Alt",)
    return rest, VersionEntry("v", major, minor, suffixes=suffixes)


def _parse_unprefixed_dot(text: str) -> ParseResult[VersionEntry]:
    result = take_while(text, is_digit, minimum=1)
    if result is None:
        return None
    rest, major = result
    rest = tag(rest, ".")
    if rest is None:
        return None
    result = take_while(rest, is_digit, minimum=1)
    if result is None:
        return None
    rest, minor = result
    return rest, VersionEntry("", major, minor)


def _is_short_date(text: str) -> bool:
    """MM/DD/YY"""
    return (len(text) >= 8 and text[2] == '/' and text[5] == '/'
            and all(is_digit(text[i]) for i in (0, 1, 3, 4, 6, 7)))


def _parse_full_version(text: str) -> ParseResult[VersionEntry]:
    """``Version 5.0 04/15/10 E`` as used by Redump BIOS entries."""
    rest = tag(text, "Version ")
    if rest is None:
        return None
    result = take_while(rest, is_digit, minimum=1)
    if result is None:
        return None
    rest, major = result
    minor = None
    after_dot = tag(rest, ".")
    if after_dot is not None:
        rest, minor = take_while(after_dot, lambda c: is_alnum(c) or c in '.-')

    suffixes: List[str] = []
    after_space = tag(rest, " ")
    if after_space is not None and _is_short_date(after_space):
        rest = after_space[8:]
        suffixes.append(after_space[:8])

    after_space = tag(rest, " ")
    if after_space is not None:
        suffix = None
        if after_space.startswith("Alt"):
            suffix = "Alt"
        elif after_space[:1] and is_upper(after_space[0]):
            suffix = after_space[0]
        if suffix is not None:
            rest = after_space[len(suffix):]
            suffixes.append(suffix)

    return rest, VersionEntry("Version", major, minor, suffixes=tuple(suffixes) or None)


def _parse_playstation(text: str) -> ParseResult[VersionEntry]:
    result = one_of_tags(text, ("PS3 ", "PSP "))
    if result is None:
        return None
    rest, prefix = result
    result = _parse_prefixed(rest)
    if result is None:
        return None
    rest, entry = result
    return rest, entry._replace(prefix=prefix.strip())


def _parse_build_number(text: str) -> ParseResult[VersionEntry]:
    result = take_while(text, is_alnum, minimum=4, maximum=4)
    if result is None:
        return None
    rest, number = result
    return rest, VersionEntry("", number)


_FIRST_VERSION_READERS = (
    _parse_playstation,
    _parse_prefixed,
    _parse_full_version,
    _parse_revision,
    _parse_unprefixed_dot,
)

_NEXT_VERSION_READERS = (
    _parse_playstation,
    _parse_prefixed,
    _parse_full_version,
    _parse_revision,
    _parse_build_number,
)


def _first_of(text: str, readers) -> ParseResult:
    for reader in readers:
        result = reader(text)
        if result is not None:
            return result
    return None


def parse_version(text: str) -> ParseResult[Version]:
    """Read one or more versions separated by ``, ``, ``,`` or a space."""
    result = _first_of(text, _FIRST_VERSION_READERS)
    if result is None:
        return None
    text, entry = result
    versions = [entry]
    while True:
        separator_result = one_of_tags(text, (", ", ",", " "))
        rest, separator = separator_result if separator_result else (text, None)
        result = _first_of(rest, _NEXT_VERSION_READERS)
        if result is None:
            break
        text, entry = result
        versions.append(entry._replace(separator=separator))
    return text, Version(tuple(versions))


def parse_version_tag(text: str) -> ParseResult[Version]:
    return in_parens(text, parse_version)


def parse_release(text: str) -> ParseResult[Release]:
    result = one_of_tags(text, RELEASE_STATUSES)
    if result is None:
        return None
    rest, status = result
    extra = None
    after_space = tag(rest, " ")
    if after_space is not None:
        rest, extra = take_while(after_space, lambda c: is_alnum(c) or c == ' ')
    return rest, Release(status, extra)


def parse_release_tag(text: str) -> ParseResult[Release]:
    return in_parens(text, parse_release)


def parse_disc_tag(text: str) -> ParseResult[Media]:
    def disc(rest: str) -> ParseResult[Media]:
        rest = tag(rest, "Disc ")
        if rest is None:
            return None
        result = take_while(rest, is_digit, minimum=1)
        if result is None:
            return None
        rest, number = result
        return rest, Media("Disc", number)

    return in_parens(text, disc)


def parse_scene_number(text: str) -> ParseResult[Scene]:
    """Read ``1234``, ``xB12``, ``z123`` or ``x123``."""
    result = take_while(text, is_digit, minimum=4, maximum=4)
    if result is not None:
        rest, number = result
        return rest, Scene(number)
    for prefix, width in (("xB", 2), ("z", 3), ("x", 3)):
        rest = tag(text, prefix)
        if rest is None:
            continue
        result = take_while(rest, is_digit, minimum=width, maximum=width)
        if result is not None:
            rest, number = result
            return rest, Scene(number, prefix)
    return None


def parse_scene_tag(text: str) -> ParseResult[Scene]:
    result = parse_scene_number(text)
    if result is None:
        return None
    rest, scene = result
    rest = tag(rest, " - ")
    if rest is None:
        return None
    return rest, scene


def parse_languages(text: str) -> ParseResult[Languages]:
    """Read comma separated codes such as ``En,Fr,Zh-Hant``."""
    languages = []
    while True:
        result = take_while(text, is_alpha, minimum=2, maximum=2)
        if result is None:
            break
        rest, code = result
        variant = None
        after_dash = tag(rest, "-")
        if after_dash is not None:
            variant_result = take_while(after_dash, is_alpha, minimum=1)
            if variant_result is not None:
                rest, variant = variant_result
        text = rest
        languages.append((code, variant))
        after_comma = tag(text, ",")
        if after_comma is None:
            break
        if take_while(after_comma, is_alpha, minimum=2, maximum=2) is None:
            break
        text = after_comma
    if not languages:
        return None
    return text, Languages(tuple(languages))


def parse_language_tag(text: str) -> ParseResult[Languages]:
    return in_parens(text, parse_languages)


def parse_additional_tag(text: str) -> ParseResult[Flag]:
    result = parens_text(text)
    if result is None:
        return None
    rest, value = result
    return rest, Flag(FlagType.PARENTHESIZED, value)


def parse_multitap_tag(text: str) -> ParseResult[Flag]:
    """Read Redump's nested ``(Multi Tap (SCPH-10090) Doukonban)``."""
    rest = tag(text, "(Multi Tap (")
    if rest is None:
        return None
    result = take_until(rest, ")")
    if result is None:
        return None
    rest = result[0][1:]
    result = take_until(rest, ")")
    if result is None:
        return None
    rest = result[0]
    value = text[1:len(text) - len(rest)]
    return rest[1:], Flag(FlagType.PARENTHESIZED, value)


_KNOWN_FLAG_READERS = (
    parse_language_tag,
    parse_version_tag,
    parse_release_tag,
    parse_disc_tag,
    parse_multitap_tag,
    parse_additional_tag,
)


def parse_known_flags(text: str) -> ParseResult:
    return _first_of(text, _KNOWN_FLAG_READERS)


def _parse_region_at_title_end(text: str) -> ParseResult[Regions]:
    """A region flag followed by the end of the name or another flag."""
    result = parse_region_tag(text)
    if result is None:
        return None
    rest, regions = result
    if rest:
        after_space = tag(rest, " ")
        if after_space is None:
            return None
        if parse_additional_tag(after_space) is None and parse_baddump_tag(after_space) is None:
            return None
    return rest, regions


def parse_tokens(name: str) -> Optional[list]:
    tokens = []
    text = name

    result = parse_scene_tag(text)
    if result is not None:
        text, scene = result
        tokens.append(scene)

    result = parse_bios_tag(text)
    if result is not None:
        text, bios = result
        tokens.append(bios)

    text = text.lstrip(' ')

    result = take_up_to(text, _parse_region_at_title_end)
    if result is None:
        return None
    text, title, regions = result
    tokens.append(Title(title.strip()))
    tokens.append(regions)

    while True:
        result = parse_known_flags(_skip_space(text))
        if result is None:
            break
        text, flag = result
        tokens.append(flag)

    result = parse_baddump_tag(_skip_space(text))
    if result is not None:
        text, bad_dump = result
        tokens.append(bad_dump)

    if text:
        logger.debug(f"Unread No-Intro remainder '{text}' in '{name}'")
        return None
    return tokens


def parse(name: str) -> NoIntroName:
    """
    Parse a No-Intro file name.

    Raises:
        ParseError: If the name does not follow the No-Intro convention
    """
    tokens = parse_tokens(name)
    if tokens is None:
        raise ParseError(NamingConvention.NOINTRO, name)
    return NoIntroName(tokens)
