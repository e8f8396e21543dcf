"""
Parser for the TOSEC Naming Convention.

TOSEC's historical corpus holds many names that do not follow its own
convention, so the parser never rejects a name. Deviations are recorded as
warning tokens and anything left unread ends up in a trailing ``NOT_EOF``
warning.
"""

import logging
from typing import List, Optional, Tuple

from romnames.naming.common import (
    FlagType,
    NamingConvention,
    ParseError,
    ParseResult,
    brackets_text,
    exact_parens,
    in_brackets,
    in_parens,
    is_alnum,
    is_digit,
    is_lower,
    one_of_tags,
    parens_text,
    tag,
    take_till1,
    take_until,
    take_up_to,
    take_while,
    take_year,
)
from romnames.naming.region import RegionError, resolve_goodtools, resolve_tosec
from romnames.naming.tosec.tokens import (
    DUMP_INFO_CODES,
    Copyright,
    Date,
    Demo,
    Development,
    DumpInfo,
    Flag,
    LanguageKind,
    Languages,
    Media,
    MediaPart,
    Publisher,
    Regions,
    System,
    Title,
    TOSECMultiSetName,
    TOSECName,
    TOSECToken,
    Version,
    Video,
    Warn,
    WarnKind,
    is_warning,
)

logger = logging.getLogger(__name__)

ZZZ_PREFIX = "ZZZ-UNK-"

SYSTEMS = (
    "+2", "+2a", "+3", "130XE", "A1000", "A1200", "A1200-A4000", "A2000",
    "A2000-A3000", "A2024", "A2500-A3000UX", "A3000", "A4000", "A4000T", "A500",
    "A500+", "A500-A1000-A2000", "A500-A1000-A2000-CDTV", "A500-A1200",
    "A500-A1200-A2000-A4000", "A500-A2000", "A500-A600-A2000", "A570", "A600",
    "A600HD", "AGA", "AGA-CD32", "Aladdin Deck Enhancer", "CD32", "CDTV",
    "Computrainer", "Doctor PC Jr.", "ECS", "ECS-AGA", "Executive", "Mega ST",
    "Mega-STE", "OCS", "OCS-AGA", "ORCH80", "Osbourne 1", "PIANO90",
    "PlayChoice-10", "Plus4", "Primo-A", "Primo-A64", "Primo-B", "Primo-B64",
    "Pro-Primo", "ST", "STE", "STE-Falcon", "TT", "TURBO-R GT", "TURBO-R ST",
    "VS DualSystem", "VS UniSystem",
)

VIDEO_STANDARDS = (
    "CGA", "EGA", "HGC", "MCGA", "MDA", "NTSC", "NTSC-PAL", "PAL", "PAL-60",
    "PAL-NTSC", "SVGA", "VGA", "XGA",
)

COPYRIGHT_STATUSES = ("CW", "CW-R", "FW", "GW", "GW-R", "LW", "PD", "SW", "SW-R")

DEVELOPMENT_STATUSES = ("alpha", "beta", "preview", "pre-release", "proto")

# Capitalized spellings seen in ZZZ-UNK- names.
MALFORMED_DEVELOPMENT_STATUSES = ("Alpha", "Beta", "Preview", "Pre-Release", "Proto", "Prototype")

DEMO_KINDS = ("kiosk", "rolling", "playable", "slideshow")

MEDIA_KINDS = ("Disk", "Disc", "File", "Part", "Side")

TokenList = List[TOSECToken]


def _warn(kind: WarnKind, value: Optional[str] = None) -> Warn:
    return Warn(kind, value)


# Version and date

def parse_version_string(text: str) -> ParseResult[Version]:
    """Read ``v1.0a``, ``v20000101`` or ``Rev 1b``."""
    rest = tag(text, "Rev ")
    if rest is not None:
        rest, major = take_while(rest, is_alnum)
        return rest, Version("Rev", major)

    rest = tag(text, "v")
    if rest is None:
        return None
    rest, major = take_while(rest, is_digit)
    minor = None
    after_dot = tag(rest, ".")
    if after_dot is not None:
        rest, minor = take_while(after_dot, lambda c: is_alnum(c) or c == '.')
    if minor is None and not major:
        return None
    return rest, Version("v", major, minor)


def _parse_version_tag(text: str) -> ParseResult[TokenList]:
    result = in_parens(text, parse_version_string)
    if result is None:
        return None
    rest, version = result
    return rest, [_warn(WarnKind.VERSION_IN_FLAG), version]


def _take_date_part(text: str) -> ParseResult[str]:
    return take_while(text, lambda c: is_digit(c) or c in 'Xx', minimum=2, maximum=2)


def _parse_undelimited_date(text: str) -> ParseResult[TokenList]:
    result = take_year(text)
    if result is None:
        return None
    rest, year = result
    month_result = take_while(rest, is_digit, minimum=2, maximum=2)
    if month_result is None:
        return None
    rest, month = month_result
    day_result = take_while(rest, is_digit, minimum=2, maximum=2)
    if day_result is None:
        return None
    rest, day = day_result
    if int(month) > 12 or int(day) > 31:
        return None
    return rest, [_warn(WarnKind.UNDELIMITED_DATE, text[:8]), Date(year, month, day)]


def parse_date(text: str) -> ParseResult[TokenList]:
    """
    Read a date: ``YYYY``, ``YYYY-MM``, ``YYYY-MM-DD`` or ``YYYYMMDD``.

    Placeholder digits may be ``x``; an upper case ``X`` is accepted with a
    warning for each affected segment.
    """
    result = _parse_undelimited_date(text)
    if result is not None:
        return result

    result = take_year(text)
    if result is None:
        return None
    rest, year = result
    segments = [year]
    for _ in range(2):
        after_dash = tag(rest, "-")
        part = _take_date_part(after_dash) if after_dash is not None else None
        if part is None:
            break
        rest, value = part
        segments.append(value)

    tokens: TokenList = [_warn(WarnKind.MALFORMED_DATE_PLACEHOLDER, s) for s in segments if "X" in s]
    segments += [None] * (3 - len(segments))
    tokens.append(Date(*segments))
    return rest, tokens


def _parse_date_tag(text: str) -> ParseResult[TokenList]:
    return in_parens(text, parse_date)


def _parse_demo_tag(text: str) -> ParseResult[Demo]:
    rest = tag(text, "(demo")
    if rest is None:
        return None
    kind = None
    after_dash = tag(rest, "-")
    if after_dash is not None:
        result = one_of_tags(after_dash, DEMO_KINDS)
        if result is not None:
            rest, kind = result
    rest = tag(rest, ")")
    if rest is None:
        return None
    return rest, Demo(kind)


# Publisher

def parse_publisher(text: str) -> ParseResult[Publisher]:
    """Read the inside of a publisher flag: ``-`` or names joined by `` - ``."""
    rest = tag(text, "-")
    if rest is not None:
        return rest, Publisher(None)
    result = take_till1(text, ")")
    if result is None:
        return None
    rest, segment = result
    names = segment.split(" - ")
    if len(names) > 1 and not names[-1]:
        return None
    return rest, Publisher(tuple(names))


def parse_publisher_tag(text: str) -> ParseResult[Publisher]:
    return in_parens(text, parse_publisher)


def _parse_by_publisher(text: str) -> Optional[Tuple[str, str, Publisher]]:
    """Split ``<title> by <publisher> (...`` into its title, publisher and the rest."""
    result = take_until(text, " by ")
    if result is None:
        return None
    after, title = result
    rest, publisher = take_while(after[len(" by "):], lambda c: c != '(')
    return rest, title.strip(), Publisher((publisher.strip(),))


# Flags

def parse_region(text: str) -> ParseResult[Regions]:
    result = take_till1(text, ")")
    if result is None:
        return None
    rest, region_str = result
    try:
        strs, regions = resolve_tosec(region_str)
    except RegionError:
        return None
    return rest, Regions(tuple(strs), tuple(regions))


def parse_region_tag(text: str) -> ParseResult[Regions]:
    return in_parens(text, parse_region)


def _parse_goodtools_region_tag(text: str) -> ParseResult[TokenList]:
    result = parens_text(text)
    if result is None:
        return None
    rest, region_str = result
    try:
        strs, regions = resolve_goodtools(region_str)
    except RegionError:
        return None
    return rest, [_warn(WarnKind.GOODTOOLS_REGION_CODE, region_str),
                  Regions(tuple(strs), tuple(regions))]


def _language_code(text: str) -> ParseResult[str]:
    return take_while(text, is_lower, minimum=2, maximum=2)


def parse_language(text: str) -> ParseResult[Languages]:
    rest = tag(text, "M")
    if rest is not None:
        rest, count = take_while(rest, is_digit)
        return rest, Languages(LanguageKind.COUNT, (count,))

    first = _language_code(text)
    if first is None:
        return None
    rest, code = first
    after_dash = tag(rest, "-")
    second = _language_code(after_dash) if after_dash is not None else None
    if second is not None:
        rest, other = second
        return rest, Languages(LanguageKind.DOUBLE, (code, other))
    return rest, Languages(LanguageKind.SINGLE, (code,))


def parse_language_tag(text: str) -> ParseResult[Languages]:
    return in_parens(text, parse_language)


def _parse_media_part(text: str, kinds) -> ParseResult[MediaPart]:
    result = one_of_tags(text, kinds)
    if result is None:
        return None
    rest, kind = result
    rest = tag(rest, " ")
    if rest is None:
        return None
    rest, number = take_while(rest, lambda c: is_alnum(c) or c == '-')
    total = None
    after_of = tag(rest, " of ")
    if after_of is not None:
        rest, total = take_while(after_of, lambda c: is_alnum(c) or c == '-')
    return rest, MediaPart(kind, number, total)


def parse_media(text: str) -> ParseResult[Media]:
    """Read ``Disc 1 of 2``, optionally followed by `` Side A``."""
    result = _parse_media_part(text, MEDIA_KINDS)
    if result is None:
        return None
    rest, first = result
    parts = [first]
    after_space = tag(rest, " ")
    if after_space is not None:
        side = tag(after_space, "Side ")
        if side is not None:
            rest, number = take_while(side, is_alnum)
            parts.append(MediaPart("Side", number))
    return rest, Media(tuple(parts))


def _parse_media_tag(text: str) -> ParseResult[Media]:
    return in_parens(text, parse_media)


def _parse_closed_tag(text: str, values, token_type) -> ParseResult[TOSECToken]:
    result = exact_parens(text, values)
    if result is None:
        return None
    rest, value = result
    return rest, token_type(value)


def _parse_development_tag(text: str) -> ParseResult[TokenList]:
    result = exact_parens(text, DEVELOPMENT_STATUSES)
    if result is not None:
        rest, value = result
        return rest, [Development(value)]
    result = exact_parens(text, MALFORMED_DEVELOPMENT_STATUSES)
    if result is not None:
        rest, value = result
        return rest, [_warn(WarnKind.MALFORMED_DEVELOPMENT_STATUS, value), Development(value)]
    return None


def _single(reader):
    def parse(text: str) -> ParseResult[TokenList]:
        result = reader(text)
        if result is None:
            return None
        rest, token = result
        return rest, [token]
    return parse


_KNOWN_FLAG_READERS = (
    _single(parse_region_tag),
    _single(parse_language_tag),
    _single(lambda text: _parse_closed_tag(text, SYSTEMS, System)),
    _single(lambda text: _parse_closed_tag(text, VIDEO_STANDARDS, Video)),
    _single(lambda text: _parse_closed_tag(text, COPYRIGHT_STATUSES, Copyright)),
    _single(_parse_media_tag),
    _parse_goodtools_region_tag,
    _parse_development_tag,
    _parse_version_tag,
)


def parse_known_flags(text: str) -> ParseResult[TokenList]:
    """Read the first recognized parenthesized flag."""
    for reader in _KNOWN_FLAG_READERS:
        result = reader(text)
        if result is not None:
            return result
    return None


def _parse_parens_flag(text: str) -> ParseResult[TokenList]:
    result = parens_text(text)
    if result is None:
        return None
    rest, value = result
    return rest, [Flag(FlagType.PARENTHESIZED, value)]


def parse_moreinfo_tag(text: str) -> ParseResult[Flag]:
    result = brackets_text(text)
    if result is None:
        return None
    rest, value = result
    return rest, Flag(FlagType.BRACKETED, value)


def parse_dumpinfo_tag(text: str, code: str) -> ParseResult[DumpInfo]:
    """Read a dump info flag with the given code, e.g. ``[cr2 PDX - TRSi]``."""
    def inner(rest: str) -> ParseResult[DumpInfo]:
        rest = tag(rest, code)
        if rest is None:
            return None
        rest, number = take_while(rest, is_digit)
        info = None
        after_space = tag(rest, " ")
        if after_space is not None:
            result = take_till1(after_space, "]")
            if result is not None:
                rest, info = result
        return rest, DumpInfo(code, number or None, info)

    return in_brackets(text, inner)


def _skip_space(text: str) -> str:
    rest = tag(text, " ")
    return text if rest is None else rest


def _parse_unexpected_space(text: str) -> Optional[str]:
    if text.startswith(" & "):
        return None
    return tag(text, " ")


# Title

def _parse_version_demo_date(text: str) -> ParseResult[TokenList]:
    tokens: TokenList = []
    after_space = tag(text, " ")
    if after_space is not None:
        result = parse_version_string(after_space)
        if result is not None:
            text, version = result
            tokens.append(version)

    result = _parse_demo_tag(_skip_space(text))
    if result is not None:
        text, demo = result
        tokens.append(demo)

    after_space = tag(text, " ")
    if after_space is None:
        tokens.append(_warn(WarnKind.MISSING_SPACE))
    else:
        text = after_space

    result = _parse_date_tag(text)
    if result is None:
        return None
    text, date_tokens = result
    return text, tokens + date_tokens


def _parse_title_with_date(text: str) -> ParseResult[TokenList]:
    result = take_up_to(text, _parse_version_demo_date)
    if result is None:
        return None
    rest, title, tokens = result
    return rest, [Title(title.strip())] + tokens


def _title_stop(text: str) -> ParseResult[Optional[Version]]:
    after_space = tag(text, " ")
    if after_space is not None:
        result = parse_version_string(after_space)
        if result is not None:
            return result
    if text[:1] in ("(", "["):
        return text, None
    return None


def _parse_title_without_date(text: str) -> ParseResult[TokenList]:
    result = take_up_to(text, _title_stop)
    if result is None:
        return None
    rest, title, version = result
    rest = _skip_space(rest)
    tokens: TokenList = [Title(title.strip())]
    if version is not None:
        tokens.append(version)
    tokens.append(_warn(WarnKind.MISSING_DATE))
    return rest, tokens


def _fallback_tokens(text: str) -> TokenList:
    return [Title(text), _warn(WarnKind.MISSING_DATE), _warn(WarnKind.MISSING_PUBLISHER)]


def _repair_zzz(text: str, tokens: TokenList) -> str:
    """Move an old style ``by <publisher>`` into a publisher token."""
    by_publisher = _parse_by_publisher(tokens[0].value)
    if by_publisher is not None:
        _, title, publisher = by_publisher
        tokens[0] = Title(title)
        tokens[1:1] = [_warn(WarnKind.PUBLISHER_BEFORE_DATE), _warn(WarnKind.BY_PUBLISHER), publisher]
        return text

    # Flags between the date and "by" are left for the flag readers.
    if tag(text, " by ") is not None:
        text, _, publisher = _parse_by_publisher(text)
        tokens.extend([_warn(WarnKind.UNEXPECTED_SPACE), _warn(WarnKind.BY_PUBLISHER), publisher])
        return text

    if not text and not is_warning(tokens[-1], WarnKind.MISSING_PUBLISHER):
        tokens.append(_warn(WarnKind.MISSING_PUBLISHER))
    return text


def _parse_flag_run(text: str, tokens: TokenList) -> str:
    while True:
        rest = _parse_unexpected_space(text)
        spaced = rest is not None
        rest = rest if spaced else text
        result = parse_known_flags(rest) or _parse_parens_flag(rest)
        if result is None:
            return text
        if spaced:
            tokens.append(_warn(WarnKind.UNEXPECTED_SPACE))
        text, flags = result
        tokens.extend(flags)


def _parse_dumpinfos(text: str, tokens: TokenList) -> str:
    # A space before a missing dump info is still consumed.
    for code in DUMP_INFO_CODES:
        rest = _parse_unexpected_space(text)
        if rest is not None:
            text = rest
            tokens.append(_warn(WarnKind.UNEXPECTED_SPACE))
        result = parse_dumpinfo_tag(text, code)
        if result is not None:
            text, info = result
            tokens.append(info)
    return text


def _parse_moreinfo_run(text: str, tokens: TokenList) -> str:
    while True:
        rest = _parse_unexpected_space(text)
        spaced = rest is not None
        result = parse_moreinfo_tag(rest if spaced else text)
        if result is None:
            return text
        if spaced:
            tokens.append(_warn(WarnKind.UNEXPECTED_SPACE))
        text, flag = result
        tokens.append(flag)


def _parse_trailing_flags(text: str, tokens: TokenList) -> str:
    text = _parse_flag_run(text, tokens)
    text = _parse_dumpinfos(text, tokens)
    return _parse_moreinfo_run(text, tokens)


def parse_tosec_name(text: str) -> ParseResult[TokenList]:
    """
    Tokenize one TOSEC name, returning the unread remainder.

    Returns None only when a mandatory publisher flag cannot be read.
    """
    rest = tag(text, ZZZ_PREFIX)
    zzz = rest is not None
    if zzz:
        text = rest

    result = _parse_title_with_date(text)
    if result is None:
        logger.debug(f"No date found in '{text}', reading title up to the first flag")
        result = _parse_title_without_date(text)
    if result is None:
        text, tokens = "", _fallback_tokens(text)
    else:
        text, tokens = result

    if zzz:
        text = _repair_zzz(text, tokens)
        tokens.insert(0, _warn(WarnKind.ZZZ_UNKNOWN))

    rest = _parse_unexpected_space(text)
    if rest is not None:
        text = rest
        tokens.append(_warn(WarnKind.UNEXPECTED_SPACE))

    has_publisher = any(isinstance(t, Publisher) for t in tokens)
    if parse_known_flags(text) is None and parse_moreinfo_tag(text) is None:
        if not has_publisher and not is_warning(tokens[-1], WarnKind.MISSING_PUBLISHER):
            result = parse_publisher_tag(text)
            if result is None:
                return None
            text, publisher = result
            tokens.append(publisher)
    elif not has_publisher:
        tokens.append(_warn(WarnKind.MISSING_PUBLISHER))

    text = _parse_trailing_flags(text, tokens)
    return text, tokens


def _with_remainder(rest: str, tokens: TokenList) -> TokenList:
    if rest:
        tokens.append(_warn(WarnKind.NOT_EOF, rest))
    return tokens


def parse(name: str) -> TOSECName:
    """
    Parse a TOSEC file name.

    Never fails: a name whose structure cannot be read at all becomes a
    single title with missing date and publisher warnings.
    """
    result = parse_tosec_name(name)
    if result is None:
        logger.debug(f"Unreadable TOSEC name, keeping it as a title: '{name}'")
        rest = tag(name, ZZZ_PREFIX)
        if rest is None:
            return TOSECName(_fallback_tokens(name))
        return TOSECName([_warn(WarnKind.ZZZ_UNKNOWN)] + _fallback_tokens(rest))

    rest, tokens = result
    return TOSECName(_with_remainder(rest, tokens))


def parse_multiset(name: str) -> TOSECMultiSetName:
    """
    Parse a multi-image set name such as ``A (1987)(X) & B (1987)(Y)-(PD)``.

    Raises:
        ParseError: If the first name in the set cannot be read
    """
    result = parse_tosec_name(name)
    if result is None:
        raise ParseError(NamingConvention.TOSEC, name)
    text, tokens = result
    names: List[TokenList] = [tokens]

    # The separator is only consumed when another name follows it.
    while True:
        after_separator = tag(text, " & ")
        if after_separator is None:
            break
        result = parse_tosec_name(after_separator)
        if result is None:
            break
        text, tokens = result
        names.append(tokens)

    globals_: TokenList = []
    after_dash = tag(text, "-")
    if after_dash is not None:
        text = _parse_trailing_flags(after_dash, globals_)

    return TOSECMultiSetName(names, _with_remainder(text, globals_))
