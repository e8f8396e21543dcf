"""
Parser for the GoodTools naming convention.

GoodTools names are a title followed by a run of flags. The title is
everything up to the first position from which the rest of the name reads
as flags only; a name without such a position is all title, so parsing
never fails.
"""

import logging
from typing import List, Optional

from romnames.naming.common import (
    FlagType,
    ParseResult,
    brackets_text,
    exact_parens,
    in_parens,
    is_alnum,
    is_digit,
    is_lower,
    is_upper,
    one_of_tags,
    parens_text,
    tag,
    take_until,
    take_up_to,
    take_while,
    take_year,
)
from romnames.naming.goodtools.tokens import (
    DumpCode,
    Flag,
    GameHack,
    GoodToolsName,
    Media,
    MultiLanguage,
    NInOne,
    Regions,
    Title,
    Translation,
    TranslationStatus,
    Version,
    Volume,
    Year,
)
from romnames.naming.region import Region, RegionError, resolve_goodtools

logger = logging.getLogger(__name__)

KNOWN_FLAGS = ("PD", "NTSC", "PAL", "NTSC-PAL", "PAL-NTSC")

# Longer codes come before their prefixes.
DUMP_CODES = ("a", "b", "f_", "f", "o", "h", "p", "t", "!p", "!")

MEDIA_KINDS = ("Disk", "Disc", "Side", "Part", "Tape")

_GAMECUBE_REGIONS = {
    "E-GC": Region.EUROPE,
    "J-GC": Region.JAPAN,
}


def parse_region_tag(text: str) -> ParseResult[Regions]:
    result = parens_text(text)
    if result is None:
        return None
    rest, region_str = result
    if region_str in _GAMECUBE_REGIONS:
        return rest, Regions((region_str,), (_GAMECUBE_REGIONS[region_str],))
    try:
        strs, regions = resolve_goodtools(region_str)
    except RegionError:
        return None
    return rest, Regions(tuple(strs), tuple(regions))


def parse_year_tag(text: str) -> ParseResult[Year]:
    result = in_parens(text, take_year)
    if result is None:
        return None
    rest, year = result
    return rest, Year(year)


def parse_volume_tag(text: str) -> ParseResult[Volume]:
    def volume(rest: str) -> ParseResult[Volume]:
        rest = tag(rest, "Vol ")
        if rest is None:
            return None
        result = take_while(rest, is_digit, minimum=1)
        if result is None:
            return None
        rest, number = result
        return rest, Volume(number)

    return in_parens(text, volume)


# Versions

def _parse_version_with_underscore(text: str) -> ParseResult[Version]:
    """``V_unfinished``"""
    rest = tag(text, "V_")
    if rest is None:
        return None
    rest, major = take_while(rest, lambda c: is_alnum(c) or c in '._ ')
    return rest, Version("V_", major)


def _parse_version_with_space(text: str) -> ParseResult[Version]:
    """``V x.xx``, ``V b1`` or two to four digits."""
    rest = tag(text, "V ")
    if rest is None:
        return None
    after = tag(rest, "x.xx")
    if after is not None:
        return after, Version("V ", "x", "xx")
    result = take_while(rest, is_digit, minimum=2, maximum=4)
    if result is not None:
        rest, number = result
        return rest, Version("V ", number)
    after = tag(rest, "b")
    if after is None:
        return None
    result = take_while(after, is_digit, minimum=1)
    if result is None:
        return None
    after, number = result
    return after, Version("V ", f"b{number}")


def _parse_version(text: str) -> ParseResult[Version]:
    rest = tag(text, "V")
    if rest is None:
        return None

    after = tag(rest, "WIP")
    if after is not None:
        after, number = take_while(after, is_digit, maximum=1)
        return after, Version("V", "WIP", number or None)

    after = tag(rest, "Final")
    if after is not None:
        minor = None
        after_underscore = tag(after, "_")
        if after_underscore is not None:
            after, minor = take_while(after_underscore, lambda c: c.isalnum() or c in '_ ')
        return after, Version("V", "Final", minor)

    after = tag(rest, "unknown")
    if after is not None:
        return after, Version("V", "unknown")

    # Versions start with a digit or an x placeholder; "(Vector)" is not one.
    if take_while(rest, lambda c: is_digit(c) or c == 'x', minimum=1) is None:
        return None
    rest, major = take_while(rest, lambda c: is_alnum(c) or c in '-_')
    minor = None
    after_dot = tag(rest, ".")
    if after_dot is not None:
        result = take_while(after_dot, lambda c: is_alnum(c) or c in '-_.', minimum=1)
        if result is not None:
            rest, minor = result
    return rest, Version("V", major, minor)


def _parse_revision(text: str) -> ParseResult[Version]:
    rest = tag(text, "REV")
    if rest is None:
        return None
    result = take_while(rest, lambda c: is_alnum(c) or c == '.', minimum=1)
    if result is None:
        return None
    rest, number = result
    return rest, Version("REV", number)


_VERSION_READERS = (
    _parse_version_with_underscore,
    _parse_version_with_space,
    _parse_version,
    _parse_revision,
)


def parse_version_tag(text: str) -> ParseResult[Version]:
    for reader in _VERSION_READERS:
        result = in_parens(text, reader)
        if result is not None:
            return result
    return None


def parse_game_hack_tag(text: str) -> ParseResult[GameHack]:
    """``(Hack)`` or ``(<game> Hack)``"""
    result = parens_text(text)
    if result is None:
        return None
    rest, value = result
    if value == "Hack":
        return rest, GameHack()
    if value.endswith(" Hack") and len(value) > len(" Hack"):
        return rest, GameHack(value[:-len(" Hack")])
    return None


def parse_multilanguage_tag(text: str) -> ParseResult[MultiLanguage]:
    def count(rest: str) -> ParseResult[MultiLanguage]:
        rest = tag(rest, "M")
        if rest is None:
            return None
        result = take_while(rest, is_digit, minimum=1, maximum=2)
        if result is None:
            return None
        rest, number = result
        return rest, MultiLanguage(number)

    return in_parens(text, count)


def parse_translation_tag(text: str) -> ParseResult[Translation]:
    """``[T+Eng]`` or ``[T-Fre1.00_Tgone]``"""
    rest = tag(text, "[T")
    if rest is None:
        return None
    result = one_of_tags(rest, ("+", "-"))
    if result is None:
        return None
    rest, status = result
    result = take_until(rest, "]")
    if result is None:
        return None
    rest, value = result
    return rest[1:], Translation(TranslationStatus(status), value)


def parse_media_tag(text: str) -> ParseResult[Media]:
    """``(Disk 1 of 2)`` or ``(Side A)``"""
    def media(rest: str) -> ParseResult[Media]:
        result = one_of_tags(rest, MEDIA_KINDS)
        if result is None:
            return None
        rest, kind = result
        rest = tag(rest, " ")
        if rest is None:
            return None
        result = take_while(rest, is_alnum, minimum=1)
        if result is None:
            return None
        rest, number = result
        total = None
        after_of = tag(rest, " of ")
        if after_of is not None:
            result = take_while(after_of, is_alnum, minimum=1)
            if result is not None:
                rest, total = result
        return rest, Media(kind, number, total)

    return in_parens(text, media)


def _is_n_in_one(item: str) -> bool:
    head = item[:-len("-in-1")]
    return item.endswith("-in-1") and bool(head) and all(is_digit(c) for c in head)


def parse_n_in_one_tag(text: str) -> ParseResult[NInOne]:
    """``(4-in-1)`` or ``(4-in-1,5-in-1)``"""
    result = parens_text(text)
    if result is None:
        return None
    rest, value = result
    separator = next((sep for sep in ("+", ",") if sep in value), None)
    items = value.split(separator) if separator else [value]
    if not all(_is_n_in_one(item) for item in items):
        return None
    return rest, NInOne(tuple(items), separator)


def parse_known_flag_tag(text: str) -> ParseResult[Flag]:
    result = exact_parens(text, KNOWN_FLAGS)
    if result is None:
        return None
    rest, value = result
    return rest, Flag(FlagType.PARENTHESIZED, value)


def _parse_dump_code(text: str, code: str) -> ParseResult[DumpCode]:
    rest = tag(text, f"[{code}")
    if rest is None:
        return None
    rest, number = take_while(rest, lambda c: is_digit(c) or is_lower(c))
    rest, kind = take_while(rest, is_upper)
    result = one_of_tags(rest, ("+", "-"))
    rest, separator = result if result else (rest, None)

    argnum = None
    if separator == "-":
        result = take_while(rest, lambda c: c != ']', minimum=1)
        if result is None:
            return None
        rest, args = result
    else:
        if separator == "+":
            rest, argnum = take_while(rest, is_digit)
        rest, args = take_while(rest, is_alnum)

    rest = tag(rest, "]")
    if rest is None:
        return None
    return rest, DumpCode(code, number or None, kind or None, separator,
                          argnum or None, args or None)


def parse_dump_code_tag(text: str) -> ParseResult[DumpCode]:
    for code in DUMP_CODES:
        result = _parse_dump_code(text, code)
        if result is not None:
            return result
    return None


_KNOWN_TAG_READERS = (
    parse_region_tag,
    parse_year_tag,
    parse_volume_tag,
    parse_version_tag,
    parse_game_hack_tag,
    parse_multilanguage_tag,
    parse_translation_tag,
    parse_media_tag,
    parse_n_in_one_tag,
    parse_known_flag_tag,
    parse_dump_code_tag,
)


def parse_known_tag(text: str) -> ParseResult:
    for reader in _KNOWN_TAG_READERS:
        result = reader(text)
        if result is not None:
            return result
    return None


def parse_additional_parens_tag(text: str) -> ParseResult[Flag]:
    result = parens_text(text)
    if result is None:
        return None
    rest, value = result
    return rest, Flag(FlagType.PARENTHESIZED, value)


def parse_additional_brackets_tag(text: str) -> ParseResult[Flag]:
    result = brackets_text(text)
    if result is None:
        return None
    rest, value = result
    return rest, Flag(FlagType.BRACKETED, value)


def _parse_flag(text: str) -> ParseResult:
    after_space = tag(text, " ")
    if after_space is not None:
        text = after_space
    return (parse_known_tag(text)
            or parse_additional_parens_tag(text)
            or parse_additional_brackets_tag(text))


def _parse_flags_to_end(text: str) -> ParseResult[List]:
    """One or more flags that consume the whole text."""
    flags = []
    while text:
        result = _parse_flag(text)
        if result is None:
            return None
        text, flag = result
        flags.append(flag)
    if not flags:
        return None
    return text, flags


def parse_tokens(name: str) -> Optional[list]:
    result = take_up_to(name, _parse_flags_to_end)
    if result is None:
        logger.debug(f"No GoodTools flags in '{name}', reading it as a title")
        return [Title(name)]
    _, title, flags = result
    return [Title(title)] + flags


def parse(name: str) -> GoodToolsName:
    """Parse a GoodTools file name. Never fails."""
    return GoodToolsName(parse_tokens(name))
