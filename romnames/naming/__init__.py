"""
File name parsing for the TOSEC, No-Intro and GoodTools naming conventions.

The functions here dispatch on a ``NamingConvention``; the convention
packages can also be used directly.
"""

from typing import List, Tuple

from romnames.naming import goodtools, nointro, tosec
from romnames.naming.common import (
    FlagType,
    NamingConvention,
    NamingError,
    ParseError,
    TokenizedName,
)
from romnames.naming.name_info import DevelopmentStatus, NameInfo, to_name_info
from romnames.naming.region import (
    BadRegionCode,
    NoRegions,
    Region,
    RegionError,
    best_guess,
    from_normalized_region_string,
    resolve,
    to_normalized_region_string,
)
from romnames.naming.titles import release_title

_PARSERS = {
    NamingConvention.TOSEC: tosec.parse,
    NamingConvention.NOINTRO: nointro.parse,
    NamingConvention.GOODTOOLS: goodtools.parse,
}


def parse(convention: NamingConvention, name: str) -> TokenizedName:
    """
    Parse a file name in the given naming convention.

    TOSEC and GoodTools parsing never fails; malformed TOSEC names carry
    warning tokens instead.

    Raises:
        ParseError: If a No-Intro name does not follow the convention
        ValueError: If the convention is UNKNOWN
    """
    parser = _PARSERS.get(convention)
    if parser is None:
        raise ValueError(f"Cannot parse names in the {convention.value} convention")
    return parser(name)


def to_string(name: TokenizedName) -> str:
    """Reconstruct a file name. Only TOSEC names are guaranteed to round-trip exactly."""
    return str(name)


def region_resolve(convention: NamingConvention, region_str: str) -> Tuple[List[str], List[Region]]:
    """Resolve a region string; see ``romnames.naming.region.resolve``."""
    return resolve(convention, region_str)


__all__ = [
    'parse',
    'to_name_info',
    'to_string',
    'region_resolve',
    'best_guess',
    'release_title',
    'from_normalized_region_string',
    'to_normalized_region_string',
    'BadRegionCode',
    'DevelopmentStatus',
    'FlagType',
    'NameInfo',
    'NamingConvention',
    'NamingError',
    'NoRegions',
    'ParseError',
    'Region',
    'RegionError',
    'TokenizedName',
]
