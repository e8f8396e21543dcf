"""
Region resolution for the three naming conventions.

Each convention spells regions differently: TOSEC uses hyphenated ISO codes
(``US-EU``), No-Intro uses country names (``USA, Europe``) and GoodTools uses
short letter codes (``U``, ``JUE``). All of them resolve to the same closed
``Region`` enumeration, whose canonical external form is a 2 letter code.

Resolved region lists keep the order in which regions first appear and drop
duplicates.
"""

import logging
from enum import Enum
from typing import Dict, Iterable, List, Sequence, Tuple

from romnames.naming.common import NamingConvention

logger = logging.getLogger(__name__)


class Region(Enum):
    """Country or area a release was made for, keyed by canonical code."""
    UNKNOWN = "ZZ"
    UNITED_ARAB_EMIRATES = "AE"
    ALBANIA = "AL"
    ASIA = "AS"
    ARGENTINA = "AR"
    AUSTRIA = "AT"
    AUSTRALIA = "AU"
    BOSNIA = "BA"
    BELGIUM = "BE"
    BULGARIA = "BG"
    BRAZIL = "BR"
    CANADA = "CA"
    SWITZERLAND = "CH"
    CHILE = "CL"
    CHINA = "CN"
    SERBIA = "CS"
    CYPRUS = "CY"
    CZECHIA = "CZ"
    GERMANY = "DE"
    DENMARK = "DK"
    ESTONIA = "EE"
    EGYPT = "EG"
    SPAIN = "ES"
    EUROPE = "EU"
    FINLAND = "FI"
    FRANCE = "FR"
    UNITED_KINGDOM = "GB"
    GREECE = "GR"
    HONG_KONG = "HK"
    CROATIA = "HR"
    HUNGARY = "HU"
    INDONESIA = "ID"
    IRELAND = "IE"
    ISRAEL = "IL"
    INDIA = "IN"
    IRAN = "IR"
    ICELAND = "IS"
    ITALY = "IT"
    JORDAN = "JO"
    JAPAN = "JP"
    SOUTH_KOREA = "KR"
    LITHUANIA = "LT"
    LUXEMBOURG = "LU"
    LATVIA = "LV"
    MONGOLIA = "MN"
    MEXICO = "MX"
    MALAYSIA = "MY"
    NETHERLANDS = "NL"
    NORWAY = "NO"
    NEPAL = "NP"
    NEW_ZEALAND = "NZ"
    OMAN = "OM"
    PERU = "PE"
    PHILIPPINES = "PH"
    POLAND = "PL"
    PORTUGAL = "PT"
    QATAR = "QA"
    ROMANIA = "RO"
    RUSSIA = "RU"
    SWEDEN = "SE"
    SINGAPORE = "SG"
    SLOVENIA = "SI"
    SLOVAKIA = "SK"
    THAILAND = "TH"
    TURKEY = "TR"
    TAIWAN = "TW"
    UNITED_STATES = "US"
    VIETNAM = "VN"
    YUGOSLAVIA = "YU"
    SOUTH_AFRICA = "ZA"

    @property
    def code(self) -> str:
        """Canonical 2 letter code."""
        return self.value

    @classmethod
    def from_code(cls, code: str) -> 'Region':
        """Look up a region by its canonical code."""
        return cls(code)

    def __lt__(self, other):
        if not isinstance(other, Region):
            return NotImplemented
        return _REGION_ORDER[self] < _REGION_ORDER[other]

    def __str__(self) -> str:
        return self.value


_REGION_ORDER = {region: index for index, region in enumerate(Region)}


class RegionError(Exception):
    """Base class for region resolution errors."""

    def __init__(self, message: str, convention: NamingConvention):
        super().__init__(message)
        self.convention = convention


class BadRegionCode(RegionError):
    """A region fragment could not be resolved."""

    def __init__(self, convention: NamingConvention, index: int, offset: int):
        super().__init__(
            f"Bad {convention.value} region code at fragment {index} (offset {offset})",
            convention,
        )
        self.index = index
        self.offset = offset


class NoRegions(RegionError):
    """The region string did not contain any region."""

    def __init__(self, convention: NamingConvention):
        super().__init__(f"No {convention.value} regions found", convention)


R = Region

# TOSEC codes are the canonical codes themselves.
TOSEC_REGIONS: Dict[str, Region] = {region.value: region for region in Region}

# GoodCodes.txt
GOODTOOLS_REGIONS: Dict[str, Region] = {
    "A": R.AUSTRALIA,
    "As": R.ASIA,
    "B": R.BRAZIL,
    "C": R.CANADA,
    "Ch": R.CHINA,
    "Cz": R.CZECHIA,
    "D": R.NETHERLANDS,  # Dutch
    "E": R.EUROPE,
    "F": R.FRANCE,
    "G": R.GERMANY,
    "Gr": R.GREECE,
    "HK": R.HONG_KONG,
    "I": R.ITALY,
    "J": R.JAPAN,
    "K": R.SOUTH_KOREA,
    "Nl": R.NETHERLANDS,
    "No": R.NORWAY,
    "R": R.RUSSIA,
    "S": R.SPAIN,
    "Sw": R.SWEDEN,
    "U": R.UNITED_STATES,
    "UK": R.UNITED_KINGDOM,
    "Unk": R.UNKNOWN,
}

GOODTOOLS_ALIASES: Dict[str, Tuple[Region, ...]] = {
    "1": (R.JAPAN, R.SOUTH_KOREA),
    "4": (R.UNITED_STATES, R.BRAZIL),
    "5": (R.JAPAN, R.UNITED_STATES),
    "W": (R.JAPAN, R.UNITED_STATES, R.EUROPE),
    "JUE": (R.JAPAN, R.UNITED_STATES, R.EUROPE),
    "UE": (R.UNITED_STATES, R.EUROPE),
    "JU": (R.JAPAN, R.UNITED_STATES),
}

NOINTRO_REGIONS: Dict[str, Region] = {
    "Australia": R.AUSTRALIA,
    "Argentina": R.ARGENTINA,
    "Brazil": R.BRAZIL,
    "Canada": R.CANADA,
    "China": R.CHINA,
    "Denmark": R.DENMARK,
    "Netherlands": R.NETHERLANDS,
    "The Netherlands": R.NETHERLANDS,
    "Europe": R.EUROPE,
    "France": R.FRANCE,
    "Germany": R.GERMANY,
    "Greece": R.GREECE,
    "Hong Kong": R.HONG_KONG,
    "Italy": R.ITALY,
    "Japan": R.JAPAN,
    "Korea": R.SOUTH_KOREA,
    "Norway": R.NORWAY,
    "Russia": R.RUSSIA,
    "Spain": R.SPAIN,
    "Sweden": R.SWEDEN,
    "USA": R.UNITED_STATES,
    "UK": R.UNITED_KINGDOM,
    "United Kingdom": R.UNITED_KINGDOM,
    "Asia": R.ASIA,
    "Poland": R.POLAND,
    "Portugal": R.PORTUGAL,
    "Ireland": R.IRELAND,
    "Unknown": R.UNKNOWN,
    "Taiwan": R.TAIWAN,
    "Finland": R.FINLAND,
    "UAE": R.UNITED_ARAB_EMIRATES,
    "United Arab Emirates": R.UNITED_ARAB_EMIRATES,
    "Albania": R.ALBANIA,
    "Austria": R.AUSTRIA,
    "Bosnia": R.BOSNIA,
    "Belgium": R.BELGIUM,
    "Bulgaria": R.BULGARIA,
    "Switzerland": R.SWITZERLAND,
    "Chile": R.CHILE,
    "Serbia": R.SERBIA,
    "Cyprus": R.CYPRUS,
    "Czech Republic": R.CZECHIA,
    "Czechia": R.CZECHIA,
    "Estonia": R.ESTONIA,
    "Egypt": R.EGYPT,
    "Croatia": R.CROATIA,
    "Hungary": R.HUNGARY,
    "Indonesia": R.INDONESIA,
    "Israel": R.ISRAEL,
    "India": R.INDIA,
    "Iran": R.IRAN,
    "Iceland": R.ICELAND,
    "Jordan": R.JORDAN,
    "Lithuania": R.LITHUANIA,
    "Luxembourg": R.LUXEMBOURG,
    "Latvia": R.LATVIA,
    "Mongolia": R.MONGOLIA,
    "Mexico": R.MEXICO,
    "Malaysia": R.MALAYSIA,
    "Nepal": R.NEPAL,
    "New Zealand": R.NEW_ZEALAND,
    "Oman": R.OMAN,
    "Peru": R.PERU,
    "Philippines": R.PHILIPPINES,
    "Qatar": R.QATAR,
    "Romania": R.ROMANIA,
    "Singapore": R.SINGAPORE,
    "Slovenia": R.SLOVENIA,
    "Slovakia": R.SLOVAKIA,
    "Thailand": R.THAILAND,
    "Turkey": R.TURKEY,
    "Vietnam": R.VIETNAM,
    "Yugoslavia": R.YUGOSLAVIA,
    "South Africa": R.SOUTH_AFRICA,
}

_WORLD = (R.UNITED_STATES, R.JAPAN, R.EUROPE)

NOINTRO_ALIASES: Dict[str, Tuple[Region, ...]] = {
    "World": _WORLD,
    "World (guessed)": _WORLD,
    "World (Guessed)": _WORLD,
    "Export": _WORLD,
    "Scandinavia": (R.DENMARK, R.NORWAY, R.SWEDEN),
    "Latin America": (R.MEXICO, R.BRAZIL, R.ARGENTINA, R.CHILE, R.PERU),
}

RegionResolution = Tuple[List[str], List[Region]]


def _ordered_unique(regions: Iterable[Region]) -> List[Region]:
    return list(dict.fromkeys(regions))


def resolve_tosec(region_str: str) -> RegionResolution:
    """
    Resolve a hyphen separated TOSEC region string such as ``US-EU``.

    Raises:
        BadRegionCode: If a fragment is not a known 2 letter code
        NoRegions: If the string is empty
    """
    if not region_str:
        raise NoRegions(NamingConvention.TOSEC)

    fragments: List[str] = []
    regions: List[Region] = []
    offset = 0
    for index, code in enumerate(region_str.split('-')):
        region = TOSEC_REGIONS.get(code)
        if len(code) != 2 or region is None:
            raise BadRegionCode(NamingConvention.TOSEC, index, offset)
        fragments.append(code)
        regions.append(region)
        offset += len(code) + len('-')

    return fragments, _ordered_unique(regions)


def resolve_nointro(region_str: str) -> RegionResolution:
    """
    Resolve a No-Intro region string such as ``USA, Europe``.

    Raises:
        BadRegionCode: If a fragment is not a known country name or alias
        NoRegions: If the string is empty
    """
    if not region_str:
        raise NoRegions(NamingConvention.NOINTRO)

    fragments: List[str] = []
    regions: List[Region] = []
    offset = 0
    for index, name in enumerate(region_str.split(', ')):
        if name in NOINTRO_ALIASES:
            regions.extend(NOINTRO_ALIASES[name])
        elif all(is_region_char(c) for c in name) and name in NOINTRO_REGIONS:
            regions.append(NOINTRO_REGIONS[name])
        else:
            raise BadRegionCode(NamingConvention.NOINTRO, index, offset)
        fragments.append(name)
        offset += len(name) + len(', ')

    return fragments, _ordered_unique(regions)


def is_region_char(char: str) -> bool:
    return char == ' ' or ('a' <= char <= 'z') or ('A' <= char <= 'Z')


def resolve_goodtools(region_str: str) -> RegionResolution:
    """
    Resolve a comma separated GoodTools region string such as ``U`` or ``J,K``.

    Raises:
        BadRegionCode: If a fragment is not a known code or alias
        NoRegions: If the string is empty
    """
    if not region_str:
        raise NoRegions(NamingConvention.GOODTOOLS)

    fragments: List[str] = []
    regions: List[Region] = []
    offset = 0
    for index, code in enumerate(region_str.split(',')):
        if code in GOODTOOLS_ALIASES:
            regions.extend(GOODTOOLS_ALIASES[code])
        elif code in GOODTOOLS_REGIONS:
            regions.append(GOODTOOLS_REGIONS[code])
        else:
            raise BadRegionCode(NamingConvention.GOODTOOLS, index, offset)
        fragments.append(code)
        offset += len(code) + len(',')

    return fragments, _ordered_unique(regions)


_RESOLVERS = {
    NamingConvention.TOSEC: resolve_tosec,
    NamingConvention.NOINTRO: resolve_nointro,
    NamingConvention.GOODTOOLS: resolve_goodtools,
}


def resolve(convention: NamingConvention, region_str: str) -> RegionResolution:
    """
    Resolve a region string in the given convention.

    Returns:
        Tuple of the raw fragments as spelled in the input and the resolved regions

    Raises:
        RegionError: If the string cannot be resolved
        ValueError: If the convention has no region syntax
    """
    resolver = _RESOLVERS.get(convention)
    if resolver is None:
        raise ValueError(f"No region syntax for the {convention.value} convention")
    return resolver(region_str)


def best_guess(region_str: str) -> List[Region]:
    """
    Resolve a region string of unknown convention.

    Every resolver is tried; the result recovering the most known regions wins,
    preferring GoodTools, then No-Intro, then TOSEC on ties. Never fails.
    """
    best: List[Region] = [Region.UNKNOWN]
    best_score = -1
    for convention in (NamingConvention.GOODTOOLS, NamingConvention.NOINTRO,
                       NamingConvention.TOSEC):
        try:
            _, regions = resolve(convention, region_str)
        except RegionError:
            regions = [Region.UNKNOWN]
        score = sum(1 for region in regions if region is not Region.UNKNOWN)
        if score > best_score:
            best, best_score = regions, score

    logger.debug(f"Best region guess for '{region_str}': {to_normalized_region_string(best)}")
    return best


def to_normalized_region_string(regions: Sequence[Region]) -> str:
    """Join canonical region codes with hyphens, e.g. ``US-JP``."""
    return '-'.join(region.code for region in regions)


def from_normalized_region_string(region_str: str) -> List[Region]:
    """Inverse of ``to_normalized_region_string``."""
    _, regions = resolve_tosec(region_str)
    return regions
