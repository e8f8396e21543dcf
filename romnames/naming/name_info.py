"""
Release metadata extracted from a parsed file name.

``to_name_info`` folds a token stream of any convention into a ``NameInfo``
record. It never fails: tokens it does not understand are ignored and
missing fields keep their defaults.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from romnames.naming import goodtools, nointro, tosec
from romnames.naming.common import FlagType, NamingConvention, TokenizedName
from romnames.naming.region import Region, to_normalized_region_string
from romnames.naming.titles import release_title

logger = logging.getLogger(__name__)


class DevelopmentStatus(Enum):
    """How finished a release is."""
    RELEASE = "release"        # includes (Sample) releases, see NameInfo.is_demo
    PRERELEASE = "prerelease"  # No-Intro (Beta); TOSEC alpha, beta, preview, pre-release
    PROTOTYPE = "prototype"    # No-Intro (Proto); TOSEC proto


@dataclass(frozen=True)
class NameInfo:
    """Structured metadata about a single release."""
    entry_title: str
    release_title: str
    naming_convention: NamingConvention
    region: Tuple[Region, ...] = (Region.UNKNOWN,)
    part_number: Optional[int] = None
    version: Optional[str] = None
    is_unlicensed: bool = False
    is_demo: bool = False
    is_system: bool = False
    status: DevelopmentStatus = DevelopmentStatus.RELEASE

    def as_record(self) -> Dict[str, Any]:
        """Flat scalar columns, with the region as a normalized region string."""
        return {
            'entry_title': self.entry_title,
            'release_title': self.release_title,
            'region': to_normalized_region_string(self.region),
            'part_number': self.part_number,
            'version': self.version,
            'is_unlicensed': self.is_unlicensed,
            'is_demo': self.is_demo,
            'is_system': self.is_system,
            'status': self.status.value,
            'naming_convention': self.naming_convention.value,
        }


@dataclass
class _Fields:
    """Mutable accumulator for a NameInfo."""
    entry_title: str = ""
    region: Tuple[Region, ...] = (Region.UNKNOWN,)
    part_number: Optional[int] = None
    version: Optional[str] = None
    is_unlicensed: bool = False
    is_demo: bool = False
    is_system: bool = False
    status: DevelopmentStatus = DevelopmentStatus.RELEASE

    def build(self, convention: NamingConvention) -> NameInfo:
        return NameInfo(
            entry_title=self.entry_title,
            release_title=release_title(self.entry_title),
            naming_convention=convention,
            region=self.region,
            part_number=self.part_number,
            version=self.version,
            is_unlicensed=self.is_unlicensed,
            is_demo=self.is_demo,
            is_system=self.is_system,
            status=self.status,
        )


def _version_string(major: str, minor: Optional[str]) -> str:
    return major if minor is None else f"{major}.{minor}"


def _to_int(value: Optional[str]) -> Optional[int]:
    if value is not None and value.isdigit():
        return int(value)
    return None


NOINTRO_DEMO_FLAGS = ("Kiosk", "Kiosk Demo", "Bonus Game", "Taikenban Sample ROM")


def _nointro_fields(name: nointro.NoIntroName) -> _Fields:
    info = _Fields()
    for token in name:
        if isinstance(token, nointro.tokens.Title):
            info.entry_title = token.value
        elif isinstance(token, nointro.tokens.Regions):
            info.region = token.regions
        elif isinstance(token, nointro.tokens.Release):
            if token.status in ("Demo", "Sample"):
                info.is_demo = True
            elif token.status == "Beta":
                info.status = DevelopmentStatus.PRERELEASE
            elif token.status in ("Proto", "Prototype"):
                info.status = DevelopmentStatus.PROTOTYPE
        elif isinstance(token, nointro.tokens.Flag):
            if token.value in NOINTRO_DEMO_FLAGS:
                info.is_demo = True
            elif token.value == "Unl":
                info.is_unlicensed = True
            elif token.value == "BIOS":
                info.is_system = True
        elif isinstance(token, nointro.tokens.Version):
            if token.versions:
                first = token.versions[0]
                info.version = _version_string(first.major, first.minor)
        elif isinstance(token, nointro.tokens.Media):
            info.part_number = _to_int(token.number)
    return info


def _goodtools_fields(name: goodtools.GoodToolsName) -> _Fields:
    info = _Fields()
    for token in name:
        if isinstance(token, goodtools.tokens.Title):
            info.entry_title = token.value
        elif isinstance(token, goodtools.tokens.Regions):
            info.region = token.regions
        elif isinstance(token, goodtools.tokens.Version):
            info.version = _version_string(token.major, token.minor)
        elif isinstance(token, goodtools.tokens.Media):
            info.part_number = _to_int(token.number)
        elif isinstance(token, goodtools.tokens.Flag) \
                and token.flag_type is FlagType.PARENTHESIZED:
            if token.value == "Unl":
                info.is_unlicensed = True
            elif token.value in ("Kiosk Demo", "Demo"):
                info.is_demo = True
            elif token.value in ("Beta", "Alpha", "Pre-Release"):
                info.status = DevelopmentStatus.PRERELEASE
            elif token.value == "Prototype":
                info.status = DevelopmentStatus.PROTOTYPE
    return info


TOSEC_PROTOTYPE_STATUSES = ("proto", "Proto", "Prototype")
TOSEC_SIDES = {"A": 1, "B": 2}


def _tosec_fields(name: tosec.TOSECName) -> _Fields:
    info = _Fields()
    for token in name:
        if isinstance(token, tosec.tokens.Title):
            info.entry_title = token.value
        elif isinstance(token, tosec.tokens.Regions):
            info.region = token.regions
        elif isinstance(token, tosec.tokens.Media):
            if token.parts:
                first = token.parts[0]
                if first.kind == "Side":
                    info.part_number = TOSEC_SIDES.get(first.number)
                else:
                    info.part_number = _to_int(first.number)
        elif isinstance(token, tosec.tokens.Version):
            info.version = _version_string(token.major, token.minor)
        elif isinstance(token, tosec.tokens.DumpInfo) and token.code == "p":
            info.is_unlicensed = True
        elif isinstance(token, tosec.tokens.Demo):
            info.is_demo = True
        elif isinstance(token, tosec.tokens.Development):
            if token.value in TOSEC_PROTOTYPE_STATUSES:
                info.status = DevelopmentStatus.PROTOTYPE
            else:
                info.status = DevelopmentStatus.PRERELEASE

    if info.entry_title.endswith(("BIOS", "System Software")):
        info.is_system = True
    return info


_EXTRACTORS = {
    NamingConvention.NOINTRO: _nointro_fields,
    NamingConvention.GOODTOOLS: _goodtools_fields,
    NamingConvention.TOSEC: _tosec_fields,
}


def to_name_info(name: TokenizedName) -> NameInfo:
    """
    Extract release metadata from a parsed name.

    Args:
        name: A parsed TOSEC, No-Intro or GoodTools name

    Returns:
        NameInfo for the release
    """
    extractor = _EXTRACTORS.get(name.convention)
    if extractor is None:
        raise TypeError(f"No metadata extractor for {type(name).__name__}")
    info = extractor(name).build(name.convention)
    logger.debug(f"Extracted '{info.release_title}' from {name.convention.value} name")
    return info
