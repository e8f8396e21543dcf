"""Parser for Logiqx XML DAT files.

Reads game entries from No-Intro, Redump, TOSEC and GoodTools DATs and
parses each game name in the catalog's naming convention.
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

from lxml import etree

from romnames.dats.dat_entry import GameEntry, RomEntry, Serial
from romnames.naming import goodtools, nointro, tosec
from romnames.naming.common import NamingError
from romnames.naming.name_info import NameInfo, to_name_info

logger = logging.getLogger(__name__)


class DatSource(Enum):
    """Catalogs a DAT can come from."""
    NOINTRO = "No-Intro"
    REDUMP = "Redump"
    TOSEC = "TOSEC"
    GOODTOOLS = "GoodTools"
    OPENGOOD = "OpenGood"
    GENERIC = "Generic"

    @classmethod
    def from_name(cls, name: str) -> 'DatSource':
        key = name.strip().lower().replace('-', '')
        for source in cls:
            if source.value.lower().replace('-', '') == key:
                return source
        raise ValueError(f"Unknown DAT source: {name}")


# Expected <header><homepage> values; sources not listed are not checked.
HEADER_HOMEPAGES: Dict[DatSource, str] = {
    DatSource.NOINTRO: "No-Intro",
    DatSource.REDUMP: "redump.org",
    DatSource.TOSEC: "TOSEC",
}

_NAME_PARSERS: Dict[DatSource, Callable] = {
    DatSource.NOINTRO: nointro.parse,
    DatSource.REDUMP: nointro.parse,
    DatSource.TOSEC: tosec.parse,
    DatSource.GOODTOOLS: goodtools.parse,
    DatSource.OPENGOOD: goodtools.parse,
}


class DatError(Exception):
    """Base class for DAT errors."""
    pass


class DatParseError(DatError):
    """The DAT file is missing or is not valid XML."""
    pass


class HeaderMismatchError(DatError):
    """The DAT header does not name the expected catalog."""

    def __init__(self, expected: str, actual: Optional[str]):
        super().__init__(
            f'Expected DAT to have header homepage "{expected}" but it actually was '
            f'"{actual or "None"}". Disable the header check to ignore it.'
        )
        self.expected = expected
        self.actual = actual


def _lower(value: Optional[str]) -> Optional[str]:
    return value.lower() if value is not None else None


class DatParser:
    """Parser for XML DAT files of a single catalog."""

    def __init__(self, source: Union[DatSource, str], check_header: bool = True,
                 skip_unparseable: bool = True):
        """Initialize parser for a catalog.

        Args:
            source: Catalog the DAT comes from
            check_header: Verify the header homepage matches the catalog
            skip_unparseable: Drop entries whose names fail to parse instead
                of keeping them without name info
        """
        self.source = source if isinstance(source, DatSource) else DatSource.from_name(source)
        self.check_header = check_header
        self.skip_unparseable = skip_unparseable
        self.skipped: List[str] = []

    def parse_file(self, dat_path: Path) -> List[GameEntry]:
        """Parse a DAT file.

        Raises:
            DatParseError: If the file doesn't exist or is malformed
            HeaderMismatchError: If the header check fails
        """
        dat_path = Path(dat_path)
        if not dat_path.exists():
            raise DatParseError(f"DAT file not found: {dat_path}")

        logger.info(f"Parsing {self.source.value} DAT: {dat_path}")
        try:
            root = etree.parse(str(dat_path)).getroot()
        except etree.XMLSyntaxError as e:
            raise DatParseError(f"Error parsing {self.source.value} XML: {e}") from e
        return self._parse_root(root)

    def parse_string(self, xml: Union[str, bytes]) -> List[GameEntry]:
        """Parse DAT contents held in memory."""
        if isinstance(xml, str):
            xml = xml.encode('utf-8')
        try:
            root = etree.fromstring(xml)
        except etree.XMLSyntaxError as e:
            raise DatParseError(f"Error parsing {self.source.value} XML: {e}") from e
        return self._parse_root(root)

    def _parse_root(self, root) -> List[GameEntry]:
        if self.check_header:
            self._check_header(root)

        self.skipped = []
        entries = []
        for game_elem in root.findall("game"):
            entry = self._parse_game(game_elem)
            if entry is not None:
                entries.append(entry)

        logger.info(f"Parsed {len(entries)} entries from {self.source.value} DAT")
        if self.skipped:
            logger.info(f"  - {len(self.skipped)} entries skipped with unparseable names")
        return entries

    def _check_header(self, root) -> None:
        expected = HEADER_HOMEPAGES.get(self.source)
        if expected is None:
            return
        actual = root.findtext("header/homepage")
        if actual != expected:
            raise HeaderMismatchError(expected, actual)

    def _parse_name(self, name: str) -> Optional[NameInfo]:
        parser = _NAME_PARSERS.get(self.source)
        if parser is None:
            return None
        return to_name_info(parser(name))

    def _parse_game(self, game_elem) -> Optional[GameEntry]:
        """Parse a single game element.

        Returns:
            GameEntry, or None if the entry is skipped
        """
        name = game_elem.get("name", "")
        info = None
        if not name:
            if self._reject(name, "game entry has no name"):
                return None
        else:
            try:
                info = self._parse_name(name)
            except NamingError as e:
                if self._reject(name, str(e)):
                    return None

        rom_elems = game_elem.findall("rom")
        if self.source is DatSource.NOINTRO:
            serials = [serial for rom_elem in rom_elems
                       for serial in Serial.split(rom_elem.get("serial"))]
        elif self.source is DatSource.REDUMP:
            serials = Serial.split(game_elem.findtext("serial"))
        else:
            serials = []

        return GameEntry(
            entry_name=name,
            info=info,
            source=self.source.value,
            serials=serials,
            rom_entries=[self._parse_rom(rom_elem) for rom_elem in rom_elems],
        )

    def _reject(self, name: str, reason: str) -> bool:
        """Record an unparseable entry. Returns True if it is to be skipped."""
        self.skipped.append(name)
        if self.skip_unparseable:
            logger.warning(f"Skipping entry: {reason}")
            return True
        logger.warning(f"Keeping entry without name info: {reason}")
        return False

    def _parse_rom(self, rom_elem) -> RomEntry:
        size = rom_elem.get("size")
        return RomEntry(
            file_name=rom_elem.get("name"),
            size=int(size) if size else 0,
            crc=_lower(rom_elem.get("crc")),
            md5=_lower(rom_elem.get("md5")),
            sha1=_lower(rom_elem.get("sha1")),
        )
