"""DAT file ingestion."""

from romnames.dats.dat_entry import GameEntry, RomEntry, Serial
from romnames.dats.dat_parser import (
    DatError,
    DatParseError,
    DatParser,
    DatSource,
    HeaderMismatchError,
)

__all__ = [
    'DatError',
    'DatParseError',
    'DatParser',
    'DatSource',
    'GameEntry',
    'HeaderMismatchError',
    'RomEntry',
    'Serial',
]
