"""Game and ROM entries read from DAT files."""

import re
from dataclasses import dataclass, field
from typing import List, Optional

from romnames.naming.name_info import NameInfo


@dataclass
class RomEntry:
    """A single ROM file of a game entry. Hashes are lowercase hex."""
    file_name: str
    size: int = 0
    crc: Optional[str] = None
    md5: Optional[str] = None
    sha1: Optional[str] = None


def _rewrite(pattern: str, template: str):
    regex = re.compile(pattern)

    def rule(serial: str) -> Optional[str]:
        match = regex.match(serial)
        return match.expand(template) if match else None
    return rule


_SONY = _rewrite(r"^(?P<code>[a-zA-Z]+)[-_ ](?P<number>\d+)([#\-_ /]*(\w?|$))*$", r"\g<code>-\g<number>")
_NEC_TGCD = _rewrite(r"^(?P<code>\w{4,5})[ -](?P<number>\w+)$", r"\g<code>\g<number>")
_SEGA = (
    _rewrite(r"^(?P<pre>\w+)-(?P<code>\w+)(-[\w.]+)$", r"\g<pre>-\g<code>"),
    _rewrite(r"^(?P<pre>MK|T|GS)(?P<code>\w+)(-[\w.]+)?$", r"\g<pre>-\g<code>"),
    _rewrite(r"^(?P<pre>0{2,3})(?P<code>\d+)(-\d{2}\w?)?$", r"\g<pre>\g<code>"),
)

# Nintendo serials reduce to their product code.
_NINTENDO = {
    "NINTENDO_GCN": _rewrite(r"^DL-DOL-(?P<code>\w{4})-[-\w()]+$", r"\g<code>"),
    "NINTENDO_WII": _rewrite(r"^RVL-(?P<code>\w{4})-[-\w()]+$", r"\g<code>"),
    "NINTENDO_WIIU": _rewrite(r"^WUP-[PMNTUB]-(?P<code>\w{4})-[-\w()]+$", r"\g<code>"),
    "NINTENDO_3DS": _rewrite(r"^CTR-[PMNTUB]-(?P<code>\w{4})(-[-\w()]+)*$", r"\g<code>"),
    "NINTENDO_NSW": _rewrite(r"^LA-H-(?P<code>\w{5})(-[-\w()]+)*$", r"\g<code>"),
}

SONY_PLATFORMS = ("SONY_PSX", "SONY_PS2", "SONY_PS3", "SONY_PS4", "SONY_PSP", "SONY_PSV")
SEGA_PLATFORMS = ("SEGA_GEN", "SEGA_CD", "SEGA_DC", "SEGA_GG", "SEGA_SAT", "SEGA_32X", "SEGA_32X_CD")


@dataclass(frozen=True)
class Serial:
    """A product serial as printed in a DAT."""
    value: str

    @classmethod
    def split(cls, serials: Optional[str]) -> List['Serial']:
        """Split a comma separated serial attribute, e.g. ``"SLUS-00001, SLUS-00002"``."""
        if not serials:
            return []
        return [cls(s.strip()) for s in serials.split(',') if s.strip()]

    def as_normalized(self, platform_id: str) -> 'Serial':
        """
        Normalize the serial for a platform so that serials from different
        catalogs compare equal.

        Args:
            platform_id: Platform identifier such as ``SONY_PSX`` or ``NINTENDO_GCN``

        Returns:
            The normalized serial, or this serial if no rule applies
        """
        if platform_id in SONY_PLATFORMS:
            rules = (_SONY,)
        elif platform_id in SEGA_PLATFORMS:
            rules = _SEGA
        elif platform_id == "NEC_TGCD":
            rules = (_NEC_TGCD,)
        elif platform_id in _NINTENDO:
            rules = (_NINTENDO[platform_id],)
        else:
            return self

        for rule in rules:
            rewritten = rule(self.value)
            if rewritten is not None:
                return Serial(rewritten)
        return self

    def __str__(self) -> str:
        return self.value


@dataclass
class GameEntry:
    """
    A game entry of a DAT file.

    ``info`` is None for sources without a naming convention, and for
    entries whose name could not be parsed when those are kept.
    """
    entry_name: str
    info: Optional[NameInfo]
    source: str
    serials: List[Serial] = field(default_factory=list)
    rom_entries: List[RomEntry] = field(default_factory=list)
