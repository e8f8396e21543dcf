import logging

import pytest

from romnames.dats.dat_entry import Serial
from romnames.dats.dat_parser import (
    DatParseError,
    DatParser,
    DatSource,
    HeaderMismatchError,
)
from romnames.naming import NamingConvention, Region


VOID_TERRARIUM = "void tRrLM(); Void Terrarium"


@pytest.mark.unit
class TestNoIntroDat:
    def test_parse_file(self, dat_file):
        parser = DatParser(DatSource.NOINTRO)
        entries = parser.parse_file(dat_file("nointro.dat"))

        assert [e.entry_name for e in entries] == [
            "Star Jacker (Japan, Europe, Australia, New Zealand) (Rev 1)",
            "Tetris (Japan) (En) (Beta) [b]",
        ]
        assert parser.skipped == [VOID_TERRARIUM]

        star_jacker = entries[0]
        assert star_jacker.source == "No-Intro"
        assert star_jacker.info.naming_convention is NamingConvention.NOINTRO
        assert star_jacker.info.region == (
            Region.JAPAN, Region.EUROPE, Region.AUSTRALIA, Region.NEW_ZEALAND
        )
        assert star_jacker.serials == [Serial("MK-81086")]

    def test_rom_entries(self, dat_file):
        entries = DatParser(DatSource.NOINTRO).parse_file(dat_file("nointro.dat"))
        rom = entries[0].rom_entries[0]

        assert rom.file_name == "Star Jacker (Japan, Europe, Australia, New Zealand) (Rev 1).sg"
        assert rom.size == 32768
        assert rom.crc == "3fe59505"
        assert rom.md5 == "5a4f2f2a3a5b1d5e2c1b6e0b5f7c8d9e"
        assert rom.sha1 == "adb0a7c1b5b1d5e2c1b6e0b5f7c8d9e0a1b2c3d4"

    def test_serial_attribute_split(self, dat_file):
        entries = DatParser(DatSource.NOINTRO).parse_file(dat_file("nointro.dat"))
        assert entries[1].serials == [Serial("DMG-TRA"), Serial("DMG-TRA-1")]
        assert entries[1].rom_entries[0].md5 is None

    def test_keeps_unparseable_entries(self, dat_file):
        parser = DatParser(DatSource.NOINTRO, skip_unparseable=False)
        entries = parser.parse_file(dat_file("nointro.dat"))

        assert len(entries) == 3
        assert entries[2].entry_name == VOID_TERRARIUM
        assert entries[2].info is None
        assert parser.skipped == [VOID_TERRARIUM]

    def test_logs_skipped_entries(self, dat_file, caplog):
        with caplog.at_level(logging.WARNING):
            DatParser(DatSource.NOINTRO).parse_file(dat_file("nointro.dat"))
        assert "Skipping entry" in caplog.text


@pytest.mark.unit
def test_redump_serials_and_media(dat_file):
    entries = DatParser("Redump").parse_file(dat_file("redump.dat"))

    assert len(entries) == 1
    entry = entries[0]
    assert entry.serials == [Serial("SCUS-94163"), Serial("SCUS-94164")]
    assert len(entry.rom_entries) == 2
    assert entry.rom_entries[1].size == 747435024
    assert entry.info.part_number == 1


@pytest.mark.unit
def test_tosec_names_always_parse(dat_file):
    parser = DatParser(DatSource.TOSEC)
    entries = parser.parse_file(dat_file("tosec.dat"))

    assert len(entries) == 2
    assert parser.skipped == []
    assert entries[0].info.region == (Region.BRAZIL,)
    assert entries[0].serials == []
    assert entries[1].info.entry_title == VOID_TERRARIUM


@pytest.mark.unit
class TestNamelessEntries:
    def test_skipped(self, dat_file, caplog):
        parser = DatParser(DatSource.TOSEC)
        with caplog.at_level(logging.WARNING):
            entries = parser.parse_file(dat_file("nameless.dat"))

        assert [e.entry_name for e in entries] == ["Xevious (1983)(CCE)(NTSC)(BR)"]
        assert parser.skipped == [""]
        assert "game entry has no name" in caplog.text

    def test_kept_without_name_info(self, dat_file):
        parser = DatParser(DatSource.TOSEC, skip_unparseable=False)
        entries = parser.parse_file(dat_file("nameless.dat"))

        assert len(entries) == 2
        assert entries[0].entry_name == ""
        assert entries[0].info is None
        assert entries[0].rom_entries[0].crc == "11111111"
        assert entries[1].info.region == (Region.BRAZIL,)


@pytest.mark.unit
class TestHeaderCheck:
    def test_mismatch(self, dat_file):
        with pytest.raises(HeaderMismatchError) as exc_info:
            DatParser(DatSource.NOINTRO).parse_file(dat_file("bad_header.dat"))
        assert exc_info.value.expected == "No-Intro"
        assert exc_info.value.actual == "example.com"

    def test_disabled(self, dat_file):
        entries = DatParser(DatSource.NOINTRO, check_header=False).parse_file(dat_file("bad_header.dat"))
        assert entries[0].info.entry_title == "Some Game"

    def test_missing_header(self):
        with pytest.raises(HeaderMismatchError, match='"None"'):
            DatParser(DatSource.REDUMP).parse_string("<datafile></datafile>")

    def test_unchecked_sources(self, dat_file):
        entries = DatParser(DatSource.GOODTOOLS).parse_file(dat_file("bad_header.dat"))
        assert entries[0].info.naming_convention is NamingConvention.GOODTOOLS


@pytest.mark.unit
def test_generic_source_has_no_name_info(dat_file):
    entries = DatParser(DatSource.GENERIC).parse_file(dat_file("bad_header.dat"))
    assert entries[0].info is None
    assert entries[0].source == "Generic"


@pytest.mark.unit
class TestErrors:
    def test_missing_file(self, tmp_path):
        with pytest.raises(DatParseError, match="not found"):
            DatParser(DatSource.TOSEC).parse_file(tmp_path / "missing.dat")

    def test_malformed_xml(self):
        with pytest.raises(DatParseError):
            DatParser(DatSource.TOSEC).parse_string("<datafile><game>")

    def test_malformed_file(self, tmp_path):
        path = tmp_path / "broken.dat"
        path.write_text("<datafile><header>")
        with pytest.raises(DatParseError):
            DatParser(DatSource.TOSEC).parse_file(path)


@pytest.mark.unit
@pytest.mark.parametrize("name, expected", [
    ("No-Intro", DatSource.NOINTRO),
    ("nointro", DatSource.NOINTRO),
    ("redump", DatSource.REDUMP),
    ("OpenGood", DatSource.OPENGOOD),
])
def test_source_from_name(name, expected):
    assert DatSource.from_name(name) is expected


@pytest.mark.unit
def test_source_from_unknown_name():
    with pytest.raises(ValueError):
        DatSource.from_name("MAME")
