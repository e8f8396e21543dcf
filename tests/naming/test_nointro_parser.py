import pytest

from romnames.naming.common import FlagType, NamingConvention, ParseError
from romnames.naming.nointro import parse
from romnames.naming.nointro.parser import (
    parse_languages,
    parse_scene_number,
    parse_version,
)
from romnames.naming.nointro.tokens import (
    Flag,
    Languages,
    Media,
    Regions,
    Release,
    Scene,
    Title,
    Version,
    VersionEntry,
)
from romnames.naming.region import Region


@pytest.mark.unit
class TestParse:
    def test_title_regions_revision(self):
        name = parse("Star Jacker (Japan, Europe, Australia, New Zealand) (Rev 1)")
        assert name.tokens == [
            Title("Star Jacker"),
            Regions(("Japan", "Europe", "Australia", "New Zealand")),
            Version((VersionEntry("Rev", "1"),)),
        ]
        assert name[1].regions == (
            Region.JAPAN, Region.EUROPE, Region.AUSTRALIA, Region.NEW_ZEALAND
        )
        assert name.convention is NamingConvention.NOINTRO

    def test_world_region(self):
        name = parse("Super Mario Bros. (World)")
        assert name.title == "Super Mario Bros."
        assert name[1].regions == (Region.UNITED_STATES, Region.JAPAN, Region.EUROPE)

    def test_languages_release_and_bad_dump(self):
        name = parse("Tetris (Japan) (En) (Beta) [b]")
        assert name.tokens == [
            Title("Tetris"),
            Regions(("Japan",)),
            Languages((("En", None),)),
            Release("Beta"),
            Flag(FlagType.BRACKETED, "b"),
        ]

    def test_prototype_is_not_read_as_proto(self):
        name = parse("Some Game (USA) (Prototype)")
        assert name[2] == Release("Prototype")

    def test_disc(self):
        name = parse("Final Fantasy VII (USA) (Disc 1)")
        assert name[2] == Media("Disc", "1")

    def test_scene_number(self):
        name = parse("1234 - Some Title (USA)")
        assert name.tokens == [Scene("1234"), Title("Some Title"), Regions(("USA",))]

    def test_prefixed_scene_number(self):
        name = parse("z123 - Some Title (Europe)")
        assert name[0] == Scene("123", "z")

    def test_bios(self):
        name = parse("[BIOS] Game Boy Advance (World)")
        assert name[0] == Flag(FlagType.BRACKETED, "BIOS")
        assert name.title == "Game Boy Advance"

    def test_multiple_versions(self):
        name = parse("Gran Turismo (USA) (v1.07, PS3 v1.70)")
        assert name[2] == Version((
            VersionEntry("v", "1", "07"),
            VersionEntry("v", "1", "70", prefix="PS3", separator=", "),
        ))

    def test_full_version(self):
        name = parse("PlayStation BIOS (SCPH-1001) (USA) (Version 2.2 12/04/95 A)")
        assert name.title == "PlayStation BIOS (SCPH-1001)"
        assert name[2] == Version((
            VersionEntry("Version", "2", "2", suffixes=("12/04/95", "A")),
        ))

    def test_multitap(self):
        name = parse("Game (Japan) (Multi Tap (SCPH-10090) Doukonban)")
        assert name[2] == Flag(FlagType.PARENTHESIZED, "Multi Tap (SCPH-10090) Doukonban")

    @pytest.mark.parametrize("name", [
        "void tRrLM(); Void Terrarium",
        "No Region Here",
        "Title (USA)Extra",
        "Title (Narnia)",
    ])
    def test_rejects_non_conforming_names(self, name):
        with pytest.raises(ParseError) as exc_info:
            parse(name)
        assert exc_info.value.convention is NamingConvention.NOINTRO


@pytest.mark.unit
@pytest.mark.parametrize("name", [
    "Star Jacker (Japan, Europe, Australia, New Zealand) (Rev 1)",
    "Tetris (Japan) (En) (Beta) [b]",
    "1234 - Some Title (USA)",
    "[BIOS] Game Boy Advance (World)",
    "Gran Turismo (USA) (v1.07, PS3 v1.70)",
    "PlayStation BIOS (SCPH-1001) (USA) (Version 2.2 12/04/95 A)",
    "Game (Japan) (Multi Tap (SCPH-10090) Doukonban)",
    "Game (China) (Zh-Hant,En)",
])
def test_reconstructs_original_name(name):
    assert str(parse(name)) == name


@pytest.mark.unit
class TestReaders:
    def test_languages_with_variant(self):
        assert parse_languages("Zh-Hant,En") == (
            "", Languages((("Zh", "Hant"), ("En", None)))
        )

    def test_languages_list(self):
        rest, languages = parse_languages("En,Fr,De")
        assert rest == ""
        assert [code for code, _ in languages.languages] == ["En", "Fr", "De"]

    @pytest.mark.parametrize("text, expected", [
        ("1234", Scene("1234")),
        ("xB12", Scene("12", "xB")),
        ("x123", Scene("123", "x")),
    ])
    def test_scene_number(self, text, expected):
        assert parse_scene_number(text) == ("", expected)

    @pytest.mark.parametrize("text, entry", [
        ("Rev A", VersionEntry("Rev", "A")),
        ("v1.1", VersionEntry("v", "1", "1")),
        ("v2.0 Alt", VersionEntry("v", "2", "0", suffixes=("Alt",))),
        ("1.02", VersionEntry("", "1", "02")),
    ])
    def test_version(self, text, entry):
        assert parse_version(text) == ("", Version((entry,)))
