import pytest

from romnames.naming.common import NamingConvention
from romnames.naming.region import (
    BadRegionCode,
    NoRegions,
    Region,
    best_guess,
    from_normalized_region_string,
    resolve,
    resolve_goodtools,
    resolve_nointro,
    resolve_tosec,
    to_normalized_region_string,
)


@pytest.mark.unit
class TestResolveTOSEC:
    def test_single_code(self):
        assert resolve_tosec("US") == (["US"], [Region.UNITED_STATES])

    def test_unknown_code_keeps_position(self):
        assert resolve_tosec("US-ZZ") == (["US", "ZZ"], [Region.UNITED_STATES, Region.UNKNOWN])

    def test_duplicates_are_dropped_in_order(self):
        _, regions = resolve_tosec("JP-US-JP")
        assert regions == [Region.JAPAN, Region.UNITED_STATES]

    def test_bad_code_reports_fragment_and_offset(self):
        with pytest.raises(BadRegionCode) as exc_info:
            resolve_tosec("US-XX-JP")
        assert exc_info.value.index == 1
        assert exc_info.value.offset == 3
        assert exc_info.value.convention is NamingConvention.TOSEC

    @pytest.mark.parametrize("region_str", ["us", "USA", "U"])
    def test_rejects_non_codes(self, region_str):
        with pytest.raises(BadRegionCode):
            resolve_tosec(region_str)

    def test_empty_string(self):
        with pytest.raises(NoRegions):
            resolve_tosec("")


@pytest.mark.unit
class TestResolveNoIntro:
    def test_country_names(self):
        strs, regions = resolve_nointro("Japan, Europe, Australia, New Zealand")
        assert strs == ["Japan", "Europe", "Australia", "New Zealand"]
        assert regions == [Region.JAPAN, Region.EUROPE, Region.AUSTRALIA, Region.NEW_ZEALAND]

    @pytest.mark.parametrize("alias", ["World", "Export"])
    def test_world_aliases(self, alias):
        _, regions = resolve_nointro(alias)
        assert regions == [Region.UNITED_STATES, Region.JAPAN, Region.EUROPE]

    def test_alias_mixed_with_names(self):
        _, regions = resolve_nointro("USA, World")
        assert regions == [Region.UNITED_STATES, Region.JAPAN, Region.EUROPE]

    def test_scandinavia(self):
        _, regions = resolve_nointro("Scandinavia")
        assert regions == [Region.DENMARK, Region.NORWAY, Region.SWEDEN]

    def test_latin_america(self):
        _, regions = resolve_nointro("Latin America")
        assert regions == [Region.MEXICO, Region.BRAZIL, Region.ARGENTINA, Region.CHILE, Region.PERU]

    @pytest.mark.parametrize("name", ["UAE", "United Arab Emirates"])
    def test_united_arab_emirates(self, name):
        assert resolve_nointro(name) == ([name], [Region.UNITED_ARAB_EMIRATES])

    def test_bad_name_offset(self):
        with pytest.raises(BadRegionCode) as exc_info:
            resolve_nointro("USA, Narnia")
        assert exc_info.value.index == 1
        assert exc_info.value.offset == 5

    def test_rejects_non_letters(self):
        with pytest.raises(BadRegionCode):
            resolve_nointro("Rev 1")

    def test_empty_string(self):
        with pytest.raises(NoRegions):
            resolve_nointro("")


@pytest.mark.unit
class TestResolveGoodTools:
    def test_single_code(self):
        assert resolve_goodtools("U") == (["U"], [Region.UNITED_STATES])

    def test_world(self):
        assert resolve_goodtools("W") == (["W"], [Region.JAPAN, Region.UNITED_STATES, Region.EUROPE])

    @pytest.mark.parametrize("code, expected", [
        ("1", [Region.JAPAN, Region.SOUTH_KOREA]),
        ("4", [Region.UNITED_STATES, Region.BRAZIL]),
        ("5", [Region.JAPAN, Region.UNITED_STATES]),
        ("JUE", [Region.JAPAN, Region.UNITED_STATES, Region.EUROPE]),
        ("UE", [Region.UNITED_STATES, Region.EUROPE]),
        ("JU", [Region.JAPAN, Region.UNITED_STATES]),
    ])
    def test_aliases(self, code, expected):
        assert resolve_goodtools(code) == ([code], expected)

    def test_dutch_code(self):
        _, regions = resolve_goodtools("D")
        assert regions == [Region.NETHERLANDS]

    def test_comma_separated(self):
        assert resolve_goodtools("J,K") == (["J", "K"], [Region.JAPAN, Region.SOUTH_KOREA])

    def test_bad_code_offset(self):
        with pytest.raises(BadRegionCode) as exc_info:
            resolve_goodtools("U,Q")
        assert exc_info.value.index == 1
        assert exc_info.value.offset == 2


@pytest.mark.unit
class TestRegionHelpers:
    def test_resolve_dispatch(self):
        assert resolve(NamingConvention.NOINTRO, "World")[1] == [
            Region.UNITED_STATES, Region.JAPAN, Region.EUROPE
        ]
        assert resolve(NamingConvention.TOSEC, "US-ZZ")[1] == [Region.UNITED_STATES, Region.UNKNOWN]

    def test_resolve_unknown_convention(self):
        with pytest.raises(ValueError):
            resolve(NamingConvention.UNKNOWN, "US")

    @pytest.mark.parametrize("region_str, expected", [
        ("USA, Europe", [Region.UNITED_STATES, Region.EUROPE]),
        ("U", [Region.UNITED_STATES]),
        ("US-EU", [Region.UNITED_STATES, Region.EUROPE]),
        ("Narnia", [Region.UNKNOWN]),
        ("", [Region.UNKNOWN]),
    ])
    def test_best_guess(self, region_str, expected):
        assert best_guess(region_str) == expected

    def test_normalized_region_string(self):
        regions = [Region.UNITED_STATES, Region.JAPAN]
        assert to_normalized_region_string(regions) == "US-JP"
        assert from_normalized_region_string("US-JP") == regions

    def test_codes(self):
        assert Region.from_code("JP") is Region.JAPAN
        assert Region.JAPAN.code == "JP"
        assert str(Region.EUROPE) == "EU"

    def test_regions_sort_in_table_order(self):
        assert sorted([Region.UNITED_STATES, Region.EUROPE, Region.JAPAN]) == [
            Region.EUROPE, Region.JAPAN, Region.UNITED_STATES
        ]
