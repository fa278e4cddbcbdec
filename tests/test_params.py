"""Tests for waypost.routing.params — segment converters."""

import re

import pytest

from waypost.routing.params import CONVERTERS, SEGMENT_VALUE, converter_regex


class TestConverters:
    def test_all_types_registered(self) -> None:
        assert set(CONVERTERS) == {"str", "int", "float", "path"}

    def test_str_regex_excludes_slash(self) -> None:
        assert re.fullmatch(CONVERTERS["str"], "a/b") is None
        assert re.fullmatch(CONVERTERS["str"], "ab") is not None

    def test_path_regex_matches_slashes(self) -> None:
        assert re.fullmatch(CONVERTERS["path"], "docs/api/v2") is not None

    def test_float_accepts_integers(self) -> None:
        assert re.fullmatch(CONVERTERS["float"], "10") is not None
        assert re.fullmatch(CONVERTERS["float"], "3.14") is not None


class TestConverterRegex:
    def test_known(self) -> None:
        assert converter_regex("int") == r"\d+"

    def test_unknown_type_raises(self) -> None:
        with pytest.raises(KeyError):
            converter_regex("uuid")


class TestSegmentValue:
    def test_excludes_separators(self) -> None:
        assert re.fullmatch(SEGMENT_VALUE, "a/b") is None
        assert re.fullmatch(SEGMENT_VALUE, "a.json") is None

    def test_allows_encoded_text(self) -> None:
        assert re.fullmatch(SEGMENT_VALUE, "jane%20doe") is not None
        assert re.fullmatch(SEGMENT_VALUE, "a-b_c~d") is not None
