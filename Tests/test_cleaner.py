"""
Tests for file name normalization and show name casing.
"""

import pytest

from tvmatcher.cleaner import show_case, strip_common_tags


class TestStripCommonTags:
    """Test removal of quality and codec tags."""

    @pytest.mark.parametrize("file_name,expected", [
        ("Modern.Family.S05E17.720p.DD5.1.AAC2.0.H.264.mkv", "Modern.Family.S05E17.....mkv"),
        ("the.walking.dead.s03e01.1080p.bluray.x264.mkv", "the.walking.dead.s03e01..bluray..mkv"),
        ("house.of.cards.(2013).s01e01.bluray.dts.x264.mkv", "house.of.cards.(2013).s01e01.bluray.dts..mkv"),
        ("show.s01e01.480i.ac3.mkv", "show.s01e01...mkv"),
        ("show.s01e01.dd 7.1.mkv", "show.s01e01..mkv"),
    ])
    def test_strip_common_tags(self, file_name: str, expected: str):
        result = strip_common_tags(file_name)
        print(f'"{file_name}" -> "{result}"')
        assert result == expected

    @pytest.mark.parametrize("file_name", [
        "the.league.s01e01.pilot.mkv",
        "Scrubs - 1x05.mkv",
        "house.of.cards.(2013).102.pilot.mkv",
    ])
    def test_untagged_names_unchanged(self, file_name: str):
        assert strip_common_tags(file_name) == file_name


class TestShowCase:
    """Test conversion of captured show names to title case."""

    @pytest.mark.parametrize("name,expected", [
        ("the.league", "The League"),
        ("the_league", "The League"),
        ("the.office.(us)", "The Office (US)"),
        ("house.of.cards.(2013)", "House of Cards (2013)"),
        ("man VS food", "Man vs Food"),
        ("two_and_a_half_men", "Two and a Half Men"),
        ("parks And recreation", "Parks and Recreation"),
        ("the.league.", "The League"),
        ("a.touch.of.cloth", "A Touch of Cloth"),
        ("marvel's.agents.of.s.h.i.e.l.d", "Marvel's Agents of S H I E L D"),
        ("x-men", "X-Men"),
        ("_the_league", "The League"),
        ("..the.league", "The League"),
    ])
    def test_show_case(self, name: str, expected: str):
        result = show_case(name)
        print(f'"{name}" -> "{result}" (expected: "{expected}")')
        assert result == expected

    @pytest.mark.parametrize("name", [
        "The League",
        "The Office (US)",
        "Two and a Half Men",
        "It's Always Sunny in Philadelphia",
    ])
    def test_show_case_is_idempotent(self, name: str):
        assert show_case(name) == name
        assert show_case(show_case(name)) == name
