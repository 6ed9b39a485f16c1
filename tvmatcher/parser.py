"""
Episode pattern detection and parsing.

This module contains all the regex patterns for detecting the show, season
and episode number(s) of a file name. Each strategy handles one family of
naming conventions:
- SE delimited: s01e01, S01.E01, s01e01e02, s01e01-s01e02
- X delimited: 1x01, 1x01x02
- Word delimited: season 1 episode 2, ep02, e01e02
- No delimiter: 102, 1.02, 1_02
- Part: part 2, pt.ii, part iii part iv

Strategies are tried in that order by TVMatcher (see matcher.py) and the
first to match wins. The show and season captured by a pattern are only
used as MatchOptions allows: a configured resolver (usually backed by the
directory structure) can replace them or be used as a fallback.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Callable, Protocol

from .cleaner import show_case
from .models import NO_SEASON, EpisodeMatch

logger = logging.getLogger(__name__)


ShowResolver = Callable[[Path], "str | None"]
SeasonResolver = Callable[[Path], "int | None"]
Capture = Callable[[], "str | None"]


class ElementMatcher(Protocol):
    """Anything able to resolve both the show and the season of a path."""

    def match_show(self, path: Path) -> str | None: ...

    def match_season(self, path: Path) -> int: ...


@dataclass(frozen=True)
class MatchOptions:
    """
    How the show and season of a match are resolved.

    A primary resolver replaces the value captured by the pattern. When the
    primary resolver (or the pattern, if there is no primary resolver) finds
    nothing, the fallback resolver is used, otherwise the pattern capture if
    the matching fallback_to_pattern flag is set.

    Show resolvers return None (or "") and season resolvers NO_SEASON (or
    None) when they find nothing.
    """
    show_resolver: ShowResolver | None = None
    season_resolver: SeasonResolver | None = None
    fallback_show_resolver: ShowResolver | None = None
    fallback_season_resolver: SeasonResolver | None = None
    fallback_to_pattern_show: bool = False
    fallback_to_pattern_season: bool = False

    @classmethod
    def from_element_matcher(cls, element_matcher: ElementMatcher) -> MatchOptions:
        """Resolve both show and season with element_matcher instead of the pattern."""
        return cls(
            show_resolver=element_matcher.match_show,
            season_resolver=element_matcher.match_season,
        )

    def with_fallback(self, element_matcher: ElementMatcher) -> MatchOptions:
        return replace(
            self,
            fallback_show_resolver=element_matcher.match_show,
            fallback_season_resolver=element_matcher.match_season,
        )

    def with_fallback_show(self, resolver: ShowResolver) -> MatchOptions:
        return replace(self, fallback_show_resolver=resolver)

    def with_fallback_season(self, resolver: SeasonResolver) -> MatchOptions:
        return replace(self, fallback_season_resolver=resolver)

    def with_pattern_fallback(self, show: bool = True, season: bool = True) -> MatchOptions:
        return replace(self, fallback_to_pattern_show=show, fallback_to_pattern_season=season)


DEFAULT_OPTIONS = MatchOptions()


# =============================================================================
# SHOW / SEASON RESOLUTION
# =============================================================================

def _show_from_capture(capture: str | None) -> str | None:
    return show_case(capture) if capture else None


def _season_from_capture(capture: str | None) -> int:
    return int(capture) if capture else NO_SEASON


def resolve_show(options: MatchOptions, path: Path, capture: Capture) -> str | None:
    """
    Resolve the show of path as per options.

    Args:
        options: Match options holding the resolvers
        path: Path of the episode file
        capture: Returns the show captured by the pattern, if any

    Returns:
        Show name, or None if not found
    """
    if options.show_resolver is not None:
        show = options.show_resolver(path)
    else:
        show = _show_from_capture(capture())
    if show:
        return show

    if options.fallback_show_resolver is not None:
        logger.debug("Falling back to show resolver for %s", path)
        return options.fallback_show_resolver(path) or None
    if options.fallback_to_pattern_show:
        logger.debug("Falling back to pattern show for %s", path)
        return _show_from_capture(capture())
    return None


def resolve_season(options: MatchOptions, path: Path, capture: Capture) -> int:
    """
    Resolve the season of path as per options.

    Args:
        options: Match options holding the resolvers
        path: Path of the episode file
        capture: Returns the season captured by the pattern, if any

    Returns:
        Season number, or NO_SEASON if not found
    """
    if options.season_resolver is not None:
        season = options.season_resolver(path)
    else:
        season = _season_from_capture(capture())
    if season is not None and season != NO_SEASON:
        return season

    if options.fallback_season_resolver is not None:
        logger.debug("Falling back to season resolver for %s", path)
        season = options.fallback_season_resolver(path)
        return NO_SEASON if season is None else season
    if options.fallback_to_pattern_season:
        logger.debug("Falling back to pattern season for %s", path)
        return _season_from_capture(capture())
    return NO_SEASON


# =============================================================================
# EPISODE PATTERN DEFINITIONS
# =============================================================================

SEPARATOR = r'[_\-. +]*'
SEPARATOR_RUN = re.compile(r'[_\-. +]+')
TRAILING_SEPARATORS = re.compile(SEPARATOR + r'$')

# SE delimited: s01e01, s01.e01, S01xE01, s01e01e02, s01e01-s01e02
SE_SEPARATOR = r'[_\-. +x]*'

PATTERN_SE = re.compile(
    r'^(.*?)' + SEPARATOR + r's(\d+)' + SE_SEPARATOR + r'e(\d+)' + SE_SEPARATOR
    + r'((?:(?:(?:.*?)s(?:\d+)' + SE_SEPARATOR + r')?e\d+' + SE_SEPARATOR + r')*)',
    re.IGNORECASE
)

PATTERN_SE_EXTRA = re.compile(r'(?:s\d+)?' + SE_SEPARATOR + r'e(\d+)', re.IGNORECASE)

# X delimited: 1x01, 01x01, 1x01x02
PATTERN_X = re.compile(
    r'^(.*?)' + SEPARATOR + r'(\d+)' + SEPARATOR + r'x(\d+)' + SEPARATOR
    + r'((?:(?:(?:.*?)(?:\d+)' + SEPARATOR + r')?x\d+' + SEPARATOR + r')*)',
    re.IGNORECASE
)

PATTERN_X_EXTRA = re.compile(r'(?:\d+)?x(\d+)', re.IGNORECASE)

# Word delimited: season 1 episode 2, season.1.ep02, e2, ep01ep02
EP_WORD = r'(?:episode|ep|e)'

PATTERN_WORD = re.compile(
    r'(?:season' + SEPARATOR + r'(\d+))?[_\-. +]+' + EP_WORD + SEPARATOR + r'(\d+)',
    re.IGNORECASE
)

# Fused episodes (e01e02e03) are tried first so a trailing number of the
# show name is never taken for the season
PATTERN_WORD_CONSECUTIVE = re.compile(
    PATTERN_WORD.pattern + r'((?:' + EP_WORD + r'\d+)+)',
    re.IGNORECASE
)

PATTERN_WORD_SHOW = re.compile(r'^(.*?)' + SEPARATOR + PATTERN_WORD.pattern, re.IGNORECASE)

PATTERN_EP_WORD = re.compile(EP_WORD, re.IGNORECASE)

# No delimiter: 102, 1.02, 1_02
PATTERN_NO_DELIMITER = re.compile(
    r'^(.*)' + SEPARATOR + r'(\d+)' + SEPARATOR + r'(\d\d)',
    re.IGNORECASE
)

# Air dates (YYYYMMDD, MMDDYYYY, YYYY) would otherwise read as season/episode
YEAR = r'(19|20)?\d\d'
PATTERN_DATE = re.compile(
    SEPARATOR.join((YEAR, r'\d\d', r'\d\d|\d\d', r'\d\d', YEAR, r'|(19|20)\d\d'))
)

# Part: part 2, pt.ii, part2
PATTERN_PART = re.compile(
    r'(?:pt|part)(?:[_\-. +]+([MDCLXVI]+)|' + SEPARATOR + r'(\d+))',
    re.IGNORECASE
)

PATTERN_PART_SHOW = re.compile(r'^(.*?)' + SEPARATOR + PATTERN_PART.pattern, re.IGNORECASE)

# Canonical roman numerals only, so IIII or VV are rejected
PATTERN_ROMAN_STRICT = re.compile(
    r'^M{0,4}(CM|CD|D?C{0,3})(XC|XL|L?X{0,3})(IX|IV|V?I{0,3})$',
    re.IGNORECASE
)

ROMAN_VALUES = {'I': 1, 'V': 5, 'X': 10, 'L': 50, 'C': 100, 'D': 500, 'M': 1000}


def roman_to_int(numeral: str) -> int:
    """
    Convert a roman numeral to an integer.

    Returns:
        The value, or 0 if numeral is not a canonical roman numeral
    """
    if not numeral or not PATTERN_ROMAN_STRICT.fullmatch(numeral):
        return 0

    total = 0
    values = [ROMAN_VALUES[c] for c in numeral.upper()]
    for i, value in enumerate(values):
        if i + 1 < len(values) and value < values[i + 1]:
            total -= value
        else:
            total += value
    return total


# =============================================================================
# STRATEGIES
# Each takes the episode path, its filtered file name and the match options
# =============================================================================

def match_se_delimited(path: Path, filtered_name: str, options: MatchOptions) -> EpisodeMatch | None:
    """Match s01e01 style names, including repeated episode groups."""
    m = PATTERN_SE.search(filtered_name)
    if not m:
        return None

    show = resolve_show(options, path, lambda: m.group(1))
    season = resolve_season(options, path, lambda: m.group(2))
    match = EpisodeMatch(show, season, [int(m.group(3))])
    match.add_episode_no(*(int(ep) for ep in PATTERN_SE_EXTRA.findall(m.group(4))))
    return match


def match_x_delimited(path: Path, filtered_name: str, options: MatchOptions) -> EpisodeMatch | None:
    """Match 1x01 style names, including 1x01x02."""
    m = PATTERN_X.search(filtered_name)
    if not m:
        return None

    show = resolve_show(options, path, lambda: m.group(1))
    season = resolve_season(options, path, lambda: m.group(2))
    match = EpisodeMatch(show, season, [int(m.group(3))])
    for token in SEPARATOR_RUN.split(m.group(4)):
        match.add_episode_no(*(int(ep) for ep in PATTERN_X_EXTRA.findall(token)))
    return match


def match_word_delimited(path: Path, filtered_name: str, options: MatchOptions) -> EpisodeMatch | None:
    """Match "season 1 episode 2" style names. The season is optional."""
    show_match = PATTERN_WORD_SHOW.search(path.name)

    def show_capture() -> str | None:
        return show_match.group(1) if show_match else None

    m = PATTERN_WORD_CONSECUTIVE.search(filtered_name)
    if m:
        show = resolve_show(options, path, show_capture)
        season = resolve_season(options, path, lambda: m.group(1))
        match = EpisodeMatch(show, season, [int(m.group(2))])
        # "e02e03" splits to ["", "02", "03"]
        match.add_episode_no(*(int(ep) for ep in PATTERN_EP_WORD.split(m.group(3))[1:]))
        return match

    found = list(PATTERN_WORD.finditer(filtered_name))
    if not found:
        return None

    first = found[0]
    show = resolve_show(options, path, show_capture)
    season = resolve_season(options, path, lambda: first.group(1))
    match = EpisodeMatch(show, season, [int(first.group(2))])
    match.add_episode_no(*(int(m.group(2)) for m in found[1:]))
    return match


def match_no_delimiter(path: Path, filtered_name: str, options: MatchOptions) -> EpisodeMatch | None:
    """Match a bare season and episode run such as 102 (season 1, episode 2)."""
    show_match = PATTERN_NO_DELIMITER.search(filtered_name)
    if not show_match:
        return None

    show = resolve_show(options, path, lambda: show_match.group(1))
    if show is not None:
        show = TRAILING_SEPARATORS.sub('', show)

    m = PATTERN_NO_DELIMITER.search(PATTERN_DATE.sub('', filtered_name))
    if not m:
        return None

    season = resolve_season(options, path, lambda: m.group(2))
    return EpisodeMatch(show, season, [int(m.group(3))])


def match_part(path: Path, filtered_name: str, options: MatchOptions) -> EpisodeMatch | None:
    """
    Match "part 2" or "pt.ii" style names, repeatable for multi-part files.

    The pattern has no season, so the season is only known when a season
    resolver is configured.
    """
    episodes = []
    for m in PATTERN_PART.finditer(filtered_name):
        roman, number = m.groups()
        if number is not None:
            episodes.append(int(number))
        else:
            value = roman_to_int(roman)
            if value > 0:
                episodes.append(value)

    if not episodes:
        return None

    show_match = PATTERN_PART_SHOW.search(path.name)
    show = resolve_show(options, path, lambda: show_match.group(1) if show_match else None)
    season = resolve_season(options, path, lambda: None)
    return EpisodeMatch(show, season, episodes)


Strategy = Callable[[Path, str, MatchOptions], "EpisodeMatch | None"]

# Priority order: the first strategy to match wins
STRATEGIES: tuple[tuple[str, Strategy], ...] = (
    ("se_delimited", match_se_delimited),
    ("x_delimited", match_x_delimited),
    ("word_delimited", match_word_delimited),
    ("no_delimiter", match_no_delimiter),
    ("part", match_part),
)
