"""
Matching episode files.

TVMatcher runs the strategies of parser.py over a single path. EpisodeMatcher
applies it to collections of paths, and TVEpisodeMatcher to the seasons of
a show found through a TVPath (see library.py).
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Iterable

from .cleaner import strip_common_tags
from .exceptions import MatchElementNotFoundError, MatchNotFoundError
from .models import NO_SEASON, EpisodeMatch, EpisodeRange, Range, Season, episode_no_sort_key
from .parser import DEFAULT_OPTIONS, STRATEGIES, MatchOptions

if TYPE_CHECKING:
    from .library import TVPath

logger = logging.getLogger(__name__)


class MatchElement(Enum):
    """Element a match is required to have."""
    SHOW = "show"
    SEASON = "season"
    ALL = "all"

    @property
    def requires_show(self) -> bool:
        return self in (MatchElement.SHOW, MatchElement.ALL)

    @property
    def requires_season(self) -> bool:
        return self in (MatchElement.SEASON, MatchElement.ALL)


class TVMatcher:
    """Match a file path to its show, season and episode number(s)."""

    def __init__(self, options: MatchOptions | None = None):
        self.options = options or DEFAULT_OPTIONS

    def match(self, path: Path | str) -> EpisodeMatch | None:
        """
        Match a file path to an episode.

        The file name is stripped of common tags, then each strategy is tried
        in priority order until one matches.

        Returns:
            EpisodeMatch with source_file set, or None if nothing matched
        """
        path = Path(path)
        filtered_name = strip_common_tags(path.name)

        for name, strategy in STRATEGIES:
            match = strategy(path, filtered_name, self.options)
            if match is not None:
                logger.debug("Matched %s as %s via %s", path.name, match, name)
                match.source_file = path
                return match

        logger.debug("No match for %s", path.name)
        return None

    def match_element(self, path: Path | str, required: MatchElement) -> EpisodeMatch | None:
        """
        Match a file path, requiring the match to have the given element.

        Returns:
            EpisodeMatch, or None if nothing matched or the match lacks the
            required element
        """
        match = self.match(path)
        if match is None:
            return None
        if required.requires_show and match.show is None:
            return None
        if required.requires_season and match.season == NO_SEASON:
            return None
        return match

    def match_element_or_throw(self, path: Path | str, required: MatchElement) -> EpisodeMatch | None:
        """
        Match a file path, requiring the match to have the given element.

        Returns:
            EpisodeMatch, or None if nothing matched

        Raises:
            MatchElementNotFoundError: a match was found without the required element
        """
        match = self.match(path)
        if match is None:
            return None
        if required.requires_show and match.show is None:
            raise MatchElementNotFoundError("show", path)
        if required.requires_season and match.season == NO_SEASON:
            raise MatchElementNotFoundError("season", path)
        return match

    def match_or_throw(self, path: Path | str, required: MatchElement) -> EpisodeMatch:
        """
        Match a file path, requiring the match to have the given element.

        Raises:
            MatchNotFoundError: nothing matched
            MatchElementNotFoundError: a match was found without the required element
        """
        match = self.match_element_or_throw(path, required)
        if match is None:
            raise MatchNotFoundError(path)
        return match


class EpisodeMatcher:
    """Match collections of episode paths."""

    def __init__(self, options: MatchOptions | None = None):
        self.tv_matcher = TVMatcher(options)

    def match(self, path: Path | str) -> EpisodeMatch | None:
        return self.tv_matcher.match(path)

    def match_all(
        self,
        paths: Iterable[Path],
        condition: Callable[[EpisodeMatch], bool] | None = None,
    ) -> list[EpisodeMatch]:
        """
        Match every path, keeping the matches that satisfy condition.

        Returns:
            Matches sorted by episode number
        """
        matches = []
        for path in paths:
            match = self.tv_matcher.match(path)
            if match is not None and (condition is None or condition(match)):
                matches.append(match)
        return sorted(matches, key=episode_no_sort_key)

    def match_episode(self, paths: Iterable[Path], episode_no: int) -> EpisodeMatch | None:
        """Find the first path matching episode_no (single or multi-episode)."""
        for path in paths:
            match = self.tv_matcher.match(path)
            if match is not None and match.is_episode_no(episode_no):
                return match
        return None

    def match_range(self, paths: Iterable[Path], episode_range: Range) -> list[EpisodeMatch]:
        """Match paths whose episodes overlap episode_range."""
        return self.match_all(paths, lambda m: episode_range.contains(m.episodes_as_range()))

    def match_from(self, paths: Iterable[Path], start_episode: int) -> list[EpisodeMatch]:
        """Match paths with an episode numbered start_episode or higher."""
        return self.match_all(paths, lambda m: m.is_episode_in_range(Range.max_range(start_episode)))

    def match_largest(self, paths: Iterable[Path]) -> EpisodeMatch | None:
        """Find the match with the largest episode number."""
        largest = None
        max_episode = -1
        for match in self.match_all(paths):
            end = match.episodes_as_range().end
            if end > max_episode:
                max_episode = end
                largest = match
        return largest


class TVEpisodeMatcher:
    """Match the episodes of a show stored in a TV library."""

    def __init__(self, tv_path: TVPath, options: MatchOptions | None = None):
        self.tv_path = tv_path
        self.episode_matcher = EpisodeMatcher(options)

    def match_episode(self, show: str, season: int, episode: int) -> EpisodeMatch | None:
        """
        Raises:
            EpisodesPathNotFoundError: the season directory doesn't exist
        """
        return self.episode_matcher.match_episode(self.tv_path.list_paths(show, season), episode)

    def match_episode_in(self, episodes_path: Path, episode: int) -> EpisodeMatch | None:
        """Match an episode number among the files of a season directory."""
        return self.episode_matcher.match_episode(self.tv_path.list_episode_paths(episodes_path), episode)

    def match_largest_episode(self, show: str, season: int) -> EpisodeMatch | None:
        return self.episode_matcher.match_largest(self.tv_path.list_paths(show, season))

    def match_largest_episode_in(self, episodes_path: Path) -> EpisodeMatch | None:
        return self.episode_matcher.match_largest(self.tv_path.list_episode_paths(episodes_path))

    def match_latest_episode(self, show: str) -> EpisodeMatch | None:
        """Match the largest episode of the largest season of a show."""
        season = self.largest_season(self.tv_path.list_seasons(show))
        if season is None:
            return None
        return self.match_largest_episode_in(season.path)

    def match_season(self, show: str, season: int) -> list[EpisodeMatch]:
        return self.match_season_range(show, Range.single(season))

    def match_season_range(self, show: str, season_range: Range) -> list[EpisodeMatch]:
        """Match every episode of the seasons of a show within season_range."""
        matches = []
        for season in self.tv_path.list_seasons(show):
            if season_range.contains(season.number):
                matches.extend(self.episode_matcher.match_all(self.tv_path.list_episode_paths(season.path)))
        return matches

    def match_seasons_from(self, show: str, season: int) -> list[EpisodeMatch]:
        return self.match_season_range(show, Range.max_range(season))

    def match_largest_season(self, show: str) -> list[EpisodeMatch]:
        largest = self.largest_season(self.tv_path.list_seasons(show))
        if largest is None:
            return []
        return self.episode_matcher.match_all(self.tv_path.list_episode_paths(largest.path))

    @staticmethod
    def largest_season(seasons: Iterable[Season]) -> Season | None:
        return max(seasons, default=None)

    def match_episodes_from(self, show: str, season: int, episode: int) -> list[EpisodeMatch]:
        return self.episode_matcher.match_from(self.tv_path.list_paths(show, season), episode)

    def match_episode_range(self, show: str, episode_range: EpisodeRange) -> list[EpisodeMatch]:
        """
        Match the episodes of a show within an episode range.

        The range may span several seasons: the start season is matched from
        its start episode, the seasons in between entirely, and the end season
        up to its end episode.
        """
        start, end = episode_range.start_season, episode_range.end_season
        if start > end:
            return []
        if start == end:
            return self.episode_matcher.match_range(self.tv_path.list_paths(show, start), episode_range.to_range())

        matches = self.episode_matcher.match_from(self.tv_path.list_paths(show, start), episode_range.start_episode)
        matches.extend(self.match_season_range(show, Range(start + 1, end - 1)))
        matches.extend(self.episode_matcher.match_range(
            self.tv_path.list_paths(show, end),
            Range(0, episode_range.end_episode),
        ))
        return matches

    def match_all_episodes(self, show: str) -> list[EpisodeMatch]:
        return self.match_seasons_from(show, 1)
