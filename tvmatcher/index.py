"""
Indexes of episode matches.

SeasonsMap maps season -> episode number -> match for a single show and
TVMap maps show -> SeasonsMap. A multi-episode match is stored under each
of its episode numbers so any of them can be looked up directly.

Neither structure is thread safe.
"""

from __future__ import annotations

import logging
from typing import Iterable

from .models import NO_SEASON, EpisodeMatch, episode_no_sort_key

logger = logging.getLogger(__name__)


class SeasonsMap:
    """Episode matches of a single show, by season and episode number."""

    def __init__(self, episodes: Iterable[EpisodeMatch] = ()):
        self._seasons: dict[int, dict[int, EpisodeMatch]] = {}
        self.add_episodes(episodes)

    def add_episode(self, episode: EpisodeMatch) -> None:
        """
        Add a match under each of its episode numbers.

        An episode number already present in the season is left as it is.
        """
        if not episode.episodes:
            return
        season = self._seasons.setdefault(episode.season, {})
        for single in episode.to_split_episode_list():
            season.setdefault(single.episode, episode)

    def add_episodes(self, episodes: Iterable[EpisodeMatch]) -> None:
        for episode in episodes:
            self.add_episode(episode)

    def contains(self, season: int, episode: int) -> bool:
        return episode in self._seasons.get(season, {})

    def contains_season(self, season: int) -> bool:
        return season in self._seasons

    def get_episode(self, season: int, episode: int) -> EpisodeMatch | None:
        return self._seasons.get(season, {}).get(episode)

    def get_seasons(self) -> list[int]:
        return sorted(self._seasons)

    def get_season_episodes(self, season: int) -> list[EpisodeMatch] | None:
        """
        Get the distinct matches of a season, ordered by episode number.

        Returns:
            Matches, or None if the season isn't present
        """
        if season not in self._seasons:
            return None
        return sorted(set(self._seasons[season].values()), key=episode_no_sort_key)

    def get_episodes(self) -> set[EpisodeMatch]:
        return {match for episodes in self._seasons.values() for match in episodes.values()}

    def season_count(self, include_no_season: bool = False) -> int:
        count = len(self._seasons)
        if not include_no_season and NO_SEASON in self._seasons:
            count -= 1
        return count

    def is_empty(self) -> bool:
        return not self._seasons

    def remove_episode(self, episode: EpisodeMatch) -> None:
        """Remove every episode number of a match from its season."""
        if not self.contains(episode.season, episode.episode):
            return
        season = self._seasons[episode.season]
        for episode_no in episode.episodes:
            season.pop(episode_no, None)
        self._compact(episode.season)

    def remove_episode_subset(self, partial: EpisodeMatch) -> None:
        """
        Remove only the episode numbers of partial.

        A stored multi-episode match losing some of its numbers is replaced
        by a match holding the remaining ones.
        """
        for single in partial.to_split_episode_list():
            stored = self.get_episode(single.season, single.episode)
            if stored is None:
                continue
            self.remove_episode(stored)
            remaining = stored.copy()
            remaining.episodes.remove(single.episode)
            if remaining.episodes:
                self.add_episode(remaining)

    def remove_season(self, season: int) -> None:
        self._seasons.pop(season, None)

    def _compact(self, season: int) -> None:
        if season in self._seasons and not self._seasons[season]:
            del self._seasons[season]


class TVMap:
    """
    Episode matches by show, season and episode number.

    Show names are looked up case-insensitively; the casing first added is
    kept for get_shows().
    """

    def __init__(self, episodes: Iterable[EpisodeMatch] = ()):
        self._show_names: dict[str, str] = {}
        self._shows: dict[str, SeasonsMap] = {}
        self.add_episodes(episodes)

    @staticmethod
    def _key(show: str) -> str:
        return show.casefold()

    def add_episode(self, episode: EpisodeMatch) -> None:
        """
        Raises:
            ValueError: the match has no show
        """
        if episode.show is None:
            raise ValueError(f"Cannot index a match without a show: {episode}")
        if not episode.episodes:
            return
        key = self._key(episode.show)
        if key not in self._shows:
            self._show_names[key] = episode.show
            self._shows[key] = SeasonsMap()
        self._shows[key].add_episode(episode)

    def add_episodes(self, episodes: Iterable[EpisodeMatch]) -> None:
        for episode in episodes:
            self.add_episode(episode)

    def contains(self, show: str, season: int, episode: int) -> bool:
        seasons = self._shows.get(self._key(show))
        return seasons is not None and seasons.contains(season, episode)

    def contains_episode(self, episode: EpisodeMatch) -> bool:
        return episode.show is not None and self.contains(episode.show, episode.season, episode.episode)

    def contains_show(self, show: str) -> bool:
        return self._key(show) in self._shows

    def contains_season(self, show: str, season: int) -> bool:
        seasons = self._shows.get(self._key(show))
        return seasons is not None and seasons.contains_season(season)

    def get_shows(self) -> set[str]:
        return set(self._show_names.values())

    def get_seasons(self, show: str) -> set[int]:
        seasons = self._shows.get(self._key(show))
        return set(seasons.get_seasons()) if seasons is not None else set()

    def get_episodes(self, show: str) -> set[EpisodeMatch]:
        seasons = self._shows.get(self._key(show))
        return seasons.get_episodes() if seasons is not None else set()

    def get_episode(self, show: str, season: int, episode: int) -> EpisodeMatch | None:
        seasons = self._shows.get(self._key(show))
        return seasons.get_episode(season, episode) if seasons is not None else None

    def get_season_episodes(self, show: str, season: int) -> set[EpisodeMatch]:
        seasons = self._shows.get(self._key(show))
        if seasons is None:
            return set()
        return set(seasons.get_season_episodes(season) or ())

    def show_count(self) -> int:
        return len(self._shows)

    def season_count(self, show: str, include_no_season: bool = False) -> int:
        seasons = self._shows.get(self._key(show))
        return seasons.season_count(include_no_season) if seasons is not None else 0

    def is_empty(self) -> bool:
        return self.show_count() == 0

    def replace_episode(self, old: EpisodeMatch, replacement: EpisodeMatch) -> None:
        self.remove_episode(old)
        self.add_episode(replacement)

    def remove_all(self, episodes: Iterable[EpisodeMatch]) -> None:
        for episode in episodes:
            self.remove_episode_subset(episode)

    def remove_show(self, show: str) -> None:
        key = self._key(show)
        self._shows.pop(key, None)
        self._show_names.pop(key, None)

    def remove_season(self, show: str, season: int) -> None:
        key = self._key(show)
        if key in self._shows:
            self._shows[key].remove_season(season)
            self._compact(key)

    def remove_episode(self, episode: EpisodeMatch) -> None:
        if not self.contains_episode(episode):
            return
        key = self._key(episode.show)
        self._shows[key].remove_episode(episode)
        logger.debug("Removed %s %s from index", episode.show, episode)
        self._compact(key)

    def remove_episode_subset(self, partial: EpisodeMatch) -> None:
        """Remove only the episode numbers of partial, shrinking multi-episode matches."""
        if partial.show is None:
            return
        key = self._key(partial.show)
        if key in self._shows:
            self._shows[key].remove_episode_subset(partial)
            self._compact(key)

    def _compact(self, key: str) -> None:
        if key in self._shows and self._shows[key].is_empty():
            del self._shows[key]
            del self._show_names[key]
