"""
Navigating to the previous, current or next episode of a show.

The episodes of a season are whatever files its directory holds, so
navigation has to cope with missing files and multi-episode files without
knowing how many episodes a season really has.
"""

from __future__ import annotations

import logging
from enum import IntEnum
from typing import TYPE_CHECKING

from .models import EpisodeMatch

if TYPE_CHECKING:
    from .library import TVPath
    from .matcher import TVEpisodeMatcher

logger = logging.getLogger(__name__)


class Pointer(IntEnum):
    """Offset of the episode to navigate to."""
    PREV = -1
    CUR = 0
    NEXT = 1


class EpisodeNavigator:
    """Find the episode adjacent to another, crossing season boundaries."""

    def __init__(self, tv_episode_matcher: TVEpisodeMatcher, tv_path: TVPath):
        self.tv_episode_matcher = tv_episode_matcher
        self.tv_path = tv_path

    def navigate(self, episode: EpisodeMatch, offset: Pointer) -> EpisodeMatch | None:
        """
        Navigate from episode by offset.

        The bound of the episode in the direction of travel is probed first
        (a multi-episode file widens it). If the episode at bound + offset is
        missing but the one at bound + 2 * offset exists, the season has a
        hole and None is returned. Otherwise the season is assumed finished
        and navigation moves to the adjacent season.

        Two or more consecutive missing episodes at the end of a season are
        indistinguishable from the end of the season.

        Returns:
            The adjacent episode, or None at either end of the show
        """
        episodes_path = self.tv_path.get_episodes_path(episode.show, episode.season)
        episode_range = episode.episodes_as_range()
        if episodes_path is None:
            if offset == Pointer.PREV and episode_range.start - 1 < 1:
                return self.navigate_season(episode, offset)
            return None

        bound = episode_range.end if offset == Pointer.NEXT else episode_range.start
        current = self.tv_episode_matcher.match_episode_in(episodes_path, bound)
        if current is not None:
            episode_range = current.episodes_as_range()
            bound = episode_range.end if offset == Pointer.NEXT else episode_range.start

        match = self.tv_episode_matcher.match_episode_in(episodes_path, bound + offset)
        if match is not None or offset == Pointer.CUR:
            return match

        if self.tv_episode_matcher.match_episode_in(episodes_path, bound + 2 * offset) is not None:
            logger.debug("Episode %d of %s season %d is missing", bound + offset, episode.show, episode.season)
            return None

        return self.navigate_season(episode, offset)

    def navigate_season(self, episode: EpisodeMatch, offset: Pointer) -> EpisodeMatch | None:
        """
        Navigate to the first (NEXT) or last (PREV) episode of the adjacent season.

        Returns:
            The episode, or None if the season or its episode can't be found
        """
        season = episode.season + offset
        episodes_path = self.tv_path.get_episodes_path(episode.show, season)
        if episodes_path is None:
            logger.debug("No season %d for %s", season, episode.show)
            return None

        if offset == Pointer.PREV:
            return self.tv_episode_matcher.match_largest_episode_in(episodes_path)
        if offset == Pointer.NEXT:
            # Some seasons number their pilot 0
            match = self.tv_episode_matcher.match_episode_in(episodes_path, 0)
            if match is None:
                match = self.tv_episode_matcher.match_episode_in(episodes_path, 1)
            return match
        return None
