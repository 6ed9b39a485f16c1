"""
Episode data model.

An EpisodeMatch is what every matching strategy produces: the show, the
season and the ordered list of episode numbers found in a single file.
Range is the closed integer interval used to reason about the episodes
a match covers.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator


# Season number of a match whose season could not be determined
NO_SEASON = -1


@dataclass(frozen=True)
class Range:
    """Closed integer interval [start, end]."""
    start: int
    end: int

    @classmethod
    def single(cls, value: int) -> Range:
        return cls(value, value)

    @classmethod
    def max_range(cls, start: int) -> Range:
        """Range from start with no practical upper bound."""
        return cls(start, sys.maxsize)

    def contains(self, other: int | Range) -> bool:
        """
        Check if a value, or any part of another range, falls in this range.

        For a range argument this is an overlap test:
        other.end >= start and other.start <= end.
        """
        if isinstance(other, Range):
            return other.end >= self.start and other.start <= self.end
        return self.start <= other <= self.end

    def __contains__(self, value: int) -> bool:
        return self.contains(value)

    def __iter__(self) -> Iterator[int]:
        return iter(range(self.start, self.end + 1))

    def __str__(self) -> str:
        return f"{self.start} - {self.end}"


@dataclass(frozen=True)
class EpisodeRange:
    """Span of episodes that may cross season boundaries."""
    start_season: int
    start_episode: int
    end_season: int
    end_episode: int

    def to_range(self) -> Range:
        return Range(self.start_episode, self.end_episode)


@dataclass
class EpisodeMatch:
    """
    Show, season and episode number(s) matched from a file.

    Equality and hashing only consider show, season and episodes (in order),
    never the file the match came from.
    """
    show: str | None = None
    season: int = NO_SEASON
    episodes: list[int] = field(default_factory=list)
    source_file: Path | None = field(default=None, compare=False, repr=False)

    def __hash__(self) -> int:
        return hash((self.show, self.season, tuple(self.episodes)))

    @property
    def episode(self) -> int:
        """The smallest episode number."""
        return self.episodes_as_range().start

    def episodes_as_range(self) -> Range:
        if not self.episodes:
            # Deliberately invalid: nothing is contained in it
            return Range(sys.maxsize, -1)
        return Range(min(self.episodes), max(self.episodes))

    def is_multi_episode(self) -> bool:
        return len(self.episodes) > 1

    def is_episode_no(self, episode: int) -> bool:
        return episode in self.episodes

    def is_episode_in_range(self, episode_range: Range) -> bool:
        return any(episode_range.contains(ep) for ep in self.episodes)

    def add_episode_no(self, *episodes: int) -> None:
        self.episodes.extend(episodes)

    def to_split_episode_list(self) -> list[EpisodeMatch]:
        """Split into one single-episode match per episode number."""
        return [
            EpisodeMatch(self.show, self.season, [ep], source_file=self.source_file)
            for ep in self.episodes
        ]

    def copy(self) -> EpisodeMatch:
        return EpisodeMatch(self.show, self.season, list(self.episodes), source_file=self.source_file)

    def format_code(self) -> str:
        """Format as S01E01E02 style code (E01E02 when the season is unknown)."""
        code = "".join(f"E{ep:02d}" for ep in self.episodes)
        if self.season == NO_SEASON:
            return code
        return f"S{self.season:02d}{code}"

    def __str__(self) -> str:
        return self.format_code()


@dataclass(order=True, frozen=True)
class Season:
    """A season number and the directory holding its episodes."""
    number: int
    path: Path = field(compare=False)

    def as_string(self) -> str:
        return f"{self.number:02d}"


def episode_sort_key(match: EpisodeMatch) -> tuple:
    """
    Sort key ordering matches by show, season, then episode range.

    A multi-episode match sorts after a single episode sharing its first
    episode number.
    """
    episode_range = match.episodes_as_range()
    return (match.show or "", match.season, episode_range.start, episode_range.end)


def episode_no_sort_key(match: EpisodeMatch) -> tuple[int, int]:
    """Sort key ordering matches by their episode range only."""
    episode_range = match.episodes_as_range()
    return (episode_range.start, episode_range.end)
