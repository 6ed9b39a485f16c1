"""
Pytest configuration and shared fixtures.
"""

from pathlib import Path

import pytest

from tvmatcher.library import StandardTVPath
from tvmatcher.matcher import TVEpisodeMatcher
from tvmatcher.models import EpisodeMatch


SHOWS = ["Scrubs", "Friends", "Modern Family", "The Office (US)", "It's Always Sunny In Philadelphia"]
NUM_SEASONS = 3
NUM_EPISODES = 12


def episode_file_name(show: str, season: int, episode: int, num_episodes: int = 1) -> str:
    """Mock episode file name, e.g. "Scrubs - 1x05.mkv" or "Scrubs - 1x05x06.mkv"."""
    codes = "".join(f"x{episode + i:02d}" for i in range(num_episodes))
    return f"{show} - {season}{codes}.mkv"


def create_episodes(season_dir: Path, show: str, season: int, start: int = 1) -> None:
    for episode in range(start, NUM_EPISODES + 1):
        (season_dir / episode_file_name(show, season, episode)).touch()


@pytest.fixture
def tv_root(tmp_path: Path) -> Path:
    """
    Mock TV library root.

    Each show in SHOWS has NUM_SEASONS seasons of NUM_EPISODES episodes.
    "The Walking Dead" has a single season holding the double episodes
    1x02x03 and 1x05x06.
    """
    root = tmp_path / "tv"
    for show in SHOWS:
        for season in range(1, NUM_SEASONS + 1):
            season_dir = root / show / f"Season {season}"
            season_dir.mkdir(parents=True)
            create_episodes(season_dir, show, season)

    show = "The Walking Dead"
    season_dir = root / show / "Season 1"
    season_dir.mkdir(parents=True)
    (season_dir / episode_file_name(show, 1, 1)).touch()
    (season_dir / episode_file_name(show, 1, 2, num_episodes=2)).touch()
    (season_dir / episode_file_name(show, 1, 4)).touch()
    (season_dir / episode_file_name(show, 1, 5, num_episodes=2)).touch()
    create_episodes(season_dir, show, 1, start=7)
    return root


@pytest.fixture
def tv_path(tv_root: Path) -> StandardTVPath:
    return StandardTVPath(tv_root)


@pytest.fixture
def tv_episode_matcher(tv_path: StandardTVPath) -> TVEpisodeMatcher:
    return TVEpisodeMatcher(tv_path)


@pytest.fixture
def episode_path(tv_root: Path):
    """Build the path of a mock episode file."""
    def build(show: str, season: int, episode: int) -> Path:
        return tv_root / show / f"Season {season}" / episode_file_name(show, season, episode)
    return build


def full_season_matches(show: str, seasons: range) -> list[EpisodeMatch]:
    return [
        EpisodeMatch(show, season, [episode])
        for season in seasons
        for episode in range(1, NUM_EPISODES + 1)
    ]
