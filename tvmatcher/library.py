"""
TV library directory structures.

A TV library stores its episodes as <root>/<show>/<season folder>/<file>,
where the season folder is named after one of the SeasonFormat values
("Season 1", "Season 01", "Series 1" or "Series 01"). TVPath subclasses
locate show and season directories, and PathElementMatcher reads the show
and season of an episode back from its path.
"""

from __future__ import annotations

import logging
import re
import threading
import time
from enum import Enum
from pathlib import Path
from typing import Iterable, Mapping

from .exceptions import EpisodesPathNotFoundError, SeasonsPathNotFoundError
from .models import NO_SEASON, Season

logger = logging.getLogger(__name__)


# =============================================================================
# VIDEO FILES
# =============================================================================

VIDEO_EXTENSIONS = {'.mkv', '.mp4', '.avi', '.mpg', '.mpeg', '.mov'}


def is_video_file(path: Path) -> bool:
    return path.suffix.lower() in VIDEO_EXTENSIONS


def list_video_files(directory: Path) -> list[Path]:
    """
    List the video files directly inside directory, sorted by name.

    Raises:
        OSError: the directory can't be listed
    """
    return sorted(p for p in Path(directory).iterdir() if p.is_file() and is_video_file(p))


def scan(path: Path | str, recursive: bool = True) -> list[Path]:
    """
    Find the video files at path.

    Args:
        path: A video file, or a directory to search
        recursive: Search subdirectories too

    Returns:
        Sorted video file paths (empty if path doesn't exist)
    """
    path = Path(path)
    if path.is_file():
        return [path] if is_video_file(path) else []
    if not path.is_dir():
        return []

    candidates = path.rglob('*') if recursive else path.iterdir()
    return sorted(p for p in candidates if p.is_file() and is_video_file(p))


# =============================================================================
# PATH ELEMENTS
# =============================================================================

SEASON_DIR_PATTERN = re.compile(r'(?:Season|Series) ([0-9]+)', re.IGNORECASE)


class PathElementMatcher:
    """Resolve the show and season of an episode from the directories holding it."""

    def match_show(self, path: Path) -> str | None:
        """
        Get the show of an episode stored in a season folder.

        Returns:
            Name of the directory above the season folder, or None if the
            episode isn't in a season folder
        """
        season_dir = Path(path).parent
        if not season_dir.name or not SEASON_DIR_PATTERN.fullmatch(season_dir.name):
            return None
        return season_dir.parent.name or None

    def match_season(self, path: Path) -> int:
        """
        Get the season number from a season folder, or from the folder
        holding an episode file.

        Returns:
            Season number, or NO_SEASON
        """
        path = Path(path)
        season_dir = path if path.is_dir() else path.parent
        return self.season_from_name(season_dir.name)

    @staticmethod
    def season_from_name(directory_name: str) -> int:
        m = SEASON_DIR_PATTERN.search(directory_name)
        return int(m.group(1)) if m else NO_SEASON


class SeasonFormat(Enum):
    """Naming formats of season folders, in lookup order."""
    SEASON = "Season {}"
    SEASON_PADDED = "Season {:02d}"
    SERIES = "Series {}"
    SERIES_PADDED = "Series {:02d}"

    def format(self, season: int) -> str:
        return self.value.format(season)


# =============================================================================
# TV PATHS
# =============================================================================

class TVPath:
    """
    Base class of TV library structures.

    Subclasses locate the directory of a show (get_seasons_path) and of one
    of its seasons (get_episodes_path), returning None when it doesn't exist.
    """

    def get_seasons_path(self, show: str | None) -> Path | None:
        raise NotImplementedError

    def get_episodes_path(self, show: str | None, season: int) -> Path | None:
        raise NotImplementedError

    def element_matcher(self) -> PathElementMatcher:
        return PathElementMatcher()

    def get_season(self, show: str, season: int) -> Season:
        """
        Raises:
            EpisodesPathNotFoundError: the season directory doesn't exist
        """
        episodes_path = self.get_episodes_path(show, season)
        if episodes_path is None:
            raise EpisodesPathNotFoundError(show, season)
        return Season(season, episodes_path)

    def list_seasons(self, show: str) -> list[Season]:
        """
        List the season folders of a show, ordered by season number.

        Raises:
            SeasonsPathNotFoundError: the show directory doesn't exist
        """
        seasons_path = self.get_seasons_path(show)
        if seasons_path is None:
            raise SeasonsPathNotFoundError(show)

        element_matcher = self.element_matcher()
        seasons = []
        for directory in seasons_path.iterdir():
            if not directory.is_dir():
                continue
            season = element_matcher.match_season(directory)
            if season != NO_SEASON:
                seasons.append(Season(season, directory))
        return sorted(seasons)

    def list_paths(self, show: str, season: int) -> list[Path]:
        """
        List the video files of a season.

        Raises:
            EpisodesPathNotFoundError: the season directory doesn't exist
        """
        episodes_path = self.get_episodes_path(show, season)
        if episodes_path is None:
            raise EpisodesPathNotFoundError(show, season)
        return list_video_files(episodes_path)

    def list_episode_paths(self, directory: Path) -> list[Path]:
        """List the video files of directory, or [] if it can't be listed."""
        try:
            return list_video_files(directory)
        except OSError as e:
            logger.debug("Unable to list %s: %s", directory, e)
            return []


def _find_episodes_path(seasons_path: Path, season: int) -> Path | None:
    for season_format in SeasonFormat:
        episodes_path = seasons_path / season_format.format(season)
        if episodes_path.exists():
            return episodes_path
    return None


class StandardTVPath(TVPath):
    """A single TV root directory: <root>/<show>/<season folder>."""

    def __init__(self, root: Path | str):
        self.root = Path(root)

    def get_seasons_path(self, show: str | None) -> Path | None:
        if not show:
            return None
        seasons_path = self.root / show
        return seasons_path if seasons_path.exists() else None

    def get_episodes_path(self, show: str | None, season: int) -> Path | None:
        seasons_path = self.get_seasons_path(show)
        if seasons_path is None:
            return None
        return _find_episodes_path(seasons_path, season)

    def detect_season_format(self, show: str) -> SeasonFormat | None:
        """
        Detect the season folder format used by a show.

        Only seasons 0 to 9 are considered since larger numbers look the same
        padded or not.

        Returns:
            SeasonFormat, or None if the show doesn't exist or no format matched
        """
        seasons_path = self.get_seasons_path(show)
        if seasons_path is None:
            return None

        for directory in sorted(seasons_path.iterdir()):
            season = PathElementMatcher.season_from_name(directory.name)
            if not 0 <= season < 10:
                continue
            for season_format in SeasonFormat:
                if directory.name == season_format.format(season):
                    return season_format
        return None

    def new_seasons_path(self, show: str) -> Path:
        """Create the directory of a show, returning it (or the existing one)."""
        seasons_path = self.root / show
        seasons_path.mkdir(exist_ok=True)
        return seasons_path

    def new_episodes_path(self, show: str, season: int, season_format: SeasonFormat | None = None) -> Path:
        """
        Create the directory of a season, returning it (or the existing one).

        Args:
            show: Show name
            season: Season number
            season_format: Format of the folder name. Detected from the
                existing seasons of the show when None, defaulting to
                SeasonFormat.SEASON

        Raises:
            SeasonsPathNotFoundError: the show directory doesn't exist
        """
        seasons_path = self.get_seasons_path(show)
        if seasons_path is None:
            raise SeasonsPathNotFoundError(show)

        if season_format is None:
            season_format = self.detect_season_format(show) or SeasonFormat.SEASON
        episodes_path = seasons_path / season_format.format(season)
        episodes_path.mkdir(exist_ok=True)
        logger.debug("Using episodes path %s", episodes_path)
        return episodes_path


class StandardTVLibrary(TVPath):
    """
    Several TV roots with the StandardTVPath structure, searched in order.

    With a probe_timeout, roots are checked concurrently on creation and the
    ones that don't respond in time (e.g. an unmounted network share) are
    left out.
    """

    def __init__(self, sources: Iterable[Path | str], probe_timeout: float | None = None):
        sources = list(sources)
        if probe_timeout is not None:
            sources = existing_dirs(sources, probe_timeout)
        self.tv_paths = [StandardTVPath(source) for source in sources]

    def get_seasons_path(self, show: str | None) -> Path | None:
        for tv_path in self.tv_paths:
            seasons_path = tv_path.get_seasons_path(show)
            if seasons_path is not None:
                return seasons_path
        return None

    def get_episodes_path(self, show: str | None, season: int) -> Path | None:
        seasons_path = self.get_seasons_path(show)
        if seasons_path is None:
            return None
        return _find_episodes_path(seasons_path, season)

    def new_episodes_path(self, show: str, season: int, season_format: SeasonFormat | None = None) -> Path:
        """
        Create the directory of a season in the root holding the show.

        Raises:
            SeasonsPathNotFoundError: no root holds the show
        """
        for tv_path in self.tv_paths:
            if tv_path.get_seasons_path(show) is not None:
                return tv_path.new_episodes_path(show, season, season_format)
        raise SeasonsPathNotFoundError(show)


class AliasedTVLibrary(StandardTVLibrary):
    """
    StandardTVLibrary retrying lookups with a show alias.

    Useful when the show name matched from a file differs from the name of
    its directory, e.g. "The Office" stored as "The Office (US)".
    """

    def __init__(
        self,
        sources: Iterable[Path | str],
        aliases: Mapping[str, str],
        probe_timeout: float | None = None,
    ):
        super().__init__(sources, probe_timeout)
        self.aliases = dict(aliases)

    def get_seasons_path(self, show: str | None) -> Path | None:
        seasons_path = super().get_seasons_path(show)
        if seasons_path is None and show in self.aliases:
            logger.debug("Looking up %s as %s", show, self.aliases[show])
            seasons_path = super().get_seasons_path(self.aliases[show])
        return seasons_path

    def new_episodes_path(self, show: str, season: int, season_format: SeasonFormat | None = None) -> Path:
        try:
            return super().new_episodes_path(show, season, season_format)
        except SeasonsPathNotFoundError:
            if show not in self.aliases:
                raise
            return super().new_episodes_path(self.aliases[show], season, season_format)


# =============================================================================
# DIRECTORY PROBING
# =============================================================================

def existing_dirs(dirs: Iterable[Path | str], timeout: float | None = None) -> list[Path]:
    """
    Get the directories of dirs that exist, checking them concurrently.

    A check still running after timeout seconds counts as missing. Checks
    run on daemon threads so a hung one never holds up interpreter exit.

    Returns:
        Existing directories, in the order given
    """
    dirs = [Path(d) for d in dirs]
    results = [False] * len(dirs)

    def probe(index: int, directory: Path) -> None:
        try:
            results[index] = directory.exists()
        except OSError as e:
            logger.debug("Error checking %s: %s", directory, e)

    threads = [
        threading.Thread(target=probe, args=(i, d), daemon=True)
        for i, d in enumerate(dirs)
    ]
    for thread in threads:
        thread.start()

    deadline = None if timeout is None else time.monotonic() + timeout
    for d, thread in zip(dirs, threads):
        if deadline is None:
            thread.join()
        else:
            thread.join(max(0.0, deadline - time.monotonic()))
        if thread.is_alive():
            logger.debug("Timed out checking %s", d)

    return [
        d for d, thread, exists in zip(dirs, threads, results)
        if exists and not thread.is_alive()
    ]
