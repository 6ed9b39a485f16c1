"""
TV Episode Matcher

Match TV episode file names to their show, season and episode number(s),
index the matches and navigate between the episodes of a TV library.
"""

from importlib.metadata import version, PackageNotFoundError

from .exceptions import (
    EpisodesPathNotFoundError,
    MatchElementNotFoundError,
    MatchError,
    MatchNotFoundError,
    SeasonsPathNotFoundError,
    TVMatcherError,
    TVPathError,
)
from .index import SeasonsMap, TVMap
from .library import (
    AliasedTVLibrary,
    PathElementMatcher,
    SeasonFormat,
    StandardTVLibrary,
    StandardTVPath,
    TVPath,
)
from .matcher import EpisodeMatcher, MatchElement, TVEpisodeMatcher, TVMatcher
from .models import NO_SEASON, EpisodeMatch, EpisodeRange, Range, Season
from .navigator import EpisodeNavigator, Pointer
from .parser import MatchOptions

try:
    __version__ = version("tvmatcher")
except PackageNotFoundError:
    # Running from source without installation
    __version__ = "0.0.0-dev"
