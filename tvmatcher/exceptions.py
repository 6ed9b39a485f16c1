"""Exceptions raised by tvmatcher."""

from __future__ import annotations

from pathlib import Path


class TVMatcherError(Exception):
    """Base exception for all tvmatcher errors."""


class MatchError(TVMatcherError):
    """Raised when a file could not be matched as required."""

    def __init__(self, message: str, path: Path | str):
        super().__init__(message)
        self.path = path


class MatchNotFoundError(MatchError):
    """Raised when no pattern matched a file that was expected to match."""

    def __init__(self, path: Path | str):
        super().__init__(f"Match not found: {path}", path)


class MatchElementNotFoundError(MatchError):
    """Raised when a file matched but lacks a required show or season."""

    def __init__(self, element: str, path: Path | str):
        super().__init__(f"{element.capitalize()} not found: {path}", path)
        self.element = element


class TVPathError(TVMatcherError):
    """Raised when a TV library directory could not be resolved."""


class SeasonsPathNotFoundError(TVPathError):
    """Raised when the directory of a show could not be found."""

    def __init__(self, show: str):
        super().__init__(f"Seasons path not found for show: {show}")
        self.show = show


class EpisodesPathNotFoundError(TVPathError):
    """Raised when the directory of a season could not be found."""

    def __init__(self, show: str, season: int):
        super().__init__(f"Episodes path not found for show: {show}, season {season}")
        self.show = show
        self.season = season
