"""
Command-line interface for tvmatcher.

  tvmatcher [options] [path]
  tvmatcher --navigate next --root /mnt/TV "/mnt/TV/Scrubs/Season 1/scrubs.1x03.mkv"
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from . import __version__
from .exceptions import MatchElementNotFoundError, MatchError, TVPathError
from .index import TVMap
from .library import PathElementMatcher, StandardTVLibrary, scan
from .matcher import MatchElement, TVEpisodeMatcher, TVMatcher
from .models import EpisodeMatch, episode_sort_key
from .navigator import EpisodeNavigator, Pointer
from .parser import MatchOptions


# =============================================================================
# COLORS (ANSI escape codes)
# =============================================================================

class Colors:
    RED = "\033[0;31m"
    GREEN = "\033[0;32m"
    YELLOW = "\033[1;33m"
    BLUE = "\033[0;34m"
    CYAN = "\033[0;36m"
    NC = "\033[0m"  # No Color

    @classmethod
    def disable(cls):
        """Disable colors (for non-TTY output)."""
        cls.RED = ""
        cls.GREEN = ""
        cls.YELLOW = ""
        cls.BLUE = ""
        cls.CYAN = ""
        cls.NC = ""


def print_status(color: str, message: str) -> None:
    """Print a colored status message."""
    print(f"{color}{message}{Colors.NC}")


def print_verbose(message: str, verbose: bool) -> None:
    """Print a verbose message if verbose mode is enabled."""
    if verbose:
        print(f"{Colors.CYAN}  [VERBOSE] {message}{Colors.NC}", file=sys.stderr)


# =============================================================================
# CLI ARGUMENT PARSING
# =============================================================================

def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all options."""
    parser = argparse.ArgumentParser(
        prog="tvmatcher",
        description="Match TV episode files to their show, season and episode",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s /mnt/TV/Scrubs
  %(prog)s --path-show --require all /mnt/TV
  %(prog)s --navigate next --root /mnt/TV "/mnt/TV/Scrubs/Season 1/Scrubs - 1x03.mkv"

Supported Episode Patterns:
  SE delimited:    S01E01, s01.e01, S01E01E02, S01E01-S01E02
  X delimited:     1x01, 01x01, 1x01x02
  Word delimited:  Season 1 Episode 2, ep02, E01E02
  No delimiter:    102, 1.02
  Part:            Part 2, Pt.II, Part III Part IV
""",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show detailed matching information",
    )

    parser.add_argument(
        "--no-recursive",
        action="store_true",
        help="Only match files directly inside path",
    )

    parser.add_argument(
        "--require",
        choices=[element.value for element in MatchElement],
        help="Report matches missing the show, the season or both as errors",
    )

    parser.add_argument(
        "--path-show",
        action="store_true",
        help="Take the show from the directory structure instead of the file name",
    )

    parser.add_argument(
        "--path-season",
        action="store_true",
        help="Take the season from the directory structure instead of the file name",
    )

    parser.add_argument(
        "--fallback-path",
        action="store_true",
        help="Use the directory structure when the show or season can't be resolved",
    )

    parser.add_argument(
        "--fallback-pattern",
        action="store_true",
        help="Use the file name when the show or season can't be resolved from the directory structure",
    )

    parser.add_argument(
        "--navigate",
        choices=[pointer.name.lower() for pointer in Pointer],
        help="Print the previous, current or next episode of the file given as path",
    )

    parser.add_argument(
        "--root",
        metavar="DIR",
        action="append",
        help="TV library root used with --navigate (repeatable)",
    )

    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="File or directory to match (default: current directory)",
    )

    return parser


def build_options(args: argparse.Namespace) -> MatchOptions:
    """Map the resolution flags onto MatchOptions."""
    element_matcher = PathElementMatcher()
    options = MatchOptions(
        show_resolver=element_matcher.match_show if args.path_show else None,
        season_resolver=element_matcher.match_season if args.path_season else None,
    )
    if args.fallback_path:
        options = options.with_fallback(element_matcher)
    if args.fallback_pattern:
        options = options.with_pattern_fallback()
    return options


# =============================================================================
# COMMANDS
# =============================================================================

def describe(match: EpisodeMatch) -> str:
    show = match.show if match.show is not None else "<unknown show>"
    return f"{show} {match.format_code()}"


def run_match(args: argparse.Namespace, options: MatchOptions, base_path: Path) -> int:
    """Match every video file under base_path and summarize the result."""
    tv_matcher = TVMatcher(options)
    required = MatchElement(args.require) if args.require else None
    files = scan(base_path, recursive=not args.no_recursive)

    print_status(Colors.BLUE, "=== TV Episode Matcher ===")
    print_status(Colors.BLUE, f"Path: {base_path}")
    print_verbose(f"Options: {options}", args.verbose)
    print()

    matches = []
    unmatched = 0
    for path in files:
        try:
            if required is None:
                match = tv_matcher.match(path)
            else:
                match = tv_matcher.match_element_or_throw(path, required)
        except MatchElementNotFoundError as e:
            print_status(Colors.YELLOW, f"  {e.element.capitalize()} missing: {path.name}")
            unmatched += 1
            continue

        if match is None:
            print_status(Colors.YELLOW, f"  No match: {path.name}")
            unmatched += 1
            continue

        print_status(Colors.GREEN, f"  {path.name} -> {describe(match)}")
        matches.append(match)

    tv_map = TVMap(m for m in matches if m.show is not None)
    without_show = sum(1 for m in matches if m.show is None)

    print()
    print_status(Colors.BLUE, "=== Summary ===")
    print_status(Colors.GREEN, f"Video files: {len(files)}")
    print_status(Colors.GREEN, f"Matched: {len(matches)}")
    if unmatched:
        print_status(Colors.YELLOW, f"Unmatched: {unmatched}")
    if without_show:
        print_status(Colors.YELLOW, f"Matched without a show: {without_show}")

    for show in sorted(tv_map.get_shows(), key=str.casefold):
        episodes = sorted(tv_map.get_episodes(show), key=episode_sort_key)
        print_status(
            Colors.CYAN,
            f"  {show}: {tv_map.season_count(show)} season(s), {len(episodes)} file(s)",
        )
        for episode in episodes:
            print_verbose(f"{show} {episode.format_code()}", args.verbose)

    return 0


def run_navigate(args: argparse.Namespace, options: MatchOptions, episode_path: Path) -> int:
    """Print the episode adjacent to episode_path in the library."""
    if not args.root:
        print_status(Colors.RED, "Error: --navigate requires --root")
        return 1
    if not episode_path.is_file():
        print_status(Colors.RED, f'Error: File "{args.path}" does not exist!')
        return 1

    try:
        match = TVMatcher(options).match_or_throw(episode_path, MatchElement.ALL)
    except MatchError as e:
        print_status(Colors.RED, f"Error: {e}")
        return 1

    library = StandardTVLibrary(args.root)
    navigator = EpisodeNavigator(TVEpisodeMatcher(library, options), library)
    pointer = Pointer[args.navigate.upper()]
    print_verbose(f"Navigating {pointer.name} from {describe(match)}", args.verbose)

    try:
        found = navigator.navigate(match, pointer)
    except TVPathError as e:
        print_status(Colors.RED, f"Error: {e}")
        return 1

    if found is None:
        print_status(Colors.YELLOW, f"No {pointer.name.lower()} episode for {describe(match)}")
        return 1

    print_status(Colors.GREEN, describe(found))
    if found.source_file is not None:
        print(found.source_file)
    return 0


# =============================================================================
# MAIN ENTRY POINT
# =============================================================================

def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    # Disable colors if not a TTY
    if not sys.stdout.isatty():
        Colors.disable()

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
            stream=sys.stderr,
        )

    options = build_options(args)
    path = Path(args.path).resolve()

    if args.navigate:
        return run_navigate(args, options, path)

    if not path.exists():
        print_status(Colors.RED, f'Error: Path "{args.path}" does not exist!')
        return 1

    return run_match(args, options, path)


if __name__ == "__main__":
    sys.exit(main())
