"""
File name normalization and show name casing.

Quality and codec tags are stripped from a file name before any pattern
is tried against it. The tags are deleted rather than replaced by a
separator, which can merge neighbouring tokens; the patterns in parser.py
tolerate runs of separators so this never hides an episode code.
"""

from __future__ import annotations

import re


# =============================================================================
# COMMON TAG PATTERNS
# Removed from file names before matching
# =============================================================================

# Qualities: 720p, 1080i, 480p
QUALITY_TAG = r'(?:720|480|1080)[ip]'

# Video codecs: h.264, x264, h 264
VIDEO_CODEC_TAG = r'([hx][_\-. +]*264)'

# Audio codecs: dd5.1, dd 7.1, ac3, aac2.0
AUDIO_CODEC_TAG = r'dd[_\-. +]?[257][_\-. +]*[01]|ac3|aac[_\-. +]*(?:[257][_\-. +]*[01])*'

COMMON_TAGS_PATTERN = re.compile(
    '|'.join((QUALITY_TAG, VIDEO_CODEC_TAG, AUDIO_CODEC_TAG)),
    re.IGNORECASE
)


# =============================================================================
# SHOW CASE
# Words kept lower case unless they start the show name
# =============================================================================

TITLE_EXCEPTIONS = {
    1: ("A",),
    2: ("As", "At", "By", "In", "Of", "On", "Or", "To", "Vs", "VS"),
    3: ("And", "For", "The"),
    4: ("From", "With"),
}


def strip_common_tags(file_name: str) -> str:
    """
    Strip quality and codec tags that interfere with matching.

    Example:
        "Modern.Family.S05E17.720p.DD5.1.AAC2.0.H.264.mkv"
        -> "Modern.Family.S05E17.....mkv"
    """
    return COMMON_TAGS_PATTERN.sub('', file_name)


def show_case(name: str) -> str:
    """
    Convert a show name captured from a file name to title case.

    Dots and underscores become spaces. Each word starts upper case, text in
    parentheses is upper cased entirely ("the.office.(us)" -> "The Office (US)")
    and short joining words after the first word are lower cased
    ("parks And recreation" -> "Parks and Recreation"). Converting an already
    converted name returns it unchanged.
    """
    chars = list(re.sub(r'[_.]+', ' ', name))
    next_title_case = True
    force_title_case = False

    for i, char in enumerate(chars):
        if char.isspace() or char == '-':
            next_title_case = True
        elif char == '(':
            force_title_case = True
        elif char == ')':
            force_title_case = False
        elif next_title_case or force_title_case:
            chars[i] = char.upper()
            next_title_case = False

    return _fix_word_case(''.join(chars))


def _fix_word_case(show: str) -> str:
    # Leading and trailing separators never produce words
    words = re.split(r' +', show.strip(' '))

    for i in range(1, len(words)):
        if words[i] in TITLE_EXCEPTIONS.get(len(words[i]), ()):
            words[i] = words[i].lower()

    return ' '.join(words)
