"""
Shared utility functions for LRCKit.

Provides common utilities used across multiple modules: the LRC time-tag
scanner, timestamp conversion, and helpers for AList remote paths.
"""

import posixpath
from typing import Iterable, Optional, Tuple

from .models import CaptionEntry, RemoteFile


def _scan_digits(text: str, start: int) -> int:
    """Return the index just past the run of ASCII digits beginning at start."""
    end = start
    while end < len(text) and "0" <= text[end] <= "9":
        end += 1
    return end


def match_leading_tag(line: str) -> Optional[Tuple[float, str]]:
    """
    Match a leading ``[MM:SS]`` or ``[MM:SS.fraction]`` time tag.

    Grammar: ``"[" DIGITS ":" DIGITS ("." DIGITS)? "]" REST``. Leading
    whitespace before the tag is ignored. Minutes have no fixed width.

    Args:
        line: One physical line of caption text

    Returns:
        Tuple of (seconds, rest_of_line), or None if the line does not
        start with a time tag. The rest is returned untrimmed.

    Example:
        >>> match_leading_tag("[01:02.5]hello")
        (62.5, 'hello')
        >>> match_leading_tag("[ar:Someone]") is None
        True
    """
    text = line.lstrip()
    if not text.startswith("["):
        return None

    minutes_end = _scan_digits(text, 1)
    if minutes_end == 1 or minutes_end >= len(text) or text[minutes_end] != ":":
        return None

    seconds_start = minutes_end + 1
    seconds_end = _scan_digits(text, seconds_start)
    if seconds_end == seconds_start:
        return None

    if seconds_end < len(text) and text[seconds_end] == ".":
        fraction_end = _scan_digits(text, seconds_end + 1)
        if fraction_end == seconds_end + 1:
            return None
        seconds_end = fraction_end

    if seconds_end >= len(text) or text[seconds_end] != "]":
        return None

    # float() saturates to inf on huge digit runs instead of raising
    minutes = float(text[1:minutes_end])
    seconds = float(text[seconds_start:seconds_end])
    return minutes * 60 + seconds, text[seconds_end + 1:]


def lrc_timestamp_to_seconds(timestamp: str) -> float:
    """
    Convert MM:SS.xx format to seconds.

    Args:
        timestamp: Timestamp string without brackets, e.g. ``"01:30.50"``

    Returns:
        Time in seconds as float

    Raises:
        ValueError: If the timestamp is not in MM:SS[.fraction] format

    Example:
        >>> lrc_timestamp_to_seconds("01:30.50")
        90.5
    """
    matched = match_leading_tag(f"[{timestamp.strip()}]")
    if matched is None or matched[1]:
        raise ValueError(f"Invalid LRC timestamp: {timestamp!r}")
    return matched[0]


def seconds_to_lrc_timestamp(seconds: float) -> str:
    """
    Convert seconds to MM:SS.xx format (centisecond precision).

    Negative values are clamped to zero. Minutes grow past two digits
    for tracks longer than 99 minutes.

    Example:
        >>> seconds_to_lrc_timestamp(90.5)
        '01:30.50'
    """
    centiseconds = int(round(max(seconds, 0.0) * 100))
    minutes, centiseconds = divmod(centiseconds, 6000)
    return f"{minutes:02d}:{centiseconds // 100:02d}.{centiseconds % 100:02d}"


def format_lrc(entries: Iterable[CaptionEntry]) -> str:
    """
    Format caption entries as LRC text, one ``[MM:SS.xx]text`` line each.

    Args:
        entries: Caption entries, written in the given order

    Returns:
        LRC content ending with a newline, or an empty string
    """
    lines = [f"[{seconds_to_lrc_timestamp(e.timestamp)}]{e.text}" for e in entries]
    if not lines:
        return ""
    return "\n".join(lines) + "\n"


def join_remote_path(directory: str, name: str) -> str:
    """
    Join an AList directory path and an entry name.

    Example:
        >>> join_remote_path("/", "music")
        '/music'
        >>> join_remote_path("/music/", "a.mp3")
        '/music/a.mp3'
    """
    directory = "/" + directory.strip("/") if directory.strip("/") else ""
    return f"{directory}/{name.strip('/')}"


def parent_remote_path(path: str) -> str:
    """
    Return the parent of an AList path; the root is its own parent.

    Example:
        >>> parent_remote_path("/music/album")
        '/music'
        >>> parent_remote_path("/music")
        '/'
    """
    stripped = path.rstrip("/")
    if not stripped:
        return "/"
    parent = posixpath.dirname(stripped)
    return parent or "/"


def find_caption_file(audio_file: RemoteFile, candidates: Iterable[RemoteFile]) -> Optional[RemoteFile]:
    """
    Find the caption file belonging to an audio file.

    A caption matches when it sits in the same listing and shares the audio
    file's name without extension (``song.mp3`` -> ``song.lrc``).

    Args:
        audio_file: The audio file about to be played
        candidates: Sibling entries from the same directory listing

    Returns:
        The first matching caption file, or None
    """
    for candidate in candidates:
        if candidate.is_dir or not candidate.is_caption:
            continue
        if candidate.stem == audio_file.stem:
            return candidate
    return None
