"""
LRCKit - LRC Caption Synchronization Toolkit

A small library for playing audio stored on an AList server with
synchronized LRC captions.

Features:
- Parse LRC caption text into an ordered timeline
- Track the active caption line from playback position samples
- Browse AList directories and resolve download URLs
- Match audio files with their caption files

Example usage:
    >>> from lrckit import CaptionTimeline
    >>>
    >>> timeline = CaptionTimeline.from_text("[00:00.00]intro\\n[00:12.50]first line")
    >>> timeline.subscribe(lambda index: print(f"now at line {index}"))
    >>> timeline.update(13.0)
    now at line 1
    1
"""

import logging

__version__ = "0.1.0"
__author__ = "LRCKit Contributors"
__license__ = "MIT"

# Add NullHandler to prevent "No handler found" warnings
# Users should configure logging in their application if they want to see logs
logging.getLogger(__name__).addHandler(logging.NullHandler())

# Core utility functions
from .utils import (
    match_leading_tag,
    lrc_timestamp_to_seconds,
    seconds_to_lrc_timestamp,
    format_lrc,
    join_remote_path,
    parent_remote_path,
    find_caption_file,
)

# Parsing
from .parser import parse_lrc, parse_lrc_metadata, LRCParser

# Synchronization
from .timeline import CaptionTimeline, NO_ACTIVE_INDEX

# Data models
from .models import CaptionEntry, RemoteFile, AListConfig

# AList client
from .alist import AListClient, AListError

# Playback glue
from .session import PlaybackSession, PositionSource

__all__ = [
    # Version info
    "__version__",
    "__author__",
    "__license__",

    # Core parsing functions
    "parse_lrc",
    "parse_lrc_metadata",
    "match_leading_tag",
    "lrc_timestamp_to_seconds",
    "seconds_to_lrc_timestamp",
    "format_lrc",

    # Remote path helpers
    "join_remote_path",
    "parent_remote_path",
    "find_caption_file",

    # Main classes
    "LRCParser",
    "CaptionTimeline",
    "AListClient",
    "PlaybackSession",
    "PositionSource",

    # Constants and errors
    "NO_ACTIVE_INDEX",
    "AListError",

    # Models
    "CaptionEntry",
    "RemoteFile",
    "AListConfig",
]
