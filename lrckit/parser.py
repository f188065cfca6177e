"""
LRC caption parser.

Converts timestamped caption text into an ordered list of CaptionEntry
objects. Parsing is lenient: lines without a leading time tag (ID tags,
comments, malformed tags) are dropped rather than reported.
"""

import logging
from typing import Dict, List, Optional

from .models import CaptionEntry
from .utils import match_leading_tag

logger = logging.getLogger(__name__)


def _split_lines(raw: str) -> List[str]:
    """Split on LF, CRLF and CR only; other control characters stay in the text."""
    return raw.replace("\r\n", "\n").replace("\r", "\n").split("\n")


def _parse_line(line: str, expand_repeated_tags: bool) -> List[CaptionEntry]:
    matched = match_leading_tag(line)
    if matched is None:
        return []

    timestamp, rest = matched
    if not expand_repeated_tags:
        return [CaptionEntry(timestamp=timestamp, text=rest.strip())]

    # [00:12][00:45]chorus -> one entry per tag, all sharing the same text
    timestamps = [timestamp]
    following = match_leading_tag(rest)
    while following is not None:
        timestamps.append(following[0])
        rest = following[1]
        following = match_leading_tag(rest)

    text = rest.strip()
    return [CaptionEntry(timestamp=t, text=text) for t in timestamps]


def parse_lrc(raw: Optional[str], expand_repeated_tags: bool = False) -> List[CaptionEntry]:
    """
    Parse LRC content into caption entries sorted by timestamp.

    Each line must begin with a ``[MM:SS]`` or ``[MM:SS.fraction]`` tag; the
    rest of the line, trimmed, becomes the entry text (possibly empty).
    Entries with equal timestamps keep their file order.

    Args:
        raw: LRC content as string (None is treated as empty)
        expand_repeated_tags: If True, a line with several leading tags
            produces one entry per tag. Otherwise only the first tag is
            consumed and any further tags stay in the text.

    Returns:
        List of CaptionEntry in non-decreasing timestamp order

    Example:
        >>> parse_lrc("[00:05.50]second\\n[00:01]first")
        [CaptionEntry(timestamp=1.0, text='first'), CaptionEntry(timestamp=5.5, text='second')]
    """
    if not raw or not raw.strip():
        return []

    entries: List[CaptionEntry] = []
    lines = _split_lines(raw)
    for line in lines:
        entries.extend(_parse_line(line, expand_repeated_tags))

    # sorted() is stable, ties keep file order
    entries = sorted(entries, key=lambda entry: entry.timestamp)

    logger.debug(f"Parsed {len(entries)} caption entries from {len(lines)} lines")
    return entries


def parse_lrc_metadata(raw: Optional[str]) -> Dict[str, str]:
    """
    Extract ID tags such as ``[ti:Title]`` or ``[ar:Artist]`` from LRC content.

    A line counts as an ID tag when it consists solely of ``[key:value]``
    and the key is alphabetic. Later tags override earlier ones.

    Args:
        raw: LRC content as string

    Returns:
        Dictionary mapping lowercase tag keys to trimmed values
    """
    metadata: Dict[str, str] = {}
    if not raw:
        return metadata

    for line in _split_lines(raw):
        line = line.strip()
        if not (line.startswith("[") and line.endswith("]")):
            continue
        key, sep, value = line[1:-1].partition(":")
        key = key.strip()
        if not sep or not key.isalpha() or "]" in value:
            continue
        metadata[key.lower()] = value.strip()

    return metadata


class LRCParser:
    """
    Parser for LRC caption files.

    Wraps parse_lrc with file loading and a fixed repeated-tag policy.
    """

    def __init__(self, expand_repeated_tags: bool = False):
        """
        Initialize LRC parser.

        Args:
            expand_repeated_tags: Expand lines with several leading tags
                into one entry per tag (default: False)
        """
        self.expand_repeated_tags = expand_repeated_tags

    def parse(self, raw: Optional[str]) -> List[CaptionEntry]:
        """Parse LRC content string (no file I/O)."""
        return parse_lrc(raw, expand_repeated_tags=self.expand_repeated_tags)

    def parse_file(self, lrc_file: str) -> List[CaptionEntry]:
        """
        Load and parse an LRC file.

        Args:
            lrc_file: Path to LRC file (UTF-8, optional byte order mark)

        Returns:
            List of CaptionEntry in non-decreasing timestamp order
        """
        logger.info(f"Parsing LRC file: {lrc_file}")

        with open(lrc_file, 'r', encoding='utf-8-sig', errors='replace') as f:
            content = f.read()

        entries = self.parse(content)
        logger.info(f"LRC parsing complete: {len(entries)} entries extracted")
        return entries
