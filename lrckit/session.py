"""
Playback session for LRCKit.

Ties the AList client, caption matching, and the caption timeline together
for one track at a time. Audio decoding and transport control belong to an
external playback engine; the session only reads its position through a
PositionSource and reports which caption line is active.
"""

import logging
import math
from typing import Iterable, Optional

from .alist import AListClient
from .models import RemoteFile
from .parser import parse_lrc
from .timeline import CaptionTimeline
from .utils import find_caption_file, join_remote_path

logger = logging.getLogger(__name__)


class PositionSource:
    """Base interface for the playback engine that reports position."""

    def current_time(self) -> float:
        raise NotImplementedError

    def duration(self) -> float:
        raise NotImplementedError


class PlaybackSession:
    """
    Caption state for the track currently handed to the playback engine.

    Typical flow:
    1. open_track() resolves the audio URL and loads matching captions
    2. the host passes the returned URL to its playback engine
    3. a timer calls sample() (or on_position()) roughly every 100ms
    4. the UI reads timeline.entries and highlights timeline.active_index
    """

    def __init__(self, client: AListClient, source: Optional[PositionSource] = None):
        """
        Initialize playback session.

        Args:
            client: AList client used for URL resolution and caption download
            source: Optional playback engine adapter used by sample()
        """
        self.client = client
        self.source = source
        self.timeline = CaptionTimeline()
        self.track_name = ""
        self.audio_url: Optional[str] = None
        self.position = 0.0
        self.duration = 0.0

    def open_track(
        self,
        directory: str,
        audio_file: RemoteFile,
        siblings: Iterable[RemoteFile] = ()
    ) -> Optional[str]:
        """
        Prepare a track for playback.

        Resolves the audio download URL, then looks for a caption file with
        the same name among the siblings and loads it into the timeline.
        Missing or unreadable captions leave the timeline empty.

        Args:
            directory: Remote directory containing the audio file
            audio_file: Listing entry of the audio file
            siblings: Other entries of the same directory listing

        Returns:
            Audio URL for the playback engine, or None if it cannot be
            resolved (the current session is then left untouched)
        """
        audio_url = self.client.get_download_url(join_remote_path(directory, audio_file.name))
        if audio_url is None:
            logger.warning(f"Cannot play {audio_file.name}: download URL unavailable")
            return None

        caption_text = None
        caption_file = find_caption_file(audio_file, siblings)
        if caption_file is not None:
            logger.info(f"Found captions for {audio_file.name}: {caption_file.name}")
            caption_text = self.client.fetch_captions(directory, caption_file)
        else:
            logger.info(f"No captions found for {audio_file.name}")

        self.track_name = audio_file.name
        self.audio_url = audio_url
        self.position = 0.0
        self.duration = 0.0
        self.timeline.load(parse_lrc(caption_text))

        logger.info(f"Opened track {audio_file.name} with {len(self.timeline)} caption lines")
        return audio_url

    def on_position(self, position: float, duration: Optional[float] = None) -> int:
        """
        Record a playback position sample and update the active caption.

        Args:
            position: Elapsed playback time in seconds
            duration: Track duration in seconds, if known

        Returns:
            Active caption index (NO_ACTIVE_INDEX when none)
        """
        self.position = position
        if duration is not None and not math.isnan(duration):
            self.duration = duration
        return self.timeline.update(position)

    def sample(self) -> int:
        """
        Pull one position sample from the configured PositionSource.

        Raises:
            RuntimeError: If the session has no PositionSource
        """
        if self.source is None:
            raise RuntimeError("PlaybackSession has no PositionSource to sample")
        return self.on_position(self.source.current_time(), self.source.duration())

    def close(self) -> None:
        """Forget the current track and clear its captions."""
        self.timeline.reset()
        self.track_name = ""
        self.audio_url = None
        self.position = 0.0
        self.duration = 0.0
