"""
AList browsing example.

Lists a directory on an AList server, opens the first audio file with its
matching LRC captions, and simulates a playback engine reporting position.
"""

import logging
import time

from lrckit import AListClient, AListError, PlaybackSession, PositionSource

# Configure logging to see lrckit internal logs
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


class WallClockSource(PositionSource):
    """Pretends playback started when the object was created."""

    def __init__(self, length: float):
        self.started = time.monotonic()
        self.length = length

    def current_time(self) -> float:
        return time.monotonic() - self.started

    def duration(self) -> float:
        return self.length


def main():
    client = AListClient("http://192.168.1.5:5244", token="")
    directory = "/music"

    try:
        files = client.list_files(directory)
    except AListError as e:
        print(f"Could not list {directory}: {e}")
        return

    audio_files = [f for f in files if f.is_audio]
    if not audio_files:
        print("No audio files found")
        return

    session = PlaybackSession(client, source=WallClockSource(length=30.0))
    audio_url = session.open_track(directory, audio_files[0], files)
    if audio_url is None:
        print("Could not resolve audio URL")
        return

    print(f"Hand this URL to your player: {audio_url}")
    session.timeline.subscribe(
        lambda index: print(f"Line {index}: {session.timeline.current_entry}")
    )

    # A real player would drive this from its own timer
    for _ in range(100):
        session.sample()
        time.sleep(0.1)


if __name__ == "__main__":
    main()
