"""
Data models for LRCKit.

Defines the core data structures used throughout the package.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

AUDIO_EXTENSIONS = (".mp3", ".m4a", ".flac", ".wav")
CAPTION_EXTENSIONS = (".lrc",)


@dataclass(frozen=True)
class CaptionEntry:
    """A single timed caption line."""
    timestamp: float  # seconds from track start
    text: str


@dataclass
class RemoteFile:
    """Represents one item of an AList directory listing."""
    name: str
    size: int = 0
    is_dir: bool = False
    modified: str = ""
    sign: Optional[str] = None
    thumb: Optional[str] = None

    @property
    def is_audio(self) -> bool:
        return self.name.lower().endswith(AUDIO_EXTENSIONS)

    @property
    def is_caption(self) -> bool:
        return self.name.lower().endswith(CAPTION_EXTENSIONS)

    @property
    def stem(self) -> str:
        """File name without its final extension."""
        base, dot, _ext = self.name.rpartition(".")
        if not dot or not base:
            return self.name
        return base

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Optional["RemoteFile"]:
        """
        Build a RemoteFile from an AList listing item.

        Args:
            data: Item dictionary from the ``data.content`` array

        Returns:
            RemoteFile, or None if the item has no usable name
        """
        if not isinstance(data, dict):
            return None
        name = data.get("name")
        if not isinstance(name, str):
            return None

        size = data.get("size")
        if not isinstance(size, int) or isinstance(size, bool):
            size = 0
        modified = data.get("modified")
        sign = data.get("sign")
        thumb = data.get("thumb")

        return cls(
            name=name,
            size=size,
            is_dir=data.get("is_dir") is True,
            modified=modified if isinstance(modified, str) else "",
            sign=sign if isinstance(sign, str) else None,
            thumb=thumb if isinstance(thumb, str) else None,
        )


@dataclass
class AListConfig:
    """Configuration for AList server access."""
    server_url: str
    token: str = ""
    timeout: int = 30
    verify_ssl: bool = True
