"""
Normalized podcast record shared by every extraction strategy.
"""

from dataclasses import dataclass
from typing import Dict

from .errors import NotFoundError


@dataclass(frozen=True)
class PodcastRecord:
    """Episode metadata as served to the player UI."""

    title: str
    audio_url: str
    image_url: str = ''
    playlist_image_url: str = ''
    playlist_title: str = ''
    playlist_url: str = ''

    def to_dict(self) -> Dict[str, str]:
        """Serialize with the camelCase keys the UI reads."""
        return {
            'title': self.title,
            'imageUrl': self.image_url,
            'audioUrl': self.audio_url,
            'playlistImageUrl': self.playlist_image_url,
            'playlistTitle': self.playlist_title,
            'playlistUrl': self.playlist_url,
        }


def require_audio(record: PodcastRecord) -> PodcastRecord:
    """Reject records without a playable audio URL."""
    if not record.audio_url:
        raise NotFoundError('audio url not found')
    return record
