"""
Diffusion id resolution and API item mapping.

Pages without an episode JSON-LD node still advertise the episode through
the mobile app deep link (<meta property="al:ios:url">), whose query string
carries the diffusionId used by the items API.
"""

import re
from typing import Any, Optional, Sequence, Tuple, Union

from bs4 import BeautifulSoup

from .errors import NotFoundError
from .models import PodcastRecord, require_audio

DEEP_LINK_META_PROPERTY = 'al:ios:url'
DIFFUSION_ID_PATTERN = re.compile(r'diffusionId=([\w-]+)')

DEFAULT_TITLE = 'Untitled Podcast'
DEFAULT_PLAYLIST_BASE_URL = 'https://radiofrance.fr/'

PathKey = Union[str, int]

# (record field, path inside the API item, default when absent)
DIFFUSION_FIELD_MAP: Tuple[Tuple[str, Tuple[PathKey, ...], str], ...] = (
    ('title', ('title',), DEFAULT_TITLE),
    ('image_url', ('visual', 'webpSrc'), ''),
    ('audio_url', ('playerInfo', 'media', 'sources', 0, 'url'), ''),
    ('playlist_image_url', ('playerInfo', 'playerMetadata', 'cover', 'src'), ''),
    ('playlist_title', ('playerInfo', 'playerMetadata', 'firstLine'), ''),
)
PLAYLIST_PATH = ('playerInfo', 'playerMetadata', 'firstLinePath')


def extract_diffusion_id(deep_link: str) -> Optional[str]:
    """Extract the diffusion id from a deep-link URL."""
    if not deep_link:
        return None
    match = DIFFUSION_ID_PATTERN.search(deep_link)
    return match.group(1) if match else None


def resolve_diffusion_id(html: str) -> str:
    """Find the diffusion id advertised by the page's deep-link meta tag."""
    soup = BeautifulSoup(html, 'html.parser')
    meta = soup.find('meta', property=DEEP_LINK_META_PROPERTY)
    diffusion_id = extract_diffusion_id(meta.get('content') if meta else None)
    if not diffusion_id:
        raise NotFoundError('diffusion id not found')
    return diffusion_id


def dig(data: Any, path: Sequence[PathKey]) -> Any:
    """Follow a path of dict keys and list indexes, None when it breaks."""
    current = data
    for key in path:
        if isinstance(key, int):
            if not isinstance(current, list) or not -len(current) <= key < len(current):
                return None
        elif not isinstance(current, dict):
            return None
        try:
            current = current[key]
        except KeyError:
            return None
    return current


def _value_or_default(item: dict, path: Sequence[PathKey], default: str) -> str:
    value = dig(item, path)
    if not isinstance(value, str) or value == '':
        return default
    return value


def first_item(payload: Any) -> dict:
    """Return the first element of the API response's items collection."""
    items = payload.get('items') if isinstance(payload, dict) else None
    if not isinstance(items, list) or not items or not isinstance(items[0], dict):
        raise NotFoundError('podcast data not found')
    return items[0]


def map_diffusion_item(item: dict, playlist_base_url: str = DEFAULT_PLAYLIST_BASE_URL) -> PodcastRecord:
    """
    Map an API item to a PodcastRecord.

    Each field falls back to its own default from DIFFUSION_FIELD_MAP; only a
    missing audio URL fails the extraction.
    """
    fields = {
        name: _value_or_default(item, path, default)
        for name, path, default in DIFFUSION_FIELD_MAP
    }
    playlist_path = _value_or_default(item, PLAYLIST_PATH, '')
    fields['playlist_url'] = playlist_base_url + playlist_path.lstrip('/')
    return require_audio(PodcastRecord(**fields))
