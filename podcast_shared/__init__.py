"""Shared extraction logic for the Podcast Extractor."""

from .errors import (
    ExtractionError,
    MissingInputError,
    FetchFailure,
    NotFoundError,
    ShapeMismatchError,
    ParseFailure,
)

from .models import PodcastRecord, require_audio

from .structured_data import (
    EPISODE_TYPE,
    find_episode_node,
    episode_node_to_record,
    extract_structured_data,
)

from .diffusion import (
    DEEP_LINK_META_PROPERTY,
    DEFAULT_TITLE,
    DIFFUSION_FIELD_MAP,
    extract_diffusion_id,
    resolve_diffusion_id,
    first_item,
    map_diffusion_item,
)

__all__ = [
    # Errors
    'ExtractionError',
    'MissingInputError',
    'FetchFailure',
    'NotFoundError',
    'ShapeMismatchError',
    'ParseFailure',
    # Model
    'PodcastRecord',
    'require_audio',
    # Structured data (JSON-LD)
    'EPISODE_TYPE',
    'find_episode_node',
    'episode_node_to_record',
    'extract_structured_data',
    # Diffusion id + items API
    'DEEP_LINK_META_PROPERTY',
    'DEFAULT_TITLE',
    'DIFFUSION_FIELD_MAP',
    'extract_diffusion_id',
    'resolve_diffusion_id',
    'first_item',
    'map_diffusion_item',
]
