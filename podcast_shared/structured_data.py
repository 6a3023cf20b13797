"""
JSON-LD extraction for podcast episode pages.

Episode pages embed schema.org data in <script type="application/ld+json">
blocks. A block holds either a single node or a "@graph" wrapper around a
list of nodes; the first node typed RadioEpisode describes the episode.
"""

import json
from typing import Any, Iterable, List, Optional

from bs4 import BeautifulSoup

from .errors import NotFoundError, ParseFailure, ShapeMismatchError
from .models import PodcastRecord, require_audio

EPISODE_TYPE = 'RadioEpisode'
LD_JSON_SELECTOR = 'script[type="application/ld+json"]'


def parse_ld_json_block(text: str) -> Any:
    """Parse one structured-data block, raising ParseFailure on bad JSON."""
    try:
        return json.loads(text)
    except (TypeError, ValueError) as e:
        raise ParseFailure(f'invalid JSON-LD block: {e}') from e


def iter_ld_json_trees(soup: BeautifulSoup) -> Iterable[Any]:
    """Yield parsed JSON-LD trees in document order, skipping broken blocks."""
    for script in soup.select(LD_JSON_SELECTOR):
        try:
            yield parse_ld_json_block(script.get_text())
        except ParseFailure as e:
            print(f"Skipping structured data block: {e.message}")


def graph_entries(tree: Any) -> List[Any]:
    """Return the nodes of a JSON-LD tree as a list."""
    if isinstance(tree, dict):
        graph = tree.get('@graph')
        if isinstance(graph, list):
            return graph
        return [tree]
    if isinstance(tree, list):
        return tree
    return []


def is_episode_node(node: Any) -> bool:
    if not isinstance(node, dict):
        return False
    node_type = node.get('@type')
    if isinstance(node_type, list):
        return EPISODE_TYPE in node_type
    return node_type == EPISODE_TYPE


def find_episode_node(trees: Iterable[Any]) -> Optional[dict]:
    """Return the first episode node across all trees, or None."""
    for tree in trees:
        for node in graph_entries(tree):
            if is_episode_node(node):
                return node
    return None


def _required(node: dict, *path: str) -> Any:
    current = node
    for key in path:
        if not isinstance(current, dict) or key not in current:
            raise ShapeMismatchError('.'.join(path))
        current = current[key]
    return current


def episode_node_to_record(node: dict) -> PodcastRecord:
    """Map a RadioEpisode node; missing nested fields are fatal."""
    title = _required(node, 'name')
    if not isinstance(title, str):
        raise ShapeMismatchError('name')
    image_url = _required(node, 'image', 'url')
    audio_url = _required(node, 'mainEntity', 'contentUrl')
    record = PodcastRecord(
        title=title,
        image_url=image_url if isinstance(image_url, str) else '',
        audio_url=audio_url if isinstance(audio_url, str) else '',
    )
    return require_audio(record)


def extract_structured_data(html: str) -> PodcastRecord:
    """Extract a podcast record from the page's JSON-LD blocks."""
    soup = BeautifulSoup(html, 'html.parser')
    node = find_episode_node(iter_ld_json_trees(soup))
    if node is None:
        raise NotFoundError('podcast data not found')
    return episode_node_to_record(node)
