"""
Shared pytest fixtures for Podcast Extractor tests.
"""

import pytest
import sys
import json
import importlib.util
from pathlib import Path

# Project root for finding Cloud Function modules
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))


def _load_module_from_path(module_name: str, file_path: Path):
    """Load a module from a specific file path."""
    spec = importlib.util.spec_from_file_location(module_name, file_path)
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    spec.loader.exec_module(module)
    return module


# Load Cloud Function module with a unique name at module load time
_podcast_extractor_module = _load_module_from_path(
    'podcast_extractor_main',
    PROJECT_ROOT / 'podcast-extractor' / 'main.py'
)

EPISODE_URL = "https://www.radiofrance.fr/franceculture/podcasts/les-chemins-de-la-philosophie/episode-1"
API_URL = _podcast_extractor_module.DIFFUSION_API_URL


def ld_json_page(*blocks) -> str:
    """Build an HTML page with one JSON-LD script per block (str blocks are inserted raw)."""
    scripts = []
    for block in blocks:
        text = block if isinstance(block, str) else json.dumps(block)
        scripts.append(f'<script type="application/ld+json">{text}</script>')
    return f"""
    <!DOCTYPE html>
    <html>
    <head>
        <title>Episode | France Culture</title>
        {''.join(scripts)}
    </head>
    <body><h1>Episode</h1></body>
    </html>
    """


def deep_link_page(content: str) -> str:
    """Build an HTML page whose only episode hint is the app deep link."""
    return f"""
    <!DOCTYPE html>
    <html>
    <head>
        <title>Episode | France Inter</title>
        <meta property="og:title" content="Episode">
        <meta property="al:ios:url" content="{content}">
    </head>
    <body><h1>Episode</h1></body>
    </html>
    """


# ============================================================================
# Sample data
# ============================================================================

@pytest.fixture
def episode_node():
    """A well-formed RadioEpisode JSON-LD node."""
    return {
        "@type": "RadioEpisode",
        "name": "Descartes et le doute",
        "image": {"@type": "ImageObject", "url": "https://www.radiofrance.fr/cover.jpg"},
        "mainEntity": {"@type": "AudioObject", "contentUrl": "https://media.radiofrance.fr/descartes.mp3"},
    }


@pytest.fixture
def structured_data_html(episode_node):
    """Episode page carrying the episode inside a @graph wrapper."""
    return ld_json_page({
        "@context": "https://schema.org",
        "@graph": [
            {"@type": "BreadcrumbList", "itemListElement": []},
            episode_node,
        ],
    })


@pytest.fixture
def diffusion_html():
    """Episode page without JSON-LD but with a deep link."""
    return deep_link_page("radiofrance://diffusion?diffusionId=abc-123&station=franceinter")


@pytest.fixture
def plain_html():
    """Page with neither JSON-LD nor a deep link."""
    return "<html><head><title>Not a podcast</title></head><body></body></html>"


@pytest.fixture
def diffusion_item():
    """Complete item from the diffusion API."""
    return {
        "title": "Le journal de 8h",
        "visual": {"webpSrc": "https://www.radiofrance.fr/visual.webp"},
        "playerInfo": {
            "media": {"sources": [{"url": "https://media.radiofrance.fr/journal.mp3"}]},
            "playerMetadata": {
                "cover": {"src": "https://www.radiofrance.fr/show.webp"},
                "firstLine": "Le journal",
                "firstLinePath": "franceinter/podcasts/le-journal",
            },
        },
    }


# ============================================================================
# Cloud Function Fixtures
# ============================================================================

@pytest.fixture
def extractor_module():
    """Returns the podcast-extractor module itself."""
    return _podcast_extractor_module


@pytest.fixture
def fetch_webpage():
    """Returns fetch_webpage function from podcast-extractor."""
    return _podcast_extractor_module.fetch_webpage


@pytest.fixture
def fetch_diffusion_item():
    """Returns fetch_diffusion_item function from podcast-extractor."""
    return _podcast_extractor_module.fetch_diffusion_item


@pytest.fixture
def extract_podcast():
    """Returns extract_podcast function from podcast-extractor."""
    return _podcast_extractor_module.extract_podcast


@pytest.fixture
def podcast_info():
    """Returns main entry point from podcast-extractor."""
    return _podcast_extractor_module.podcast_info


@pytest.fixture
def mock_flask_request():
    """Factory for creating mock Flask request objects."""
    class MockRequest:
        def __init__(self, args=None, method='GET'):
            self.args = args or {}
            self.method = method
            self.data = b''

    return MockRequest


@pytest.fixture
def make_ld_json_page():
    """Returns the JSON-LD page builder."""
    return ld_json_page


@pytest.fixture
def make_deep_link_page():
    """Returns the deep-link page builder."""
    return deep_link_page


@pytest.fixture
def episode_url():
    return EPISODE_URL


@pytest.fixture
def api_url():
    return API_URL
