"""
Podcast Extractor Cloud Function

Fetches a Radio France episode page and returns the episode metadata the
player UI needs (title, artwork, audio URL, parent show).

Responsibilities:
- Fetch the episode page
- Extract the episode from JSON-LD structured data
- Fall back to the diffusion id + items API when the page has no episode node
- Map every failure to a JSON error with the right HTTP status

Does NOT:
- Store extracted records
- Cache pages or API responses
- Retry failed requests (the caller re-initiates)
"""

import functions_framework
import requests
import json
import os
import sys
import traceback

# Add shared module to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))
from podcast_shared.errors import ExtractionError, FetchFailure, MissingInputError
from podcast_shared.models import PodcastRecord
from podcast_shared.structured_data import extract_structured_data
from podcast_shared.diffusion import (
    DEFAULT_PLAYLIST_BASE_URL,
    first_item,
    map_diffusion_item,
    resolve_diffusion_id,
)

# Configuration
REQUEST_TIMEOUT = float(os.environ.get('REQUEST_TIMEOUT', '5'))
DIFFUSION_API_URL = os.environ.get('DIFFUSION_API_URL', 'https://www.radiofrance.fr/api/v2.1/items')
DIFFUSION_API_ID_PARAM = os.environ.get('DIFFUSION_API_ID_PARAM', 'ids')
PLAYLIST_BASE_URL = os.environ.get('PLAYLIST_BASE_URL', DEFAULT_PLAYLIST_BASE_URL)
USER_AGENT = 'Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36'

UNEXPECTED_ERROR_MESSAGE = 'Failed to fetch podcast info'


def _get(url: str, params: dict = None, accept: str = 'text/html') -> requests.Response:
    """Single GET with the shared timeout. Raises FetchFailure."""
    try:
        response = requests.get(
            url,
            params=params,
            headers={'User-Agent': USER_AGENT, 'Accept': accept},
            timeout=REQUEST_TIMEOUT,
            allow_redirects=True
        )
        response.raise_for_status()
        return response
    except requests.exceptions.Timeout:
        raise FetchFailure('Request timed out')
    except requests.exceptions.HTTPError as e:
        raise FetchFailure(f'HTTP error: {e.response.status_code}', e.response.status_code)
    except requests.exceptions.RequestException as e:
        raise FetchFailure(f'Request failed: {e}')


def fetch_webpage(url: str) -> str:
    """Fetch the episode page HTML."""
    print(f"Fetching episode page: {url}")
    response = _get(url, accept='text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8')
    return decode_html(response)


def decode_html(response: requests.Response) -> str:
    """Decode page bytes, preferring UTF-8 when the server sends no charset."""
    if 'charset' in response.headers.get('Content-Type', '').lower():
        return response.text
    try:
        return response.content.decode('utf-8')
    except UnicodeDecodeError:
        response.encoding = response.apparent_encoding
        return response.text


def fetch_diffusion_item(diffusion_id: str) -> dict:
    """Fetch the first item the API returns for a diffusion id."""
    print(f"Fetching diffusion {diffusion_id} from {DIFFUSION_API_URL}")
    response = _get(
        DIFFUSION_API_URL,
        params={DIFFUSION_API_ID_PARAM: diffusion_id},
        accept='application/json'
    )
    try:
        payload = response.json()
    except ValueError:
        raise FetchFailure('API returned invalid JSON', response.status_code)
    return first_item(payload)


def extract_from_diffusion_api(html: str) -> PodcastRecord:
    """Resolve the diffusion id and map the API item."""
    diffusion_id = resolve_diffusion_id(html)
    item = fetch_diffusion_item(diffusion_id)
    return map_diffusion_item(item, PLAYLIST_BASE_URL)


# Tried in order; the first record wins
EXTRACTION_STRATEGIES = [
    ('structured_data', extract_structured_data),
    ('diffusion_api', extract_from_diffusion_api),
]


def extract_podcast(url: str) -> PodcastRecord:
    """
    Fetch an episode page and extract its podcast record.

    Raises the last strategy's ExtractionError when every strategy fails.
    """
    if not url:
        raise MissingInputError()

    html = fetch_webpage(url)

    last_error = None
    for name, strategy in EXTRACTION_STRATEGIES:
        try:
            record = strategy(html)
            print(f"Extracted '{record.title}' with {name}")
            return record
        except ExtractionError as e:
            print(f"Strategy {name} failed: {e.message}")
            last_error = e

    raise last_error


def error_response(error: ExtractionError, headers: dict) -> tuple:
    return (json.dumps({'error': error.public_message}), error.http_status, headers)


@functions_framework.http
def podcast_info(request):
    """
    Main Cloud Function entry point.

    Expected query string:
        ?url=https://www.radiofrance.fr/franceculture/podcasts/...
    """
    # Handle CORS
    if request.method == 'OPTIONS':
        headers = {
            'Access-Control-Allow-Origin': '*',
            'Access-Control-Allow-Methods': 'GET',
            'Access-Control-Allow-Headers': 'Content-Type',
            'Access-Control-Max-Age': '3600'
        }
        return ('', 204, headers)

    headers = {
        'Access-Control-Allow-Origin': '*',
        'Content-Type': 'application/json'
    }

    try:
        record = extract_podcast(request.args.get('url'))
        return (json.dumps(record.to_dict()), 200, headers)

    except ExtractionError as e:
        return error_response(e, headers)

    except Exception as e:
        print(f"Unexpected error: {e}")
        print(f"Full traceback: {traceback.format_exc()}")
        return (json.dumps({'error': UNEXPECTED_ERROR_MESSAGE}), 500, headers)
