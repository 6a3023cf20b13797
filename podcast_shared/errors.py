"""
Failure taxonomy for podcast extraction.

Every failure raised by the extraction pipeline derives from ExtractionError
and knows which HTTP status the Cloud Function should answer with.

Error Classification:
====================

- MissingInputError   -> 400 (no url parameter)
- FetchFailure        -> upstream status when known, 502 otherwise
- NotFoundError       -> 404 (no episode node, no diffusion id, no item, no audio)
- ShapeMismatchError  -> 404 (JSON-LD episode node missing nested fields)
- ParseFailure        -> never surfaced, the offending JSON-LD block is skipped
"""

from typing import Optional

NOT_FOUND_MESSAGE = 'podcast data not found'


class ExtractionError(Exception):
    """Base class for every extraction failure."""

    http_status = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def public_message(self) -> str:
        """Message safe to return to the caller."""
        return self.message


class MissingInputError(ExtractionError):
    http_status = 400

    def __init__(self, message: str = 'URL parameter is required'):
        super().__init__(message)


class FetchFailure(ExtractionError):
    """Transport failure or non-2xx status from the page or the API."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code

    @property
    def http_status(self) -> int:
        # Mirror upstream client/server errors, transport failures are a bad gateway
        if self.status_code and self.status_code >= 400:
            return self.status_code
        return 502

    @property
    def public_message(self) -> str:
        if self.status_code and self.status_code >= 400:
            return f'upstream returned HTTP {self.status_code}'
        return 'upstream request failed'


class NotFoundError(ExtractionError):
    http_status = 404

    def __init__(self, message: str = NOT_FOUND_MESSAGE):
        super().__init__(message)


class ShapeMismatchError(ExtractionError):
    """Episode node found but a required nested field is missing."""

    http_status = 404

    def __init__(self, path: str):
        super().__init__(f'episode node has no {path}')
        self.path = path

    @property
    def public_message(self) -> str:
        return NOT_FOUND_MESSAGE


class ParseFailure(ExtractionError):
    """A structured-data block is not valid JSON."""
