"""Client for The Cat API image search."""
import logging
from typing import List, Optional
import requests

from model import ImageItem

logger = logging.getLogger(__name__)


class CatApiError(Exception):
    """Raised when cat images cannot be fetched or parsed."""


class CatApiClient:
    """Client for fetching random cat images."""

    def __init__(self, api_key: Optional[str] = None,
                 base_url: str = "https://api.thecatapi.com/v1",
                 timeout: float = 10):
        """Initialize Cat API client.

        Args:
            api_key: The Cat API key; requests are anonymous without one
            base_url: Base URL for The Cat API
            timeout: Request timeout in seconds
        """
        self.api_key = api_key
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = self._create_session()

    def _create_session(self) -> requests.Session:
        """Create HTTP session with authentication."""
        session = requests.Session()
        session.headers.update({'Accept': 'application/json'})
        if self.api_key:
            session.headers.update({'x-api-key': self.api_key})
        return session

    def search_images(self, limit: int) -> List[ImageItem]:
        """Fetch random cat images.

        Args:
            limit: Number of images to request

        Returns:
            List of ImageItem objects, as many as the API returned

        Raises:
            CatApiError: If the request fails or the body is malformed
        """
        url = f"{self.base_url}/images/search"
        logger.info(f"Fetching {limit} cat images")

        try:
            response = self.session.get(url, params={'limit': limit}, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error(f"Failed to fetch cat images: {e}")
            raise CatApiError(f"Request to {url} failed: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"Invalid JSON from cat image search: {e}")
            raise CatApiError("Response body is not valid JSON") from e

        return self._extract_images(data)

    def _extract_images(self, data) -> List[ImageItem]:
        """Extract image records from search response.

        Args:
            data: Decoded API response

        Returns:
            List of ImageItem objects
        """
        if not isinstance(data, list):
            raise CatApiError(f"Expected a list of images, got {type(data).__name__}")

        images = []
        for record in data:
            if not isinstance(record, dict):
                raise CatApiError(f"Malformed image record: {record!r}")

            url = record.get('url')
            if not isinstance(url, str) or not url:
                raise CatApiError(f"Image record without url: {record!r}")

            image_id = record.get('id')
            images.append(ImageItem(
                url=url,
                id=str(image_id) if image_id is not None else None
            ))

        return images

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.session.close()
