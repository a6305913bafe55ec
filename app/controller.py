"""Controller owning the cat feed screen state."""
import dataclasses
import logging
import threading
from typing import Any, Dict, Optional, Sequence

from cat_client import CatApiClient, CatApiError
from model import FeedState, ImageItem
from util import parse_count, image_key, format_title

logger = logging.getLogger(__name__)

DEFAULT_COUNT = 5
MIN_COUNT = 1
MAX_COUNT = 10

INVALID_COUNT_MESSAGE = "Please enter a valid number of cats"
MIN_EXCEEDED_MESSAGE = f"Minimum number of cats is {MIN_COUNT}"
MAX_EXCEEDED_MESSAGE = f"Maximum number of cats is {MAX_COUNT}"
FETCH_FAILED_MESSAGE = "Failed to fetch cats"


class CountValidationError(ValueError):
    """Raised when the requested number of cats is not acceptable."""


def validate_count(text: Optional[str]) -> int:
    """Validate the raw count text.

    Args:
        text: Raw text from the count field

    Returns:
        Count within [MIN_COUNT, MAX_COUNT]

    Raises:
        CountValidationError: If the text is not a number or out of range
    """
    count = parse_count(text)
    if count is None:
        raise CountValidationError(INVALID_COUNT_MESSAGE)
    if count > MAX_COUNT:
        raise CountValidationError(MAX_EXCEEDED_MESSAGE)
    if count < MIN_COUNT:
        raise CountValidationError(MIN_EXCEEDED_MESSAGE)
    return count


# State transitions. Each returns a new FeedState.

def pending_text_changed(state: FeedState, text: str) -> FeedState:
    return dataclasses.replace(state, pending_count_text=text)


def submission_started(state: FeedState) -> FeedState:
    return dataclasses.replace(state, error_message="")


def submission_rejected(state: FeedState, message: str) -> FeedState:
    return dataclasses.replace(state, error_message=message)


def images_received(state: FeedState, images: Sequence[ImageItem], count: int) -> FeedState:
    """Replace the displayed images, truncated to the requested count."""
    return dataclasses.replace(state, items=tuple(images[:count]))


def fetch_failed(state: FeedState) -> FeedState:
    return dataclasses.replace(state, error_message=FETCH_FAILED_MESSAGE)


class CatFeedController:
    """Drives the cat feed screen.

    State is only replaced through the transitions above. Every fetch is
    tagged with a generation number; a response is applied only if no newer
    fetch has started and the screen has not been closed.
    """

    def __init__(self, client: CatApiClient, state: Optional[FeedState] = None):
        """Initialize controller.

        Args:
            client: Cat API client used for fetches
            state: Initial state, placeholder images by default
        """
        self.client = client
        self._state = state if state is not None else FeedState()
        self._lock = threading.Lock()
        self._generation = 0
        self._activated = False
        self._closed = False

    @property
    def state(self) -> FeedState:
        with self._lock:
            return self._state

    def activate(self) -> None:
        """Load the default number of cats on first activation."""
        with self._lock:
            if self._activated or self._closed:
                return
            self._activated = True
        self.fetch(DEFAULT_COUNT)

    def set_pending_text(self, text: str) -> None:
        with self._lock:
            self._state = pending_text_changed(self._state, text)

    def submit(self, count_text: Optional[str] = None) -> None:
        """Validate the requested count and fetch that many cats.

        Args:
            count_text: Raw count text; the pending text is used if omitted
        """
        with self._lock:
            if count_text is None:
                count_text = self._state.pending_count_text
            self._state = submission_started(self._state)
            # Earlier fetches still in flight no longer apply
            self._generation += 1

        try:
            count = validate_count(count_text)
        except CountValidationError as e:
            logger.warning(f"Rejected count {count_text!r}: {e}")
            with self._lock:
                self._state = submission_rejected(self._state, str(e))
            return

        self.fetch(count)

    def fetch(self, count: int) -> None:
        """Fetch cats and replace the displayed images.

        Args:
            count: Number of cats to request
        """
        with self._lock:
            if self._closed:
                logger.info("Screen closed, skipping fetch")
                return
            self._generation += 1
            generation = self._generation

        try:
            images = self.client.search_images(count)
        except CatApiError as e:
            logger.error(f"Failed to fetch {count} cats: {e}")
            with self._lock:
                if self._is_current(generation):
                    self._state = fetch_failed(self._state)
            return

        with self._lock:
            if not self._is_current(generation):
                logger.info(f"Discarding stale response for fetch #{generation}")
                return
            self._state = images_received(self._state, images, count)
            logger.info(f"Displaying {len(self._state.items)} cats")

    def _is_current(self, generation: int) -> bool:
        return not self._closed and generation == self._generation

    def close(self) -> None:
        """Tear down the screen; late responses are ignored."""
        with self._lock:
            self._closed = True
            self._generation += 1
        self.client.close()

    def view(self) -> Dict[str, Any]:
        """Build the render-ready view of the current state.

        Returns:
            Dict with title, items, pendingCountText and errorMessage
        """
        state = self.state
        return {
            'title': format_title(len(state.items)),
            'items': [
                {'url': item.url, 'id': item.id, 'key': image_key(item, index)}
                for index, item in enumerate(state.items)
            ],
            'pendingCountText': state.pending_count_text,
            'errorMessage': state.error_message,
        }
