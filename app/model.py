"""Data models for the cat feed screen."""
from typing import Optional, Tuple
from dataclasses import dataclass, field


@dataclass(frozen=True)
class ImageItem:
    """Represents a cat image returned by The Cat API."""
    url: str
    id: Optional[str] = None


# Shown until the screen is activated; never used as a fallback on failure
PLACEHOLDER_IMAGES: Tuple[ImageItem, ...] = (
    ImageItem(url="https://cdn2.thecatapi.com/images/8cd.jpg"),
    ImageItem(url="https://cdn2.thecatapi.com/images/8ob.jpg"),
    ImageItem(url="https://cdn2.thecatapi.com/images/a0v.jpg"),
    ImageItem(url="https://cdn2.thecatapi.com/images/akf.jpg"),
)


@dataclass(frozen=True)
class FeedState:
    """Everything the screen renders."""
    items: Tuple[ImageItem, ...] = field(default=PLACEHOLDER_IMAGES)
    pending_count_text: str = ""
    error_message: str = ""
