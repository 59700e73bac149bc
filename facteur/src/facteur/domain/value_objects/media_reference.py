"""
MediaReference value object - pointer to an already uploaded media file.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class MediaReference:
    """
    Reference to media attached to a message.

    The file itself lives in external storage; only its URL travels here.

    Attributes:
        url: Location of the media file
        media_type: Category ("image", "video", "audio", ...) or None
        thumbnail_url: Optional preview location
    """

    url: str
    media_type: Optional[str] = None
    thumbnail_url: Optional[str] = None

    def __post_init__(self):
        if not self.url or not self.url.strip():
            raise ValueError("Media URL cannot be empty")

        # "image/png" is stored as its category, like the upload route did
        if self.media_type:
            category = self.media_type.split("/", 1)[0].strip().lower()
            object.__setattr__(self, "media_type", category or None)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mediaUrl": self.url,
            "mediaType": self.media_type,
            "thumbnailUrl": self.thumbnail_url,
        }
