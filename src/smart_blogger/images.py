# ABOUTME: Picks the image to feature for a published feed item.
# ABOUTME: Prefers an image enclosure, falls back to the first inline <img> tag.

import re

from smart_blogger.models import FeedItem

IMG_SRC_PATTERN = re.compile(r"""<img\b[^>]*?\ssrc\s*=\s*['"]([^'"]+)['"]""", re.IGNORECASE)


def resolve_image_url(item: FeedItem) -> str | None:
    """Resolve the best image URL for a feed item.

    Args:
        item: The feed item.

    Returns:
        The enclosure link when the enclosure is an image, else the src of the
        first <img> in the content, else None.
    """
    enclosure = item.enclosure
    if enclosure and enclosure.link and "image" in enclosure.mime_type:
        return enclosure.link

    match = IMG_SRC_PATTERN.search(item.content or "")
    if match:
        return match.group(1)
    return None
