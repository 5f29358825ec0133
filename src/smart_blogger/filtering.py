# ABOUTME: Keyword filter deciding whether a feed item is worth publishing.
# ABOUTME: Case-insensitive substring match over the title and tag-stripped content.

from bs4 import BeautifulSoup


def parse_keywords(text: str) -> tuple[str, ...]:
    """Parse comma-separated keyword text into lowercase, trimmed keywords.

    Empty entries (e.g. from a trailing comma) are dropped.
    """
    keywords = (part.strip() for part in text.lower().split(","))
    return tuple(keyword for keyword in keywords if keyword)


def strip_tags(html: str) -> str:
    """Return the text of an HTML fragment without any markup."""
    if not html:
        return ""
    return BeautifulSoup(html, "html.parser").get_text()


class KeywordFilter:
    """Matches items against an ordered keyword set."""

    def __init__(self, keywords: tuple[str, ...] | list[str]) -> None:
        self.keywords = tuple(k.strip().lower() for k in keywords if k.strip())

    def matches(self, title: str, content: str) -> bool:
        """Check whether any keyword occurs in the title or the stripped content.

        Matching is by substring, so "cat" also matches "category".

        Args:
            title: Item title.
            content: Item content as raw HTML.

        Returns:
            True on the first keyword found.
        """
        title_text = title.lower()
        content_text: str | None = None

        for keyword in self.keywords:
            if keyword in title_text:
                return True
            if content_text is None:
                content_text = strip_tags(content).lower()
            if keyword in content_text:
                return True
        return False
