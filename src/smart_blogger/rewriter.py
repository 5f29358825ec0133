# ABOUTME: Randomized synonym substitution applied to item content before publishing.
# ABOUTME: Whole-word, case-insensitive rules applied in table order.

import random
import re
from collections.abc import Mapping, Sequence

# Rules run in this order; later rules see the output of earlier ones.
DEFAULT_SYNONYMS: dict[str, list[str]] = {
    "is": ["is a", "is actually"],
    "are": ["are often", "are in fact"],
    "to": ["to", "in order to"],
    "for": ["for", "for the purpose of"],
    "guide": ["complete guide", "ultimate guide", "tutorial"],
    "best": ["top", "finest", "recommended"],
    "tips": ["tricks", "strategies", "advice"],
    "how to": ["how you can", "a guide on how to"],
    "easy": ["simple", "straightforward"],
    "fast": ["quick", "rapid"],
}


class ContentTransformer:
    """Rewrites text by replacing table phrases with a random candidate.

    Each occurrence draws its own candidate, so transforming the same input
    twice can give different results. Pass a seeded ``random.Random`` to make
    the output reproducible.
    """

    def __init__(
        self,
        table: Mapping[str, Sequence[str]] | None = None,
        rng: random.Random | None = None,
    ) -> None:
        table = DEFAULT_SYNONYMS if table is None else table
        self.rng = rng or random.Random()
        self._rules: list[tuple[re.Pattern[str], tuple[str, ...]]] = []

        for phrase, candidates in table.items():
            if not candidates:
                raise ValueError(f"No replacement candidates for {phrase!r}")
            pattern = re.compile(r"\b" + re.escape(phrase) + r"\b", re.IGNORECASE)
            self._rules.append((pattern, tuple(candidates)))

    def transform(self, content: str) -> str:
        """Apply every rule to the content, in table order."""
        for pattern, candidates in self._rules:
            content = pattern.sub(lambda _match, c=candidates: self.rng.choice(c), content)
        return content
