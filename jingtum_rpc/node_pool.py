"""
Node pool — the fixed set of JSON-RPC endpoints.

Write traffic picks a node uniformly at random to spread load. Read
traffic walks the full list in order so the first generally-available
node answers. Selection is memoryless: no health state is tracked, a
node that just failed can be picked again on the next call.
"""

from __future__ import annotations

import random
from collections.abc import Iterable, Iterator


class NodePool:
    """Immutable, non-empty list of RPC base URLs.

    Args:
        urls: Endpoint URLs in preference order.
        rng: Random source for ``random_url``. Inject a seeded
            ``random.Random`` for deterministic tests.

    Raises:
        ValueError: If ``urls`` is empty or contains a blank entry.
    """

    def __init__(self, urls: Iterable[str], *, rng: random.Random | None = None) -> None:
        cleaned: list[str] = []
        for url in urls:
            if not isinstance(url, str) or not url.strip():
                raise ValueError(f"node url must be a non-empty string, got: {url!r}")
            cleaned.append(url.strip().rstrip("/"))
        if not cleaned:
            raise ValueError("node pool needs at least one url")
        self._urls = tuple(cleaned)
        self._rng = rng or random.Random()

    def all_urls(self) -> tuple[str, ...]:
        """Every endpoint, in construction order."""
        return self._urls

    def random_url(self) -> str:
        """One endpoint chosen uniformly at random."""
        return self._rng.choice(self._urls)

    def __len__(self) -> int:
        return len(self._urls)

    def __iter__(self) -> Iterator[str]:
        return iter(self._urls)

    def __repr__(self) -> str:
        return f"NodePool({list(self._urls)!r})"
