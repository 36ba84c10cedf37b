"""Impulse category classification policy"""

from typing import Iterable, Protocol, Tuple

# English names plus the Portuguese defaults the tracker ships with
DEFAULT_IMPULSE_KEYWORDS: Tuple[str, ...] = (
    "leisure",
    "entertainment",
    "miscellaneous",
    "impulse",
    "shopping",
    "lazer",
    "entretenimento",
    "outros",
    "impulso",
    "compras",
)


class ImpulsePolicy(Protocol):
    """Decides whether an expense category counts as discretionary spending"""

    def is_impulse(self, category: str) -> bool: ...


class KeywordImpulsePolicy:
    """Flags a category when its name contains any keyword (case-insensitive)"""

    def __init__(self, keywords: Iterable[str] = DEFAULT_IMPULSE_KEYWORDS):
        self.keywords = tuple(k.lower() for k in keywords)

    def is_impulse(self, category: str) -> bool:
        lower = category.lower()
        return any(keyword in lower for keyword in self.keywords)


default_impulse_policy = KeywordImpulsePolicy()
