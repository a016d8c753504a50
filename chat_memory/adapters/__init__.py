from .evict_oldest import OldestFirstEviction
from .tokens_approx import ApproxTokenCounter
from .tokens_mock import WhitespaceTokenCounter

__all__ = [
    "OldestFirstEviction",
    "ApproxTokenCounter",
    "WhitespaceTokenCounter",
]
