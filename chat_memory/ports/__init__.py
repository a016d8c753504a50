from .eviction import EvictionPolicy
from .memory import ChatMemory
from .tokens import TokenCounter

__all__ = [
    "ChatMemory",
    "EvictionPolicy",
    "TokenCounter",
]
