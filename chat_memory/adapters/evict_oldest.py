from __future__ import annotations

from typing import Optional, Sequence

from chat_memory.domain.models import ChatMessage
from chat_memory.ports.eviction import EvictionPolicy


class OldestFirstEviction(EvictionPolicy):
    """
    - system никогда не вытесняется
    - остальные уходят в порядке добавления (самое старое первым)
    """

    def select(self, messages: Sequence[ChatMessage]) -> Optional[int]:
        for i, m in enumerate(messages):
            if not m.is_system:
                return i
        return None
