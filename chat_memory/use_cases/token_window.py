from __future__ import annotations

import json
import logging
from threading import Lock
from typing import List, Optional

from chat_memory.adapters.evict_oldest import OldestFirstEviction
from chat_memory.domain.models import ChatMessage
from chat_memory.ports.eviction import EvictionPolicy
from chat_memory.ports.tokens import TokenCounter

log = logging.getLogger("chat_memory")

DEFAULT_MEMORY_ID = "default"


class TokenWindowChatMemory:
    """
    Окно сообщений, ограниченное по токенам.

    - после каждого add считаем counter.count_messages по всему окну
      (overhead запроса входит ровно один раз)
    - пока лимит превышен, вытесняем то, что выберет policy (по умолчанию самое старое не-system)
    - system хранится максимум один; повторный add того же system — no-op,
      другой system удаляет старый и встаёт в конец
    - новое сообщение, которое одно превышает лимит, в своём же add не вытесняется;
      если вытеснять больше нечего, окно остаётся сверх лимита (warning в лог)
    """

    def __init__(
        self,
        max_tokens: int,
        counter: TokenCounter,
        *,
        memory_id: str = DEFAULT_MEMORY_ID,
        eviction: Optional[EvictionPolicy] = None,
    ):
        if isinstance(max_tokens, bool) or not isinstance(max_tokens, int) or max_tokens <= 0:
            raise ValueError(f"max_tokens must be a positive int, got {max_tokens!r}")
        if counter is None or not isinstance(counter, TokenCounter):
            raise ValueError("counter must implement TokenCounter")
        if not isinstance(memory_id, str):
            raise ValueError(f"memory_id must be a str, got {memory_id!r}")

        self._id = memory_id
        self._max_tokens = max_tokens
        self._counter = counter
        self._eviction: EvictionPolicy = eviction if eviction is not None else OldestFirstEviction()
        self._messages: List[ChatMessage] = []
        self._lock = Lock()

    @classmethod
    def with_max_tokens(
        cls,
        max_tokens: int,
        counter: TokenCounter,
        *,
        memory_id: str = DEFAULT_MEMORY_ID,
    ) -> "TokenWindowChatMemory":
        return cls(max_tokens, counter, memory_id=memory_id)

    @property
    def id(self) -> str:
        return self._id

    @property
    def max_tokens(self) -> int:
        return self._max_tokens

    def add(self, message: ChatMessage) -> None:
        with self._lock:
            if message.is_system:
                current = self._system_index()
                if current is not None:
                    if self._messages[current] == message:
                        return
                    old = self._messages.pop(current)
                    log.debug(json.dumps(
                        {"event": "system_replaced", "memory_id": self._id, "old_index": current,
                         "old_chars": len(old.content or "")},
                        ensure_ascii=False,
                    ))

            self._messages.append(message)
            self._ensure_capacity()

    def messages(self) -> List[ChatMessage]:
        with self._lock:
            return list(self._messages)

    def clear(self) -> None:
        with self._lock:
            self._messages.clear()

    def token_count(self) -> int:
        with self._lock:
            return self._counter.count_messages(self._messages)

    def __len__(self) -> int:
        with self._lock:
            return len(self._messages)

    def __repr__(self) -> str:
        return f"TokenWindowChatMemory(id={self._id!r}, max_tokens={self._max_tokens}, size={len(self._messages)})"

    def _system_index(self) -> Optional[int]:
        for i, m in enumerate(self._messages):
            if m.is_system:
                return i
        return None

    def _ensure_capacity(self) -> None:
        # вызывается под self._lock
        tokens = self._counter.count_messages(self._messages)
        if tokens <= self._max_tokens:
            return

        # новое сообщение, которое само по себе не влезает в лимит, не вытесняем
        protect_tail = self._counter.count_messages(self._messages[-1:]) > self._max_tokens

        while tokens > self._max_tokens:
            candidates = self._messages[:-1] if protect_tail else self._messages
            idx = self._eviction.select(candidates)
            if idx is None:
                log.warning(json.dumps(
                    {"event": "over_budget", "memory_id": self._id, "tokens": tokens,
                     "max_tokens": self._max_tokens, "messages": len(self._messages)},
                    ensure_ascii=False,
                ))
                return

            evicted = self._messages.pop(idx)
            log.debug(json.dumps(
                {"event": "evicted", "memory_id": self._id, "index": idx, "role": evicted.role},
                ensure_ascii=False,
            ))
            tokens = self._counter.count_messages(self._messages)
