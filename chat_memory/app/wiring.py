from __future__ import annotations

from threading import Lock
from typing import Dict, Optional, Tuple

from chat_memory.app.settings import AppSettings, TokenizerSettings
from chat_memory.domain.models import system_message
from chat_memory.ports.tokens import TokenCounter
from chat_memory.use_cases.token_window import TokenWindowChatMemory


# -----------------------
# Internal shared cache
# -----------------------
_cache_lock = Lock()
_counters: Dict[Tuple[Optional[str], ...], TokenCounter] = {}


def _tokenizer_key(t: TokenizerSettings) -> Tuple[Optional[str], ...]:
    return (t.backend, t.tiktoken_model, t.tiktoken_encoding)


def _build_counter(t: TokenizerSettings) -> TokenCounter:
    if t.backend == "tiktoken":
        from chat_memory.adapters.tokens_tiktoken import TiktokenTokenCounter
        return TiktokenTokenCounter(encoding_name=t.tiktoken_encoding, model=t.tiktoken_model)
    if t.backend == "mock":
        from chat_memory.adapters.tokens_mock import WhitespaceTokenCounter
        return WhitespaceTokenCounter()

    from chat_memory.adapters.tokens_approx import ApproxTokenCounter
    return ApproxTokenCounter()


def build_counter(settings: AppSettings) -> TokenCounter:
    """Счётчик токенов переиспользуется: загрузка энкодинга tiktoken дорогая."""
    key = _tokenizer_key(settings.tokenizer)
    with _cache_lock:
        counter = _counters.get(key)
        if counter is None:
            counter = _build_counter(settings.tokenizer)
            _counters[key] = counter
    return counter


def build_memory(settings: AppSettings, *, memory_id: Optional[str] = None) -> TokenWindowChatMemory:
    counter = build_counter(settings)
    memory = TokenWindowChatMemory(
        settings.memory.budget.max_input_tokens,
        counter,
        memory_id=memory_id if memory_id is not None else settings.memory.memory_id,
    )
    if settings.memory.system_prompt:
        memory.add(system_message(settings.memory.system_prompt))
    return memory
