from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

from chat_memory.domain.models import ChatMessage
from chat_memory.ports.tokens import TokenCounter


@dataclass
class TiktokenTokenCounter(TokenCounter):
    """
    Подсчёт в формате OpenAI chat:
    - per-message cost: tokens_per_message + tokens(content) + tokens(name if any)
    - count_messages добавляет reply_priming_tokens один раз на весь запрос
      (ответ ассистента всегда "праймится" <|start|>assistant<|message|>).
    """
    encoding_name: str = "cl100k_base"
    model: Optional[str] = None
    tokens_per_message: int = 3
    tokens_per_name: int = 1
    reply_priming_tokens: int = 3

    encoder: Optional[Any] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if self.encoder is not None:
            self._enc = self.encoder
            return

        import tiktoken
        if self.model:
            try:
                self._enc = tiktoken.encoding_for_model(self.model)
            except KeyError:
                self._enc = tiktoken.get_encoding(self.encoding_name)
        else:
            self._enc = tiktoken.get_encoding(self.encoding_name)

    def count_text(self, text: str) -> int:
        return len(self._enc.encode(text or ""))

    def count_message(self, message: ChatMessage) -> int:
        total = self.tokens_per_message
        total += self.count_text(message.content or "")
        if message.name:
            total += self.tokens_per_name
            total += self.count_text(message.name)
        return total

    def count_messages(self, messages: Sequence[ChatMessage]) -> int:
        total = 0
        for m in messages:
            total += self.count_message(m)
        return total + self.reply_priming_tokens
