from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Budget:
    """Сколько токенов окна можно отдать под историю: контекст модели минус резерв под ответ."""
    max_context_tokens: int
    reserve_output_tokens: int = 0
    safety_margin_tokens: int = 32

    @classmethod
    def exact(cls, max_tokens: int) -> "Budget":
        return cls(max_context_tokens=max_tokens, reserve_output_tokens=0, safety_margin_tokens=0)

    @property
    def max_input_tokens(self) -> int:
        # не клампим к 0: нерабочий бюджет должен упасть в конструкторе памяти
        return int(self.max_context_tokens - self.reserve_output_tokens - self.safety_margin_tokens)
