from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from chat_memory.use_cases.budget import Budget
from chat_memory.use_cases.token_window import DEFAULT_MEMORY_ID


def _env_int(name: str, default: int) -> int:
    v = os.getenv(name)
    if v is None or v.strip() == "":
        return default
    try:
        return int(v)
    except ValueError:
        return default


def _env_opt_int(name: str) -> Optional[int]:
    v = os.getenv(name)
    if v is None or v.strip() == "":
        return None
    try:
        return int(v)
    except ValueError:
        return None


def _env_str(name: str, default: str) -> str:
    v = os.getenv(name)
    return default if v is None or v.strip() == "" else v


def _env_opt_str(name: str) -> Optional[str]:
    v = os.getenv(name)
    return None if v is None or v.strip() == "" else v


def _env_choice(name: str, default: str, allowed: set[str]) -> str:
    v = os.getenv(name)
    if v is None or v.strip() == "":
        return default
    val = v.strip().lower()
    return val if val in allowed else default


TOKENIZER_BACKENDS = {"approx", "tiktoken", "mock"}


@dataclass(frozen=True)
class TokenizerSettings:
    backend: str = "approx"  # approx | tiktoken | mock
    tiktoken_model: Optional[str] = None
    tiktoken_encoding: str = "cl100k_base"


@dataclass(frozen=True)
class MemorySettings:
    memory_id: str = DEFAULT_MEMORY_ID
    max_context_tokens: int = 800
    reserve_output_tokens: int = 200
    safety_margin_tokens: int = 32
    max_tokens: Optional[int] = None  # если задан, перекрывает расчёт из контекста
    system_prompt: Optional[str] = None

    @property
    def budget(self) -> Budget:
        if self.max_tokens is not None:
            return Budget.exact(self.max_tokens)
        return Budget(
            max_context_tokens=self.max_context_tokens,
            reserve_output_tokens=self.reserve_output_tokens,
            safety_margin_tokens=self.safety_margin_tokens,
        )


@dataclass(frozen=True)
class AppSettings:
    memory: MemorySettings = MemorySettings()
    tokenizer: TokenizerSettings = TokenizerSettings()
    log_level: str = "INFO"

    @staticmethod
    def from_env() -> "AppSettings":
        mem = MemorySettings(
            memory_id=_env_str("CM_MEMORY_ID", MemorySettings.memory_id),
            max_context_tokens=_env_int("CM_MAX_CONTEXT", MemorySettings.max_context_tokens),
            reserve_output_tokens=_env_int("CM_RESERVE_OUTPUT", MemorySettings.reserve_output_tokens),
            safety_margin_tokens=_env_int("CM_SAFETY_MARGIN", MemorySettings.safety_margin_tokens),
            max_tokens=_env_opt_int("CM_MAX_TOKENS"),
            system_prompt=_env_opt_str("CM_SYSTEM_PROMPT"),
        )

        tok = TokenizerSettings(
            backend=_env_choice("CM_TOKENIZER", TokenizerSettings.backend, TOKENIZER_BACKENDS),
            tiktoken_model=_env_opt_str("CM_TIKTOKEN_MODEL"),
            tiktoken_encoding=_env_str("CM_TIKTOKEN_ENCODING", TokenizerSettings.tiktoken_encoding),
        )

        return AppSettings(
            memory=mem,
            tokenizer=tok,
            log_level=_env_str("CM_LOG_LEVEL", "INFO").upper(),
        )
