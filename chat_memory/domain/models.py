from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Literal, Optional

Role = Literal["system", "user", "assistant", "tool"]


@dataclass(frozen=True)
class ChatMessage:
    role: Role
    content: str = ""
    name: Optional[str] = None
    tool_call_id: Optional[str] = None

    @property
    def is_system(self) -> bool:
        return self.role == "system"

    def to_dict(self) -> Dict[str, Any]:
        """Формат сообщения, как его ждут chat-провайдеры."""
        out: Dict[str, Any] = {"role": self.role, "content": self.content or ""}
        if self.name:
            out["name"] = self.name
        if self.tool_call_id:
            out["tool_call_id"] = self.tool_call_id
        return out


def system_message(text: str) -> ChatMessage:
    return ChatMessage(role="system", content=text)


def user_message(text: str, name: Optional[str] = None) -> ChatMessage:
    return ChatMessage(role="user", content=text, name=name)


def ai_message(text: str) -> ChatMessage:
    return ChatMessage(role="assistant", content=text)


def tool_message(text: str, tool_call_id: str, name: Optional[str] = None) -> ChatMessage:
    return ChatMessage(role="tool", content=text, name=name, tool_call_id=tool_call_id)
