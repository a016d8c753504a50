from __future__ import annotations

import argparse
import json
import logging
from dataclasses import replace

from chat_memory.app.settings import TOKENIZER_BACKENDS, AppSettings
from chat_memory.app.wiring import build_memory
from chat_memory.domain.models import ai_message, system_message, tool_message, user_message
from chat_memory.use_cases.token_window import TokenWindowChatMemory


def _snapshot(memory: TokenWindowChatMemory) -> dict:
    return {
        "memory_id": memory.id,
        "max_tokens": memory.max_tokens,
        "tokens": memory.token_count(),
        "messages": [m.to_dict() for m in memory.messages()],
    }


def _print_window(memory: TokenWindowChatMemory) -> None:
    msgs = memory.messages()
    if not msgs:
        print("mem> (empty)\n")
        return
    print(f"mem> {len(msgs)} messages, {memory.token_count()}/{memory.max_tokens} tokens")
    for i, m in enumerate(msgs):
        print(f"  {i:>3} {m.role:<9} {m.content}")
    print()


def handle_command(memory: TokenWindowChatMemory, line: str) -> bool:
    """Применяет одну строку REPL к памяти. False — пора выходить."""
    if line == "/exit":
        return False

    if line == "/show":
        _print_window(memory)
    elif line == "/clear":
        memory.clear()
        print("mem> cleared\n")
    elif line.startswith("/system "):
        memory.add(system_message(line.split(" ", 1)[1].strip()))
    elif line.startswith("/ai "):
        memory.add(ai_message(line.split(" ", 1)[1].strip()))
    elif line.startswith("/tool "):
        parts = line.split(" ", 2)
        if len(parts) < 3:
            print("mem> usage: /tool <call_id> <text>\n")
        else:
            memory.add(tool_message(parts[2].strip(), tool_call_id=parts[1]))
    else:
        memory.add(user_message(line))
    return True


def main() -> None:
    parser = argparse.ArgumentParser(description="Inspect a token-bounded chat memory window")
    parser.add_argument("--id", default=None, help="Memory id")
    parser.add_argument("--max-tokens", type=int, default=None, help="Override token budget")
    parser.add_argument("--tokenizer", choices=sorted(TOKENIZER_BACKENDS), default=None)
    parser.add_argument("--system", default=None, help="Initial system prompt")
    parser.add_argument("--debug", action="store_true")
    args = parser.parse_args()

    settings = AppSettings.from_env()

    mem = settings.memory
    if args.max_tokens is not None:
        mem = replace(mem, max_tokens=args.max_tokens)
    if args.system is not None:
        mem = replace(mem, system_prompt=args.system)
    tok = settings.tokenizer
    if args.tokenizer is not None:
        tok = replace(tok, backend=args.tokenizer)
    settings = replace(settings, memory=mem, tokenizer=tok)

    logging.basicConfig(level=logging.DEBUG if args.debug else settings.log_level, format="%(message)s")

    memory = build_memory(settings, memory_id=args.id)

    print(f"Memory: {memory.id} (max_tokens={memory.max_tokens})")
    print("Type /exit to quit.")
    print("Commands: <text> | /ai <text> | /system <text> | /tool <call_id> <text> | /show | /clear\n")

    while True:
        try:
            line = input("you> ").strip()
        except EOFError:
            break
        if not line:
            continue
        if not handle_command(memory, line):
            break

        if args.debug:
            print("debug> " + json.dumps(_snapshot(memory), ensure_ascii=False, indent=2) + "\n")


if __name__ == "__main__":
    main()
