from concurrent.futures import ThreadPoolExecutor

from chat_memory.adapters.tokens_mock import WhitespaceTokenCounter, text_with_tokens
from chat_memory.domain.models import system_message, user_message
from chat_memory.use_cases.token_window import TokenWindowChatMemory


def test_concurrent_adds_keep_invariants():
    counter = WhitespaceTokenCounter()
    memory = TokenWindowChatMemory.with_max_tokens(50, counter)
    sys = system_message("rules")
    memory.add(sys)

    def worker(t: int) -> None:
        for i in range(200):
            memory.add(user_message(text_with_tokens(1 + (i % 7), f"t{t}m{i}")))
            snap = memory.messages()
            assert sum(1 for m in snap if m.is_system) == 1
            assert counter.count_messages(snap) <= 50

    with ThreadPoolExecutor(max_workers=8) as pool:
        for f in [pool.submit(worker, t) for t in range(8)]:
            f.result()

    assert memory.messages()[0] == sys
    assert memory.token_count() <= 50
