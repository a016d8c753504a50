from chat_memory.adapters.tokens_approx import ApproxTokenCounter
from chat_memory.adapters.tokens_mock import WhitespaceTokenCounter, text_with_tokens
from chat_memory.adapters.tokens_tiktoken import TiktokenTokenCounter
from chat_memory.domain.models import ai_message, system_message, user_message
from chat_memory.ports.tokens import TokenCounter


class _WordEncoder:
    """Подмена tiktoken-энкодинга, чтобы тест не ходил в сеть за BPE-файлом."""

    def encode(self, text):
        return text.split()


def _msgs():
    return [
        system_message("be brief"),
        user_message("hello there friend", name="ann"),
        ai_message("hi"),
    ]


def _check_overhead_once(counter: TokenCounter, overhead: int):
    msgs = _msgs()
    assert counter.count_messages([]) == overhead
    for m in msgs:
        assert counter.count_messages([m]) == counter.count_message(m) + overhead

    running = counter.count_messages([])
    for k, m in enumerate(msgs, start=1):
        running += counter.count_message(m)
        assert counter.count_messages(msgs[:k]) == running


def test_tiktoken_counter_overhead_counted_once():
    counter = TiktokenTokenCounter(encoder=_WordEncoder())
    assert isinstance(counter, TokenCounter)
    _check_overhead_once(counter, 3)


def test_tiktoken_counter_message_cost():
    counter = TiktokenTokenCounter(encoder=_WordEncoder())
    # 3 per message + 3 words + 1 per name + 1 word of name
    assert counter.count_message(user_message("hello there friend", name="ann")) == 8
    assert counter.count_message(ai_message("")) == 3


def test_approx_counter():
    counter = ApproxTokenCounter()
    assert counter.count_text("") == 0
    assert counter.count_text("abcd") == 1
    assert counter.count_text("abcde") == 2
    _check_overhead_once(counter, 3)


def test_whitespace_counter_matches_requested_tokens():
    counter = WhitespaceTokenCounter()
    assert counter.count_message(user_message(text_with_tokens(10))) == 10
    assert counter.count_messages([user_message(text_with_tokens(10))]) == 13
    _check_overhead_once(counter, 3)
