import pytest

from chat_memory.adapters.tokens_mock import WhitespaceTokenCounter
from chat_memory.use_cases.budget import Budget
from chat_memory.use_cases.token_window import TokenWindowChatMemory


def test_budget_max_input_tokens():
    b = Budget(max_context_tokens=1000, reserve_output_tokens=200, safety_margin_tokens=50)
    assert b.max_input_tokens == 750


def test_exact_budget():
    assert Budget.exact(33).max_input_tokens == 33


def test_exhausted_budget_is_rejected_by_memory():
    b = Budget(max_context_tokens=100, reserve_output_tokens=100)
    assert b.max_input_tokens < 0
    with pytest.raises(ValueError):
        TokenWindowChatMemory(b.max_input_tokens, WhitespaceTokenCounter())
