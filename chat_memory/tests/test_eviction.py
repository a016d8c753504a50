from chat_memory.adapters.evict_oldest import OldestFirstEviction
from chat_memory.domain.models import ai_message, system_message, tool_message, user_message


def test_oldest_non_system_is_selected():
    policy = OldestFirstEviction()
    msgs = [
        system_message("sys"),
        user_message("u1"),
        ai_message("a1"),
    ]
    assert policy.select(msgs) == 1


def test_system_in_the_middle_is_skipped():
    policy = OldestFirstEviction()
    msgs = [user_message("u1"), system_message("sys"), tool_message("42", tool_call_id="c1")]
    assert policy.select(msgs) == 0
    assert policy.select(msgs[1:]) == 1


def test_nothing_to_evict():
    policy = OldestFirstEviction()
    assert policy.select([]) is None
    assert policy.select([system_message("sys")]) is None


def test_message_equality_is_structural():
    assert user_message("hi") == user_message("hi")
    assert user_message("hi") != ai_message("hi")
    assert system_message("a") != system_message("b")
    assert tool_message("r", tool_call_id="1").to_dict() == {"role": "tool", "content": "r", "tool_call_id": "1"}
    assert user_message("hi", name="ann").to_dict() == {"role": "user", "content": "hi", "name": "ann"}
