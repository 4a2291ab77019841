from types import SimpleNamespace

from api.features.chat.entities import Sender
from api.features.chat.history import HistoryTurn, Role, project_history, role_for_sender


def _message(sender, text):
    return SimpleNamespace(sender=sender, text=text)


def test_role_mapping():
    assert role_for_sender(Sender.USER) is Role.USER
    assert role_for_sender(Sender.AI) is Role.MODEL
    assert role_for_sender("ai") is Role.MODEL


def test_projection_preserves_order_and_content():
    messages = [
        _message(Sender.USER, "Hi"),
        _message(Sender.AI, "Hello! How can I help?"),
        _message(Sender.USER, "Where is my order?"),
        _message(Sender.USER, "It was order 1042"),
        _message(Sender.AI, "Let me check."),
    ]

    turns = project_history(messages)

    assert len(turns) == len(messages)
    for message, turn in zip(messages, turns):
        assert turn.content == message.text
        assert turn.role is role_for_sender(message.sender)
    assert [t.role for t in turns] == [
        Role.USER,
        Role.MODEL,
        Role.USER,
        Role.USER,
        Role.MODEL,
    ]


def test_projection_does_not_window_or_mutate():
    messages = [_message(Sender.USER, str(i)) for i in range(30)]
    snapshot = [(m.sender, m.text) for m in messages]

    turns = project_history(messages)

    assert len(turns) == 30
    assert [(m.sender, m.text) for m in messages] == snapshot
    assert project_history(messages) == turns


def test_projection_of_empty_history():
    assert project_history([]) == []


def test_history_turn_is_value_object():
    assert HistoryTurn(Role.USER, "a") == HistoryTurn(Role.USER, "a")
