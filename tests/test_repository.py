from datetime import timedelta, timezone
import uuid

import pytest

from api.features.chat.entities import Sender
from api.shared.exceptions import StoreError


async def test_create_conversation_returns_unique_existing_ids(repository):
    first = await repository.create_conversation()
    second = await repository.create_conversation()

    assert first != second
    assert str(uuid.UUID(first)) == first
    assert await repository.conversation_exists(first)
    assert await repository.conversation_exists(second)


async def test_conversation_exists_is_false_for_unknown_id(repository):
    assert not await repository.conversation_exists(str(uuid.uuid4()))
    assert not await repository.conversation_exists("not-a-session")


async def test_messages_listed_in_append_order(repository):
    conversation_id = await repository.create_conversation()
    await repository.append_message(conversation_id, Sender.USER, "Do you ship to Canada?")
    await repository.append_message(conversation_id, Sender.AI, "Yes, we do.")
    await repository.append_message(conversation_id, "user", "How long does it take?")

    messages = await repository.list_messages(conversation_id)

    assert [(m.sender, m.text) for m in messages] == [
        (Sender.USER, "Do you ship to Canada?"),
        (Sender.AI, "Yes, we do."),
        (Sender.USER, "How long does it take?"),
    ]
    assert all(m.conversation_id == conversation_id for m in messages)
    timestamps = [m.timestamp for m in messages]
    assert timestamps == sorted(timestamps)
    assert len(set(timestamps)) == len(timestamps)


async def test_list_messages_is_idempotent(repository):
    conversation_id = await repository.create_conversation()
    for i in range(5):
        await repository.append_message(conversation_id, Sender.USER, f"message {i}")

    first = await repository.list_messages(conversation_id)
    second = await repository.list_messages(conversation_id)

    assert [(m.id, m.text, m.timestamp) for m in first] == [
        (m.id, m.text, m.timestamp) for m in second
    ]


async def test_list_messages_only_returns_own_conversation(repository):
    a = await repository.create_conversation()
    b = await repository.create_conversation()
    await repository.append_message(a, Sender.USER, "from a")
    await repository.append_message(b, Sender.USER, "from b")

    assert [m.text for m in await repository.list_messages(a)] == ["from a"]
    assert [m.text for m in await repository.list_messages(b)] == ["from b"]


async def test_list_messages_for_unknown_conversation_is_empty(repository):
    assert await repository.list_messages(str(uuid.uuid4())) == []

    conversation_id = await repository.create_conversation()
    assert await repository.list_messages(conversation_id) == []


async def test_append_to_unknown_conversation_raises_store_error(repository):
    missing = str(uuid.uuid4())

    with pytest.raises(StoreError) as exc_info:
        await repository.append_message(missing, Sender.USER, "hello")

    assert exc_info.value.error_code == "STORE_ERROR"
    assert exc_info.value.details["operation"] == "append_message"
    assert exc_info.value.details["conversation_id"] == missing
    assert exc_info.value.__cause__ is not None
    assert await repository.list_messages(missing) == []


async def test_timestamps_read_back_as_utc(repository):
    conversation_id = await repository.create_conversation()
    await repository.append_message(conversation_id, Sender.USER, "Hi")

    [message] = await repository.list_messages(conversation_id)

    assert message.timestamp.tzinfo is not None
    assert message.timestamp.utcoffset() == timedelta(0)
    assert message.timestamp.tzinfo == timezone.utc
