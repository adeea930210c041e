"""Contract tests run against every message store backend."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from convmem.llm.client import Message, ToolCall


@pytest.fixture
def store(backend_store):
    """Run every contract test on each backend."""
    return backend_store


def test_get_all_unknown_conversation(store):
    """Test an unknown conversation has an empty log."""
    assert store.get_all("missing") == []
    assert store.count("missing") == 0


def test_append_assigns_increasing_seqs(store):
    """Test appended records keep order and get increasing seqs."""
    records = store.append("c1", [Message.user("U1"), Message.assistant("A1")])
    records += store.append("c1", [Message.user("U2")])

    seqs = [r.seq for r in records]
    assert seqs == sorted(seqs)
    assert len(set(seqs)) == 3
    assert [r.content for r in store.get_all("c1")] == ["U1", "A1", "U2"]
    assert all(r.conversation_id == "c1" for r in records)


def test_append_empty_batch(store):
    """Test an empty batch creates nothing."""
    assert store.append("c1", []) == []
    assert store.list_conversation_ids() == set()


def test_payload_survives_storage(store):
    """Test tool calls and attachments are stored with the message."""
    call = ToolCall(id="call-1", name="search", arguments={"query": "weather", "limit": 3})
    store.append(
        "c1",
        [
            Message(role="assistant", content="", tool_calls=[call], attachments=["img://1"]),
            Message.tool("sunny", tool_call_id="call-1", name="search"),
        ],
    )

    assistant, tool = [r.to_message() for r in store.get_all("c1")]
    assert assistant.tool_calls == (call,)
    assert assistant.attachments == ("img://1",)
    assert tool.tool_call_id == "call-1"
    assert tool.name == "search"


def test_delete_specific_entries(store):
    """Test deleting by seq removes only those entries."""
    records = store.append("c1", [Message.user(f"U{i}") for i in range(4)])

    removed = store.delete("c1", [records[0].seq, records[2].seq])

    assert removed == 2
    assert [r.content for r in store.get_all("c1")] == ["U1", "U3"]


def test_delete_is_idempotent(store):
    """Test deleting missing entries is not an error."""
    records = store.append("c1", [Message.user("U1")])

    assert store.delete("c1", [records[0].seq]) == 1
    assert store.delete("c1", [records[0].seq]) == 0
    assert store.delete("c1", []) == 0
    assert store.delete("missing", [1, 2]) == 0


def test_delete_scoped_to_conversation(store):
    """Test seqs of another conversation are not touched."""
    other = store.append("c2", [Message.user("V1")])

    assert store.delete("c1", [other[0].seq]) == 0
    assert store.count("c2") == 1


def test_delete_all_is_idempotent(store):
    """Test removing a whole log twice."""
    store.append("c1", [Message.user("U1"), Message.user("U2")])

    assert store.delete_all("c1") == 2
    assert store.delete_all("c1") == 0
    assert store.get_all("c1") == []


def test_list_conversation_ids(store):
    """Test listing conversations that hold messages."""
    store.append("c1", [Message.user("U1")])
    store.append("c2", [Message.user("V1")])
    store.delete_all("c2")

    assert store.list_conversation_ids() == {"c1"}


def test_duplicate_messages_kept(store):
    """Test the store never deduplicates."""
    store.append("c1", [Message.user("same"), Message.user("same")])
    assert store.count("c1") == 2


def test_empty_conversation_id_rejected(store):
    """Test an empty id is rejected."""
    with pytest.raises(ValueError):
        store.append("", [Message.user("U1")])


def test_concurrent_batches_do_not_interleave(store):
    """Test each batch stays contiguous under concurrent appends."""

    def write(batch):
        store.append("c1", [Message.user(f"{batch}-{i}") for i in range(5)])

    with ThreadPoolExecutor(max_workers=4) as pool:
        list(pool.map(write, range(8)))

    contents = [r.content for r in store.get_all("c1")]
    assert len(contents) == 40
    for start in range(0, 40, 5):
        chunk = contents[start : start + 5]
        prefix = chunk[0].split("-")[0]
        assert chunk == [f"{prefix}-{i}" for i in range(5)]
