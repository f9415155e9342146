from datetime import datetime, timezone

from rewear.messages.conversations import group_conversations
from rewear.messages.models import Message

ME = "me"


def _msg(mid, sender, receiver, created_at, content, product_id=None, read=False):
    return Message.model_validate({
        "id": mid,
        "sender_id": sender,
        "receiver_id": receiver,
        "product_id": product_id,
        "content": content,
        "read": read,
        "created_at": created_at,
        "sender": {"username": sender},
        "receiver": {"username": receiver},
    })


def _by_key(conversations):
    return {c.key: c for c in conversations}


def test_no_messages_gives_empty_list():
    assert group_conversations([], ME) == []


def test_product_thread_is_distinct_from_general_thread():
    messages = [
        _msg("1", "alice", ME, "2024-06-01T10:00:00Z", "dispo ?", product_id="p1"),
        _msg("2", "alice", ME, "2024-06-01T09:00:00Z", "bonjour"),
    ]
    convs = _by_key(group_conversations(messages, ME))
    assert set(convs) == {"alice-p1", "alice"}
    assert convs["alice-p1"].product_id == "p1"
    assert convs["alice"].product_id is None


def test_latest_message_wins_regardless_of_input_order():
    messages = [
        _msg("1", "alice", ME, "2024-06-01T10:00:00Z", "première", product_id="p1"),
        _msg("2", ME, "alice", "2024-06-01T11:00:00Z", "ma réponse", product_id="p1", read=True),
        _msg("3", "alice", ME, "2024-06-01T08:00:00Z", "ancienne", product_id="p1"),
    ]
    conv = group_conversations(messages, ME)[0]
    assert conv.last_message == "ma réponse"
    assert conv.other_id == "alice"
    assert conv.other_person.username == "alice"


def test_unread_counts_every_unread_incoming_message():
    # Le dernier message (envoyé par moi) ne remet pas le compteur à zéro
    messages = [
        _msg("1", "alice", ME, "2024-06-01T10:00:00Z", "a", product_id="p1"),
        _msg("2", ME, "alice", "2024-06-01T11:00:00Z", "b", product_id="p1"),
        _msg("3", "alice", ME, "2024-06-01T08:00:00Z", "c", product_id="p1"),
        _msg("4", "alice", ME, "2024-06-01T07:00:00Z", "d", product_id="p1", read=True),
    ]
    conv = group_conversations(messages, ME)[0]
    assert conv.last_message == "b"
    assert conv.unread == 2


def test_equal_timestamps_keep_first_seen():
    messages = [
        _msg("1", "bob", ME, "2024-06-01T10:00:00Z", "premier"),
        _msg("2", "bob", ME, "2024-06-01T10:00:00Z", "second"),
    ]
    conv = group_conversations(messages, ME)[0]
    assert conv.last_message == "premier"
    assert conv.unread == 2


def test_outgoing_messages_are_not_unread():
    messages = [_msg("1", ME, "carol", "2024-06-01T10:00:00Z", "salut")]
    conv = group_conversations(messages, ME)[0]
    assert conv.other_id == "carol"
    assert conv.unread == 0


def test_fractional_precision_does_not_change_ordering():
    # PostgREST supprime les zéros finaux des microsecondes
    messages = [
        _msg("1", "alice", ME, "2024-06-01T10:00:00.5+00:00", "premier"),
        _msg("2", "alice", ME, "2024-06-01T10:00:00.12345+00:00", "plus ancien"),
        _msg("3", "alice", ME, "2024-06-01T10:00:01.1234+00:00", "dernier"),
    ]
    conv = group_conversations(messages, ME)[0]
    assert conv.last_message == "dernier"
    assert conv.created_at == datetime(2024, 6, 1, 10, 0, 1, 123400, tzinfo=timezone.utc)
