import pytest

from app.models.enums import MessageKind
from app.services.conversation_store import ConversationStore, canonical_pair


def test_conversation_lookup_is_order_insensitive(db, make_user):
    maria = make_user("Maria")
    ana = make_user("Ana")
    store = ConversationStore()

    conv = store.append_message(db, maria.id, ana.id, text="Oi")

    assert store.get_conversation(db, ana.id, maria.id).id == conv.id
    assert (conv.user_a_id, conv.user_b_id) == canonical_pair(ana.id, maria.id)


def test_messages_append_in_order(db, make_user):
    maria = make_user("Maria")
    ana = make_user("Ana")
    store = ConversationStore()

    store.append_message(db, maria.id, ana.id, text="Oi")
    store.append_message(db, ana.id, maria.id, text="Olá!")
    conv = store.append_message(db, maria.id, ana.id, text="Tudo bem?")

    assert [m.text for m in conv.messages] == ["Oi", "Olá!", "Tudo bem?"]
    assert [m.sender_id for m in conv.messages] == [maria.id, ana.id, maria.id]
    assert all(m.kind == MessageKind.text.value for m in conv.messages)
    assert all(m.request_status is None for m in conv.messages)


def test_find_message(db, make_user):
    maria = make_user("Maria")
    ana = make_user("Ana")
    store = ConversationStore()
    store.append_message(db, maria.id, ana.id, text="Oi")
    conv = store.append_message(db, ana.id, maria.id, text="Olá!")

    assert store.find_message(conv, lambda m: m.sender_id == ana.id).text == "Olá!"
    assert store.find_message(conv, lambda m: m.text == "nada") is None


def test_list_user_conversations(db, make_user):
    maria = make_user("Maria")
    ana = make_user("Ana")
    carla = make_user("Carla")
    store = ConversationStore()
    store.append_message(db, maria.id, ana.id, text="Oi Ana")
    store.append_message(db, carla.id, maria.id, text="Oi Maria")
    store.append_message(db, ana.id, carla.id, text="Oi Carla")

    convs = store.list_user_conversations(db, maria.id)

    assert {c.other_user_id(maria.id) for c in convs} == {ana.id, carla.id}


def test_cannot_message_yourself(db, make_user):
    maria = make_user("Maria")
    with pytest.raises(ValueError):
        ConversationStore().append_message(db, maria.id, maria.id, text="eco")
