from datetime import datetime, timedelta

import pytest

import chat_service
import models
import schemas


def test_create_conversation_with_title(db, user):
    result = chat_service.create_conversation(
        db, schemas.ConversationCreate(user_id=user.id, title="Test Conversation")
    )

    assert result.id is not None
    assert result.user_id == user.id
    assert result.title == "Test Conversation"
    assert result.created_at == result.updated_at


@pytest.mark.parametrize("kwargs", [{}, {"title": None}])
def test_create_conversation_without_title_stores_null(db, user, kwargs):
    result = chat_service.create_conversation(db, schemas.ConversationCreate(user_id=user.id, **kwargs))

    assert result.title is None
    stored = db.query(models.Conversation).filter(models.Conversation.id == result.id).one()
    assert stored.title is None


def test_create_conversation_for_missing_user(db):
    with pytest.raises(chat_service.NotFoundError, match="User with id 999999 does not exist"):
        chat_service.create_conversation(db, schemas.ConversationCreate(user_id=999999))

    assert db.query(models.Conversation).count() == 0


def test_get_conversations_most_recently_updated_first(db, user):
    now = datetime.utcnow()
    db.add_all([
        models.Conversation(user_id=user.id, title="Older conversation",
                            created_at=now - timedelta(hours=2), updated_at=now - timedelta(hours=2)),
        models.Conversation(user_id=user.id, title="Newer conversation",
                            created_at=now - timedelta(hours=1), updated_at=now - timedelta(hours=1)),
    ])
    db.commit()

    result = chat_service.get_conversations(db, user.id)

    assert [c.title for c in result] == ["Newer conversation", "Older conversation"]
    assert result[0].updated_at > result[1].updated_at


def test_renamed_conversation_moves_to_front(db, user):
    now = datetime.utcnow()
    old = models.Conversation(user_id=user.id, title="first",
                              created_at=now - timedelta(hours=3), updated_at=now - timedelta(hours=3))
    mid = models.Conversation(user_id=user.id, title="second",
                              created_at=now - timedelta(hours=2), updated_at=now - timedelta(hours=2))
    new = models.Conversation(user_id=user.id, title="third",
                              created_at=now - timedelta(hours=1), updated_at=now - timedelta(hours=1))
    db.add_all([old, mid, new])
    db.commit()

    assert [c.title for c in chat_service.get_conversations(db, user.id)] == ["third", "second", "first"]

    chat_service.update_conversation_title(
        db, schemas.UpdateConversationTitleInput(conversation_id=old.id, title="renamed")
    )

    assert [c.title for c in chat_service.get_conversations(db, user.id)] == ["renamed", "third", "second"]


def test_get_conversations_empty(db, user):
    assert chat_service.get_conversations(db, user.id) == []
    assert chat_service.get_conversations(db, 424242) == []


def test_get_conversations_only_for_that_user(db, user):
    other = models.User(username="other", email="other@example.com")
    db.add(other)
    db.commit()
    db.add_all([
        models.Conversation(user_id=user.id, title="mine"),
        models.Conversation(user_id=other.id, title="theirs"),
    ])
    db.commit()

    result = chat_service.get_conversations(db, user.id)

    assert [c.title for c in result] == ["mine"]


def test_update_conversation_title(db, user):
    created = datetime.utcnow() - timedelta(minutes=5)
    conv = models.Conversation(user_id=user.id, title="Original", created_at=created, updated_at=created)
    db.add(conv)
    db.commit()

    result = chat_service.update_conversation_title(
        db, schemas.UpdateConversationTitleInput(conversation_id=conv.id, title="Updated Conversation Title")
    )

    assert result.id == conv.id
    assert result.user_id == user.id
    assert result.title == "Updated Conversation Title"
    assert result.updated_at > result.created_at


def test_update_title_of_untitled_conversation(db, user):
    conv = chat_service.create_conversation(db, schemas.ConversationCreate(user_id=user.id))

    result = chat_service.update_conversation_title(
        db, schemas.UpdateConversationTitleInput(conversation_id=conv.id, title="New Title")
    )

    assert result.title == "New Title"


def test_update_title_of_missing_conversation(db):
    with pytest.raises(chat_service.NotFoundError, match="Conversation with id 99999 not found"):
        chat_service.update_conversation_title(
            db, schemas.UpdateConversationTitleInput(conversation_id=99999, title="x")
        )


def test_conversation_endpoints(client, user):
    r = client.post("/rpc/createConversation", json={"user_id": user.id})
    assert r.status_code == 201
    conv = r.json()
    assert conv["title"] is None

    r = client.post("/rpc/updateConversationTitle", json={"conversation_id": conv["id"], "title": "Renamed"})
    assert r.status_code == 200
    assert r.json()["title"] == "Renamed"

    r = client.get("/rpc/getConversations", params={"user_id": user.id})
    assert r.status_code == 200
    assert [c["id"] for c in r.json()] == [conv["id"]]


def test_conversation_endpoints_not_found(client):
    r = client.post("/rpc/createConversation", json={"user_id": 999, "title": "x"})
    assert r.status_code == 404
    assert "999" in r.json()["detail"]

    r = client.post("/rpc/updateConversationTitle", json={"conversation_id": 12345, "title": "x"})
    assert r.status_code == 404
    assert "12345" in r.json()["detail"]


def test_get_conversations_requires_user_id(client):
    r = client.get("/rpc/getConversations")

    assert r.status_code == 422
    assert r.json()["detail"][0]["loc"] == ["query", "user_id"]
