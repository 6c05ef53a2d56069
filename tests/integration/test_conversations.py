"""Integration tests for the conversation history endpoints."""

from httpx import AsyncClient

from yuno.models.modes import Mode
from yuno.storage.store import ConversationStore


class TestListConversations:
    """Tests for GET /conversations."""

    async def test_lists_user_conversations_newest_first(
        self, async_client: AsyncClient, store: ConversationStore
    ) -> None:
        first = store.create_conversation("user-1", Mode.STUDY, "Photosynthesis")
        second = store.create_conversation("user-1", Mode.EMOTIONAL, "Long week")
        store.create_conversation("user-2", Mode.CASUAL, "Someone else")
        store.add_message(first.id, "user", "bump")

        response = await async_client.get("/conversations", params={"user_id": "user-1"})

        assert response.status_code == 200
        data = response.json()
        assert [c["id"] for c in data] == [first.id, second.id]
        assert data[0]["mode"] == "study"
        assert data[0]["title"] == "Photosynthesis"

    async def test_empty_history(self, async_client: AsyncClient) -> None:
        response = await async_client.get("/conversations", params={"user_id": "nobody"})

        assert response.status_code == 200
        assert response.json() == []

    async def test_user_id_required(self, async_client: AsyncClient) -> None:
        response = await async_client.get("/conversations")

        assert response.status_code == 422


class TestConversationMessages:
    """Tests for GET /conversations/{id}/messages."""

    async def test_returns_messages_in_order(
        self, async_client: AsyncClient, store: ConversationStore
    ) -> None:
        conversation = store.create_conversation("user-1", Mode.SUPPORT, "Login issue")
        store.add_message(conversation.id, "user", "I can't log in")
        store.add_message(conversation.id, "assistant", "Let's fix that step by step.")

        response = await async_client.get(f"/conversations/{conversation.id}/messages")

        assert response.status_code == 200
        assert [(m["role"], m["content"]) for m in response.json()] == [
            ("user", "I can't log in"),
            ("assistant", "Let's fix that step by step."),
        ]

    async def test_unknown_conversation_returns_404(self, async_client: AsyncClient) -> None:
        response = await async_client.get("/conversations/missing/messages")

        assert response.status_code == 404
        assert "Conversation not found" in response.json()["detail"]


class TestDeleteConversation:
    """Tests for DELETE /conversations/{id}."""

    async def test_delete(self, async_client: AsyncClient, store: ConversationStore) -> None:
        conversation = store.create_conversation("user-1", Mode.PRODUCTIVITY, "Plan")
        store.add_message(conversation.id, "user", "Plan my day")

        response = await async_client.delete(f"/conversations/{conversation.id}")

        assert response.status_code == 204
        assert store.list_conversations("user-1") == []

    async def test_delete_unknown_returns_404(self, async_client: AsyncClient) -> None:
        response = await async_client.delete("/conversations/missing")

        assert response.status_code == 404


class TestHealth:
    async def test_health_check(self, async_client: AsyncClient) -> None:
        response = await async_client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "service": "yuno"}
