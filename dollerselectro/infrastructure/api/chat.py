"""Live chat typing indicators and the notification feed."""

from __future__ import annotations

from typing import Any

from dollerselectro.infrastructure.api.client import ApiClient


class ChatAPI:
    def __init__(self, client: ApiClient) -> None:
        self._client = client

    def get_chat_message(self, message_id: str) -> dict[str, Any]:
        return self._client.get(f"/chat/messages/{message_id}")

    def update_typing_status(self, message_id: str, is_typing: bool) -> dict[str, Any]:
        return self._client.post(f"/chat/messages/{message_id}/typing", json={"isTyping": is_typing})

    def get_notifications(self, page: int = 1, limit: int = 20, unread_only: bool = False) -> dict[str, Any]:
        return self._client.get(
            "/chat/notifications",
            params={"page": page, "limit": limit, "unreadOnly": unread_only},
        )

    def mark_notification_read(self, notification_id: str) -> dict[str, Any]:
        return self._client.put(f"/chat/notifications/{notification_id}/read")

    def mark_all_notifications_read(self) -> dict[str, Any]:
        return self._client.put("/chat/notifications/read-all")
