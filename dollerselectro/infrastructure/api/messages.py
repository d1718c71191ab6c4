"""Contact/support messages (customer side and admin inbox)."""

from __future__ import annotations

from typing import Any

from dollerselectro.infrastructure.api.client import ApiClient


class MessagesAPI:
    def __init__(self, client: ApiClient) -> None:
        self._client = client

    def send_contact_message(self, data: dict[str, Any]) -> dict[str, Any]:
        return self._client.post("/messages/contact", json=data)

    def get_my_messages(self) -> dict[str, Any]:
        return self._client.get("/messages/my-messages")

    def get_message(self, message_id: str) -> dict[str, Any]:
        return self._client.get(f"/messages/{message_id}")

    def reply_to_message(self, message_id: str, data: dict[str, Any]) -> dict[str, Any]:
        """data: {"message": str, "isInternal": bool}"""
        return self._client.post(f"/messages/{message_id}/reply", json=data)

    def add_internal_note(self, message_id: str, data: dict[str, Any]) -> dict[str, Any]:
        return self._client.post(f"/messages/{message_id}/internal-note", json=data)

    def get_all_messages(self, params: dict[str, Any] | None = None) -> dict[str, Any]:
        """Admin inbox. params: status, priority, category, assignedTo, page, limit, search."""
        return self._client.get("/admin/messages", params=params)

    def get_message_stats(self) -> dict[str, Any]:
        return self._client.get("/admin/messages/stats")

    def assign_message(self, message_id: str, assigned_to: str) -> dict[str, Any]:
        return self._client.put(f"/messages/{message_id}/assign", json={"assignedTo": assigned_to})

    def update_message_status(self, message_id: str, status: str) -> dict[str, Any]:
        return self._client.put(f"/messages/{message_id}/status", json={"status": status})

    def update_message(self, message_id: str, data: dict[str, Any]) -> dict[str, Any]:
        return self._client.put(f"/messages/{message_id}", json=data)

    def delete_message(self, message_id: str) -> dict[str, Any]:
        return self._client.delete(f"/messages/{message_id}")
