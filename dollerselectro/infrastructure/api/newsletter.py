"""Newsletter subscription and admin mailing endpoints."""

from __future__ import annotations

from typing import Any

from dollerselectro.infrastructure.api.client import ApiClient

DEFAULT_PREFERENCES: dict[str, Any] = {
    "productUpdates": True,
    "promotions": True,
    "news": True,
    "frequency": "weekly",
}


class NewsletterAPI:
    def __init__(self, client: ApiClient) -> None:
        self._client = client

    def subscribe(self, email: str, preferences: dict[str, Any] | None = None) -> dict[str, Any]:
        prefs = dict(DEFAULT_PREFERENCES) if preferences is None else preferences
        return self._client.post("/newsletter/subscribe", json={"email": email, "preferences": prefs})

    def verify(self, token: str) -> dict[str, Any]:
        return self._client.get(f"/newsletter/verify/{token}")

    def unsubscribe(self, email: str | None = None, token: str | None = None) -> dict[str, Any]:
        body = {k: v for k, v in {"email": email, "token": token}.items() if v}
        return self._client.post("/newsletter/unsubscribe", json=body)

    def update_preferences(self, preferences: dict[str, Any]) -> dict[str, Any]:
        return self._client.put("/newsletter/preferences", json={"preferences": preferences})

    def get_subscribers(self, filters: dict[str, Any] | None = None) -> dict[str, Any]:
        return self._client.get("/newsletter/subscribers", params=filters)

    def get_stats(self) -> dict[str, Any]:
        return self._client.get("/newsletter/stats")

    def send_newsletter(self, data: dict[str, Any]) -> dict[str, Any]:
        """data: subject, content, targetAudience (optional)."""
        return self._client.post("/newsletter/send", json=data)

    def delete_subscriber(self, subscriber_id: str) -> dict[str, Any]:
        return self._client.delete(f"/newsletter/subscribers/{subscriber_id}")
