"""Quizzes: customer play-through and admin authoring."""

from __future__ import annotations

from typing import Any

from dollerselectro.infrastructure.api.client import ApiClient


class QuizAPI:
    def __init__(self, client: ApiClient) -> None:
        self._client = client

    # --- Customer ---

    def get_quizzes(self, category: str = "", difficulty: str = "", search: str = "") -> dict[str, Any]:
        return self._client.get("/quiz", params={"category": category, "difficulty": difficulty, "search": search})

    def get_quiz(self, quiz_id: str) -> dict[str, Any]:
        return self._client.get(f"/quiz/{quiz_id}")

    def start_quiz(self, quiz_id: str) -> dict[str, Any]:
        return self._client.post(f"/quiz/{quiz_id}/start")

    def submit_quiz(self, quiz_id: str, user_quiz_id: str, answers: list[dict[str, Any]]) -> dict[str, Any]:
        """answers: [{"questionId": str, "selectedOptions": [str, ...]}, ...]"""
        return self._client.post(f"/quiz/{quiz_id}/submit", json={"userQuizId": user_quiz_id, "answers": answers})

    def get_user_history(self) -> dict[str, Any]:
        return self._client.get("/quiz/user/history")

    def get_user_stats(self) -> dict[str, Any]:
        return self._client.get("/quiz/user/stats")

    # --- Admin quizzes ---

    def get_admin_quizzes(
        self,
        page: int = 1,
        limit: int = 10,
        category: str = "",
        difficulty: str = "",
        search: str = "",
    ) -> dict[str, Any]:
        return self._client.get(
            "/quiz/admin",
            params={"page": page, "limit": limit, "category": category, "difficulty": difficulty, "search": search},
        )

    def get_admin_quiz(self, quiz_id: str) -> dict[str, Any]:
        return self._client.get(f"/quiz/admin/{quiz_id}")

    def create_quiz(self, data: dict[str, Any]) -> dict[str, Any]:
        return self._client.post("/quiz/admin", json=data)

    def update_quiz(self, quiz_id: str, data: dict[str, Any]) -> dict[str, Any]:
        return self._client.put(f"/quiz/admin/{quiz_id}", json=data)

    def delete_quiz(self, quiz_id: str) -> dict[str, Any]:
        return self._client.delete(f"/quiz/admin/{quiz_id}")

    # --- Admin questions ---

    def get_admin_questions(
        self,
        page: int = 1,
        limit: int = 10,
        category: str = "",
        difficulty: str = "",
        search: str = "",
        quiz_id: str = "",
    ) -> dict[str, Any]:
        return self._client.get(
            "/quiz/admin/questions",
            params={
                "page": page,
                "limit": limit,
                "category": category,
                "difficulty": difficulty,
                "search": search,
                "quizId": quiz_id,
            },
        )

    def get_admin_question(self, question_id: str) -> dict[str, Any]:
        return self._client.get(f"/quiz/admin/questions/{question_id}")

    def create_question(self, data: dict[str, Any]) -> dict[str, Any]:
        return self._client.post("/quiz/admin/questions", json=data)

    def update_question(self, question_id: str, data: dict[str, Any]) -> dict[str, Any]:
        return self._client.put(f"/quiz/admin/questions/{question_id}", json=data)

    def delete_question(self, question_id: str) -> dict[str, Any]:
        return self._client.delete(f"/quiz/admin/questions/{question_id}")
