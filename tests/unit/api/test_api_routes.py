"""
API 라우트 테스트 (guide / community / health)
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from shanti.agents.guide_agent import GuideAgent
from shanti.api.app_factory import create_app
from shanti.api.dependencies import limiter
from shanti.core.content_guard import ContentSafetyFilter
from shanti.domain.entities.guide import GenerationResult
from shanti.infrastructure.container import Container
from shanti.rag.loader import KnowledgeSourceLoader


@pytest.fixture
def agent():
    mock = MagicMock(spec=GuideAgent)
    mock.get_response = AsyncMock(
        return_value=GenerationResult(text="Be still.", suggestion="box-breathing")
    )
    mock.gateway = MagicMock()
    mock.gateway.has_credential.return_value = True
    return mock


@pytest.fixture
def client(agent):
    limiter.reset()
    Container.override("guide_agent", agent)
    Container.override("knowledge_loader", KnowledgeSourceLoader(sources=[]))
    return TestClient(create_app())


class TestGuideRoute:
    def test_respond(self, client, agent):
        response = client.post(
            "/api/guide/respond",
            json={"prompt": "I feel anxious today", "purpose": "chat"},
        )

        assert response.status_code == 200
        assert response.json() == {"text": "Be still.", "suggestion": "box-breathing"}
        args = agent.get_response.call_args[0]
        assert args[0] == "I feel anxious today"
        assert args[1].value == "chat"
        assert args[2] is None

    def test_respond_with_mood(self, client, agent):
        response = client.post(
            "/api/guide/respond",
            json={"prompt": "Long day", "purpose": "journal", "mood": "calm"},
        )

        assert response.status_code == 200
        assert agent.get_response.call_args[0][2].value == "calm"

    def test_unknown_purpose_rejected(self, client):
        response = client.post("/api/guide/respond", json={"prompt": "hi", "purpose": "poem"})
        assert response.status_code == 422

    def test_unknown_mood_rejected(self, client):
        response = client.post(
            "/api/guide/respond", json={"prompt": "hi", "purpose": "mood", "mood": "meh"}
        )
        assert response.status_code == 422


class TestCommunityRoute:
    def test_publishable(self, client):
        response = client.post(
            "/api/community/screen", json={"title": "My week", "content": "Small steps"}
        )

        assert response.status_code == 200
        assert response.json() == {"publishable": True, "message": None}

    def test_held_for_review(self, client):
        response = client.post(
            "/api/community/screen", json={"title": "Hard week", "content": "I took too many pills"}
        )

        body = response.json()
        assert body["publishable"] is False
        assert body["message"] == ContentSafetyFilter.REVIEW_MESSAGE


class TestHealthRoute:
    def test_health_before_load(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["knowledge_loaded"] is False
        assert body["knowledge_entries"] is None
        assert body["credential_configured"] is True
