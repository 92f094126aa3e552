"""Shared fixtures for the coach matching tests.

The OpenAI client is never contacted: ranking tests use FakeRankingClient, and the
ranking client tests hand GenerativeRankingClient a MagicMock in place of OpenAI().
"""

from types import SimpleNamespace
from typing import Any, List, Optional
from unittest.mock import MagicMock

import pytest

from coach_match.data_models import Candidate
from coach_match.errors import GenerativeError
from coach_match.ingest import InMemoryCandidateRepository
from coach_match.matching_models import LLMCoachRanking, LLMRankingResponse


CAREER_NEED = "I need help with career transition and stress management"


class FakeRankingClient:
    """Stands in for GenerativeRankingClient; returns a canned result or raises."""

    def __init__(self, result: Any = None, error: Optional[GenerativeError] = None):
        self.result = result
        self.error = error
        self.calls: List[Any] = []

    def rank(self, artifact):
        self.calls.append(artifact)
        if self.error is not None:
            raise self.error
        return self.result


def ranking(*entries) -> LLMRankingResponse:
    """Build an LLMRankingResponse from (id, name, score, specialties) tuples."""
    return LLMRankingResponse(
        ranked_coaches=[
            LLMCoachRanking(
                candidate_id=cid,
                candidate_name=name,
                match_score=score,
                relevant_specialties=list(specs),
            )
            for cid, name, score, specs in entries
        ]
    )


def parsed_response(output_parsed: Any) -> SimpleNamespace:
    return SimpleNamespace(output_parsed=output_parsed)


@pytest.fixture
def coaches() -> List[Candidate]:
    return [
        Candidate(
            id="1",
            name="Dr. Eleanor Vance",
            bio=(
                "Experienced life coach specializing in career transitions and personal growth. "
                "Let me help you unlock your potential and find your true path."
            ),
            specialties=["Career Coaching", "Personal Development", "Mindfulness"],
            keywords=["career change", "growth mindset", "stress management"],
            location="New York, NY",
            status="approved",
            subscription_tier="premium",
        ),
        Candidate(
            id="2",
            name="Marcus Chen",
            bio=(
                "Helping entrepreneurs and leaders build resilience and achieve peak performance. "
                "Over 10 years of experience in executive coaching."
            ),
            specialties=["Executive Coaching", "Leadership", "Business Strategy"],
            keywords=["entrepreneurship", "performance", "resilience"],
            status="approved",
            subscription_tier="free",
        ),
        Candidate(
            id="3",
            name="Aisha Khan",
            bio=(
                "Passionate about empowering individuals to overcome obstacles and live a more "
                "fulfilling life. Focus on wellness and relationship coaching."
            ),
            specialties=["Wellness Coaching", "Relationship Coaching", "Stress Management"],
            keywords=["well-being", "healthy relationships", "anxiety relief"],
            status="approved",
            subscription_tier="premium",
        ),
    ]


@pytest.fixture
def repository(coaches) -> InMemoryCandidateRepository:
    return InMemoryCandidateRepository(coaches)


@pytest.fixture
def career_ranking() -> LLMRankingResponse:
    return ranking(
        ("1", "Dr. Eleanor Vance", 92, ["Career Coaching", "Mindfulness"]),
        ("3", "Aisha Khan", 74, ["Stress Management", "Wellness Coaching"]),
        ("2", "Marcus Chen", 41, ["Leadership"]),
    )


@pytest.fixture
def openai_client() -> MagicMock:
    client = MagicMock()
    client.responses.parse.return_value = parsed_response(None)
    return client
