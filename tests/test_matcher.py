"""
End-to-end tests for the matcher with the LLM replaced by FakeRankingClient.
"""

import logging
from unittest.mock import MagicMock

import pytest

from coach_match.errors import GenerativeError, MatchValidationError, RepositoryError
from coach_match.ingest import InMemoryCandidateRepository
from coach_match.matcher import CoachMatcher, match_coaches, suggest_specialties
from coach_match.matching_models import LLMRankingResponse, SpecialtySuggestion

from conftest import CAREER_NEED, FakeRankingClient, ranking


def test_career_transition_ranks_vance_first(repository, career_ranking):
    client = FakeRankingClient(result=career_ranking)
    out = match_coaches(CAREER_NEED, repository, ranking_client=client)

    assert out[0].candidate_id == "1"
    assert out[0].candidate_name == "Dr. Eleanor Vance"
    assert "Career Coaching" in out[0].relevant_specialties
    assert len(client.calls) == 1
    assert CAREER_NEED in client.calls[0].user


def test_short_need_rejected_before_catalog_read():
    repo = MagicMock()
    client = FakeRankingClient()
    with pytest.raises(MatchValidationError) as exc_info:
        match_coaches("xyz", repo, ranking_client=client)
    assert exc_info.value.reason == MatchValidationError.TOO_SHORT
    repo.list_candidates.assert_not_called()
    assert client.calls == []


def test_empty_catalog_skips_llm():
    client = FakeRankingClient(result=ranking(("1", "Someone", 90, [])))
    out = match_coaches(CAREER_NEED, InMemoryCandidateRepository([]), ranking_client=client)
    assert out == []
    assert client.calls == []


def test_hallucinated_id_is_absent(repository):
    client = FakeRankingClient(
        result=ranking(
            ("99", "Invented Coach", 97, ["Career Coaching"]),
            ("3", "Aisha Khan", 70, ["Stress Management"]),
        )
    )
    out = match_coaches(CAREER_NEED, repository, ranking_client=client)
    assert [m.candidate_id for m in out] == ["3"]


@pytest.mark.parametrize(
    "kind",
    [GenerativeError.UNAVAILABLE, GenerativeError.SCHEMA_VIOLATION],
)
def test_generative_failures_degrade_to_empty(repository, kind, caplog):
    client = FakeRankingClient(error=GenerativeError(kind, "boom"))
    with caplog.at_level(logging.WARNING, logger="coach_match.matcher"):
        out = match_coaches(CAREER_NEED, repository, ranking_client=client)
    assert out == []
    assert kind in caplog.text


def test_repository_failure_degrades_to_empty():
    repo = MagicMock()
    repo.list_candidates.side_effect = RepositoryError("catalog missing")
    client = FakeRankingClient()
    assert match_coaches(CAREER_NEED, repo, ranking_client=client) == []
    assert client.calls == []


def test_backend_connection_error_degrades_to_empty(caplog):
    repo = MagicMock()
    repo.list_candidates.side_effect = ConnectionError("firestore unreachable")
    client = FakeRankingClient()
    with caplog.at_level(logging.ERROR, logger="coach_match.matcher"):
        assert match_coaches(CAREER_NEED, repo, ranking_client=client) == []
    assert client.calls == []
    assert "firestore unreachable" in caplog.text


def test_unexpected_ranking_exception_degrades_to_empty(repository):
    client = MagicMock()
    client.rank.side_effect = RuntimeError("socket closed")
    assert match_coaches(CAREER_NEED, repository, ranking_client=client) == []
    client.rank.assert_called_once()


def test_unexpected_result_type_degrades_to_empty(repository):
    client = FakeRankingClient(result=SpecialtySuggestion(keywords=["x"], specialties=[]))
    assert match_coaches(CAREER_NEED, repository, ranking_client=client) == []


def test_empty_ranking_is_empty_result(repository):
    client = FakeRankingClient(result=LLMRankingResponse(ranked_coaches=[]))
    assert match_coaches(CAREER_NEED, repository, ranking_client=client) == []


def test_matcher_is_stateless_between_calls(coaches, career_ranking):
    repo = MagicMock()
    repo.list_candidates.side_effect = [coaches, coaches[1:]]
    client = FakeRankingClient(result=career_ranking)
    matcher = CoachMatcher(repo, ranking_client=client)

    first = matcher.match(CAREER_NEED)
    second = matcher.match(CAREER_NEED)

    assert [m.candidate_id for m in first] == ["1", "3", "2"]
    # coach 1 left the catalog between requests
    assert [m.candidate_id for m in second] == ["3", "2"]
    assert "Coach ID: 1\n" not in client.calls[1].user


def test_suggest_specialties_dedupes(repository):
    client = FakeRankingClient(
        result=SpecialtySuggestion(
            keywords=["career change", " Career Change ", "leadership"],
            specialties=["Career Coaching", "", "Executive Coaching"],
        )
    )
    out = suggest_specialties("I coach people through career changes and leadership moves.", ranking_client=client)
    assert out.keywords == ["career change", "leadership"]
    assert out.specialties == ["Career Coaching", "Executive Coaching"]
    assert client.calls[0].text_format is SpecialtySuggestion


def test_suggest_specialties_blank_bio_skips_llm():
    client = FakeRankingClient()
    assert suggest_specialties("   ", ranking_client=client) == SpecialtySuggestion.empty()
    assert client.calls == []


def test_suggest_specialties_failure_is_empty():
    client = FakeRankingClient(error=GenerativeError(GenerativeError.UNAVAILABLE))
    assert suggest_specialties("A real bio about coaching.", ranking_client=client) == SpecialtySuggestion.empty()
