# pydantic models for the matching system
from typing import List

from pydantic import BaseModel, Field


class RankedMatch(BaseModel):
    """Canonical match record returned to callers of the matcher.

    Fields:
        candidate_id: Identifier of a coach present in the catalog snapshot for this request.
        candidate_name: Display name taken from the catalog snapshot.
        match_score: Model-assigned fit score in [0, 100]; higher is better.
        relevant_specialties: Up to three of the coach's own specialties relevant to the need.
    """

    candidate_id: str
    candidate_name: str
    match_score: int = Field(
        ...,
        ge=0,
        le=100,
        description="Fit score between 0 and 100",
    )
    relevant_specialties: List[str] = Field(default_factory=list, max_length=3)


class LLMCoachRanking(BaseModel):
    """One ranked entry as emitted by the LLM (must reference a listed coach)."""

    candidate_id: str = Field(..., description="The exact Coach ID from the provided list.")
    candidate_name: str = Field(..., description="The exact name of the coach.")
    match_score: int = Field(
        ...,
        ge=0,
        le=100,
        description="How well the coach matches the user's needs, 0-100. Higher is better.",
    )
    relevant_specialties: List[str] = Field(
        ...,
        max_length=3,
        description="Up to 3 of the coach's own listed specialties that are relevant to the need.",
    )


class LLMRankingResponse(BaseModel):
    """Structured output schema declared to the LLM for coach ranking."""

    ranked_coaches: List[LLMCoachRanking] = Field(
        ...,
        description="Coaches ranked by how well they match the user's needs, best first.",
    )


class SpecialtySuggestion(BaseModel):
    """Keywords and specialties suggested from a coach bio."""

    keywords: List[str] = Field(
        ...,
        description="3-5 concise keywords derived from the bio, suitable for search and tagging.",
    )
    specialties: List[str] = Field(
        ...,
        description="2-4 coach specialties derived directly from the services described in the bio.",
    )

    @classmethod
    def empty(cls) -> "SpecialtySuggestion":
        return cls(keywords=[], specialties=[])
