from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Candidate(BaseModel):
    """
    Represents a single coach that can appear in match results.

    Only id, name, bio, specialties and keywords are used for matching; the
    remaining fields are carried for display and eligibility filtering.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    bio: Optional[str] = None
    specialties: Optional[List[str]] = None
    keywords: Optional[List[str]] = None

    location: Optional[str] = None
    status: Optional[str] = None
    subscription_tier: Optional[str] = None


class CandidateSummary(BaseModel):
    """
    Bounded, prompt-ready view of a Candidate. Rebuilt on every request.
    """

    id: str
    name: str
    bio_summary: str = Field(default="", max_length=403)
    specialties_text: str
    keywords_text: str


class MatchRequest(BaseModel):
    """
    A validated need statement.
    """

    need_statement: str = Field(..., min_length=10)
