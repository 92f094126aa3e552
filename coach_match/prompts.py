"""Prompt construction for the LLM-backed steps.

The ranking prompt lists every summarized coach and asks the model for a short,
scored shortlist drawn only from that list. The response shape is declared as a
pydantic model so the ranking client can enforce it with structured outputs.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Sequence, Type

from pydantic import BaseModel

from .data_models import CandidateSummary, MatchRequest
from .matching_models import LLMRankingResponse, SpecialtySuggestion


RANKING_SYSTEM_PROMPT = (
    "You are an assistant that matches users with life coaches from a provided list. "
    "Base every judgement only on the coaches listed in the request and the user's stated needs. "
    "Never use outside knowledge and never invent coaches, ids, names or specialties. "
    "Respond ONLY with the structured fields defined by the schema."
)

RANKING_INSTRUCTIONS = [
    "Consider only the coaches in the list above. Do not use outside knowledge and do not invent coaches.",
    "Return the top 3-5 most suitable coaches. If fewer than 3 are a good match, return only those. "
    "If none is a good match, return an empty list.",
    "For each returned coach give: candidate_id exactly as listed, candidate_name exactly as listed, "
    "an integer match_score from 0 to 100 (100 is a perfect match), and relevant_specialties: "
    "up to 3 entries taken only from that coach's own listed specialties.",
    "Order the list from best to worst match.",
]

SUGGEST_SYSTEM_PROMPT = (
    "You help life coaches improve their profiles by analysing their biography. "
    "Use only what the biography says; do not invent specialties it does not support. "
    "Respond ONLY with the structured fields defined by the schema."
)

SUGGEST_INSTRUCTIONS = [
    "Suggest 3-5 concise keywords reflecting the main themes, skills or target audience in the bio, "
    "suitable for search and tagging.",
    "Suggest 2-4 specialties the coach focuses on, derived directly from the services, problems solved "
    "or approaches described in the bio.",
]


@dataclass(frozen=True)
class PromptArtifact:
    """A compiled prompt plus the schema its answer must satisfy."""

    system: str
    user: str
    text_format: Type[BaseModel]

    def messages(self) -> List[dict[str, Any]]:
        return [
            {"role": "system", "content": self.system},
            {"role": "user", "content": self.user},
        ]


def _numbered(instructions: Sequence[str]) -> str:
    return "\n".join(f"{i}. {line}" for i, line in enumerate(instructions, start=1))


def render_coach_listing(summaries: Sequence[CandidateSummary]) -> str:
    blocks = []
    for i, s in enumerate(summaries, start=1):
        blocks.append(
            f"{i}. Coach ID: {s.id}\n"
            f"   Name: {s.name}\n"
            f"   Bio Summary: {s.bio_summary}\n"
            f"   Specialties: {s.specialties_text}\n"
            f"   Keywords: {s.keywords_text}"
        )
    return "\n".join(blocks)


def compile_prompt(request: MatchRequest, summaries: Sequence[CandidateSummary]) -> PromptArtifact:
    """Merge a need statement and the coach summaries into one ranking prompt.

    Callers must short-circuit on an empty catalog; compiling a prompt with nothing
    to rank is a programming error.
    """
    if not summaries:
        raise ValueError("compile_prompt requires at least one candidate summary")

    user = (
        "User's coaching needs:\n"
        f'"{request.need_statement}"\n\n'
        "Available coaches:\n"
        f"{render_coach_listing(summaries)}\n\n"
        "Task:\n"
        f"{_numbered(RANKING_INSTRUCTIONS)}"
    )
    return PromptArtifact(system=RANKING_SYSTEM_PROMPT, user=user, text_format=LLMRankingResponse)


def compile_suggestion_prompt(bio: str) -> PromptArtifact:
    user = (
        "Coach's biography:\n"
        f'"{bio}"\n\n'
        "Task:\n"
        f"{_numbered(SUGGEST_INSTRUCTIONS)}"
    )
    return PromptArtifact(system=SUGGEST_SYSTEM_PROMPT, user=user, text_format=SpecialtySuggestion)
