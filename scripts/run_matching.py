"""Run the coach matcher over a file of need statements.

Pseudocode:
1) Configure input paths (edit NEEDS_FILE / CATALOG as needed, or set COACH_MATCH_CATALOG)
2) Load need statements, one per non-blank line
3) Run coach_match.matcher.CoachMatcher.match for each statement
4) Save one CSV row per ranked coach to OUTPUT_CSV and print a brief summary

Notes:
- Statements that fail validation (too short) are reported and skipped.
- An unavailable LLM yields zero rows for that statement rather than stopping the run.
"""

from __future__ import annotations

from pathlib import Path
import sys
import pandas as pd

# Ensure project root (parent of scripts/) is on sys.path for package imports
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from coach_match.config import MatchSettings
from coach_match.errors import MatchValidationError
from coach_match.ingest import FileCandidateRepository
from coach_match.matcher import CoachMatcher


# Edit these paths to point at your data
NEEDS_FILE = Path("data/need_statements.txt")
CATALOG = Path("data/coaches.csv")
OUTPUT_CSV = Path("data/coach_matches.csv")


def main() -> None:
    """Entry point to run the matcher for every statement in NEEDS_FILE.

    Raises:
        FileNotFoundError: If the needs file or catalog does not exist.
    """
    settings = MatchSettings.from_env()
    catalog = settings.catalog_path or CATALOG
    if not NEEDS_FILE.exists():
        raise FileNotFoundError(f"Needs file not found: {NEEDS_FILE}")
    if not catalog.exists():
        raise FileNotFoundError(f"Catalog not found: {catalog}")

    # 1) Load need statements
    needs = [line.strip() for line in NEEDS_FILE.read_text(encoding="utf-8").splitlines() if line.strip()]
    print(f"[1/3] Loaded {len(needs)} need statements from {NEEDS_FILE}")

    # 2) Match
    repository = FileCandidateRepository(catalog, approved_only=settings.approved_only, limit=settings.catalog_limit)
    matcher = CoachMatcher(repository, settings=settings)
    print(f"[2/3] Matching against {catalog} (model={settings.model})...")
    rows = []
    for i, need in enumerate(needs, start=1):
        try:
            matches = matcher.match(need)
        except MatchValidationError as e:
            print(f"   - [{i}/{len(needs)}] skipped ({e})")
            continue
        for rank, m in enumerate(matches, start=1):
            rows.append(
                {
                    "need_index": i,
                    "need_statement": need,
                    "rank": rank,
                    "candidate_id": m.candidate_id,
                    "candidate_name": m.candidate_name,
                    "match_score": m.match_score,
                    "relevant_specialties": "; ".join(m.relevant_specialties),
                }
            )
        print(f"   - [{i}/{len(needs)}] {len(matches)} matches")

    # 3) Save results
    print(f"[3/3] Saving results to {OUTPUT_CSV}...")
    OUTPUT_CSV.parent.mkdir(parents=True, exist_ok=True)
    pd.DataFrame(
        rows,
        columns=[
            "need_index",
            "need_statement",
            "rank",
            "candidate_id",
            "candidate_name",
            "match_score",
            "relevant_specialties",
        ],
    ).to_csv(OUTPUT_CSV, index=False)
    print(f"Done. Wrote {len(rows)} rows to {OUTPUT_CSV}")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:
        print(f"Error: {exc}")
        sys.exit(1)
