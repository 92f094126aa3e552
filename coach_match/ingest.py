from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol, Sequence

import pandas as pd

from .data_models import Candidate
from .errors import RepositoryError


logger = logging.getLogger(__name__)

FIELD_ALIASES: Dict[str, List[str]] = {
    "id": ["id", "coach_id", "uid", "Coach ID"],
    "name": ["name", "coach_name", "display_name", "Name"],
    "bio": ["bio", "biography", "about", "Bio"],
    "specialties": ["specialties", "specialities", "Specialties"],
    "keywords": ["keywords", "tags", "Keywords"],
    "location": ["location", "Location"],
    "status": ["status", "Status"],
    "subscription_tier": ["subscription_tier", "subscriptionTier", "tier"],
}

APPROVED_STATUS = "approved"
UNNAMED_COACH = "Unnamed Coach"

_TAG_SPLIT_RE = re.compile(r"[;|,]")


class CandidateRepository(Protocol):
    """Source of the current coach catalog. Returns a full snapshot, no filtering by need."""

    def list_candidates(self) -> Sequence[Candidate]:
        ...


class InMemoryCandidateRepository:
    def __init__(self, candidates: Sequence[Candidate]):
        self._candidates = list(candidates)

    def list_candidates(self) -> List[Candidate]:
        return list(self._candidates)


def get_alias_column(df: pd.DataFrame, key: str) -> Optional[str]:
    for candidate in FIELD_ALIASES.get(key, []):
        if candidate in df.columns:
            return candidate
    return None


def resolve_aliases(df: pd.DataFrame) -> Dict[str, Optional[str]]:
    return {key: get_alias_column(df, key) for key in FIELD_ALIASES}


def _is_missing(val: Any) -> bool:
    if val is None:
        return True
    if isinstance(val, (list, tuple, dict)):
        return False
    try:
        return bool(pd.isna(val))
    except (TypeError, ValueError):
        return False


def _clean_text(val: Any) -> Optional[str]:
    if _is_missing(val):
        return None
    s = str(val).strip()
    if s.lower() in {"", "nan", "none", "null"}:
        return None
    return s


def parse_tags(val: Any) -> List[str]:
    """Convert a catalog tag cell to a list of strings.

    Accepts real lists, JSON-encoded lists, or text separated by ';', '|' or ','.
    Anything else (NaN, None, numbers) becomes an empty list.
    """
    if _is_missing(val):
        return []
    if isinstance(val, (list, tuple)):
        items = list(val)
    elif isinstance(val, str):
        s = val.strip()
        items = []
        if s.startswith("[") and s.endswith("]"):
            try:
                arr = json.loads(s)
                if isinstance(arr, list):
                    items = arr
            except json.JSONDecodeError:
                items = []
        if not items:
            items = _TAG_SPLIT_RE.split(s.strip("[]"))
    else:
        return []
    return [str(t).strip().strip("\"'") for t in items if not _is_missing(t) and str(t).strip().strip("\"'")]


def clean_catalog_df(df: pd.DataFrame) -> pd.DataFrame:
    """Strip header whitespace and collapse whitespace in text cells."""
    out = df.copy()
    out.columns = [col.strip() if isinstance(col, str) else col for col in out.columns]
    for col in out.columns:
        if pd.api.types.is_object_dtype(out[col]) or pd.api.types.is_string_dtype(out[col]):
            out[col] = out[col].apply(
                lambda v: re.sub(r"\s+", " ", v).strip() if isinstance(v, str) else v
            )
    return out


def candidates_from_df(
    df: pd.DataFrame,
    approved_only: bool = True,
    limit: Optional[int] = None,
) -> List[Candidate]:
    """Map catalog rows to Candidates.

    Rows without an id are skipped and duplicate ids keep their first row. When a
    status column exists and approved_only is set, only approved coaches are kept.
    """
    if df.empty:
        return []
    alias_map = resolve_aliases(df)
    id_col = alias_map.get("id")
    if id_col is None:
        raise RepositoryError(f"Catalog has no id column (tried {FIELD_ALIASES['id']})")

    def _val(row: pd.Series, key: str) -> Any:
        col = alias_map.get(key)
        return row.get(col) if col is not None else None

    out: List[Candidate] = []
    seen: set[str] = set()
    skipped_status = 0
    for _, row in df.iterrows():
        cid = _clean_text(row.get(id_col))
        if cid is None:
            continue
        # pandas reads numeric ids as floats
        if cid.endswith(".0") and cid[:-2].isdigit():
            cid = cid[:-2]
        if cid in seen:
            logger.warning("Duplicate coach id %r in catalog; keeping the first row", cid)
            continue
        status = _clean_text(_val(row, "status"))
        if approved_only and alias_map.get("status") is not None and (status or "").lower() != APPROVED_STATUS:
            skipped_status += 1
            continue
        seen.add(cid)
        out.append(
            Candidate(
                id=cid,
                name=_clean_text(_val(row, "name")) or UNNAMED_COACH,
                bio=_clean_text(_val(row, "bio")),
                specialties=parse_tags(_val(row, "specialties")),
                keywords=parse_tags(_val(row, "keywords")),
                location=_clean_text(_val(row, "location")),
                status=status,
                subscription_tier=_clean_text(_val(row, "subscription_tier")),
            )
        )
        if limit is not None and len(out) >= limit:
            break
    if skipped_status:
        logger.debug("Skipped %d coaches that are not approved", skipped_status)
    return out


def read_catalog(path: Path) -> pd.DataFrame:
    """Read a CSV or JSON (list of records) catalog export."""
    suffix = path.suffix.lower()
    try:
        if suffix == ".json":
            df = pd.read_json(path, orient="records", dtype=False)
        else:
            df = pd.read_csv(path)
    except (OSError, ValueError) as e:
        # pandas parser errors are ValueErrors
        raise RepositoryError(f"Could not read catalog {path}: {e}") from e
    return clean_catalog_df(df)


class FileCandidateRepository:
    """Candidate repository backed by a catalog export on disk.

    The file is re-read on every call so each request sees the current catalog.
    """

    def __init__(self, path: Path, approved_only: bool = True, limit: Optional[int] = None):
        self.path = Path(path)
        self.approved_only = approved_only
        self.limit = limit

    def list_candidates(self) -> List[Candidate]:
        df = read_catalog(self.path)
        candidates = candidates_from_df(df, approved_only=self.approved_only, limit=self.limit)
        logger.debug("Loaded %d coaches from %s", len(candidates), self.path)
        return candidates
