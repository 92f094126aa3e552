from coach_match.data_models import Candidate
from coach_match.summarizer import (
    BIO_SUMMARY_CHARS,
    NOT_SPECIFIED,
    join_tags,
    summarize,
    summarize_bio,
)


def test_long_bio_is_truncated_with_marker():
    bio = "x" * 401
    out = summarize_bio(bio)
    assert out == bio[:400] + "..."
    assert len(out) == 403


def test_bio_at_limit_is_unchanged():
    bio = "y" * BIO_SUMMARY_CHARS
    assert summarize_bio(bio) == bio


def test_missing_bio_is_empty():
    assert summarize_bio(None) == ""
    assert summarize_bio("") == ""


def test_join_tags_keeps_order():
    assert join_tags(["Leadership", "Career Coaching"]) == "Leadership, Career Coaching"


def test_join_tags_placeholder_for_empty_or_malformed():
    assert join_tags([]) == NOT_SPECIFIED
    assert join_tags(None) == NOT_SPECIFIED
    assert join_tags("Leadership") == NOT_SPECIFIED
    assert join_tags([None]) == NOT_SPECIFIED
    assert join_tags([""]) == NOT_SPECIFIED


def test_join_tags_does_not_normalise_whitespace():
    assert join_tags(["Career ", " Stress"]) == "Career ,  Stress"
    assert join_tags(["Career", None, 7]) == "Career, 7"


def test_summarize_maps_one_to_one_in_order(coaches):
    summaries = summarize(list(reversed(coaches)))
    assert [s.id for s in summaries] == ["3", "2", "1"]
    vance = summaries[-1]
    assert vance.name == "Dr. Eleanor Vance"
    assert vance.specialties_text == "Career Coaching, Personal Development, Mindfulness"
    assert vance.keywords_text == "career change, growth mindset, stress management"
    assert vance.bio_summary == coaches[0].bio


def test_summarize_tolerates_missing_fields():
    bare = Candidate(id="9", name="Bare Coach")
    (s,) = summarize([bare])
    assert s.bio_summary == ""
    assert s.specialties_text == NOT_SPECIFIED
    assert s.keywords_text == NOT_SPECIFIED


def test_summarize_tolerates_unvalidated_records():
    # model_construct skips validation, like a record straight from an external store
    odd = Candidate.model_construct(id="7", name="Odd", bio=12345, specialties="Leadership", keywords=None)
    (s,) = summarize([odd])
    assert s.bio_summary == "12345"
    assert s.specialties_text == NOT_SPECIFIED
    assert s.keywords_text == NOT_SPECIFIED


def test_summarize_empty():
    assert summarize([]) == []
