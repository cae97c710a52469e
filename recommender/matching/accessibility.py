"""Accessibility compatibility boost between a user's needs and a job."""
from typing import Any

from recommender.matching.normalizer import job_accessibility_to_text
from recommender.records import JobPosting

# Boost added per matched need.
MATCH_WEIGHT = 0.05

# Upper bound on the boost. Cosine similarity spans [-1, 1], so the boost
# can reorder close candidates but never outweighs a real similarity gap.
MAX_BOOST = 0.2

# Match credit for a need outside the known categories when the job lists
# any feature at all. Tunable heuristic, not derived from the other weights.
GENERIC_NEED_CREDIT = 0.5

# Need category keyword -> job feature tokens that satisfy it. Checked in
# order; the first category contained in the need decides.
NEED_CATEGORIES: tuple[tuple[str, frozenset[str]], ...] = (
    ("visual", frozenset({
        "screenreadersupport",
        "screen_reader_support",
        "assistivetechnology",
    })),
    ("hearing", frozenset({"signlanguagesupport"})),
    ("mobility", frozenset({"accessibleoffice", "remotework"})),
    ("cognitive", frozenset({"flexiblehours", "remotework"})),
)


def job_feature_tokens(job: JobPosting) -> set[str]:
    """Lower-cased whitespace tokens of the job's accessibility text."""
    return set(job_accessibility_to_text(job).lower().split())


def count_need_matches(needs: Any, enabled: set[str]) -> float:
    """Accumulate the match count for a list of needs against job tokens."""
    if isinstance(needs, str):
        needs = [needs]
    elif not isinstance(needs, (list, tuple)):
        return 0.0

    matches = 0.0
    for need_raw in needs:
        need = (need_raw or "").lower() if isinstance(need_raw, str) else ""
        if not need:
            continue

        for category, satisfying in NEED_CATEGORIES:
            if category in need:
                if enabled & satisfying:
                    matches += 1
                break
        else:
            if enabled:
                matches += GENERIC_NEED_CREDIT

    return matches


def compute_accessibility_boost(needs: Any, job: JobPosting) -> float:
    """
    Score how well a job's accessibility features cover a user's needs.

    Args:
        needs: The user's accessibility needs (list of strings, or None)
        job: Job posting to inspect

    Returns:
        Boost in [0, MAX_BOOST]; 0 when either side has nothing to compare
    """
    if not needs:
        return 0.0

    enabled = job_feature_tokens(job)
    if not enabled:
        return 0.0

    return min(MAX_BOOST, count_need_matches(needs, enabled) * MATCH_WEIGHT)
