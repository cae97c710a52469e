"""Job matching and scoring."""
from .accessibility import compute_accessibility_boost
from .keyword_matcher import KeywordFallbackScoring
from .scorer import ScoringPath, SemanticScoring, rank_candidates
from .similarity import cosine_similarity

__all__ = [
    "compute_accessibility_boost",
    "cosine_similarity",
    "KeywordFallbackScoring",
    "SemanticScoring",
    "ScoringPath",
    "rank_candidates",
]
