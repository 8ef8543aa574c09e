from roster_dedupe.steps.cleanup import NameNormalizer, collapse_whitespace
from roster_dedupe.steps.exclusion import apply_exclusion
from roster_dedupe.steps.merge import MergeResolver
from roster_dedupe.steps.similarity import SimilarityGrouper, levenshtein

__all__ = [
    "NameNormalizer",
    "collapse_whitespace",
    "apply_exclusion",
    "MergeResolver",
    "SimilarityGrouper",
    "levenshtein",
]
