"""
Keyword Similarity

Crude text similarity used to compare fields of study and focus areas.
Token pairs score 1.0 on an exact match, 0.8 when both tokens belong to
the same synonym domain, and 0.6 when one token (longer than 3 chars)
contains the other. No embeddings, no NLP library.
"""

from typing import Dict, Iterable, List, Optional

from app.domain.scoring.interfaces import SimilarityStrategy


# Related terms per domain (English and French vocabulary)
SYNONYMS: Dict[str, List[str]] = {
    "computer": ["informatique", "computing", "software", "programming", "tech"],
    "medicine": ["médecine", "medical", "health", "healthcare", "santé"],
    "engineering": ["ingénierie", "ingénieur", "technique", "technology"],
    "business": ["commerce", "management", "économie", "finance", "marketing"],
    "science": ["sciences", "research", "recherche", "scientifique"],
    "art": ["arts", "design", "creative", "créatif", "artistique"],
    "law": ["droit", "legal", "juridique", "justice"],
    "education": ["éducation", "teaching", "enseignement", "pédagogie"],
}

# Similarity above which two phrases count as the same field
MATCH_THRESHOLD = 0.7

EXACT_WEIGHT = 1.0
SYNONYM_WEIGHT = 0.8
PARTIAL_WEIGHT = 0.6
MIN_PARTIAL_LENGTH = 3


class KeywordSimilarity:
    """
    Default ``SimilarityStrategy``.

    Returns matched weight divided by the number of token pairs compared.
    A synonym hit and a partial hit on the same pair both count.
    """

    def __init__(self, synonyms: Optional[Dict[str, List[str]]] = None):
        self._synonyms = synonyms if synonyms is not None else SYNONYMS

    def similarity(self, text1: str, text2: str) -> float:
        words1 = text1.lower().split()
        words2 = text2.lower().split()

        matches = 0.0
        comparisons = 0

        for word1 in words1:
            for word2 in words2:
                comparisons += 1

                if word1 == word2:
                    matches += EXACT_WEIGHT
                    continue

                if self._same_domain(word1, word2):
                    matches += SYNONYM_WEIGHT

                if len(word1) > MIN_PARTIAL_LENGTH and len(word2) > MIN_PARTIAL_LENGTH:
                    if word1 in word2 or word2 in word1:
                        matches += PARTIAL_WEIGHT

        return matches / comparisons if comparisons else 0.0

    def _same_domain(self, word1: str, word2: str) -> bool:
        for key, related in self._synonyms.items():
            if (word1 in related or key in word1) and (word2 in related or key in word2):
                return True
        return False


def count_matching_fields(
    field: str,
    candidates: Iterable[str],
    strategy: SimilarityStrategy,
) -> int:
    """
    Count entries of ``candidates`` that match ``field``.

    An entry matches when either string contains the other
    (case-insensitive) or the strategy rates them above MATCH_THRESHOLD.
    """
    field_lower = field.lower()
    count = 0
    for candidate in candidates:
        candidate_lower = candidate.lower()
        if (
            field_lower in candidate_lower
            or candidate_lower in field_lower
            or strategy.similarity(field_lower, candidate_lower) > MATCH_THRESHOLD
        ):
            count += 1
    return count


def field_overlap_score(
    field: str,
    candidates: List[str],
    strategy: SimilarityStrategy,
) -> float:
    """
    0-100 overlap between one field of study and a list of fields.

    An exact (case-insensitive) entry scores 100 outright; otherwise the
    share of matching entries is used. A Computer Science student against
    ``["Computer Science", "Engineering"]`` therefore scores 100, not 50.
    """
    if not candidates:
        return 0.0
    field_lower = field.strip().lower()
    if any(candidate.strip().lower() == field_lower for candidate in candidates):
        return 100.0
    matching = count_matching_fields(field, candidates, strategy)
    return min(matching / len(candidates), 1.0) * 100


def contains_any(text: str, keywords: Iterable[str]) -> bool:
    """True when the lowercased text contains any keyword."""
    text_lower = text.lower()
    return any(keyword in text_lower for keyword in keywords)


def count_keywords(text: str, keywords: Iterable[str]) -> int:
    """Number of distinct keywords found in the lowercased text."""
    text_lower = text.lower()
    return sum(1 for keyword in keywords if keyword in text_lower)
