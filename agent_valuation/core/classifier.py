"""
Task classification and payment estimation.

Maps free-text work instructions to BLS occupations and computes the
maximum payment a task is worth.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .occupations import (
    KEYWORD_INDEX,
    OCCUPATIONS,
    KeywordIndex,
    Occupation,
    OccupationCategory,
)

logger = logging.getLogger(__name__)

DEFAULT_FALLBACK_OCCUPATION = "General and Operations Managers"
DEFAULT_FALLBACK_WAGE = 64.0
FALLBACK_CONFIDENCE = 0.3
FALLBACK_REASONING = "Fallback classification - no strong keyword match"

MIN_HOURS = 0.25
MAX_HOURS = 40.0

COMPLEX_MARKERS = ("implement", "build", "create", "design", "develop")
SIMPLE_MARKERS = ("fix", "update", "change", "review")


@dataclass(frozen=True)
class ClassificationResult:
    """Result of classifying a task instruction."""
    occupation: str
    hourly_wage: float
    estimated_hours: float
    max_payment: float  # round(estimated_hours * hourly_wage, 2)
    confidence: float  # 0.0 - 1.0
    category: OccupationCategory
    reasoning: str


class TaskClassifier:
    """Keyword-based classifier mapping instructions to BLS occupations.

    The catalog and keyword index are shared, immutable module data, so a
    single classifier can be used from any number of threads.
    """

    def __init__(
        self,
        fallback_occupation: str = DEFAULT_FALLBACK_OCCUPATION,
        fallback_wage: float = DEFAULT_FALLBACK_WAGE,
        occupations: Optional[Sequence[Occupation]] = None,
    ):
        """Initialize the classifier.

        Args:
            fallback_occupation: Occupation reported when no keyword matches
            fallback_wage: Hourly wage reported when no keyword matches
            occupations: Alternative catalog (defaults to the BLS catalog)

        Raises:
            ValueError: If fallback_wage is not positive
        """
        if fallback_wage <= 0:
            raise ValueError("fallback_wage must be > 0")

        if occupations is None:
            self._occupations = OCCUPATIONS
            self._index = KEYWORD_INDEX
        else:
            self._occupations = tuple(occupations)
            self._index = KeywordIndex(self._occupations)

        self._fallback_occupation = fallback_occupation
        self._fallback_wage = float(fallback_wage)

    @property
    def fallback_occupation(self) -> str:
        return self._fallback_occupation

    @property
    def fallback_wage(self) -> float:
        return self._fallback_wage

    @property
    def occupations(self) -> Sequence[Occupation]:
        """All occupations in catalog order."""
        return self._occupations

    def classify(self, instruction: str) -> ClassificationResult:
        """Classify a task instruction into an occupation with estimated value.

        Keywords match by substring containment against the lowercased
        instruction, so short keywords can match inside longer words.
        Ties go to the occupation listed first in the catalog.

        Args:
            instruction: Free-text work instruction

        Returns:
            ClassificationResult with wage, hours and payment ceiling
        """
        lower = instruction.lower()
        scores = [0.0] * len(self._occupations)

        for keyword, positions in self._index.items():
            if keyword in lower:
                for position in positions:
                    scores[position] += 1.0

        best_position = -1
        best_score = 0.0
        for position, score in enumerate(scores):
            # Strict comparison keeps the lowest position on ties
            if score > best_score:
                best_position = position
                best_score = score

        if best_position >= 0:
            occupation = self._occupations[best_position]
            name = occupation.name
            hourly_wage = occupation.hourly_wage
            category = occupation.category
            confidence = min(best_score / 3.0, 1.0)
            reasoning = f"Matched {int(best_score)} keywords"
        else:
            logger.debug("No keyword match for instruction, using fallback %s",
                         self._fallback_occupation)
            name = self._fallback_occupation
            hourly_wage = self._fallback_wage
            category = OccupationCategory.BUSINESS_FINANCE
            confidence = FALLBACK_CONFIDENCE
            reasoning = FALLBACK_REASONING

        estimated_hours = self.estimate_hours(instruction)
        max_payment = round(estimated_hours * hourly_wage, 2)

        return ClassificationResult(
            occupation=name,
            hourly_wage=hourly_wage,
            estimated_hours=estimated_hours,
            max_payment=max_payment,
            confidence=confidence,
            category=category,
            reasoning=reasoning,
        )

    @staticmethod
    def estimate_hours(instruction: str) -> float:
        """Estimate hours to complete a task from its wording and length.

        Complexity markers give a 2 hour base, simple markers 0.5 hours,
        anything else 1 hour. The base is scaled by word count / 20
        (clamped to [0.5, 2.0]) and the result clamped to [0.25, 40].
        """
        word_count = len(instruction.split())
        lower = instruction.lower()

        if any(marker in lower for marker in COMPLEX_MARKERS):
            base_hours = 2.0
        elif any(marker in lower for marker in SIMPLE_MARKERS):
            base_hours = 0.5
        else:
            base_hours = 1.0

        length_factor = min(max(word_count / 20.0, 0.5), 2.0)
        hours = base_hours * length_factor

        return min(max(hours, MIN_HOURS), MAX_HOURS)

    def occupations_by_category(self, category: OccupationCategory) -> List[Occupation]:
        """Get occupations in a category, in catalog order."""
        return [o for o in self._occupations if o.category == category]

    def get_occupation(self, name: str) -> Optional[Occupation]:
        """Look up an occupation by exact name."""
        for occupation in self._occupations:
            if occupation.name == name:
                return occupation
        return None

    def fuzzy_match(self, name: str) -> Optional[Occupation]:
        """Match an occupation name exactly, case-insensitively, or by substring.

        Each stage scans the whole catalog before the next is tried; the
        first catalog-order match wins.
        """
        exact = self.get_occupation(name)
        if exact is not None:
            return exact

        lower = name.lower()
        for occupation in self._occupations:
            if occupation.name.lower() == lower:
                return occupation

        for occupation in self._occupations:
            candidate = occupation.name.lower()
            if candidate in lower or lower in candidate:
                return occupation

        return None
