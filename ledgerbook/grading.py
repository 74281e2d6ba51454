"""
Grading Rules Module

Grading categories with default weights, immutable assignments, and the
letter-grade / GPA-point scales shared by courses and students.
"""

from dataclasses import dataclass
from typing import Dict, Mapping
from enum import Enum
import math


class GradingCategory(Enum):
    """Grading categories with their default weight percentages"""
    HOMEWORK = ("homework", 20.0)
    QUIZZES = ("quizzes", 20.0)
    MIDTERM = ("midterm", 25.0)
    FINAL_EXAM = ("final_exam", 35.0)

    def __init__(self, key: str, default_weight: float):
        self.key = key
        self.default_weight = default_weight

    def __str__(self) -> str:
        return f"{self.name} ({self.default_weight}%)"


WEIGHT_TOTAL = 100.0
DEFAULT_WEIGHT_TOLERANCE = 0.01

# (minimum percentage, letter, GPA points), highest first
GRADE_SCALE = (
    (90.0, "A", 4.0),
    (80.0, "B", 3.0),
    (70.0, "C", 2.0),
    (60.0, "D", 1.0),
    (0.0, "F", 0.0),
)

GPA_POINTS = {letter: points for _, letter, points in GRADE_SCALE}


def default_weights() -> Dict[GradingCategory, float]:
    """Default category weights in declaration order"""
    return {category: category.default_weight for category in GradingCategory}


def validate_default_weights(tolerance: float = DEFAULT_WEIGHT_TOLERANCE) -> bool:
    """Check that the default weights total 100%"""
    return abs(sum(default_weights().values()) - WEIGHT_TOTAL) < tolerance


def normalize_weights(
    category_weights: Mapping[GradingCategory, float],
    tolerance: float = DEFAULT_WEIGHT_TOLERANCE
) -> Dict[GradingCategory, float]:
    """
    Validate custom category weights

    Args:
        category_weights: Mapping of category to weight percentage
        tolerance: Allowed deviation of the total from 100

    Returns:
        New dict of float weights ordered by category declaration order

    Raises:
        ValueError: If the mapping is empty, has unknown keys or negative
            weights, or does not total 100%
    """
    if not category_weights:
        raise ValueError("Category weights cannot be null or empty")

    for category, weight in category_weights.items():
        if not isinstance(category, GradingCategory):
            raise ValueError(f"Unknown grading category: {category!r}")
        if weight is None or not math.isfinite(float(weight)) or weight < 0:
            raise ValueError(f"Weight for {category.name} must be non-negative")

    total = sum(float(w) for w in category_weights.values())
    if not abs(total - WEIGHT_TOTAL) <= tolerance:
        raise ValueError(f"Category weights must total 100%, got: {total}")

    return {
        category: float(category_weights[category])
        for category in GradingCategory
        if category in category_weights
    }


def letter_grade(percentage: float) -> str:
    """Letter grade for a percentage: A >= 90, B >= 80, C >= 70, D >= 60, else F"""
    for minimum, letter, _ in GRADE_SCALE:
        if percentage >= minimum:
            return letter
    return "F"


def gpa_points(letter: str) -> float:
    """GPA points for a letter grade (case-insensitive)"""
    try:
        return GPA_POINTS[letter.upper()]
    except (KeyError, AttributeError):
        raise ValueError(f"Invalid letter grade: {letter}") from None


@dataclass(frozen=True)
class Assignment:
    """
    Graded piece of work within one category

    Immutable; the name is stored trimmed.
    """
    name: str
    points_earned: float
    points_possible: float
    category: GradingCategory

    def __post_init__(self):
        if self.name is None or not str(self.name).strip():
            raise ValueError("Assignment name cannot be null or empty")
        for points in (self.points_earned, self.points_possible):
            if points is not None and not math.isfinite(float(points)):
                raise ValueError("Points must be finite numbers")
        if self.points_possible is None or self.points_possible <= 0:
            raise ValueError("Points possible must be positive")
        if self.points_earned is None or self.points_earned < 0 or self.points_earned > self.points_possible:
            raise ValueError("Points earned must be between 0 and points possible")
        if not isinstance(self.category, GradingCategory):
            raise ValueError("Category cannot be null")

        object.__setattr__(self, 'name', str(self.name).strip())
        object.__setattr__(self, 'points_earned', float(self.points_earned))
        object.__setattr__(self, 'points_possible', float(self.points_possible))

    @property
    def percentage(self) -> float:
        """Score as a percentage (0-100)"""
        return (self.points_earned / self.points_possible) * 100.0

    def __str__(self) -> str:
        return (
            f"{self.name}: {self.points_earned:.1f}/{self.points_possible:.1f} "
            f"[{self.category.name}] {self.percentage:.1f}%"
        )
