"""
Course Module

A course owns its category weights and assignments and computes category
averages and the weight-normalized final grade.
"""

from typing import Dict, List, Mapping, Optional

from .grading import (
    Assignment, GradingCategory, DEFAULT_WEIGHT_TOLERANCE,
    default_weights, normalize_weights, letter_grade, gpa_points
)


class Course:
    """
    Course with fixed category weights and a list of assignments

    Categories without assignments are left out of the final grade
    entirely instead of counting as zero.
    """

    def __init__(
        self,
        name: str,
        credit_hours: int,
        category_weights: Optional[Mapping[GradingCategory, float]] = None,
        weight_tolerance: float = DEFAULT_WEIGHT_TOLERANCE
    ):
        if name is None or not name.strip():
            raise ValueError("Course name cannot be null or empty")
        if isinstance(credit_hours, bool) or not isinstance(credit_hours, int) or credit_hours <= 0:
            raise ValueError("Credit hours must be positive")

        if category_weights is None:
            weights = default_weights()
        else:
            weights = normalize_weights(category_weights, weight_tolerance)

        self._name = name.strip()
        self._credit_hours = credit_hours
        self._category_weights = weights
        self._assignments: List[Assignment] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def credit_hours(self) -> int:
        return self._credit_hours

    @property
    def category_weights(self) -> Dict[GradingCategory, float]:
        """Copy of the weights, in category declaration order"""
        return dict(self._category_weights)

    @property
    def assignments(self) -> List[Assignment]:
        return list(self._assignments)

    @property
    def assignment_count(self) -> int:
        return len(self._assignments)

    def matches(self, course_name: str) -> bool:
        """Case-insensitive name comparison"""
        return course_name is not None and self._name.lower() == course_name.strip().lower()

    def add_assignment(self, assignment: Assignment) -> None:
        if not isinstance(assignment, Assignment):
            raise ValueError("Assignment cannot be null")
        self._assignments.append(assignment)

    def get_assignments_by_category(self, category: GradingCategory) -> List[Assignment]:
        return [a for a in self._assignments if a.category == category]

    def get_category_average(self, category: GradingCategory) -> float:
        """
        Points-weighted average for a category

        Returns:
            Total earned over total possible, as a percentage; 0.0 when the
            category has no assignments
        """
        category_assignments = self.get_assignments_by_category(category)
        if not category_assignments:
            return 0.0

        earned = sum(a.points_earned for a in category_assignments)
        possible = sum(a.points_possible for a in category_assignments)
        return (earned / possible) * 100.0 if possible > 0 else 0.0

    def calculate_final_grade(self) -> float:
        """
        Weighted final percentage over the categories that have assignments

        The weighted sum is divided by the weights actually used, so a course
        graded only on homework and quizzes uses their relative weights.
        """
        weighted_sum = 0.0
        total_weight = 0.0

        for category, weight in self._category_weights.items():
            if not self.get_assignments_by_category(category):
                continue
            weighted_sum += self.get_category_average(category) * (weight / 100.0)
            total_weight += weight

        if total_weight == 0.0:
            return 0.0

        return (weighted_sum / total_weight) * 100.0

    @property
    def final_letter_grade(self) -> str:
        return letter_grade(self.calculate_final_grade())

    @property
    def gpa_points(self) -> float:
        return gpa_points(self.final_letter_grade)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Course):
            return NotImplemented
        return self._name.lower() == other._name.lower()

    def __hash__(self) -> int:
        return hash(self._name.lower())

    def __repr__(self) -> str:
        return (
            f"Course(name='{self._name}', credit_hours={self._credit_hours}, "
            f"assignments={len(self._assignments)})"
        )
