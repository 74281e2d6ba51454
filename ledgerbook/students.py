"""
Student Module

A student's enrollments, per-course grades, credit-hour-weighted GPA and
academic standing.
"""

from typing import List, NamedTuple, Optional

from .courses import Course
from .grading import Assignment, GradingCategory


# (minimum GPA, standing), highest first
STANDING_BANDS = (
    (3.5, "Dean's List"),
    (3.0, "Good Standing"),
    (2.0, "Satisfactory"),
    (1.0, "Academic Warning"),
)
LOWEST_STANDING = "Academic Probation"


def academic_standing(gpa: float) -> str:
    """Standing band for a cumulative GPA"""
    for minimum, standing in STANDING_BANDS:
        if gpa >= minimum:
            return standing
    return LOWEST_STANDING


class CourseGrade(NamedTuple):
    """Final percentage and letter grade for one course"""
    percentage: float
    letter_grade: str

    def __str__(self) -> str:
        return f"{self.percentage:.1f}% ({self.letter_grade})"


class Student:
    """Student with an ordered list of enrolled courses"""

    def __init__(self, student_id: str, name: str):
        if student_id is None or not student_id.strip():
            raise ValueError("Student ID cannot be null or empty")
        if name is None or not name.strip():
            raise ValueError("Student name cannot be null or empty")

        self._student_id = student_id.strip()
        self._name = name.strip()
        self._courses: List[Course] = []

    @property
    def student_id(self) -> str:
        return self._student_id

    @property
    def name(self) -> str:
        return self._name

    @property
    def courses(self) -> List[Course]:
        return list(self._courses)

    @property
    def course_count(self) -> int:
        return len(self._courses)

    @property
    def total_credit_hours(self) -> int:
        return sum(course.credit_hours for course in self._courses)

    def enroll_in_course(self, course: Course) -> None:
        """
        Enroll in a course

        Raises:
            ValueError: If course is missing or a course with the same name
                (case-insensitive) is already enrolled
        """
        if not isinstance(course, Course):
            raise ValueError("Course cannot be null")
        if self.is_enrolled_in(course.name):
            raise ValueError(f"Student is already enrolled in course: {course.name}")
        self._courses.append(course)

    def get_course(self, course_name: str) -> Optional[Course]:
        """Enrolled course by case-insensitive name, or None"""
        for course in self._courses:
            if course.matches(course_name):
                return course
        return None

    def is_enrolled_in(self, course_name: str) -> bool:
        return self.get_course(course_name) is not None

    def _require_course(self, course_name: str) -> Course:
        course = self.get_course(course_name)
        if course is None:
            raise ValueError(f"Student is not enrolled in course: {course_name}")
        return course

    def add_assignment(self, course_name: str, assignment: Assignment) -> None:
        self._require_course(course_name).add_assignment(assignment)

    def get_category_average(self, course_name: str, category: GradingCategory) -> float:
        return self._require_course(course_name).get_category_average(category)

    def get_course_grade(self, course_name: str) -> CourseGrade:
        course = self._require_course(course_name)
        percentage = course.calculate_final_grade()
        return CourseGrade(percentage, course.final_letter_grade)

    def calculate_gpa(self) -> float:
        """
        Cumulative GPA weighted by credit hours

        Returns:
            Sum of (GPA points x credit hours) over total credit hours, or 0.0
            with no courses
        """
        if not self._courses:
            return 0.0

        quality_points = sum(c.gpa_points * c.credit_hours for c in self._courses)
        credit_hours = self.total_credit_hours
        return quality_points / credit_hours if credit_hours > 0 else 0.0

    @property
    def academic_standing(self) -> str:
        return academic_standing(self.calculate_gpa())

    def __eq__(self, other) -> bool:
        if not isinstance(other, Student):
            return NotImplemented
        return self._student_id == other._student_id

    def __hash__(self) -> int:
        return hash(self._student_id)

    def __repr__(self) -> str:
        return (
            f"Student(student_id='{self._student_id}', name='{self._name}', "
            f"courses={len(self._courses)})"
        )
