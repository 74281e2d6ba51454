"""
GradeBook Module

Registry of students keyed by student ID. Routes enrollment, assignment and
grade queries to the owning student and raises ValueError for unknown
students or invalid arguments.
"""

from typing import Dict, List, Mapping, Optional

from .config import get_config
from .courses import Course
from .grading import Assignment, GradingCategory
from .students import Student, CourseGrade
from .logging_config import get_logger, log_action
from . import reporting


class GradeBook:
    """In-memory gradebook"""

    def __init__(self, weight_tolerance: Optional[float] = None, config=None):
        if config is None:
            config = get_config()

        self.weight_tolerance = (
            weight_tolerance if weight_tolerance is not None else config.weight_tolerance
        )
        self._students: Dict[str, Student] = {}
        self.logger = get_logger("ledgerbook.gradebook")

    def add_student(self, student_id: str, name: str) -> Student:
        """
        Add a new student

        Raises:
            ValueError: If the ID or name is blank, or the ID already exists
        """
        if student_id is None or not student_id.strip():
            raise ValueError("Student ID cannot be null or empty")
        if name is None or not name.strip():
            raise ValueError("Student name cannot be null or empty")

        trimmed_id = student_id.strip()
        if trimmed_id in self._students:
            raise ValueError(f"Student with ID {trimmed_id} already exists")

        student = Student(trimmed_id, name)
        self._students[trimmed_id] = student

        log_action(
            self.logger, "info", f"Student added: {trimmed_id}",
            action="add_student", resource=f"student:{trimmed_id}"
        )
        return student

    def _key(self, student_id: str) -> str:
        return student_id.strip() if isinstance(student_id, str) else student_id

    def get_student(self, student_id: str) -> Student:
        """Get student by ID (surrounding whitespace ignored); raises ValueError if missing"""
        student = self._students.get(self._key(student_id))
        if student is None:
            raise ValueError(f"Student not found: {student_id}")
        return student

    def has_student(self, student_id: str) -> bool:
        return self._key(student_id) in self._students

    def remove_student(self, student_id: str) -> None:
        key = self._key(student_id)
        if key not in self._students:
            raise ValueError(f"Student not found: {student_id}")
        del self._students[key]

        log_action(
            self.logger, "info", f"Student removed: {key}",
            action="remove_student", resource=f"student:{key}"
        )

    def enroll_in_course(
        self,
        student_id: str,
        course_name: str,
        credit_hours: int,
        category_weights: Optional[Mapping[GradingCategory, float]] = None
    ) -> Course:
        """
        Enroll a student in a new course

        Args:
            student_id: Student ID
            course_name: Course name (unique per student, case-insensitive)
            credit_hours: Positive credit hours
            category_weights: Custom weights totalling 100; defaults when None

        Returns:
            The created Course
        """
        student = self.get_student(student_id)

        if course_name is None or not course_name.strip():
            raise ValueError("Course name cannot be null or empty")
        if student.is_enrolled_in(course_name):
            raise ValueError(f"Student {student_id} is already enrolled in {course_name}")

        course = Course(course_name, credit_hours, category_weights, self.weight_tolerance)
        student.enroll_in_course(course)

        log_action(
            self.logger, "info", f"Student {student_id} enrolled in {course.name}",
            action="enroll_in_course", resource=f"student:{student_id}",
            extra={
                "course": course.name,
                "credit_hours": credit_hours,
                "weights": {c.name: w for c, w in course.category_weights.items()}
            }
        )
        return course

    def add_assignment(self, student_id: str, course_name: str, assignment: Assignment) -> None:
        student = self.get_student(student_id)
        if assignment is None:
            raise ValueError("Assignment cannot be null")
        student.add_assignment(course_name, assignment)

    def get_category_average(self, student_id: str, course_name: str, category: GradingCategory) -> float:
        return self.get_student(student_id).get_category_average(course_name, category)

    def get_course_grade(self, student_id: str, course_name: str) -> CourseGrade:
        return self.get_student(student_id).get_course_grade(course_name)

    def calculate_gpa(self, student_id: str) -> float:
        return self.get_student(student_id).calculate_gpa()

    def get_students_in_course(self, course_name: str) -> List[Student]:
        return [s for s in self._students.values() if s.is_enrolled_in(course_name)]

    def get_all_students(self) -> Dict[str, Student]:
        return dict(self._students)

    @property
    def student_count(self) -> int:
        return len(self._students)

    def generate_transcript(self, student_id: str) -> str:
        return reporting.transcript(self.get_student(student_id))

    def get_course_report(self, student_id: str, course_name: str) -> str:
        student = self.get_student(student_id)
        course = student.get_course(course_name)
        if course is None:
            raise ValueError(f"Student is not enrolled in course: {course_name}")
        return reporting.course_report(course)

    def generate_class_roster(self, course_name: str) -> str:
        return reporting.class_roster(course_name, self._students.values())

    def generate_summary_report(self) -> str:
        return reporting.summary_report(self._students.values())
