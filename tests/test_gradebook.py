"""
Test suite for the gradebook

Tests the student registry and the routing of enrollment, assignments,
grades and reports to the owning student.
"""

import pytest

from ledgerbook.gradebook import GradeBook
from ledgerbook.grading import Assignment, GradingCategory
from ledgerbook.config import LedgerbookConfig


class TestStudentRegistry:
    """Test adding, finding and removing students"""
    
    def setup_method(self):
        """Set up test gradebook"""
        self.gradebook = GradeBook()
    
    def test_add_student(self):
        """Test a student is registered under a trimmed ID"""
        student = self.gradebook.add_student(" S001 ", "Alice Johnson")
        
        assert student.student_id == "S001"
        assert self.gradebook.has_student("S001")
        assert self.gradebook.get_student("S001") is student
        assert self.gradebook.student_count == 1
    
    def test_duplicate_student(self):
        """Test duplicate IDs are rejected"""
        self.gradebook.add_student("S001", "Alice Johnson")
        
        with pytest.raises(ValueError, match="Student with ID S001 already exists"):
            self.gradebook.add_student("S001", "Someone Else")
    
    @pytest.mark.parametrize("student_id,name,message", [
        ("", "Alice", "Student ID cannot be null or empty"),
        (None, "Alice", "Student ID cannot be null or empty"),
        ("S001", " ", "Student name cannot be null or empty"),
    ])
    def test_invalid_student(self, student_id, name, message):
        """Test blank IDs and names are rejected"""
        with pytest.raises(ValueError, match=message):
            self.gradebook.add_student(student_id, name)
    
    def test_unknown_student(self):
        """Test lookups of missing students raise"""
        with pytest.raises(ValueError, match="Student not found: S999"):
            self.gradebook.get_student("S999")
        with pytest.raises(ValueError, match="Student not found: S999"):
            self.gradebook.calculate_gpa("S999")
    
    def test_remove_student(self):
        """Test students can be removed"""
        self.gradebook.add_student("S001", "Alice Johnson")
        
        self.gradebook.remove_student("S001")
        
        assert not self.gradebook.has_student("S001")
        with pytest.raises(ValueError, match="Student not found"):
            self.gradebook.remove_student("S001")
    
    def test_get_all_students_is_copy(self):
        """Test the registry snapshot is a copy"""
        self.gradebook.add_student("S001", "Alice Johnson")
        
        self.gradebook.get_all_students().clear()
        
        assert self.gradebook.student_count == 1


class TestCourseWork:
    """Test enrollment and grading through the gradebook"""
    
    def setup_method(self):
        """Set up a gradebook with two students"""
        self.gradebook = GradeBook()
        self.gradebook.add_student("S001", "Alice Johnson")
        self.gradebook.add_student("S002", "Bob Smith")
    
    def test_full_grading_flow(self):
        """Test the standard four-category course"""
        self.gradebook.enroll_in_course("S001", "Mathematics", 3)
        for name, earned, category in [
            ("Homework 1", 85, GradingCategory.HOMEWORK),
            ("Quiz 1", 90, GradingCategory.QUIZZES),
            ("Midterm", 82, GradingCategory.MIDTERM),
            ("Final", 87, GradingCategory.FINAL_EXAM),
        ]:
            self.gradebook.add_assignment("S001", "Mathematics", Assignment(name, earned, 100, category))
        
        grade = self.gradebook.get_course_grade("S001", "Mathematics")
        
        assert grade.percentage == pytest.approx(85.95)
        assert grade.letter_grade == "B"
        assert self.gradebook.calculate_gpa("S001") == pytest.approx(3.0)
        assert self.gradebook.get_category_average(
            "S001", "Mathematics", GradingCategory.MIDTERM
        ) == pytest.approx(82.0)
    
    def test_enroll_returns_course(self):
        """Test enrollment returns the created course"""
        course = self.gradebook.enroll_in_course("S001", "Physics", 4)
        
        assert course.name == "Physics"
        assert course.credit_hours == 4
        assert self.gradebook.get_student("S001").is_enrolled_in("physics")
    
    def test_duplicate_enrollment(self):
        """Test a student cannot enroll in the same course twice"""
        self.gradebook.enroll_in_course("S001", "Mathematics", 3)
        
        with pytest.raises(ValueError, match="Student S001 is already enrolled in mathematics"):
            self.gradebook.enroll_in_course("S001", "mathematics", 3)
    
    def test_enroll_validation(self):
        """Test enrollment arguments are validated"""
        with pytest.raises(ValueError, match="Student not found"):
            self.gradebook.enroll_in_course("S999", "Mathematics", 3)
        with pytest.raises(ValueError, match="Course name cannot be null or empty"):
            self.gradebook.enroll_in_course("S001", " ", 3)
        with pytest.raises(ValueError, match="Credit hours must be positive"):
            self.gradebook.enroll_in_course("S001", "Mathematics", 0)
        
        assert self.gradebook.get_student("S001").course_count == 0
    
    def test_custom_weights(self):
        """Test custom weights are passed to the course"""
        self.gradebook.enroll_in_course("S001", "Studio Art", 2, {
            GradingCategory.HOMEWORK: 60,
            GradingCategory.FINAL_EXAM: 40
        })
        self.gradebook.add_assignment("S001", "Studio Art", Assignment("Sketches", 70, 100, GradingCategory.HOMEWORK))
        self.gradebook.add_assignment("S001", "Studio Art", Assignment("Show", 95, 100, GradingCategory.FINAL_EXAM))
        
        # 70*0.6 + 95*0.4
        assert self.gradebook.get_course_grade("S001", "Studio Art").percentage == pytest.approx(80.0)
    
    def test_weight_tolerance_from_config(self):
        """Test the weight tolerance comes from configuration"""
        strict = GradeBook(config=LedgerbookConfig(weight_tolerance=0.0001))
        strict.add_student("S001", "Alice Johnson")
        weights = {GradingCategory.HOMEWORK: 50.0, GradingCategory.QUIZZES: 49.995}
        
        with pytest.raises(ValueError, match="must total 100%"):
            strict.enroll_in_course("S001", "Mathematics", 3, weights)
        
        self.gradebook.enroll_in_course("S001", "Mathematics", 3, weights)
    
    def test_add_assignment_validation(self):
        """Test assignments need an enrolled course"""
        with pytest.raises(ValueError, match="Assignment cannot be null"):
            self.gradebook.add_assignment("S001", "Mathematics", None)
        with pytest.raises(ValueError, match="not enrolled in course: Mathematics"):
            self.gradebook.add_assignment(
                "S001", "Mathematics", Assignment("HW", 1, 1, GradingCategory.HOMEWORK)
            )
    
    def test_students_in_course(self):
        """Test course membership queries"""
        self.gradebook.enroll_in_course("S001", "Mathematics", 3)
        self.gradebook.enroll_in_course("S002", "Physics", 4)
        
        students = self.gradebook.get_students_in_course("mathematics")
        
        assert [s.student_id for s in students] == ["S001"]
        assert self.gradebook.get_students_in_course("Biology") == []


class TestStudentIdLookup:
    """Test lookups accept the same padded IDs as registration"""
    
    def setup_method(self):
        """Set up a student registered with surrounding whitespace"""
        self.gradebook = GradeBook()
        self.student = self.gradebook.add_student(" S001 ", "Alice Johnson")
    
    def test_get_and_has_with_padding(self):
        """Test padded IDs find the trimmed registration"""
        assert self.gradebook.get_student(" S001 ") is self.student
        assert self.gradebook.has_student("S001 ")
        assert not self.gradebook.has_student(None)
    
    def test_routing_with_padding(self):
        """Test operations routed by a padded ID reach the student"""
        self.gradebook.enroll_in_course(" S001", "Mathematics", 3)
        
        assert self.gradebook.calculate_gpa("S001 ") == 0.0
        assert self.student.is_enrolled_in("Mathematics")
    
    def test_remove_with_padding(self):
        """Test removal by a padded ID"""
        self.gradebook.remove_student(" S001 ")
        
        assert self.gradebook.student_count == 0
    
    def test_duplicate_detected_across_padding(self):
        """Test a padded duplicate of an existing ID is rejected"""
        with pytest.raises(ValueError, match="Student with ID S001 already exists"):
            self.gradebook.add_student("S001", "Alice Again")
