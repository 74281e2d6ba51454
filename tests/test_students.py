"""
Test suite for students

Tests enrollment, credit-hour weighted GPA and academic standing.
"""

import pytest

from ledgerbook.students import Student, CourseGrade, academic_standing
from ledgerbook.courses import Course
from ledgerbook.grading import Assignment, GradingCategory


def graded_course(name, credit_hours, percentage):
    course = Course(name, credit_hours)
    course.add_assignment(Assignment("Final", percentage, 100, GradingCategory.FINAL_EXAM))
    return course


class TestStudentCreation:
    """Test student construction"""
    
    def test_create_student(self):
        """Test a new student has no courses"""
        student = Student(" S001 ", " Alice Johnson ")
        
        assert student.student_id == "S001"
        assert student.name == "Alice Johnson"
        assert student.course_count == 0
        assert student.total_credit_hours == 0
        assert student.calculate_gpa() == 0.0
    
    @pytest.mark.parametrize("student_id", ["", "  ", None])
    def test_blank_id(self, student_id):
        """Test blank IDs are rejected"""
        with pytest.raises(ValueError, match="Student ID cannot be null or empty"):
            Student(student_id, "Alice")
    
    @pytest.mark.parametrize("name", ["", "  ", None])
    def test_blank_name(self, name):
        """Test blank names are rejected"""
        with pytest.raises(ValueError, match="Student name cannot be null or empty"):
            Student("S001", name)
    
    def test_equality_by_id(self):
        """Test students compare by ID"""
        assert Student("S001", "Alice") == Student("S001", "Alicia")
        assert Student("S001", "Alice") != Student("S002", "Alice")
        assert "S001" in repr(Student("S001", "Alice"))


class TestEnrollment:
    """Test enrolling in courses"""
    
    def setup_method(self):
        """Set up test student"""
        self.student = Student("S001", "Alice Johnson")
    
    def test_enroll(self):
        """Test enrollment adds the course and its credits"""
        self.student.enroll_in_course(Course("Mathematics", 3))
        self.student.enroll_in_course(Course("Physics", 4))
        
        assert self.student.course_count == 2
        assert self.student.total_credit_hours == 7
        assert [c.name for c in self.student.courses] == ["Mathematics", "Physics"]
    
    def test_duplicate_enrollment_case_insensitive(self):
        """Test the same course name cannot be enrolled twice"""
        self.student.enroll_in_course(Course("Mathematics", 3))
        
        with pytest.raises(ValueError, match="already enrolled in course: MATHEMATICS"):
            self.student.enroll_in_course(Course("MATHEMATICS", 3))
        
        assert self.student.course_count == 1
    
    def test_enroll_non_course(self):
        """Test only courses can be enrolled"""
        with pytest.raises(ValueError, match="Course cannot be null"):
            self.student.enroll_in_course(None)
    
    def test_get_course(self):
        """Test course lookup by case-insensitive name"""
        course = Course("Mathematics", 3)
        self.student.enroll_in_course(course)
        
        assert self.student.get_course("mathematics") is course
        assert self.student.get_course("Physics") is None
        assert self.student.is_enrolled_in("MATHEMATICS")
    
    def test_courses_list_is_copy(self):
        """Test the course list cannot be altered by callers"""
        self.student.enroll_in_course(Course("Mathematics", 3))
        
        self.student.courses.clear()
        
        assert self.student.course_count == 1
    
    def test_operations_on_unenrolled_course(self):
        """Test course operations require enrollment"""
        assignment = Assignment("HW", 10, 10, GradingCategory.HOMEWORK)
        
        with pytest.raises(ValueError, match="Student is not enrolled in course: Biology"):
            self.student.add_assignment("Biology", assignment)
        with pytest.raises(ValueError, match="not enrolled"):
            self.student.get_course_grade("Biology")
        with pytest.raises(ValueError, match="not enrolled"):
            self.student.get_category_average("Biology", GradingCategory.HOMEWORK)


class TestGrades:
    """Test course grades and GPA"""
    
    def setup_method(self):
        """Set up test student"""
        self.student = Student("S001", "Alice Johnson")
    
    def test_course_grade(self):
        """Test percentage and letter for one course"""
        self.student.enroll_in_course(Course("Mathematics", 3))
        self.student.add_assignment("mathematics", Assignment("HW", 87.5, 100, GradingCategory.HOMEWORK))
        
        grade = self.student.get_course_grade("Mathematics")
        
        assert isinstance(grade, CourseGrade)
        assert grade.percentage == pytest.approx(87.5)
        assert grade.letter_grade == "B"
        assert str(grade) == "87.5% (B)"
    
    def test_category_average(self):
        """Test category averages route to the course"""
        self.student.enroll_in_course(Course("Mathematics", 3))
        self.student.add_assignment("Mathematics", Assignment("Q1", 8, 10, GradingCategory.QUIZZES))
        self.student.add_assignment("Mathematics", Assignment("Q2", 10, 10, GradingCategory.QUIZZES))
        
        assert self.student.get_category_average("Mathematics", GradingCategory.QUIZZES) == pytest.approx(90.0)
    
    def test_gpa_equal_credits(self):
        """Test GPA of an A and a B in equal-credit courses"""
        self.student.enroll_in_course(graded_course("Mathematics", 3, 95))
        self.student.enroll_in_course(graded_course("History", 3, 85))
        
        assert self.student.calculate_gpa() == pytest.approx(3.5)
        assert self.student.academic_standing == "Dean's List"
    
    def test_gpa_weighted_by_credits(self):
        """Test courses with more credits weigh more"""
        self.student.enroll_in_course(graded_course("Physics", 4, 92))   # A
        self.student.enroll_in_course(graded_course("Seminar", 2, 75))   # C
        
        # (4.0*4 + 2.0*2) / 6
        assert self.student.calculate_gpa() == pytest.approx(20.0 / 6)
    
    def test_ungraded_course_counts_as_f(self):
        """Test an enrolled course with no work pulls the GPA down"""
        self.student.enroll_in_course(graded_course("Mathematics", 3, 95))
        self.student.enroll_in_course(Course("History", 3))
        
        assert self.student.calculate_gpa() == pytest.approx(2.0)


class TestAcademicStanding:
    """Test standing bands"""
    
    @pytest.mark.parametrize("gpa,expected", [
        (4.0, "Dean's List"),
        (3.5, "Dean's List"),
        (3.49, "Good Standing"),
        (3.0, "Good Standing"),
        (2.5, "Satisfactory"),
        (2.0, "Satisfactory"),
        (1.5, "Academic Warning"),
        (1.0, "Academic Warning"),
        (0.99, "Academic Probation"),
        (0.0, "Academic Probation"),
    ])
    def test_bands(self, gpa, expected):
        """Test band boundaries are inclusive at the lower bound"""
        assert academic_standing(gpa) == expected
    
    def test_new_student_on_probation(self):
        """Test a student with no courses has a 0.0 GPA standing"""
        assert Student("S001", "Alice").academic_standing == "Academic Probation"
