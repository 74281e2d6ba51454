"""
Reporting Module

Plain-text statements and transcripts built from the public getters of
accounts, courses and students. Report functions never mutate what they
read.
"""

from typing import Iterable, List

from .money import format_money
from .accounts import Account
from .courses import Course
from .grading import GradingCategory
from .students import Student


def _header(title: str) -> List[str]:
    return ["", f"=== {title} ==="]


def monthly_statement(account: Account) -> str:
    """Monthly statement: account details, counters and full history"""
    lines = _header("MONTHLY STATEMENT")
    lines.append(f"Account Number: {account.account_number}")
    lines.append(f"Customer Name: {account.customer_name}")
    lines.append(f"Account Type: {account.account_type.name}")
    lines.append(f"Current Balance: {format_money(account.balance)}")
    lines.append(f"Monthly Transaction Count: {account.monthly_transaction_count}")

    if account.is_savings:
        lines.append(f"Monthly Withdrawal Count: {account.monthly_withdrawal_count}")

    lines.append("")
    lines.append("Transaction History:")
    history = account.get_transaction_history()
    if not history:
        lines.append("  No transactions")
    for transaction in history:
        lines.append(f"  {transaction}")

    return "\n".join(lines) + "\n"


def course_report(course: Course) -> str:
    """Course breakdown by category plus the assignment list"""
    final_grade = course.calculate_final_grade()

    lines = _header("COURSE REPORT")
    lines.append(f"Course: {course.name}")
    lines.append(f"Credit Hours: {course.credit_hours}")
    lines.append(f"Final Grade: {final_grade:.1f}% ({course.final_letter_grade})")
    lines.append(f"GPA Points: {course.gpa_points:.1f}")
    lines.append("")
    lines.append("Category Breakdown:")

    weights = course.category_weights
    for category in GradingCategory:
        count = len(course.get_assignments_by_category(category))
        lines.append(
            f"  {category.name} ({weights.get(category, 0.0):.1f}%): "
            f"{course.get_category_average(category):.1f}% [{count} assignments]"
        )

    lines.append("")
    lines.append("Assignments:")
    for assignment in course.assignments:
        lines.append(f"  {assignment}")

    return "\n".join(lines) + "\n"


def transcript(student: Student) -> str:
    """Student transcript with per-course grades, GPA and standing"""
    lines = _header("STUDENT TRANSCRIPT")
    lines.append(f"Student ID: {student.student_id}")
    lines.append(f"Name: {student.name}")
    lines.append(f"Cumulative GPA: {student.calculate_gpa():.2f}")
    lines.append(f"Total Credit Hours: {student.total_credit_hours}")
    lines.append("")
    lines.append("Courses Completed:")

    courses = student.courses
    if not courses:
        lines.append("  No courses enrolled")
    for course in courses:
        lines.append(
            f"  {course.name:<20} {course.credit_hours:2d} credits  "
            f"{course.calculate_final_grade():5.1f}%  {course.final_letter_grade}  "
            f"{course.gpa_points:.1f} GPA"
        )

    lines.append("")
    lines.append(f"Academic Standing: {student.academic_standing}")

    return "\n".join(lines) + "\n"


def class_roster(course_name: str, students: Iterable[Student]) -> str:
    """Roster of the given students' grades in one course"""
    enrolled = [s for s in students if s.is_enrolled_in(course_name)]

    lines = _header("CLASS ROSTER")
    lines.append(f"Course: {course_name}")
    lines.append(f"Enrolled Students: {len(enrolled)}")
    lines.append("")

    if not enrolled:
        lines.append("No students enrolled")
        return "\n".join(lines) + "\n"

    lines.append(f"{'Student ID':<12} {'Name':<20} {'Grade':>8} {'GPA':>5}")
    lines.append("-" * 50)
    for student in enrolled:
        grade = student.get_course_grade(course_name)
        lines.append(
            f"{student.student_id:<12} {student.name:<20} "
            f"{grade.percentage:7.1f}% {student.calculate_gpa():5.2f}"
        )

    return "\n".join(lines) + "\n"


def summary_report(students: Iterable[Student]) -> str:
    """Gradebook-wide GPA, credit and standing summary"""
    students = list(students)

    lines = _header("GRADEBOOK SUMMARY")
    lines.append(f"Total Students: {len(students)}")

    if not students:
        lines.append("No students in gradebook")
        return "\n".join(lines) + "\n"

    lines.append("")
    lines.append("Student Performance:")
    lines.append(f"{'Student ID':<12} {'Name':<20} {'GPA':>8} {'Credits':>8} {'Standing':>12}")
    lines.append("-" * 65)

    total_gpa = 0.0
    total_credits = 0
    for student in students:
        gpa = student.calculate_gpa()
        credits = student.total_credit_hours
        total_gpa += gpa
        total_credits += credits
        lines.append(
            f"{student.student_id:<12} {student.name:<20} {gpa:8.2f} "
            f"{credits:8d} {student.academic_standing:>12}"
        )

    lines.append("")
    lines.append("Overall Statistics:")
    lines.append(f"Average GPA: {total_gpa / len(students):.2f}")
    lines.append(f"Average Credit Hours: {total_credits / len(students):.1f}")

    return "\n".join(lines) + "\n"
