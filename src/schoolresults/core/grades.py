from __future__ import annotations

import math
from typing import Optional

from schoolresults.core.errors import ValidationError
from schoolresults.core.models import GradedSubject, SubjectResult
from schoolresults.core.schemes import NO_REMARKS, GradingScheme


def to_percentage(marks: float, max_marks: float = 100) -> float:
    if max_marks is None or not math.isfinite(max_marks) or max_marks <= 0:
        raise ValidationError(f"max_marks must be a finite number greater than 0, got {max_marks}")
    if not math.isfinite(marks):
        raise ValidationError(f"marks must be a finite number, got {marks}")
    if marks < 0 or marks > max_marks:
        raise ValidationError(f"marks {marks} out of range 0-{max_marks}")
    # multiply first so whole-number boundaries such as 35/100 stay exact
    return marks * 100 / max_marks


def classify(marks: Optional[float], max_marks: float, scheme: GradingScheme) -> Optional[str]:
    if marks is None:
        return None
    return scheme.grade_for_percentage(to_percentage(marks, max_marks))


def _normalize_grade(grade: str, scheme: GradingScheme) -> str:
    if not isinstance(grade, str):
        raise ValidationError(f"Unsupported letter grade: {grade!r}")
    letter = grade.strip().upper()
    if letter not in scheme.points:
        raise ValidationError(f"Unsupported letter grade for {scheme.level.value}: {grade!r}")
    return letter


def to_points(grade: Optional[str], scheme: GradingScheme) -> Optional[int]:
    if grade is None:
        return None
    return scheme.points[_normalize_grade(grade, scheme)]


def remarks(grade: Optional[str], scheme: GradingScheme) -> str:
    if grade is None:
        return NO_REMARKS
    return scheme.remarks.get(_normalize_grade(grade, scheme), NO_REMARKS)


def is_passed(grade: Optional[str], scheme: GradingScheme, is_principal: bool = False) -> bool:
    """Principal subjects pass on ``scheme.pass_grades``; subsidiaries also accept the subsidiary pass."""
    if grade is None:
        return False
    letter = _normalize_grade(grade, scheme)
    if is_principal:
        return letter in scheme.pass_grades
    return letter in scheme.subsidiary_pass_grades


def evaluate_subject(result: SubjectResult, scheme: GradingScheme) -> GradedSubject:
    if result.level is not None and result.level != scheme.level:
        raise ValidationError(
            f"Subject {result.subject_code} is tagged {result.level.value} "
            f"but is being graded with {scheme.level.value}"
        )
    grade = classify(result.marks_obtained, result.max_marks, scheme)
    return GradedSubject(
        result=result,
        grade=grade,
        points=to_points(grade, scheme),
        remarks=remarks(grade, scheme),
    )
