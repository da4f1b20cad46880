from __future__ import annotations

from dataclasses import replace
from typing import Iterable, List

from schoolresults.core.division import classify_division
from schoolresults.core.errors import ValidationError
from schoolresults.core.grades import evaluate_subject
from schoolresults.core.models import EducationLevel, GradedSubject, StudentAggregate, SubjectResult
from schoolresults.core.schemes import GradingScheme


BEST_SEVEN_COUNT = 7


def best_graded(subjects: Iterable[GradedSubject], count: int) -> List[GradedSubject] | None:
    """Lowest-point graded subjects, ties by subject code; ``None`` if fewer than ``count``."""
    graded = [s for s in subjects if s.points is not None]
    if len(graded) < count:
        return None
    graded.sort(key=lambda s: (s.points, s.subject_code))
    return graded[:count]


def best_principals(subjects: Iterable[GradedSubject], count: int) -> List[GradedSubject] | None:
    return best_graded((s for s in subjects if s.is_principal), count)


def aggregate(
    results: Iterable[SubjectResult],
    scheme: GradingScheme,
    best_principal_count: int = 3,
    *,
    student_id: str = "",
    round_to: int = 2,
) -> StudentAggregate:
    if best_principal_count < 1:
        raise ValidationError("best_principal_count must be at least 1")

    results = list(results)
    seen = set()
    for result in results:
        if result.subject_code in seen:
            raise ValidationError(f"Duplicate subject {result.subject_code} for {student_id or 'student'}")
        seen.add(result.subject_code)

    subjects = tuple(evaluate_subject(result, scheme) for result in results)

    marks = [s.marks_obtained for s in subjects if s.marks_obtained is not None]
    total_marks = sum(marks)
    average_marks = round(total_marks / len(marks), round_to) if marks else None

    points = [s.points for s in subjects if s.points is not None]

    best_points = None
    best_codes: tuple[str, ...] = ()
    if scheme.level == EducationLevel.A_LEVEL:
        best = best_principals(subjects, best_principal_count)
        if best is not None:
            best_points = sum(s.points for s in best)
            best_codes = tuple(s.subject_code for s in best)

    seven_points = None
    seven_codes: tuple[str, ...] = ()
    if scheme.level == EducationLevel.O_LEVEL:
        seven = best_graded(subjects, BEST_SEVEN_COUNT)
        if seven is not None:
            seven_points = sum(s.points for s in seven)
            seven_codes = tuple(s.subject_code for s in seven)

    summary = StudentAggregate(
        student_id=student_id,
        level=scheme.level,
        subjects=subjects,
        total_marks=total_marks,
        average_marks=average_marks,
        total_points=sum(points),
        graded_count=len(points),
        best_principal_points=best_points,
        best_principal_subjects=best_codes,
        best_seven_points=seven_points,
        best_seven_subjects=seven_codes,
    )
    return replace(summary, division=classify_division(summary, scheme))
