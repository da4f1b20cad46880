from __future__ import annotations

from schoolresults.core.errors import ValidationError
from schoolresults.core.models import EducationLevel, StudentAggregate
from schoolresults.core.schemes import GradingScheme


def division_metric(aggregate: StudentAggregate) -> float | None:
    """Value the division is read from: best principal points for A-Level, average points for O-Level."""
    if aggregate.level == EducationLevel.A_LEVEL:
        return aggregate.best_principal_points
    return aggregate.average_points


def classify_division(aggregate: StudentAggregate, scheme: GradingScheme) -> str:
    if aggregate.level != scheme.level:
        raise ValidationError(
            f"Aggregate for {aggregate.student_id or 'student'} is {aggregate.level.value}, "
            f"scheme is {scheme.level.value}"
        )
    return scheme.division_for(division_metric(aggregate))
