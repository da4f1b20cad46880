from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Optional

import numpy as np

from schoolresults.core.errors import ValidationError
from schoolresults.core.models import GradedSubject, StudentAggregate
from schoolresults.core.schemes import GradingScheme


@dataclass(frozen=True)
class ClassStatistics:
    count: int
    mean: float
    median: float
    mode: float
    standard_deviation: float


def class_statistics(marks: Iterable[Optional[float]], *, round_to: int = 2) -> ClassStatistics:
    values = np.array([m for m in marks if m is not None], dtype=float)
    if values.size == 0:
        return ClassStatistics(count=0, mean=0.0, median=0.0, mode=0.0, standard_deviation=0.0)

    # np.unique sorts, so argmax picks the lowest of equally frequent marks
    unique, counts = np.unique(values, return_counts=True)
    return ClassStatistics(
        count=int(values.size),
        mean=round(float(np.mean(values)), round_to),
        median=round(float(np.median(values)), round_to),
        mode=round(float(unique[np.argmax(counts)]), round_to),
        standard_deviation=round(float(np.std(values)), round_to),
    )


def grade_distribution(subjects: Iterable[GradedSubject], scheme: GradingScheme) -> Dict[str, int]:
    counts = {grade: 0 for grade in scheme.grades}
    for subject in subjects:
        if subject.grade is not None:
            counts[subject.grade] += 1
    return counts


def division_summary(aggregates: Iterable[StudentAggregate], scheme: GradingScheme) -> Dict[str, int]:
    counts = {label: 0 for label in scheme.division_labels}
    for aggregate in aggregates:
        if aggregate.level != scheme.level:
            raise ValidationError(f"Cannot summarise {aggregate.level.value} results with {scheme.level.value}")
        if aggregate.division not in counts:
            raise ValidationError(
                f"Division {aggregate.division!r} of {aggregate.student_id or 'student'} is not a {scheme.version} label"
            )
        counts[aggregate.division] += 1
    return counts
