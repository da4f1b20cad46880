"""Cohort ranking.

Ranks are dense: tied students share a rank and the next distinct value gets
the following integer, so ``[6, 6, 8]`` ranks as ``[1, 1, 2]``.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Dict, Iterable, List, Optional, Tuple

from schoolresults.core.division import division_metric
from schoolresults.core.errors import ValidationError
from schoolresults.core.models import StudentAggregate
from schoolresults.core.schemes import GradingScheme


def _rank_value(aggregate: StudentAggregate) -> Tuple[int, float]:
    metric = division_metric(aggregate)
    if metric is None:
        # students without a division metric come last, ordered by total points
        return 1, aggregate.total_points
    return 0, metric


def _order_key(aggregate: StudentAggregate):
    return _rank_value(aggregate), aggregate.total_points, aggregate.student_id


def assign_ranks(aggregates: Iterable[StudentAggregate], scheme: GradingScheme) -> List[StudentAggregate]:
    """Return the cohort in rank order with ``rank`` populated on fresh copies."""
    cohort = list(aggregates)
    seen = set()
    for aggregate in cohort:
        if aggregate.level != scheme.level:
            raise ValidationError(
                f"Cannot rank {aggregate.level.value} student {aggregate.student_id} "
                f"in a {scheme.level.value} cohort"
            )
        if aggregate.student_id in seen:
            raise ValidationError(f"Duplicate student {aggregate.student_id} in cohort")
        seen.add(aggregate.student_id)

    ranked: List[StudentAggregate] = []
    rank = 0
    previous = None
    for aggregate in sorted(cohort, key=_order_key):
        value = _rank_value(aggregate)
        if value != previous:
            rank += 1
            previous = value
        ranked.append(replace(aggregate, rank=rank))
    return ranked


def subject_positions(entries: Iterable[Tuple[str, Optional[float]]]) -> Dict[str, Optional[int]]:
    """Dense positions of students within one subject, highest marks first.

    ``entries`` are ``(student_id, marks)`` pairs; students without marks get ``None``.
    """
    positions: Dict[str, Optional[int]] = {}
    marked = []
    for student_id, marks in entries:
        if student_id in positions:
            raise ValidationError(f"Duplicate student {student_id} in subject positions")
        positions[student_id] = None
        if marks is not None:
            marked.append((student_id, marks))

    position = 0
    previous = None
    for student_id, marks in sorted(marked, key=lambda item: (-item[1], item[0])):
        if marks != previous:
            position += 1
            previous = marks
        positions[student_id] = position
    return positions
