"""Grading schemes: grade bands, points, division bands and remarks per education level.

A scheme is an immutable value passed explicitly to every engine call. The two
published schemes are available through :func:`scheme_for`; callers wanting a
different curriculum build their own ``GradingScheme`` and the constructor
rejects inconsistent tables.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, FrozenSet, Mapping, Optional, Tuple

from schoolresults.core.errors import ValidationError
from schoolresults.core.models import EducationLevel

NOT_AVAILABLE = "N/A"
NO_REMARKS = "-"


@dataclass(frozen=True)
class DivisionBand:
    """Band covering values above the previous band's ceiling up to ``upper`` inclusive."""

    upper: float
    division: str


@dataclass(frozen=True)
class GradingScheme:
    level: EducationLevel
    version: str
    # (minimum percentage, grade), best grade first
    grade_bands: Tuple[Tuple[float, str], ...]
    points: Mapping[str, int]
    # lowest aggregate value the first division band accepts
    division_floor: float
    division_bands: Tuple[DivisionBand, ...]
    fail_division: Optional[str]
    remarks: Mapping[str, str]
    pass_grades: FrozenSet[str]
    subsidiary_pass_grades: FrozenSet[str]

    def __post_init__(self) -> None:
        object.__setattr__(self, "grade_bands", tuple((float(low), grade) for low, grade in self.grade_bands))
        object.__setattr__(self, "division_bands", tuple(self.division_bands))
        object.__setattr__(self, "points", MappingProxyType(dict(self.points)))
        object.__setattr__(self, "remarks", MappingProxyType(dict(self.remarks)))
        object.__setattr__(self, "pass_grades", frozenset(self.pass_grades))
        object.__setattr__(self, "subsidiary_pass_grades", frozenset(self.subsidiary_pass_grades))
        self._validate_grades()
        self._validate_divisions()

    def _validate_grades(self) -> None:
        if not self.grade_bands:
            raise ValidationError(f"{self.version}: at least one grade band is required")

        previous = None
        for low, grade in self.grade_bands:
            if not 0 <= low <= 100:
                raise ValidationError(f"{self.version}: grade {grade} threshold {low} is outside 0-100")
            if previous is not None and low >= previous:
                raise ValidationError(f"{self.version}: grade thresholds must be strictly descending")
            previous = low
        if self.grade_bands[-1][0] != 0:
            raise ValidationError(f"{self.version}: the last grade band must start at 0")

        grades = self.grades
        if len(set(grades)) != len(grades):
            raise ValidationError(f"{self.version}: duplicate grade letters")

        missing = [grade for grade in grades if grade not in self.points]
        if missing:
            raise ValidationError(f"{self.version}: no points defined for grades {', '.join(missing)}")
        extra = [grade for grade in self.points if grade not in grades]
        if extra:
            raise ValidationError(f"{self.version}: points defined for unknown grades {', '.join(extra)}")

        values = [self.points[grade] for grade in grades]
        if any(later <= earlier for earlier, later in zip(values, values[1:])):
            raise ValidationError(f"{self.version}: points must increase strictly from best to worst grade")

        for name, subset in (
            ("remarks", set(self.remarks)),
            ("pass grades", self.pass_grades),
            ("subsidiary pass grades", self.subsidiary_pass_grades),
        ):
            unknown = sorted(subset - set(grades))
            if unknown:
                raise ValidationError(f"{self.version}: {name} reference unknown grades {', '.join(unknown)}")

    def _validate_divisions(self) -> None:
        if not self.division_bands:
            raise ValidationError(f"{self.version}: at least one division band is required")

        if self.division_floor > self.division_bands[0].upper:
            raise ValidationError(
                f"{self.version}: division floor {self.division_floor} is above the first band ceiling"
            )

        ceilings = [band.upper for band in self.division_bands]
        if any(later <= earlier for earlier, later in zip(ceilings, ceilings[1:])):
            raise ValidationError(f"{self.version}: division bands overlap; ceilings must be strictly ascending")

        labels = [band.division for band in self.division_bands]
        if self.fail_division is not None:
            labels.append(self.fail_division)
        if NOT_AVAILABLE in labels:
            raise ValidationError(f"{self.version}: {NOT_AVAILABLE} is reserved for missing divisions")
        if len(set(labels)) != len(labels):
            raise ValidationError(f"{self.version}: duplicate division labels")

    @property
    def grades(self) -> Tuple[str, ...]:
        return tuple(grade for _, grade in self.grade_bands)

    @property
    def division_labels(self) -> Tuple[str, ...]:
        labels = [band.division for band in self.division_bands]
        if self.fail_division is not None:
            labels.append(self.fail_division)
        labels.append(NOT_AVAILABLE)
        return tuple(labels)

    def grade_for_percentage(self, percentage: float) -> str:
        for low, grade in self.grade_bands:
            if percentage >= low:
                return grade
        return self.grade_bands[-1][1]

    def division_for(self, value: Optional[float]) -> str:
        if value is None or value < self.division_floor:
            return NOT_AVAILABLE
        for band in self.division_bands:
            if value <= band.upper:
                return band.division
        return self.fail_division or NOT_AVAILABLE


O_LEVEL_SCHEME = GradingScheme(
    level=EducationLevel.O_LEVEL,
    version="csee-v1",
    grade_bands=(
        (80, "A"),
        (65, "B"),
        (50, "C"),
        (40, "D"),
        (0, "F"),
    ),
    points={"A": 1, "B": 2, "C": 3, "D": 4, "F": 5},
    division_floor=1,
    division_bands=(
        DivisionBand(1.4, "I"),
        DivisionBand(2.4, "II"),
        DivisionBand(3.4, "III"),
        DivisionBand(4.4, "IV"),
    ),
    fail_division="0",
    remarks={
        "A": "Excellent",
        "B": "Very Good",
        "C": "Good",
        "D": "Satisfactory",
        "F": "Fail",
    },
    pass_grades=frozenset({"A", "B", "C", "D"}),
    subsidiary_pass_grades=frozenset({"A", "B", "C", "D"}),
)

A_LEVEL_SCHEME = GradingScheme(
    level=EducationLevel.A_LEVEL,
    version="acsee-v1",
    grade_bands=(
        (80, "A"),
        (70, "B"),
        (60, "C"),
        (50, "D"),
        (40, "E"),
        (35, "S"),
        (0, "F"),
    ),
    points={"A": 1, "B": 2, "C": 3, "D": 4, "E": 5, "S": 6, "F": 7},
    # best three principals: 3 (three A's) to 21 (three F's)
    division_floor=3,
    division_bands=(
        DivisionBand(9, "I"),
        DivisionBand(12, "II"),
        DivisionBand(17, "III"),
        DivisionBand(19, "IV"),
        DivisionBand(21, "V"),
    ),
    fail_division=None,
    remarks={
        "A": "Excellent",
        "B": "Very Good",
        "C": "Good",
        "D": "Satisfactory",
        "E": "Pass",
        "S": "Subsidiary Pass",
        "F": "Fail",
    },
    pass_grades=frozenset({"A", "B", "C", "D", "E"}),
    subsidiary_pass_grades=frozenset({"A", "B", "C", "D", "E", "S"}),
)

SCHEMES_BY_LEVEL: Dict[EducationLevel, GradingScheme] = {
    EducationLevel.O_LEVEL: O_LEVEL_SCHEME,
    EducationLevel.A_LEVEL: A_LEVEL_SCHEME,
}


def scheme_for(level: EducationLevel | str) -> GradingScheme:
    try:
        return SCHEMES_BY_LEVEL[EducationLevel(level)]
    except (KeyError, ValueError) as exc:
        raise ValidationError(f"Unsupported education level: {level}") from exc
