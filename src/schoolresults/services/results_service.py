import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional

from schoolresults.config.settings import settings
from schoolresults.core.aggregate import aggregate
from schoolresults.core.errors import ValidationError
from schoolresults.core.grades import evaluate_subject
from schoolresults.core.models import GradedSubject, StudentAggregate
from schoolresults.core.ranking import assign_ranks, subject_positions
from schoolresults.core.schemes import GradingScheme
from schoolresults.core.stats import ClassStatistics, class_statistics, division_summary, grade_distribution
from schoolresults.schemas import parse_student_results, parse_subject_result, parse_subject_results


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubjectSummary:
    subject_code: str
    statistics: ClassStatistics
    grades: Dict[str, int]
    positions: Dict[str, Optional[int]]


@dataclass(frozen=True)
class ClassReport:
    scheme_version: str
    students: List[StudentAggregate]
    divisions: Dict[str, int]
    subjects: Dict[str, SubjectSummary]

    def student(self, student_id: str) -> StudentAggregate:
        for aggregate in self.students:
            if aggregate.student_id == student_id:
                return aggregate
        raise KeyError(student_id)


class ResultsService:
    """Grades, aggregates and ranks results handed over by marks-entry and report collaborators."""

    def __init__(self, best_principal_count: int = 3, round_to: int = 2) -> None:
        if best_principal_count < 1:
            raise ValidationError("best_principal_count must be at least 1")
        if round_to < 0:
            raise ValidationError("round_to must not be negative")
        self.best_principal_count = best_principal_count
        self.round_to = round_to

    @classmethod
    def from_settings(cls) -> "ResultsService":
        return cls(
            best_principal_count=settings.best_principal_count,
            round_to=settings.round_to,
        )

    def grade_subject(self, payload: Any, scheme: GradingScheme) -> GradedSubject:
        return evaluate_subject(parse_subject_result(payload), scheme)

    def student_report(self, student_id: str, results: Iterable[Any], scheme: GradingScheme) -> StudentAggregate:
        summary = aggregate(
            parse_subject_results(results),
            scheme,
            self.best_principal_count,
            student_id=student_id,
            round_to=self.round_to,
        )
        logger.debug(
            "Aggregated %s (%s): total_points=%s best_principal_points=%s division=%s",
            student_id,
            scheme.version,
            summary.total_points,
            summary.best_principal_points,
            summary.division,
        )
        return summary

    def class_report(self, students: Iterable[Mapping[str, Any]], scheme: GradingScheme) -> ClassReport:
        """Aggregate and rank one cohort; the caller decides the class or form grouping."""
        aggregates = []
        for payload in students:
            parsed = parse_student_results(payload)
            aggregates.append(
                self.student_report(parsed.student_id, [item.to_result() for item in parsed.results], scheme)
            )

        ranked = assign_ranks(aggregates, scheme)

        by_subject: Dict[str, List[tuple]] = {}
        for student in ranked:
            for subject in student.subjects:
                by_subject.setdefault(subject.subject_code, []).append((student.student_id, subject))

        subjects = {}
        for code in sorted(by_subject):
            entries = by_subject[code]
            subjects[code] = SubjectSummary(
                subject_code=code,
                statistics=class_statistics((s.marks_obtained for _, s in entries), round_to=self.round_to),
                grades=grade_distribution((s for _, s in entries), scheme),
                positions=subject_positions((student_id, s.marks_obtained) for student_id, s in entries),
            )

        report = ClassReport(
            scheme_version=scheme.version,
            students=ranked,
            divisions=division_summary(ranked, scheme),
            subjects=subjects,
        )
        logger.info(
            "Class report (%s): %d students, %d subjects, divisions=%s",
            scheme.version,
            len(ranked),
            len(subjects),
            report.divisions,
        )
        return report
