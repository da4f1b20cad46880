import unittest

from schoolresults.core.errors import ValidationError
from schoolresults.core.schemes import A_LEVEL_SCHEME, O_LEVEL_SCHEME
from schoolresults.services.results_service import ResultsService


def principal(code, marks):
    return {"subjectCode": code, "marksObtained": marks, "isPrincipal": True}


def subsidiary(code, marks):
    return {"subjectCode": code, "marksObtained": marks}


class ResultsServiceTests(unittest.TestCase):
    def setUp(self):
        self.service = ResultsService()

    def test_from_settings(self):
        service = ResultsService.from_settings()
        self.assertGreaterEqual(service.best_principal_count, 1)

    def test_invalid_configuration(self):
        with self.assertRaises(ValidationError):
            ResultsService(best_principal_count=0)
        with self.assertRaises(ValidationError):
            ResultsService(round_to=-1)

    def test_grade_subject(self):
        graded = self.service.grade_subject({"subjectCode": "PHY", "marksObtained": 30, "maxMarks": 40}, A_LEVEL_SCHEME)
        self.assertEqual((graded.grade, graded.points), ("B", 2))

    def test_student_report(self):
        summary = self.service.student_report(
            "F6-001",
            [
                principal("PHY", 78),
                principal("CHE", 65),
                principal("MAT", 72),
                subsidiary("GS", 68),
                subsidiary("BAM", 55),
            ],
            A_LEVEL_SCHEME,
        )
        self.assertEqual(summary.student_id, "F6-001")
        self.assertEqual(summary.best_principal_points, 7)
        self.assertEqual(summary.division, "I")
        self.assertAlmostEqual(summary.average_marks, 67.6)

    def test_student_report_rejects_bad_marks(self):
        with self.assertRaises(ValidationError):
            self.service.student_report("F6-001", [principal("PHY", 178)], A_LEVEL_SCHEME)

    def test_class_report(self):
        students = [
            {"studentId": "F6-003", "results": [principal("PHY", 55), principal("CHE", 52), principal("MAT", 41)]},
            {"studentId": "F6-001", "results": [principal("PHY", 81), principal("CHE", 75), principal("MAT", 70)]},
            {"studentId": "F6-002", "results": [principal("PHY", 85), principal("CHE", 72), principal("MAT", None)]},
        ]
        with self.assertLogs("schoolresults.services.results_service", level="INFO"):
            report = self.service.class_report(students, A_LEVEL_SCHEME)

        self.assertEqual(report.scheme_version, "acsee-v1")
        self.assertEqual(
            [(s.student_id, s.rank, s.division) for s in report.students],
            [("F6-001", 1, "I"), ("F6-003", 2, "III"), ("F6-002", 3, "N/A")],
        )
        self.assertEqual(report.divisions, {"I": 1, "II": 0, "III": 1, "IV": 0, "V": 0, "N/A": 1})
        self.assertEqual(list(report.subjects), ["CHE", "MAT", "PHY"])

        physics = report.subjects["PHY"]
        self.assertEqual(physics.positions, {"F6-001": 2, "F6-003": 3, "F6-002": 1})
        self.assertEqual(physics.statistics.count, 3)
        self.assertEqual(physics.grades["A"], 2)

        maths = report.subjects["MAT"]
        self.assertIsNone(maths.positions["F6-002"])
        self.assertEqual(maths.statistics.count, 2)

        self.assertEqual(report.student("F6-002").rank, 3)
        with self.assertRaises(KeyError):
            report.student("F6-999")

    def test_class_report_o_level(self):
        students = [
            {"studentId": "F4-1", "results": [subsidiary("ENG", 66), subsidiary("MAT", 81)]},
            {"studentId": "F4-2", "results": [subsidiary("ENG", 81), subsidiary("MAT", 66)]},
        ]
        report = self.service.class_report(students, O_LEVEL_SCHEME)
        self.assertEqual([s.rank for s in report.students], [1, 1])
        self.assertEqual(report.divisions["II"], 2)

    def test_class_report_rejects_invalid_student(self):
        with self.assertRaises(ValidationError):
            self.service.class_report([{"results": []}], O_LEVEL_SCHEME)


if __name__ == "__main__":
    unittest.main()
