import unittest

from schoolresults.core.errors import ValidationError
from schoolresults.core.models import EducationLevel, SubjectResult
from schoolresults.schemas import parse_student_results, parse_subject_result, parse_subject_results


class SubjectResultPayloadTests(unittest.TestCase):
    def test_camel_case_payload(self):
        result = parse_subject_result(
            {"subjectCode": "PHY", "marksObtained": 78, "maxMarks": 100, "isPrincipal": True, "level": "A_LEVEL"}
        )
        self.assertEqual(result, SubjectResult("PHY", 78, 100, True, EducationLevel.A_LEVEL))

    def test_snake_case_payload_with_defaults(self):
        result = parse_subject_result({"subject_code": "ENG", "marks_obtained": None})
        self.assertIsNone(result.marks_obtained)
        self.assertEqual(result.max_marks, 100)
        self.assertFalse(result.is_principal)

    def test_result_passthrough(self):
        result = SubjectResult("ENG", 50)
        self.assertIs(parse_subject_result(result), result)

    def test_marks_above_max(self):
        with self.assertRaises(ValidationError):
            parse_subject_result({"subjectCode": "ENG", "marksObtained": 55, "maxMarks": 50})

    def test_non_finite_numbers(self):
        with self.assertRaises(ValidationError):
            parse_subject_result({"subjectCode": "ENG", "marksObtained": 40, "maxMarks": float("nan")})
        with self.assertRaises(ValidationError):
            parse_subject_result({"subjectCode": "ENG", "marksObtained": float("inf"), "maxMarks": float("inf")})

    def test_negative_marks(self):
        with self.assertRaises(ValidationError):
            parse_subject_result({"subjectCode": "ENG", "marksObtained": -3})

    def test_missing_subject_code(self):
        with self.assertRaises(ValidationError):
            parse_subject_result({"marksObtained": 40})

    def test_unknown_level(self):
        with self.assertRaises(ValidationError):
            parse_subject_result({"subjectCode": "ENG", "marksObtained": 40, "level": "PRIMARY"})

    def test_many(self):
        results = parse_subject_results([{"subjectCode": "ENG", "marksObtained": 40}, SubjectResult("MAT", 60)])
        self.assertEqual([r.subject_code for r in results], ["ENG", "MAT"])


class StudentResultsPayloadTests(unittest.TestCase):
    def test_student_payload(self):
        parsed = parse_student_results(
            {"studentId": "F5-001", "results": [{"subjectCode": "PHY", "marksObtained": 70, "isPrincipal": True}]}
        )
        self.assertEqual(parsed.student_id, "F5-001")
        self.assertTrue(parsed.results[0].to_result().is_principal)

    def test_missing_student_id(self):
        with self.assertRaises(ValidationError):
            parse_student_results({"results": []})


if __name__ == "__main__":
    unittest.main()
