import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_core.services import build_document, build_supplementary_profile  # noqa: E402

RESUME = "Jane Doe\nSummary\nBackend engineer.\nSkills\nPython, Go, Cobol\n"


def _section_texts(document, fragment):
    section = next(s for s in document.sections if fragment in s.heading.lower())
    return [entry.text for entry in section.entries()]


class SupplementaryProfileTests(unittest.TestCase):
    def test_records_are_coerced_to_entities(self):
        profile = build_supplementary_profile(
            profile_experience=[
                {"title": "Engineer", "company": "Acme", "startDate": "Jan 2020", "endDate": "Present"},
                {"title": "Intern"},
            ],
            profile_certifications=[
                {"name": "CKA", "issuer": "CNCF", "credentialUrl": "credly.com/badges/1"},
            ],
            profile_education=["BSc Computer Science, MIT"],
            linkedin_profile_url="linkedin.com/in/jane",
        )
        self.assertEqual(profile.linkedin_profile_url, "linkedin.com/in/jane")
        self.assertEqual(len(profile.profile_experience), 1)
        self.assertEqual(profile.profile_experience[0].company, "Acme")
        self.assertEqual(profile.profile_certifications[0].provider, "CNCF")
        self.assertEqual(profile.profile_certifications[0].url, "https://credly.com/badges/1")
        self.assertEqual(profile.profile_education, ["BSc Computer Science, MIT"])
        self.assertEqual(profile.resume_experience, [])


class BuildDocumentTests(unittest.TestCase):
    def test_profile_fills_required_sections(self):
        profile = build_supplementary_profile(
            profile_experience=[
                {"title": "Engineer", "company": "Acme", "startDate": "Jan 2020", "endDate": "Present"},
            ],
            profile_education=["BSc Computer Science, MIT"],
            job_title="Staff Engineer",
            project="Built a parser. It scales well. Nobody reads this part.",
        )
        with self.assertLogs("resume_core.services.document_service", level="INFO") as captured:
            document = build_document(RESUME, job_skills="Python, Go", profile=profile)

        self.assertEqual(document.name, "Jane Doe")
        self.assertEqual(
            _section_texts(document, "experience"),
            ["Staff Engineer at Acme (Jan 2020 – Present)"],
        )
        self.assertEqual(_section_texts(document, "education"), ["BSc Computer Science, MIT"])
        self.assertEqual(_section_texts(document, "project"), ["Built a parser. It scales well."])
        skills = " ".join(_section_texts(document, "skill"))
        self.assertIn("Python", skills)
        self.assertNotIn("Cobol", skills)
        self.assertTrue(any("document_built" in line for line in captured.output))

    def test_skip_required_sections_keeps_resume_shape(self):
        document = build_document(RESUME, skip_required_sections=True)
        headings = [section.heading.lower() for section in document.sections]
        self.assertFalse(any("education" in heading for heading in headings))
        self.assertIn("Cobol", " ".join(_section_texts(document, "skill")))


if __name__ == "__main__":
    unittest.main()
