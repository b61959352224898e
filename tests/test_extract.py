import sys
import unittest
from datetime import date
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_core.extract import (  # noqa: E402
    certification_from_record,
    dedupe_contact_lines,
    extract_certifications,
    extract_contact_details,
    extract_education,
    extract_experience,
    extract_languages,
    filter_sensitive_contact_lines,
    parse_certification_line,
    parse_contact_line,
    parse_experience_line,
    parse_language_line,
    parse_resume_date,
    recency_sort_key,
    sort_by_recency,
)
from resume_core.schemas import ExperienceEntry  # noqa: E402

RESUME_TEXT = """Jane Doe
Experience
- Senior Engineer at Acme Corp (Jan 2020 - Present)
- Led migration to Kubernetes
  Mentored four engineers
- Engineer at Initech (2016 - 2019)
- Built billing system
Education
- BSc Computer Science
"""


class ExperienceExtractionTests(unittest.TestCase):
    def test_text_groups_responsibilities_under_jobs(self):
        entries = extract_experience(RESUME_TEXT)
        self.assertEqual(len(entries), 2)
        self.assertEqual(entries[0].title, "Senior Engineer")
        self.assertEqual(entries[0].company, "Acme Corp")
        self.assertEqual((entries[0].start_date, entries[0].end_date), ("Jan 2020", "Present"))
        self.assertEqual(entries[0].responsibilities, ["Led migration to Kubernetes", "Mentored four engineers"])
        self.assertEqual(entries[1].company, "Initech")
        self.assertEqual(entries[1].responsibilities, ["Built billing system"])

    def test_pipe_header_with_trailing_dates(self):
        entry = parse_experience_line("Engineer | Acme | Mar 2019 - Jun 2021")
        self.assertEqual(
            (entry.title, entry.company, entry.start_date, entry.end_date),
            ("Engineer", "Acme", "Mar 2019", "Jun 2021"),
        )

    def test_records_with_roles_are_flattened(self):
        records = [
            {
                "company": "Acme",
                "roles": [
                    {"title": "Lead", "startDate": "2020", "endDate": "2022"},
                    {"title": "Dev", "startDate": "2018", "endDate": "2020", "company": ""},
                ],
            },
            "Freelancer",
            {"title": "Intern"},
        ]
        entries = extract_experience(records)
        self.assertEqual([(e.title, e.company) for e in entries], [("Lead", "Acme"), ("Dev", "Acme")])
        self.assertEqual(entries[0].start_date, "2020")

    def test_sort_by_recency_puts_unparsable_last(self):
        entries = [
            ExperienceEntry(title="Old", start_date="2016", end_date="2019"),
            ExperienceEntry(title="Unknown", end_date="someday"),
            ExperienceEntry(title="Current", start_date="2020", end_date="Present"),
        ]
        self.assertEqual([e.title for e in sort_by_recency(entries)], ["Current", "Old", "Unknown"])

    def test_empty_sources(self):
        self.assertEqual(extract_experience(""), [])
        self.assertEqual(extract_experience(None), [])


class EducationAndCertificationTests(unittest.TestCase):
    def test_education_section_lines(self):
        text = "Jane\nEDUCATION\n- BSc CS, MIT\n- MSc AI\n\nSkills\n- Go"
        self.assertEqual(extract_education(text), ["BSc CS, MIT", "MSc AI"])
        self.assertEqual(extract_education(["BSc", "", None]), ["BSc"])

    def test_certification_line_forms(self):
        linked = parse_certification_line("AWS Certified Developer - Amazon https://www.credly.com/badges/abc")
        self.assertEqual(linked.name, "AWS Certified Developer")
        self.assertEqual(linked.provider, "Amazon")
        self.assertEqual(linked.url, "https://www.credly.com/badges/abc")

        paren = parse_certification_line("CKA (CNCF)")
        self.assertEqual((paren.name, paren.provider), ("CKA", "CNCF"))

        hyphenated = parse_certification_line("Google-Certified Pro")
        self.assertEqual((hyphenated.name, hyphenated.provider), ("Google-Certified Pro", ""))

    def test_certification_record_alternate_fields(self):
        entry = certification_from_record(
            {
                "certificateName": "CKA",
                "issuer": "CNCF",
                "credentialUrl": "credly.com/badges/9",
                "issueDate": "2023-01-01",
            }
        )
        self.assertEqual((entry.name, entry.provider, entry.date), ("CKA", "CNCF", "2023-01-01"))
        self.assertEqual(entry.url, "https://credly.com/badges/9")

        fallback = certification_from_record({"title": "Terraform", "notes": "https://www.credly.com/badges/7"})
        self.assertEqual(fallback.url, "https://www.credly.com/badges/7")

    def test_certification_text_collects_section_and_credly_lines(self):
        text = "\n".join(
            [
                "Jane",
                "Certifications",
                "- CKA (CNCF)",
                "- Terraform Associate - HashiCorp",
                "",
                "Projects",
                "https://www.credly.com/badges/xyz",
            ]
        )
        entries = extract_certifications(text)
        self.assertEqual(len(entries), 3)
        self.assertEqual((entries[1].name, entries[1].provider), ("Terraform Associate", "HashiCorp"))
        self.assertEqual(entries[2].url, "https://www.credly.com/badges/xyz")


class ContactExtractionTests(unittest.TestCase):
    def test_extracts_all_fields(self):
        text = "\n".join(
            [
                "Jane Doe",
                "Austin, TX",
                "Email: jane.doe@example.com",
                "Phone: +1 (512) 555-0142",
                "LinkedIn: linkedin.com/in/janedoe",
            ]
        )
        details = extract_contact_details(text)
        self.assertEqual(details.email, "jane.doe@example.com")
        self.assertEqual(details.phone, "+1 (512) 555-0142")
        self.assertEqual(details.linkedin, "https://linkedin.com/in/janedoe")
        self.assertEqual(details.city_state, "Austin, TX")
        self.assertEqual(
            details.contact_lines,
            [
                "Email: jane.doe@example.com",
                "Phone: +1 (512) 555-0142",
                "LinkedIn: https://linkedin.com/in/janedoe",
                "Location: Austin, TX",
            ],
        )

    def test_explicit_linkedin_overrides(self):
        details = extract_contact_details("linkedin.com/in/found", "https://www.linkedin.com/in/explicit")
        self.assertEqual(details.linkedin, "https://www.linkedin.com/in/explicit")

    def test_year_range_is_not_a_phone(self):
        self.assertEqual(extract_contact_details("Engineer 2019 - 2022").phone, "")

    def test_contact_line_helpers(self):
        self.assertEqual(parse_contact_line("• Email: a@b.co"), ("Email", "a@b.co"))
        self.assertEqual(parse_contact_line("https://x.com"), ("", "https://x.com"))
        self.assertIsNone(parse_contact_line(""))
        self.assertEqual(dedupe_contact_lines(["A", "a", "", None, "B"]), ["A", "B"])
        self.assertEqual(
            filter_sensitive_contact_lines(["Email: a@b.co", "LinkedIn: linkedin.com/in/x", "credly badge"]),
            ["Email: a@b.co"],
        )


class DateParsingTests(unittest.TestCase):
    def test_formats(self):
        self.assertEqual(parse_resume_date("Mar 2021"), date(2021, 3, 1))
        self.assertEqual(parse_resume_date("03/2021"), date(2021, 3, 1))
        self.assertEqual(parse_resume_date("2021-07"), date(2021, 7, 1))
        self.assertEqual(parse_resume_date("Present"), date.max)
        self.assertIsNone(parse_resume_date("someday"))
        self.assertIsNone(parse_resume_date("13/2020"))

    def test_year_zero_is_unparsable(self):
        self.assertIsNone(parse_resume_date("Jan 0000"))
        self.assertIsNone(parse_resume_date("1/0000"))
        self.assertIsNone(parse_resume_date("0000-01"))
        self.assertEqual(recency_sort_key("Jan 0000"), (1, 0))


class LanguageExtractionTests(unittest.TestCase):
    def test_language_line_forms(self):
        self.assertEqual(
            parse_language_line("English (Native)").model_dump(),
            {"language": "English", "proficiency": "Native"},
        )
        french = parse_language_line("French - B2")
        self.assertEqual((french.language, french.proficiency), ("French", "B2"))
        self.assertEqual(parse_language_line("Esperanto").proficiency, "")

    def test_section_text_stops_at_next_heading(self):
        text = "Jane\nLanguages\n- English (Native)\n- French - B2\nSkills\n- Go\n"
        entries = extract_languages(text)
        self.assertEqual([entry.language for entry in entries], ["English", "French"])

    def test_records_accept_alternate_keys(self):
        entries = extract_languages(
            [{"name": "Spanish", "level": "C1"}, {"language": "Hindi"}, "German: basic", {"foo": ""}]
        )
        self.assertEqual(
            [(entry.language, entry.proficiency) for entry in entries],
            [("Spanish", "C1"), ("Hindi", ""), ("German", "basic")],
        )


if __name__ == "__main__":
    unittest.main()
