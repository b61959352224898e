import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_core.parsing.tokenizer import parse_line  # noqa: E402
from resume_core.parsing.urls import link_label, normalize_url  # noqa: E402


def _shape(tokens):
    return [(token.type, token.text, token.style) for token in tokens]


class LineTokenizerTests(unittest.TestCase):
    def test_bullet_with_italic_run(self):
        tokens = parse_line("- Led *platform* migration (2019-2022)")
        self.assertEqual(
            _shape(tokens),
            [
                ("bullet", None, None),
                ("paragraph", "Led ", None),
                ("paragraph", "platform", "italic"),
                ("paragraph", " migration (2019-2022)", None),
            ],
        )

    def test_bullet_with_bold_run(self):
        tokens = parse_line("- Led **platform** migration")
        self.assertEqual(tokens[2].text, "platform")
        self.assertEqual(tokens[2].style, "bold")

    def test_bare_linkedin_host_becomes_labelled_link(self):
        tokens = parse_line("linkedin.com/in/alex")
        self.assertEqual(len(tokens), 1)
        self.assertEqual(tokens[0].type, "link")
        self.assertEqual(tokens[0].text, "LinkedIn")
        self.assertEqual(tokens[0].href, "https://linkedin.com/in/alex")

    def test_bare_url_keeps_trailing_punctuation_as_text(self):
        tokens = parse_line("Find me at linkedin.com/in/alex.")
        self.assertEqual(
            [(token.type, token.text) for token in tokens],
            [("paragraph", "Find me at "), ("link", "LinkedIn"), ("paragraph", ".")],
        )

    def test_preserve_link_text_keeps_raw_url(self):
        tokens = parse_line("www.github.com/alex", preserve_link_text=True)
        self.assertEqual(tokens[0].text, "www.github.com/alex")
        self.assertEqual(tokens[0].href, "https://www.github.com/alex")

        labelled = parse_line("www.github.com/alex")
        self.assertEqual(labelled[0].text, "GitHub")

    def test_bracketed_link(self):
        tokens = parse_line("[My Site](https://example.com/me)")
        self.assertEqual(_shape(tokens), [("link", "My Site", None)])
        self.assertEqual(tokens[0].href, "https://example.com/me")

    def test_rejected_link_degrades_to_text(self):
        tokens = parse_line("[Portfolio](ftp-site)")
        self.assertEqual(_shape(tokens), [("paragraph", "[Portfolio](ftp-site)", None)])

    def test_pipe_line_is_job_header(self):
        tokens = parse_line("Senior Engineer | Acme Corp | 2020 - 2022")
        self.assertEqual(
            _shape(tokens),
            [
                ("paragraph", "Senior Engineer", "bold"),
                ("jobsep", None, None),
                ("paragraph", " ", None),
                ("paragraph", "Acme Corp", None),
                ("jobsep", None, None),
                ("paragraph", " ", None),
                ("paragraph", "2020 - 2022", None),
            ],
        )

    def test_tab_marker_becomes_structural_token(self):
        tokens = parse_line("Python\tGo")
        self.assertEqual([token.type for token in tokens], ["paragraph", "tab", "paragraph"])

    def test_plain_line_round_trips_without_stray_markers(self):
        text = "Managed a team of five engineers"
        self.assertEqual(_shape(parse_line(text)), [("paragraph", text, None)])
        self.assertEqual(_shape(parse_line("Shipped 5* releases")), [("paragraph", "Shipped 5 releases", None)])

    def test_continued_flag_marks_all_but_last_run(self):
        tokens = parse_line("- Led **platform** migration")
        self.assertEqual([token.continued for token in tokens], [True, True, True, False])

    def test_empty_line_yields_single_empty_paragraph(self):
        tokens = parse_line("")
        self.assertEqual(len(tokens), 1)
        self.assertEqual(tokens[0].type, "paragraph")
        self.assertEqual(tokens[0].text, "")


class UrlNormalizationTests(unittest.TestCase):
    def test_scheme_inference(self):
        self.assertEqual(normalize_url("//cdn.example.com/a"), "https://cdn.example.com/a")
        self.assertEqual(normalize_url("/badges/abc"), "https://www.credly.com/badges/abc")
        self.assertEqual(normalize_url("credly.com/users/alex"), "https://credly.com/users/alex")
        self.assertEqual(normalize_url("www.example.com"), "https://www.example.com")

    def test_punctuation_is_stripped(self):
        self.assertEqual(normalize_url("(https://example.com)."), "https://example.com")

    def test_unknown_bare_host_is_rejected(self):
        self.assertEqual(normalize_url("example.com"), "")
        self.assertEqual(normalize_url(""), "")

    def test_link_label_falls_back_to_href(self):
        self.assertEqual(link_label("https://www.linkedin.com/in/alex"), "LinkedIn")
        self.assertEqual(link_label("https://example.com"), "https://example.com")


if __name__ == "__main__":
    unittest.main()
