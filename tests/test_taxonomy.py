import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_core.taxonomy import LocalTaxonomy, get_default_taxonomy_provider  # noqa: E402


class TaxonomyTests(unittest.TestCase):
    def test_bundled_categories_group_database_skills(self):
        taxonomy = LocalTaxonomy()
        self.assertEqual(taxonomy.category_for("MySQL"), "database")
        self.assertEqual(taxonomy.category_for(" sql "), "database")
        self.assertEqual(taxonomy.category_for("Database"), "database")
        self.assertIsNone(taxonomy.category_for("Python"))
        self.assertIn("postgresql", taxonomy.members("DATABASE"))
        self.assertEqual(taxonomy.members("cloud"), ())

    def test_injected_categories_replace_bundled_file(self):
        taxonomy = LocalTaxonomy(categories={"Cloud": ["AWS", "GCP"]})
        self.assertEqual(taxonomy.category_for("gcp"), "cloud")
        self.assertIsNone(taxonomy.category_for("mysql"))
        self.assertEqual(taxonomy.members("cloud"), ("aws", "gcp"))

    def test_default_provider_is_cached(self):
        self.assertIs(get_default_taxonomy_provider(), get_default_taxonomy_provider())


if __name__ == "__main__":
    unittest.main()
