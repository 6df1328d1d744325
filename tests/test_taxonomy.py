import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_match.taxonomy import skill_key  # noqa: E402
from resume_match.taxonomy.local_taxonomy import LocalTaxonomy  # noqa: E402


class TaxonomyTests(unittest.TestCase):
    def test_synonym_normalization_resolves_canonical_id(self):
        taxonomy = LocalTaxonomy()
        normalized, canonical_id = taxonomy.normalize_skill("Client Management")
        self.assertEqual(normalized, "client management")
        self.assertEqual(canonical_id, "skill_stakeholder_mgmt")

    def test_aliases_share_a_key(self):
        self.assertEqual(skill_key("React.js"), skill_key("react"))
        self.assertEqual(skill_key("  Node.JS "), skill_key("node"))

    def test_separator_variants_fold_to_known_alias(self):
        self.assertEqual(skill_key("Node-JS"), "skill_nodejs")
        self.assertEqual(skill_key("React_JS"), "skill_react")

    def test_unknown_skill_keys_on_folded_text(self):
        self.assertEqual(skill_key("  Apache   Airflow "), "apache airflow")


if __name__ == "__main__":
    unittest.main()
