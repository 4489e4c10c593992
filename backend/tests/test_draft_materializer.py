import unittest

from tourdesk.editor.drafts import UNTITLED_DRAFT, DraftMaterializer
from tourdesk.editor.form_state import FormState
from tourdesk.gateway.base import GatewayError
from fakes import FakeGateway


class DraftMaterializerTests(unittest.TestCase):
    def setUp(self):
        self.gateway = FakeGateway()
        self.form = FormState()
        self.materialized = []
        self.materializer = DraftMaterializer(
            self.gateway, self.form, on_materialized=self.materialized.append
        )

    def test_known_id_is_returned_without_creation(self):
        self.form.set_field("id", "tour-42")
        self.assertEqual(self.materializer.ensure_tour_id(), "tour-42")
        self.assertEqual(self.gateway.count("create_tour"), 0)
        self.assertEqual(self.materialized, [])

    def test_creates_once_per_session(self):
        self.form.set_field("title", "Backwater Cruise")

        first = self.materializer.ensure_tour_id()
        second = self.materializer.ensure_tour_id()

        self.assertEqual(first, second)
        self.assertEqual(self.gateway.count("create_tour"), 1)
        self.assertEqual(self.form.tour_id, first)
        self.assertEqual(self.materialized, [first])

    def test_placeholder_record(self):
        self.form.set_field("title", "Backwater Cruise")
        tour_id = self.materializer.ensure_tour_id()

        record = self.gateway.tours[tour_id]
        self.assertEqual(record["title"], "Backwater Cruise")
        self.assertTrue(record["slug"].startswith("backwater-cruise-"))
        self.assertEqual(record["display_order"], 999)
        self.assertTrue(record["is_published"])
        self.assertEqual(record["status"], "published")

    def test_placeholder_without_title(self):
        tour_id = self.materializer.ensure_tour_id()

        record = self.gateway.tours[tour_id]
        self.assertEqual(record["title"], UNTITLED_DRAFT)
        self.assertTrue(record["slug"].startswith("draft-"))

    def test_failure_returns_none_and_is_not_retried(self):
        self.gateway.failures["create_tour"] = GatewayError("insert failed", 500)

        with self.assertLogs("tourdesk.editor.drafts", level="WARNING"):
            self.assertIsNone(self.materializer.ensure_tour_id())
        self.assertIsNone(self.materializer.ensure_tour_id())

        self.assertEqual(self.gateway.count("create_tour"), 1)
        self.assertEqual(self.materialized, [])


if __name__ == "__main__":
    unittest.main()
