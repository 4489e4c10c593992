import threading
import unittest

from tourdesk.editor.autosave import IDLE, SAVING, AutosaveScheduler, SaveGuard
from tourdesk.editor.dirty import DirtyTracker
from tourdesk.editor.form_state import FormState
from tourdesk.gateway.base import GatewayError
from fakes import FakeGateway


class SaveGuardTests(unittest.TestCase):
    def test_check_and_set(self):
        guard = SaveGuard()
        self.assertTrue(guard.acquire())
        self.assertTrue(guard.busy)
        self.assertFalse(guard.acquire())
        guard.release()
        self.assertFalse(guard.busy)


class AutosaveSchedulerTests(unittest.TestCase):
    def setUp(self):
        self.gateway = FakeGateway()
        self.tour_id = self.gateway.add_tour(title="Backwaters", slug="backwaters")

        self.form = FormState()
        self.form.load(self.gateway.tours[self.tour_id])
        self.tracker = DirtyTracker(self.form)
        self.guard = SaveGuard()
        self.scheduler = AutosaveScheduler(
            self.gateway, self.form, self.tracker, self.guard, interval=0.01
        )

    def test_clean_form_is_not_saved(self):
        self.assertFalse(self.scheduler.tick())
        self.assertEqual(self.gateway.count("autosave_tour"), 0)

    def test_dirty_form_saves_subset(self):
        self.form.set_field("title", "Backwaters of Kerala")

        self.assertTrue(self.scheduler.tick())

        _, tour_id, payload = self.gateway.calls[-1]
        self.assertEqual(tour_id, self.tour_id)
        self.assertEqual(payload["title"], "Backwaters of Kerala")
        self.assertNotIn("itinerary", payload)
        self.assertNotIn("description", payload)
        self.assertFalse(self.tracker.is_dirty())
        self.assertIsNotNone(self.scheduler.last_saved_at)
        self.assertEqual(self.scheduler.state, IDLE)

    def test_fields_outside_subset_stay_dirty(self):
        self.form.set_field("title", "Backwaters of Kerala")
        self.form.set_itinerary([{"day": 1, "title": "Arrival", "description": ""}])
        self.form.set_field("price", "1200")

        self.assertTrue(self.scheduler.tick())

        self.assertEqual(self.gateway.tours[self.tour_id]["title"], "Backwaters of Kerala")
        self.assertNotIn("itinerary", self.gateway.tours[self.tour_id])
        self.assertTrue(self.tracker.is_dirty())

        # Reverting the unsaved fields leaves nothing to save
        self.form.set_itinerary([])
        self.form.set_field("price", "")
        self.assertFalse(self.tracker.is_dirty())

    def test_blank_title_is_not_autosaved(self):
        self.form.set_field("title", "")
        self.form.set_field("location", "Alleppey")

        self.assertFalse(self.scheduler.tick())
        self.assertEqual(self.gateway.count("autosave_tour"), 0)
        self.assertTrue(self.tracker.is_dirty())

        self.form.set_field("title", "Backwaters")
        self.assertTrue(self.scheduler.tick())

    def test_no_tour_id_is_skipped(self):
        self.form.load(None)
        self.tracker.mark_saved()
        self.form.set_field("title", "Brand new")

        self.assertFalse(self.scheduler.tick())
        self.assertEqual(self.gateway.count("autosave_tour"), 0)

    def test_skipped_while_loading(self):
        self.form.set_field("title", "Changed")
        self.form.loading = True
        self.assertFalse(self.scheduler.tick())

    def test_skipped_while_another_save_runs(self):
        self.form.set_field("title", "Changed")
        self.guard.acquire()
        try:
            self.assertFalse(self.scheduler.tick())
        finally:
            self.guard.release()

        self.assertEqual(self.gateway.count("autosave_tour"), 0)
        self.assertTrue(self.tracker.is_dirty())

    def test_failure_keeps_form_dirty_for_retry(self):
        self.form.set_field("title", "Changed")
        self.gateway.failures["autosave_tour"] = GatewayError("timeout")

        with self.assertLogs("tourdesk.editor.autosave", level="WARNING"):
            self.assertFalse(self.scheduler.tick())
        self.assertTrue(self.tracker.is_dirty())
        self.assertFalse(self.guard.busy)

        del self.gateway.failures["autosave_tour"]
        self.assertTrue(self.scheduler.tick())
        self.assertFalse(self.tracker.is_dirty())

    def test_edit_during_save_stays_dirty(self):
        self.form.set_field("title", "First")

        def edit_while_saving(name):
            if name == "autosave_tour":
                self.assertEqual(self.scheduler.state, SAVING)
                self.form.set_field("location", "Kumarakom")

        self.gateway.on_call = edit_while_saving
        self.assertTrue(self.scheduler.tick())
        self.assertTrue(self.tracker.is_dirty())

    def test_background_loop_saves(self):
        saved = threading.Event()
        self.gateway.on_call = lambda name: saved.set() if name == "autosave_tour" else None
        self.form.set_field("title", "Changed")

        self.scheduler.start()
        try:
            self.assertTrue(saved.wait(2))
        finally:
            self.scheduler.stop()

        self.assertFalse(self.scheduler.running)


if __name__ == "__main__":
    unittest.main()
