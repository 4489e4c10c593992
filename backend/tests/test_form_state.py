import unittest

from tourdesk.editor import form_state
from tourdesk.editor.form_state import FormState


class FormStateTests(unittest.TestCase):
    def test_load_normalizes_missing_fields(self):
        form = FormState()
        form.load({"id": "t1", "title": "Kerala", "overview": None})

        values = form.as_dict()
        self.assertEqual(values["id"], "t1")
        self.assertEqual(values["overview"], "")
        self.assertEqual(values["itinerary"], [])
        self.assertEqual(values["image_gallery_urls"], [])
        self.assertFalse(values["is_featured"])
        self.assertEqual(values["display_order"], 999)
        self.assertEqual(values["status"], "draft")

    def test_load_renumbers_collections(self):
        form = FormState()
        form.load({
            "itinerary": [{"day": 4, "title": "A"}, {"day": 9, "title": "B"}],
            "image_gallery_urls": [{"url": "a", "order": 3}],
        })

        self.assertEqual([d["day"] for d in form.get("itinerary")], [1, 2])
        self.assertEqual(form.get("image_gallery_urls")[0]["order"], 1)

    def test_load_without_record_gives_blank_form(self):
        form = FormState()
        form.set_field("title", "Old")
        form.load(None)
        self.assertEqual(form.get("title"), "")
        self.assertIsNone(form.tour_id)

    def test_unknown_field_raises(self):
        with self.assertRaises(KeyError):
            FormState().set_field("nope", 1)

    def test_as_dict_is_a_copy(self):
        form = FormState()
        form.set_itinerary([{"day": 1, "title": "A", "description": ""}])
        values = form.as_dict()
        values["itinerary"][0]["title"] = "changed"
        self.assertEqual(form.get("itinerary")[0]["title"], "A")


class ItineraryHelperTests(unittest.TestCase):
    def assertSequential(self, days):
        self.assertEqual([d["day"] for d in days], list(range(1, len(days) + 1)))

    def test_operations_keep_days_sequential(self):
        days = []
        days = form_state.add_day(days, "Arrival")
        days = form_state.add_day(days, "Cruise")
        days = form_state.add_day(days, "Departure")
        self.assertSequential(days)

        days = form_state.insert_day(days, 1, "Spice garden")
        self.assertSequential(days)
        self.assertEqual(days[1]["title"], "Spice garden")

        days = form_state.move_day(days, 0, 3)
        self.assertSequential(days)
        self.assertEqual(days[3]["title"], "Arrival")

        days = form_state.remove_day(days, 0)
        self.assertSequential(days)
        self.assertEqual(len(days), 3)

    def test_update_day_keeps_number(self):
        days = form_state.add_day([], "Arrival")
        days = form_state.update_day(days, 0, title="Arrival in Kochi", day=7)
        self.assertEqual(days, [{"day": 1, "title": "Arrival in Kochi", "description": ""}])

    def test_helpers_do_not_mutate_input(self):
        days = form_state.add_day([], "Arrival")
        form_state.remove_day(days, 0)
        self.assertEqual(len(days), 1)


class GalleryHelperTests(unittest.TestCase):
    def test_add_remove_move_keep_order_sequential(self):
        images = []
        for url in ("a.jpg", "b.jpg", "c.jpg"):
            images = form_state.add_image(images, url)
        self.assertEqual([i["order"] for i in images], [1, 2, 3])

        images = form_state.move_image(images, 2, -1)
        self.assertEqual([i["url"] for i in images], ["a.jpg", "c.jpg", "b.jpg"])
        self.assertEqual([i["order"] for i in images], [1, 2, 3])

        images = form_state.remove_image(images, 0)
        self.assertEqual([i["url"] for i in images], ["c.jpg", "b.jpg"])
        self.assertEqual([i["order"] for i in images], [1, 2])

    def test_move_out_of_range_is_noop(self):
        images = form_state.add_image([], "a.jpg")
        self.assertEqual(form_state.move_image(images, 0, -1), images)

    def test_set_crop(self):
        images = form_state.add_image([], "a.jpg")
        crop = {"x": 0, "y": 10, "width": 200, "height": 100, "aspect_ratio": 2.0}
        images = form_state.set_image_crop(images, 0, crop)
        self.assertEqual(images[0]["crop"], crop)


if __name__ == "__main__":
    unittest.main()
