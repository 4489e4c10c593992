import io

from tourdesk.extensions import db
from tourdesk.models.audit_log import AuditLog
from tourdesk.models.tour_image import TourImage
from tourdesk.models.tour_section import TourSection
from support import AppTestCase


class TourApiTests(AppTestCase):
    def setUp(self):
        super().setUp()
        self.headers = self.auth_headers()

    def create(self, **fields):
        payload = {"title": "Taj Tour", "slug": "taj-tour", **fields}
        response = self.client.post("/api/v1/tours", json=payload, headers=self.headers)
        self.assertEqual(response.status_code, 201, response.get_json())
        return response.get_json()["id"]

    def fetch(self, tour_id):
        return self.client.get(f"/api/v1/tours/{tour_id}", headers=self.headers).get_json()

    def test_create_defaults_to_draft(self):
        tour = self.fetch(self.create())
        self.assertEqual(tour["status"], "draft")
        self.assertFalse(tour["is_published"])
        self.assertEqual(tour["display_order"], 999)
        self.assertEqual(tour["created_by"], self.admin_id)

    def test_create_requires_title_and_slug(self):
        response = self.client.post("/api/v1/tours", json={"title": "No slug"}, headers=self.headers)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json()["error"], "InvariantViolation")

    def test_duplicate_slug_conflicts(self):
        self.create()
        response = self.client.post(
            "/api/v1/tours", json={"title": "Other", "slug": "taj-tour"}, headers=self.headers
        )
        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.get_json()["message"], "Slug is already in use")

    def test_update_publishes_and_validates(self):
        tour_id = self.create()

        response = self.client.patch(
            f"/api/v1/tours/{tour_id}",
            json={
                "is_published": True,
                "status": "published",
                "rating": "4.5",
                "price": "",
                "itinerary": [{"day": 1, "title": "Agra", "description": ""}],
            },
            headers=self.headers,
        )
        self.assertEqual(response.status_code, 200)

        tour = self.fetch(tour_id)
        self.assertEqual(tour["status"], "published")
        self.assertEqual(tour["rating"], 4.5)
        self.assertIsNone(tour["price"])

    def test_update_rejects_bad_values(self):
        tour_id = self.create()
        for payload in (
            {"rating": 5.1},
            {"title": ""},
            {"itinerary": [{"day": 2, "title": "Gap"}]},
            {"image_gallery_urls": [{"url": "a.jpg", "order": 1, "crop": {"x": -1, "y": 0, "width": 1, "height": 1}}]},
        ):
            response = self.client.patch(f"/api/v1/tours/{tour_id}", json=payload, headers=self.headers)
            self.assertEqual(response.status_code, 400, payload)

    def test_published_tour_cannot_return_to_draft(self):
        tour_id = self.create(status="published")
        response = self.client.patch(
            f"/api/v1/tours/{tour_id}", json={"status": "draft"}, headers=self.headers
        )
        self.assertEqual(response.status_code, 400)

    def test_autosave_ignores_fields_outside_subset(self):
        tour_id = self.create(description="Long text")

        response = self.client.patch(
            f"/api/v1/tours/{tour_id}/autosave",
            json={"title": "Taj at dawn", "description": "ignored", "status": "archived"},
            headers=self.headers,
        )
        self.assertEqual(response.status_code, 200)

        tour = self.fetch(tour_id)
        self.assertEqual(tour["title"], "Taj at dawn")
        self.assertEqual(tour["description"], "Long text")
        self.assertEqual(tour["status"], "draft")

        actions = [log.action for log in AuditLog.query.all()]
        self.assertIn("tour.autosave", actions)

    def test_missing_tour_is_404(self):
        response = self.client.get("/api/v1/tours/nope", headers=self.headers)
        self.assertEqual(response.status_code, 404)

    def test_slug_rpc_excludes_own_tour(self):
        tour_id = self.create()
        url = "/api/v1/rpc/check_tour_slug_available"

        own = self.client.post(url, json={"p_slug": "taj-tour", "p_tour_id": tour_id}, headers=self.headers)
        other = self.client.post(url, json={"p_slug": "taj-tour", "p_tour_id": None}, headers=self.headers)
        free = self.client.post(url, json={"p_slug": "goa", "p_tour_id": None}, headers=self.headers)

        self.assertTrue(own.get_json()["available"])
        self.assertFalse(other.get_json()["available"])
        self.assertTrue(free.get_json()["available"])

    def test_gallery_replace_keeps_overview_row(self):
        tour_id = self.create()
        base = f"/api/v1/tours/{tour_id}/images"

        self.client.put(f"{base}/overview", json={"image_url": "http://x/main.jpg"}, headers=self.headers)
        response = self.client.put(base, json={
            "sections": ["gallery", "itinerary"],
            "images": [
                {"image_url": "http://x/1.jpg", "section": "gallery"},
                {"image_url": "http://x/2.jpg", "section": "gallery"},
            ],
        }, headers=self.headers)
        self.assertEqual(response.status_code, 200)

        # Replacing again must not duplicate rows
        self.client.put(base, json={
            "sections": ["gallery", "itinerary"],
            "images": [{"image_url": "http://x/2.jpg", "section": "gallery"}],
        }, headers=self.headers)

        rows = self.client.get(base, headers=self.headers).get_json()
        by_section = {}
        for row in rows:
            by_section.setdefault(row["section"], []).append(row)

        self.assertEqual(len(by_section["overview"]), 1)
        self.assertEqual([r["image_url"] for r in by_section["gallery"]], ["http://x/2.jpg"])
        self.assertEqual(by_section["gallery"][0]["display_order"], 1)

    def test_overview_image_upsert_and_clear(self):
        tour_id = self.create()
        url = f"/api/v1/tours/{tour_id}/images/overview"

        self.client.put(url, json={"image_url": "http://x/a.jpg"}, headers=self.headers)
        self.client.put(url, json={"image_url": "http://x/b.jpg"}, headers=self.headers)
        rows = TourImage.query.filter_by(tour_id=tour_id, section="overview").all()
        self.assertEqual([r.image_url for r in rows], ["http://x/b.jpg"])

        self.client.put(url, json={"image_url": None}, headers=self.headers)
        self.assertEqual(TourImage.query.filter_by(tour_id=tour_id).count(), 0)

    def test_sections_replace_by_type(self):
        tour_id = self.create()
        url = f"/api/v1/tours/{tour_id}/sections"

        sections = [
            {"type": "overview", "content": {"html": "<p>a</p>"}},
            {"type": "itinerary", "content": {"days": []}},
        ]
        self.client.put(url, json={"sections": sections}, headers=self.headers)
        response = self.client.put(url, json={"sections": sections}, headers=self.headers)

        self.assertEqual(response.status_code, 200)
        self.assertEqual(TourSection.query.filter_by(tour_id=tour_id).count(), 2)

    def test_delete_cascades(self):
        tour_id = self.create()
        self.client.put(
            f"/api/v1/tours/{tour_id}/images/overview",
            json={"image_url": "http://x/a.jpg"},
            headers=self.headers,
        )

        response = self.client.delete(f"/api/v1/tours/{tour_id}", headers=self.headers)

        self.assertEqual(response.status_code, 200)
        self.assertEqual(TourImage.query.count(), 0)
        self.assertEqual(self.client.get(f"/api/v1/tours/{tour_id}", headers=self.headers).status_code, 404)

    def test_list_tours_and_day_out_filter(self):
        self.create()
        self.create(title="Backwaters day out", slug="backwaters-day-out", is_day_out_package=True)

        everything = self.client.get("/api/v1/tours", headers=self.headers).get_json()
        day_outs = self.client.get(
            "/api/v1/tours?is_day_out_package=true&order=display_order", headers=self.headers
        ).get_json()

        self.assertEqual(len(everything["items"]), 2)
        self.assertIn("pagination", everything)
        self.assertEqual([t["slug"] for t in day_outs["items"]], ["backwaters-day-out"])


class StorageApiTests(AppTestCase):
    def setUp(self):
        super().setUp()
        self.headers = self.auth_headers()

    def upload(self, path, data=b"\x89PNG fake", content_type="image/png", bucket="tour-images"):
        return self.client.post(
            f"/api/v1/storage/{bucket}",
            data={"path": path, "file": (io.BytesIO(data), path.rsplit("/", 1)[-1], content_type)},
            headers=self.headers,
            content_type="multipart/form-data",
        )

    def test_upload_and_serve(self):
        response = self.upload("tour-1/abc.png")
        self.assertEqual(response.status_code, 201)

        body = response.get_json()
        self.assertEqual(body["path"], "tour-1/abc.png")
        self.assertEqual(body["public_url"], "http://media.test/media/tour-images/tour-1/abc.png")

        served = self.client.get("/media/tour-images/tour-1/abc.png")
        self.assertEqual(served.data, b"\x89PNG fake")
        served.close()

    def test_no_overwrite(self):
        self.upload("abc.png")
        self.assertEqual(self.upload("abc.png").status_code, 400)

    def test_rejections(self):
        self.assertEqual(self.upload("doc.pdf", content_type="application/pdf").status_code, 400)
        self.assertEqual(self.upload("a.png", bucket="private").status_code, 400)

        self.app.config["MAX_UPLOAD_BYTES"] = 4
        self.assertEqual(self.upload("big.png").status_code, 400)

    def test_delete_removes_files_under_tour_folder(self):
        response = self.client.post(
            "/api/v1/tours", json={"title": "Taj Tour", "slug": "taj-tour"}, headers=self.headers
        )
        tour_id = response.get_json()["id"]

        main = self.upload(f"{tour_id}/main.png").get_json()["public_url"]
        gallery = self.upload(f"{tour_id}/gallery.png").get_json()["public_url"]
        shared = self.upload("shared.png").get_json()["public_url"]

        self.client.patch(f"/api/v1/tours/{tour_id}", json={
            "featured_image_url": main,
            "image_gallery_urls": [
                {"url": gallery, "order": 1},
                {"url": shared, "order": 2},
            ],
        }, headers=self.headers)

        response = self.client.delete(f"/api/v1/tours/{tour_id}", headers=self.headers)
        self.assertEqual(response.status_code, 200)

        self.assertEqual(self.client.get(f"/media/tour-images/{tour_id}/main.png").status_code, 404)
        self.assertEqual(self.client.get(f"/media/tour-images/{tour_id}/gallery.png").status_code, 404)

        kept = self.client.get("/media/tour-images/shared.png")
        self.assertEqual(kept.status_code, 200)
        kept.close()
