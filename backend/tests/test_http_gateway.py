import unittest
from unittest import mock

import requests

from tourdesk.gateway.base import GatewayError
from tourdesk.gateway.http import HttpGateway


def make_response(status_code=200, payload=None, text=""):
    response = mock.Mock(spec=requests.Response)
    response.status_code = status_code
    response.ok = status_code < 400
    if payload is None:
        response.content = text.encode()
        response.text = text
        response.json.side_effect = ValueError("no json")
    else:
        response.content = b"{}"
        response.json.return_value = payload
    return response


class HttpGatewayTests(unittest.TestCase):
    def setUp(self):
        self.session = mock.Mock(spec=requests.Session)
        self.session.headers = {}
        self.gateway = HttpGateway(
            "http://admin.test/api/v1", timeout=5, session=self.session
        )

    def test_every_call_has_a_timeout(self):
        self.session.request.return_value = make_response(payload={"id": "t1"})

        self.gateway.get_tour("t1")

        self.session.request.assert_called_once_with(
            "GET", "http://admin.test/api/v1/tours/t1", timeout=5
        )

    def test_slug_rpc(self):
        self.session.request.return_value = make_response(payload={"available": False})

        self.assertFalse(self.gateway.check_slug_available("taj-tour", "t2"))
        self.session.request.assert_called_once_with(
            "POST",
            "http://admin.test/api/v1/rpc/check_tour_slug_available",
            timeout=5,
            json={"p_slug": "taj-tour", "p_tour_id": "t2"},
        )

    def test_autosave_route(self):
        self.session.request.return_value = make_response(payload={"id": "t1"})

        self.assertEqual(self.gateway.autosave_tour("t1", {"title": "x"}), "t1")
        method, url = self.session.request.call_args.args
        self.assertEqual((method, url), ("PATCH", "http://admin.test/api/v1/tours/t1/autosave"))

    def test_server_error_message_is_kept(self):
        self.session.request.return_value = make_response(
            409, {"error": "SlugConflict", "message": "Slug is already in use"}
        )

        with self.assertRaises(GatewayError) as ctx:
            self.gateway.create_tour({"title": "Taj", "slug": "taj"})

        self.assertEqual(ctx.exception.message, "Slug is already in use")
        self.assertEqual(ctx.exception.status_code, 409)

    def test_non_json_error(self):
        self.session.request.return_value = make_response(502, text="Bad gateway")

        with self.assertRaises(GatewayError) as ctx:
            self.gateway.delete_tour("t1")
        self.assertEqual(ctx.exception.message, "Bad gateway")

    def test_transport_failure_is_wrapped(self):
        self.session.request.side_effect = requests.ConnectionError("refused")

        with self.assertLogs("tourdesk.gateway.http", level="WARNING"):
            with self.assertRaises(GatewayError) as ctx:
                self.gateway.list_categories()
        self.assertIsNone(ctx.exception.status_code)

    def test_sign_in_sets_bearer_token_and_sign_out_clears_it(self):
        self.session.request.return_value = make_response(payload={
            "access_token": "abc",
            "refresh_token": "def",
            "user": {"id": "u1", "email": "admin@tourdesk.test", "role": "admin"},
        })

        subject = self.gateway.sign_in("admin@tourdesk.test", "pw")

        self.assertEqual(subject.role, "admin")
        self.assertEqual(self.session.headers["Authorization"], "Bearer abc")
        self.assertEqual(self.gateway.current_subject(), subject)

        self.session.request.return_value = make_response(payload={"message": "Signed out"})
        self.gateway.sign_out()

        self.assertNotIn("Authorization", self.session.headers)
        self.assertIsNone(self.gateway.current_subject())

    def test_rejected_sign_in_keeps_session_anonymous(self):
        self.session.request.return_value = make_response(
            403, {"error": "Access denied. Admin privileges required."}
        )

        with self.assertRaises(GatewayError) as ctx:
            self.gateway.sign_in("user@tourdesk.test", "pw")

        self.assertEqual(ctx.exception.status_code, 403)
        self.assertNotIn("Authorization", self.session.headers)

    def test_upload_and_public_url(self):
        self.session.request.return_value = make_response(
            201, {"path": "t1/abc.png", "public_url": "https://cdn.test/tour-images/t1/abc.png"}
        )

        path = self.gateway.upload("tour-images", "t1/abc.png", b"data", "image/png")

        self.assertEqual(path, "t1/abc.png")
        kwargs = self.session.request.call_args.kwargs
        self.assertEqual(kwargs["files"], {"file": ("abc.png", b"data", "image/png")})
        self.assertEqual(kwargs["data"], {"path": "t1/abc.png"})
        self.assertEqual(
            self.gateway.public_url("tour-images", path),
            "https://cdn.test/tour-images/t1/abc.png",
        )
        self.assertEqual(
            self.gateway.public_url("tour-images", "other.png"),
            "http://admin.test/media/tour-images/other.png",
        )


if __name__ == "__main__":
    unittest.main()
