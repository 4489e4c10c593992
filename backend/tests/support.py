"""
Shared setup for tests that run the Flask application on in-memory SQLite.
"""
import shutil
import tempfile
import unittest

from tourdesk import create_app
from tourdesk.extensions import db
from tourdesk.models.user import User


class AppTestCase(unittest.TestCase):
    admin_email = "admin@tourdesk.test"
    admin_password = "correct horse"

    def setUp(self):
        self.upload_dir = tempfile.mkdtemp()
        self.app = create_app("testing", {"UPLOAD_FOLDER": self.upload_dir})
        self.client = self.app.test_client()

        self.ctx = self.app.app_context()
        self.ctx.push()
        db.create_all()

        self.admin = self.make_user(self.admin_email, self.admin_password, "admin")
        self.admin_id = self.admin.id

    def tearDown(self):
        db.session.remove()
        db.drop_all()
        self.ctx.pop()
        shutil.rmtree(self.upload_dir, ignore_errors=True)

    def make_user(self, email, password, role="user", is_active=True):
        user = User()
        user.email = email
        user.role = role
        user.is_active = is_active
        user.set_password(password)
        db.session.add(user)
        db.session.commit()
        return user

    def login(self, email=None, password=None):
        return self.client.post("/api/v1/auth/login", json={
            "email": email or self.admin_email,
            "password": password or self.admin_password,
        })

    def auth_headers(self):
        token = self.login().get_json()["access_token"]
        return {"Authorization": f"Bearer {token}"}
