import unittest

from rest_framework import status

from apps.users.views import MeView, RegisterView


class DummyRequest:
    def __init__(self, data=None, user=None, *, method="GET"):
        self.data = data or {}
        self.user = user
        self.method = method
        self.query_params = {}


class StubUserService:
    def __init__(self):
        self.register_result = (self._profile(1), None)
        self.profile = self._profile(1)
        self.last_register_payload = None
        self.last_update = None

    @staticmethod
    def _profile(user_id):
        return {
            "id": user_id,
            "username": "joana",
            "email": "joana@apm.ao",
            "first_name": "",
            "last_name": "",
            "name": "joana",
            "phone": "",
            "location": "",
            "role": "USER",
            "is_privileged": False,
            "date_joined": None,
        }

    def register(self, data):
        self.last_register_payload = data
        return self.register_result

    def get_profile(self, user_id):
        return self.profile

    def update_profile(self, user_id, data):
        self.last_update = (user_id, data)
        if self.profile is None:
            return None
        return {**self.profile, **data}


class UserViewsUnitTests(unittest.TestCase):
    def setUp(self):
        self.service = StubUserService()

    def dispatch(self, request, view_cls, *, method="get", **kwargs):
        view = view_cls()
        view.service = self.service
        return getattr(view, method)(request, **kwargs)

    @staticmethod
    def _user(user_id=1):
        return type("User", (), {"id": user_id, "is_authenticated": True})()

    def test_register_success_maps_camel_case_fields(self):
        request = DummyRequest(
            {
                "username": "joana",
                "email": "joana@apm.ao",
                "password": "segredo1",
                "firstName": "Joana",
            },
            method="POST",
        )
        response = self.dispatch(request, RegisterView, method="post")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        payload = self.service.last_register_payload
        self.assertEqual(payload["first_name"], "Joana")
        self.assertEqual(payload["role"], "USER")
        self.assertNotIn("password", response.data)

    def test_register_rejects_admin_role(self):
        request = DummyRequest(
            {
                "username": "x",
                "email": "x@apm.ao",
                "password": "segredo1",
                "role": "ADMIN",
            },
            method="POST",
        )
        response = self.dispatch(request, RegisterView, method="post")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("role", response.data["error"]["details"])
        self.assertIsNone(self.service.last_register_payload)

    def test_register_surfaces_service_error(self):
        self.service.register_result = (
            None,
            ("VALIDATION_ERROR", "Unique constraint violated", {"email": "taken"}),
        )
        request = DummyRequest(
            {"username": "x", "email": "x@apm.ao", "password": "segredo1"},
            method="POST",
        )
        response = self.dispatch(request, RegisterView, method="post")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"]["details"], {"email": "taken"})

    def test_me_returns_profile(self):
        response = self.dispatch(DummyRequest(user=self._user()), MeView)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["username"], "joana")
        self.assertFalse(response.data["isPrivileged"])

    def test_me_missing_profile_is_404(self):
        self.service.profile = None
        response = self.dispatch(DummyRequest(user=self._user()), MeView)
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_me_patch_updates_profile(self):
        request = DummyRequest({"location": "Benguela"}, user=self._user(3), method="PATCH")
        response = self.dispatch(request, MeView, method="patch")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(self.service.last_update, (3, {"location": "Benguela"}))
        self.assertEqual(response.data["location"], "Benguela")
