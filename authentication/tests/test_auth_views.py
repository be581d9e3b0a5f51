from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient

from authentication.api.serializers.jwt_serializers import CustomRefreshToken
from authentication.models import SellerProfile
from marketplace.tests.factories import UserFactory

User = get_user_model()


class RegisterTests(TestCase):
    url = "/api/auth/register/"

    def setUp(self):
        self.client = APIClient()
        self.payload = {
            "email": "Grower@Example.com",
            "password": "pineapple1",
            "first_name": "Ana",
            "last_name": "Tan",
        }

    def test_register_buyer_returns_tokens(self):
        response = self.client.post(self.url, self.payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        data = response.data["data"]
        self.assertEqual(data["user"]["email"], "grower@example.com")
        self.assertEqual(data["user"]["role"], User.ROLE_BUYER)
        self.assertFalse(data["user"]["is_seller"])
        self.assertTrue(data["token"])
        self.assertTrue(data["refresh"])

    def test_register_seller_creates_profile(self):
        response = self.client.post(self.url, {**self.payload, "user_type": "seller"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        user = User.objects.get(email="grower@example.com")
        self.assertTrue(user.is_seller())
        self.assertTrue(SellerProfile.objects.filter(user=user).exists())

    def test_duplicate_email_is_a_conflict(self):
        UserFactory(email="grower@example.com")

        response = self.client.post(self.url, self.payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertFalse(response.data["success"])
        self.assertIn("email", response.data["errors"])

    def test_short_password(self):
        response = self.client.post(self.url, {**self.payload, "password": "abc"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("password", response.data["errors"])


class LoginTests(TestCase):
    url = "/api/auth/login/"

    def setUp(self):
        self.client = APIClient()
        self.user = UserFactory(email="buyer@example.com")

    def test_login(self):
        response = self.client.post(self.url, {"email": "buyer@example.com", "password": "defaultpassword"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["message"], "Login successful")
        self.assertEqual(response.data["data"]["user"]["id"], str(self.user.id))

    def test_wrong_password(self):
        response = self.client.post(self.url, {"email": "buyer@example.com", "password": "nope-nope"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.data["message"], "Invalid credentials")

    def test_unknown_email_looks_like_wrong_password(self):
        response = self.client.post(self.url, {"email": "ghost@example.com", "password": "whatever"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.data["message"], "Invalid credentials")

    def test_deactivated_account(self):
        self.user.is_active = False
        self.user.save()

        response = self.client.post(self.url, {"email": "buyer@example.com", "password": "defaultpassword"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)


class TokenAuthenticationTests(TestCase):
    url = "/api/auth/profile/"

    def setUp(self):
        self.client = APIClient()
        self.user = UserFactory()

    def authorize(self, user):
        token = CustomRefreshToken.for_user(user).access_token
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")

    def test_missing_token(self):
        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertFalse(response.data["success"])

    def test_garbage_token(self):
        self.client.credentials(HTTP_AUTHORIZATION="Bearer garbage")

        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_valid_token(self):
        self.authorize(self.user)

        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["data"]["user"]["email"], self.user.email)

    def test_token_of_deactivated_account(self):
        self.authorize(self.user)
        User.objects.filter(pk=self.user.pk).update(is_active=False)

        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_token_refresh(self):
        refresh = CustomRefreshToken.for_user(self.user)

        response = self.client.post("/api/auth/token/refresh/", {"refresh": str(refresh)}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data["data"]["token"])


class ProfileTests(TestCase):
    url = "/api/auth/profile/"

    def setUp(self):
        self.client = APIClient()
        self.user = UserFactory(first_name="Ana")
        self.client.force_authenticate(user=self.user)

    def test_update_profile(self):
        response = self.client.put(self.url, {"first_name": "Anita", "phone": "+60123456789"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.user.refresh_from_db()
        self.assertEqual(self.user.first_name, "Anita")
        self.assertEqual(self.user.phone, "+60123456789")

    def test_phone_taken_by_someone_else(self):
        UserFactory(phone="+60111111111")

        response = self.client.put(self.url, {"phone": "+60111111111"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
