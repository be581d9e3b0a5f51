import uuid

from django.contrib.auth.models import AbstractUser
from django.db import models


class CustomUser(AbstractUser):
    ROLE_BUYER = "buyer"
    ROLE_SELLER = "seller"
    ROLE_BOTH = "both"
    ROLE_ADMIN = "admin"

    ROLE_CHOICES = [
        (ROLE_BUYER, "Buyer"),
        (ROLE_SELLER, "Seller"),
        (ROLE_BOTH, "Buyer & Seller"),
        (ROLE_ADMIN, "Admin"),
    ]

    SELLER_ROLES = (ROLE_SELLER, ROLE_BOTH)

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True)
    first_name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100)
    phone = models.CharField(max_length=20, unique=True, null=True, blank=True)
    date_joined = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    is_verified = models.BooleanField(default=False)
    profile_image = models.URLField(max_length=2000, blank=True)

    # Role system - simple field
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=ROLE_BUYER)

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = ["username"]

    class Meta:
        app_label = "authentication"

    def is_seller(self):
        """Check if user may act as a seller"""
        return self.role in self.SELLER_ROLES or self.is_admin()

    def is_admin(self):
        """Check if user is an admin"""
        return self.role == self.ROLE_ADMIN or self.is_superuser

    def can_sell_products(self):
        """Check if user can create and sell products"""
        return self.is_seller()

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}".strip()

    def __str__(self):
        return self.email
