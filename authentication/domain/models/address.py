from django.conf import settings
from django.db import models


class Address(models.Model):
    DEFAULT_COUNTRY = "Malaysia"

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="addresses")
    street_address = models.CharField(max_length=255)
    city = models.CharField(max_length=100)
    state = models.CharField(max_length=100)
    postal_code = models.CharField(max_length=20)
    country = models.CharField(max_length=100, default=DEFAULT_COUNTRY)
    is_default = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        app_label = "authentication"
        ordering = ["-is_default", "-created_at"]
        verbose_name_plural = "Addresses"
        constraints = [
            models.UniqueConstraint(
                fields=["user"],
                condition=models.Q(is_default=True),
                name="unique_default_address_per_user",
            )
        ]

    @classmethod
    def placeholder_for(cls, user):
        """Unsaved default address used when a buyer checks out without one"""
        return cls(
            user=user,
            street_address="Default Address",
            city="City",
            state="State",
            postal_code="00000",
            country=cls.DEFAULT_COUNTRY,
            is_default=True,
        )

    def __str__(self):
        return f"{self.street_address}, {self.city}"
