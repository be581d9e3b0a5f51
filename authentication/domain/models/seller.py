from django.conf import settings
from django.db import models


class SellerProfile(models.Model):
    """Storefront details for users selling on the marketplace"""

    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="seller_profile")
    business_name = models.CharField(max_length=200)
    business_description = models.TextField(blank=True)
    total_products = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        app_label = "authentication"
        verbose_name = "Seller Profile"
        verbose_name_plural = "Seller Profiles"

    @staticmethod
    def default_business_name(user):
        return f"{user.first_name} {user.last_name}'s Store"

    def __str__(self):
        return self.business_name
