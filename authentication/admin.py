from django.contrib import admin
from django.contrib.auth.admin import UserAdmin

from .models import Address, CustomUser, SellerProfile


@admin.register(CustomUser)
class CustomUserAdmin(UserAdmin):
    list_display = ("email", "first_name", "last_name", "role", "is_active", "is_verified", "date_joined")
    list_filter = ("role", "is_active", "is_verified", "is_staff")
    search_fields = ("email", "first_name", "last_name", "phone")
    ordering = ("-date_joined",)

    fieldsets = UserAdmin.fieldsets + (("Marketplace", {"fields": ("role", "phone", "is_verified", "profile_image")}),)


@admin.register(SellerProfile)
class SellerProfileAdmin(admin.ModelAdmin):
    list_display = ("business_name", "user", "total_products", "created_at")
    search_fields = ("business_name", "user__email")


@admin.register(Address)
class AddressAdmin(admin.ModelAdmin):
    list_display = ("user", "street_address", "city", "state", "postal_code", "is_default")
    list_filter = ("is_default", "country")
    search_fields = ("user__email", "street_address", "city", "postal_code")
