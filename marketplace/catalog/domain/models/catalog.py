import uuid

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.utils.text import slugify

from .category import Category


class ProductQuerySet(models.QuerySet):
    def active(self):
        return self.filter(status=Product.STATUS_ACTIVE)

    def not_deleted(self):
        return self.exclude(status=Product.STATUS_DELETED)


class Product(models.Model):
    STATUS_ACTIVE = "active"
    STATUS_DELETED = "deleted"

    STATUS_CHOICES = [
        (STATUS_ACTIVE, "Active"),
        (STATUS_DELETED, "Deleted"),
    ]

    DEFAULT_UNIT = "piece"

    # Basic Information
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    slug = models.SlugField(unique=True, blank=True)
    description = models.TextField(blank=True)

    # Seller and Category
    seller = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.PROTECT, related_name="products")
    category = models.ForeignKey(Category, on_delete=models.SET_NULL, null=True, blank=True, related_name="products")

    # Pricing and Inventory
    price = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(0)])
    stock_quantity = models.PositiveIntegerField(default=0)
    unit = models.CharField(max_length=30, default=DEFAULT_UNIT)

    # Produce Details
    weight = models.DecimalField(max_digits=8, decimal_places=2, null=True, blank=True, help_text="Weight in kg")
    is_organic = models.BooleanField(default=False)
    origin = models.CharField(max_length=200, blank=True)
    harvest_date = models.DateField(null=True, blank=True)

    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_ACTIVE)

    # Derived from reviews, recomputed on every review write
    rating_average = models.DecimalField(max_digits=3, decimal_places=2, default=0)
    total_reviews = models.PositiveIntegerField(default=0)

    # Metrics
    total_sales = models.PositiveIntegerField(default=0)
    view_count = models.PositiveIntegerField(default=0)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = ProductQuerySet.as_manager()

    class Meta:
        ordering = ["-created_at"]
        app_label = "marketplace"
        indexes = [
            models.Index(fields=["status", "-created_at"], name="product_status_created_idx"),
            models.Index(fields=["seller", "status"], name="product_seller_status_idx"),
            models.Index(fields=["category", "status"], name="product_category_status_idx"),
            models.Index(fields=["status", "price"], name="product_status_price_idx"),
        ]

    @property
    def is_active(self):
        return self.status == self.STATUS_ACTIVE

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = slugify(f"{self.name}-{str(self.id)[:8]}")
        super().save(*args, **kwargs)

    def __str__(self):
        return self.name


class ProductImage(models.Model):
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name="images")
    image_url = models.URLField(max_length=2000)
    alt_text = models.CharField(max_length=200, blank=True)
    is_primary = models.BooleanField(default=False)
    order = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-is_primary", "order", "created_at"]
        app_label = "marketplace"

    def __str__(self):
        return f"Image for {self.product.name}"
