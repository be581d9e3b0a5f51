from django.contrib import admin
from django.utils.html import format_html

from .models import (
    Cart,
    CartItem,
    Category,
    Order,
    OrderItem,
    Product,
    ProductFavorite,
    ProductImage,
    ProductReview,
)


class ProductImageInline(admin.TabularInline):
    model = ProductImage
    extra = 1
    fields = ("image_url", "alt_text", "is_primary", "order", "image_preview")
    readonly_fields = ("image_preview",)

    def image_preview(self, obj):
        if obj.image_url:
            return format_html('<img src="{}" width="100" height="100" />', obj.image_url)
        return "No Image"

    image_preview.short_description = "Preview"


class ProductReviewInline(admin.TabularInline):
    model = ProductReview
    extra = 0
    fields = ("reviewer", "rating", "comment", "is_verified_purchase")
    readonly_fields = ("reviewer", "rating", "comment", "is_verified_purchase")


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ("name", "is_active", "product_count", "created_at")
    list_filter = ("is_active",)
    search_fields = ("name", "description")
    prepopulated_fields = {"slug": ("name",)}

    def product_count(self, obj):
        return obj.products.filter(status=Product.STATUS_ACTIVE).count()

    product_count.short_description = "Active Products"


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("name", "seller", "category", "price", "stock_quantity", "unit", "is_organic", "status")
    list_filter = ("status", "is_organic", "category")
    search_fields = ("name", "description", "origin", "seller__email")
    readonly_fields = ("id", "slug", "created_at", "updated_at", "view_count", "rating_average", "total_reviews")

    inlines = [ProductImageInline, ProductReviewInline]

    fieldsets = (
        ("Basic Information", {"fields": ("id", "name", "slug", "description")}),
        ("Seller & Category", {"fields": ("seller", "category")}),
        ("Pricing & Inventory", {"fields": ("price", "stock_quantity", "unit")}),
        ("Produce Details", {"fields": ("weight", "is_organic", "origin", "harvest_date")}),
        ("Status", {"fields": ("status",)}),
        (
            "Metrics",
            {"fields": ("view_count", "total_sales", "rating_average", "total_reviews"), "classes": ("collapse",)},
        ),
        ("Timestamps", {"fields": ("created_at", "updated_at"), "classes": ("collapse",)}),
    )

    actions = ["restore_products"]

    def get_queryset(self, request):
        return super().get_queryset(request).select_related("seller", "category")

    def restore_products(self, request, queryset):
        updated = queryset.update(status=Product.STATUS_ACTIVE)
        self.message_user(request, f"{updated} products restored.")

    restore_products.short_description = "Restore selected products"


@admin.register(ProductReview)
class ProductReviewAdmin(admin.ModelAdmin):
    list_display = ("product", "reviewer", "rating", "is_verified_purchase", "created_at")
    list_filter = ("rating", "is_verified_purchase")
    search_fields = ("product__name", "reviewer__email", "comment")
    readonly_fields = ("created_at", "updated_at")


@admin.register(ProductFavorite)
class ProductFavoriteAdmin(admin.ModelAdmin):
    list_display = ("user", "product", "created_at")
    search_fields = ("user__email", "product__name")
    readonly_fields = ("created_at",)


class CartItemInline(admin.TabularInline):
    model = CartItem
    extra = 0
    readonly_fields = ("product", "quantity", "added_at")


@admin.register(Cart)
class CartAdmin(admin.ModelAdmin):
    list_display = ("user", "created_at", "updated_at")
    search_fields = ("user__email",)
    inlines = [CartItemInline]


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    readonly_fields = ("product", "seller", "product_name", "quantity", "unit_price", "total_price")


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ("order_number", "buyer", "status", "payment_method", "total_amount", "created_at")
    list_filter = ("status", "payment_method", "created_at")
    search_fields = ("order_number", "buyer__email")
    readonly_fields = (
        "id",
        "order_number",
        "subtotal",
        "shipping_fee",
        "tax_amount",
        "total_amount",
        "created_at",
        "updated_at",
    )
    inlines = [OrderItemInline]

    def get_queryset(self, request):
        return super().get_queryset(request).select_related("buyer", "shipping_address")
