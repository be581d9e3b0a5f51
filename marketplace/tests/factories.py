import random
import uuid
from decimal import Decimal

import factory
from django.contrib.auth import get_user_model
from django.utils.text import slugify

from authentication.models import Address, SellerProfile
from marketplace.models import (
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

User = get_user_model()


class UserFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = User

    id = factory.LazyFunction(uuid.uuid4)
    username = factory.Sequence(lambda n: f"user_{n}")
    email = factory.Sequence(lambda n: f"user_{n}@example.com")
    first_name = factory.Faker("first_name")
    last_name = factory.Faker("last_name")
    password = factory.PostGenerationMethodCall("set_password", "defaultpassword")
    is_active = True
    role = User.ROLE_BUYER


class SellerFactory(UserFactory):
    role = User.ROLE_SELLER
    username = factory.Sequence(lambda n: f"seller_{n}")
    email = factory.Sequence(lambda n: f"seller_{n}@example.com")

    @factory.post_generation
    def seller_profile(self, create, extracted, **kwargs):
        if create:
            SellerProfile.objects.get_or_create(
                user=self, defaults={"business_name": SellerProfile.default_business_name(self)}
            )


class AdminFactory(UserFactory):
    role = User.ROLE_ADMIN
    is_superuser = True
    is_staff = True
    username = factory.Sequence(lambda n: f"admin_{n}")
    email = factory.Sequence(lambda n: f"admin_{n}@example.com")


class AddressFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Address

    user = factory.SubFactory(UserFactory)
    street_address = factory.Faker("street_address")
    city = factory.Faker("city")
    state = factory.Faker("state")
    postal_code = factory.Faker("postcode")
    country = Address.DEFAULT_COUNTRY
    is_default = False


class CategoryFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Category

    name = factory.Sequence(lambda n: f"Category {n}")
    slug = factory.LazyAttribute(lambda o: slugify(o.name))
    description = factory.Faker("text", max_nb_chars=200)
    is_active = True


class ProductFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Product

    id = factory.LazyFunction(uuid.uuid4)
    name = factory.Sequence(lambda n: f"Pineapple {n}")
    slug = factory.LazyAttribute(lambda o: slugify(f"{o.name}-{str(o.id)[:8]}"))
    description = factory.Faker("paragraph", nb_sentences=3)
    price = factory.LazyFunction(lambda: Decimal(f"{random.randint(3, 60)}.00"))
    stock_quantity = factory.Faker("random_int", min=10, max=100)
    unit = factory.Iterator(["piece", "kg", "box"])
    is_organic = False
    origin = factory.Faker("city")
    status = Product.STATUS_ACTIVE

    seller = factory.SubFactory(SellerFactory)
    category = factory.SubFactory(CategoryFactory)


class ProductOutOfStockFactory(ProductFactory):
    stock_quantity = 0


class ProductImageFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = ProductImage

    product = factory.SubFactory(ProductFactory)
    image_url = factory.Sequence(lambda n: f"https://cdn.example.com/products/{n}.jpg")
    alt_text = factory.Faker("sentence", nb_words=5)
    is_primary = False
    order = 0


class ProductReviewFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = ProductReview

    product = factory.SubFactory(ProductFactory)
    reviewer = factory.SubFactory(UserFactory)
    rating = factory.Faker("random_int", min=1, max=5)
    comment = factory.Faker("paragraph", nb_sentences=2)
    is_verified_purchase = False


class ProductFavoriteFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = ProductFavorite

    user = factory.SubFactory(UserFactory)
    product = factory.SubFactory(ProductFactory)


class CartFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Cart
        django_get_or_create = ("user",)

    user = factory.SubFactory(UserFactory)


class CartItemFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = CartItem

    cart = factory.SubFactory(CartFactory)
    product = factory.SubFactory(ProductFactory)
    quantity = factory.Faker("random_int", min=1, max=5)


class OrderFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Order

    order_number = factory.Sequence(lambda n: f"PM-TEST{n:05d}")
    buyer = factory.SubFactory(UserFactory)
    status = Order.STATUS_PENDING
    payment_method = "cash_on_delivery"
    subtotal = factory.LazyFunction(lambda: Decimal(f"{random.randint(50, 500)}.00"))
    shipping_fee = Decimal("50.00")
    tax_amount = factory.LazyAttribute(lambda o: (o.subtotal * Decimal("0.12")).quantize(Decimal("0.01")))
    total_amount = factory.LazyAttribute(lambda o: o.subtotal + o.shipping_fee + o.tax_amount)
    shipping_address = factory.SubFactory(AddressFactory, user=factory.SelfAttribute("..buyer"))
    notes = ""


class OrderItemFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = OrderItem

    order = factory.SubFactory(OrderFactory)
    product = factory.SubFactory(ProductFactory)
    seller = factory.LazyAttribute(lambda o: o.product.seller)
    quantity = factory.Faker("random_int", min=1, max=3)

    @factory.lazy_attribute
    def unit_price(self):
        return self.product.price

    @factory.lazy_attribute
    def total_price(self):
        return self.unit_price * self.quantity

    product_name = factory.LazyAttribute(lambda o: o.product.name)
