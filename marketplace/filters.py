import django_filters
from django.db.models import Q

from .models import Product


class ProductFilter(django_filters.FilterSet):
    """
    Filter for the public product listing
    """

    # Price range filters
    min_price = django_filters.NumberFilter(field_name="price", lookup_expr="gte")
    max_price = django_filters.NumberFilter(field_name="price", lookup_expr="lte")

    # Category by name, as shown to shoppers
    category = django_filters.CharFilter(field_name="category__name", lookup_expr="iexact")
    category_id = django_filters.NumberFilter(field_name="category__id")

    is_organic = django_filters.BooleanFilter()
    in_stock = django_filters.BooleanFilter(method="filter_in_stock")

    seller_id = django_filters.UUIDFilter(field_name="seller__id")

    # Search in multiple fields
    search = django_filters.CharFilter(method="filter_search")

    class Meta:
        model = Product
        fields = ["is_organic"]

    def filter_in_stock(self, queryset, name, value):
        if value:
            return queryset.filter(stock_quantity__gt=0)
        elif value is False:
            return queryset.filter(stock_quantity=0)
        return queryset

    def filter_search(self, queryset, name, value):
        """Search across name and description"""
        if value:
            return queryset.filter(Q(name__icontains=value) | Q(description__icontains=value))
        return queryset
