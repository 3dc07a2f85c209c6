import django_filters

from modules.products.models import Product


class ProductFilter(django_filters.FilterSet):
    name = django_filters.CharFilter(field_name="name", lookup_expr="icontains")
    size = django_filters.CharFilter(field_name="size", lookup_expr="iexact")

    class Meta:
        model = Product
        fields = ["name", "size"]
