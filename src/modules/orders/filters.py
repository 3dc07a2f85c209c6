import django_filters

from modules.orders.models import Order


class OrderFilter(django_filters.FilterSet):
    status = django_filters.CharFilter(field_name="status", lookup_expr="iexact")
    payment_method = django_filters.CharFilter(
        field_name="payment_method", lookup_expr="iexact"
    )
    customer = django_filters.UUIDFilter(field_name="customer_id")
    start_date = django_filters.DateFilter(field_name="created_at", lookup_expr="date__gte")
    end_date = django_filters.DateFilter(field_name="created_at", lookup_expr="date__lte")
    min_total = django_filters.NumberFilter(field_name="total_cents", lookup_expr="gte")
    max_total = django_filters.NumberFilter(field_name="total_cents", lookup_expr="lte")

    class Meta:
        model = Order
        fields = [
            "status",
            "payment_method",
            "customer",
            "start_date",
            "end_date",
            "min_total",
            "max_total",
        ]
