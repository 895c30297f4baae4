import django_filters

from modules.claims.constants import ClaimStatus
from modules.claims.models import WarrantyClaim


class ClaimFilter(django_filters.FilterSet):
    status = django_filters.ChoiceFilter(choices=ClaimStatus.choices)
    product = django_filters.UUIDFilter(field_name="registered_product_id")
    start_date = django_filters.DateFilter(field_name="created_at", lookup_expr="date__gte")
    end_date = django_filters.DateFilter(field_name="created_at", lookup_expr="date__lte")

    class Meta:
        model = WarrantyClaim
        fields = ["status", "product", "start_date", "end_date"]
