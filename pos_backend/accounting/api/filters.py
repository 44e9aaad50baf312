# accounting/api/filters.py

import django_filters

from accounting.models.voucher import Voucher


class VoucherFilter(django_filters.FilterSet):
    """
    ?start_date= / ?end_date= are inclusive calendar days (local time).
    """

    start_date = django_filters.DateFilter(field_name="date", lookup_expr="date__gte")
    end_date = django_filters.DateFilter(field_name="date", lookup_expr="date__lte")

    class Meta:
        model = Voucher
        fields = ["voucher_type", "start_date", "end_date"]
