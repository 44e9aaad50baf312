# pos/api/urls.py

from django.urls import path

from pos.api.views import ExpenseListCreateView, InventoryItemListCreateView, SaleListCreateView

urlpatterns = [
    path("sales/", SaleListCreateView.as_view(), name="pos-sales"),
    path("expenses/", ExpenseListCreateView.as_view(), name="pos-expenses"),
    path("inventory/", InventoryItemListCreateView.as_view(), name="pos-inventory"),
]
