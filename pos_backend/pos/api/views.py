# pos/api/views.py

"""
======================================================
PATH: pos/api/views.py
======================================================
POS FEED API (STAFF)

GET/POST /api/pos/sales/
GET/POST /api/pos/expenses/
GET/POST /api/pos/inventory/

Security:
- Requires IsAuthenticated + any staff role (admin / manager / cashier)

Accounting:
- Nothing is posted here; the accounting snapshot derives from these rows.
======================================================
"""

from __future__ import annotations

import logging

from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import generics
from rest_framework.permissions import IsAuthenticated

from pos.api.serializers import ExpenseSerializer, InventoryItemSerializer, SaleSerializer
from pos.models import Expense, InventoryItem, Sale
from users.permissions import IsStaff

logger = logging.getLogger(__name__)


@extend_schema_view(
    get=extend_schema(tags=["pos"]),
    post=extend_schema(tags=["pos"]),
)
class SaleListCreateView(generics.ListCreateAPIView):
    permission_classes = [IsAuthenticated, IsStaff]
    serializer_class = SaleSerializer
    queryset = Sale.objects.order_by("-timestamp", "-id")
    filterset_fields = ["payment_method"]

    def perform_create(self, serializer):
        sale = serializer.save(user=self.request.user)
        logger.info("Sale #%s recorded: %s via %s", sale.pk, sale.total, sale.payment_method)


@extend_schema_view(
    get=extend_schema(tags=["pos"]),
    post=extend_schema(tags=["pos"]),
)
class ExpenseListCreateView(generics.ListCreateAPIView):
    permission_classes = [IsAuthenticated, IsStaff]
    serializer_class = ExpenseSerializer
    queryset = Expense.objects.order_by("-timestamp", "-id")

    def perform_create(self, serializer):
        expense = serializer.save(recorded_by=self.request.user)
        logger.info("Expense #%s recorded: %s", expense.pk, expense.amount)


@extend_schema_view(
    get=extend_schema(tags=["pos"]),
    post=extend_schema(tags=["pos"]),
)
class InventoryItemListCreateView(generics.ListCreateAPIView):
    permission_classes = [IsAuthenticated, IsStaff]
    serializer_class = InventoryItemSerializer
    queryset = InventoryItem.objects.order_by("name", "id")
    filterset_fields = ["category", "is_active"]
