"""Copyman admin.

Roles, customers, products and offers are edited here. Ledgers and
transactions are read-only: counters change through LedgerService only.
"""

from django.contrib import admin
from django.utils.html import format_html

from copyman.models import (
    Customer,
    CustomerRole,
    Offer,
    Product,
    RewardLedger,
    Transaction,
    TransactionItem,
)


# ===========================================
# CustomerRole / Customer Admin
# ===========================================


@admin.register(CustomerRole)
class CustomerRoleAdmin(admin.ModelAdmin):
    list_display = ["code", "name", "is_active", "customer_count"]
    list_filter = ["is_active"]
    search_fields = ["code", "name"]

    def customer_count(self, obj):
        return obj.customers.count()

    customer_count.short_description = "Customers"


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    list_display = ["code", "name", "mobile", "role", "is_active"]
    list_filter = ["role", "is_active"]
    search_fields = ["code", "name", "mobile"]
    list_editable = ["is_active"]
    readonly_fields = ["created_at", "updated_at"]


# ===========================================
# Product / Offer Admin
# ===========================================


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ["name", "price_q", "is_active"]
    list_filter = ["is_active"]
    search_fields = ["name"]


@admin.register(Offer)
class OfferAdmin(admin.ModelAdmin):
    list_display = [
        "product",
        "role_display",
        "buy_quantity",
        "free_quantity",
        "usable_badge",
        "is_active",
    ]
    list_filter = ["is_active", "role"]
    search_fields = ["product__name", "role__name"]

    def role_display(self, obj):
        return obj.role.name if obj.role else "All"

    role_display.short_description = "Role"

    def usable_badge(self, obj):
        if obj.is_usable:
            return format_html('<span style="color: green;">{}</span>', "yes")
        return format_html('<span style="color: red;">{}</span>', "no")

    usable_badge.short_description = "Usable"


# ===========================================
# RewardLedger Admin
# ===========================================


@admin.register(RewardLedger)
class RewardLedgerAdmin(admin.ModelAdmin):
    list_display = [
        "customer",
        "total_units",
        "paid_display",
        "free_earned",
        "free_used",
        "free_remaining",
        "updated_at",
    ]
    search_fields = ["customer__code", "customer__name", "customer__mobile"]
    readonly_fields = [
        "customer",
        "total_units",
        "free_earned",
        "free_used",
        "created_at",
        "updated_at",
    ]

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    def paid_display(self, obj):
        return obj.paid_total

    paid_display.short_description = "Paid"

    def free_remaining(self, obj):
        return obj.free_balance

    free_remaining.short_description = "Free remaining"


# ===========================================
# Transaction Admin
# ===========================================


class TransactionItemInline(admin.TabularInline):
    model = TransactionItem
    extra = 0
    readonly_fields = ["product", "quantity", "paid_quantity", "free_quantity", "unit_price_q"]

    def has_add_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(Transaction)
class TransactionAdmin(admin.ModelAdmin):
    list_display = ["id", "customer", "total_q", "free_units", "apply_offer", "created_at"]
    list_filter = ["apply_offer"]
    search_fields = ["customer__code", "customer__name", "customer__mobile"]
    readonly_fields = ["customer", "total_q", "apply_offer", "offer", "created_at"]
    date_hierarchy = "created_at"
    inlines = [TransactionItemInline]

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    def free_units(self, obj):
        return sum(item.free_quantity for item in obj.items.all())

    free_units.short_description = "Free units"
