# Generated migration for Copyman loyalty models

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="CustomerRole",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("code", models.SlugField(unique=True, verbose_name="code")),
                ("name", models.CharField(max_length=100, verbose_name="name")),
                ("is_active", models.BooleanField(default=True, verbose_name="active")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated at")),
            ],
            options={
                "verbose_name": "customer role",
                "verbose_name_plural": "customer roles",
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="Product",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=200, verbose_name="name")),
                (
                    "price_q",
                    models.PositiveIntegerField(
                        default=0,
                        help_text="Unit price in minor units",
                        verbose_name="price",
                    ),
                ),
                ("is_active", models.BooleanField(default=True, verbose_name="active")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated at")),
            ],
            options={
                "verbose_name": "product",
                "verbose_name_plural": "products",
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="Customer",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "code",
                    models.CharField(
                        help_text="Unique customer code (e.g. CUST-001)",
                        max_length=50,
                        unique=True,
                        verbose_name="code",
                    ),
                ),
                ("name", models.CharField(max_length=200, verbose_name="name")),
                (
                    "mobile",
                    models.CharField(
                        help_text="Digits only",
                        max_length=20,
                        unique=True,
                        verbose_name="mobile",
                    ),
                ),
                ("is_active", models.BooleanField(db_index=True, default=True, verbose_name="active")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated at")),
                (
                    "role",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="customers",
                        to="copyman.customerrole",
                        verbose_name="role",
                    ),
                ),
            ],
            options={
                "verbose_name": "customer",
                "verbose_name_plural": "customers",
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="Offer",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("buy_quantity", models.PositiveIntegerField(verbose_name="buy quantity")),
                ("free_quantity", models.PositiveIntegerField(verbose_name="free quantity")),
                ("is_active", models.BooleanField(default=True, verbose_name="active")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated at")),
                (
                    "product",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="offers",
                        to="copyman.product",
                        verbose_name="product",
                    ),
                ),
                (
                    "role",
                    models.ForeignKey(
                        blank=True,
                        help_text="Empty = applies to all roles",
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="offers",
                        to="copyman.customerrole",
                        verbose_name="role",
                    ),
                ),
            ],
            options={
                "verbose_name": "offer",
                "verbose_name_plural": "offers",
                "ordering": ["-id"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("product", "role"),
                        name="copyman_offer_unique_product_role",
                    ),
                    models.UniqueConstraint(
                        condition=models.Q(("role__isnull", True)),
                        fields=("product",),
                        name="copyman_offer_unique_common_product",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="RewardLedger",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "total_units",
                    models.PositiveIntegerField(
                        default=0,
                        help_text="Units of the loyalty product printed (paid + free)",
                        verbose_name="total units",
                    ),
                ),
                ("free_earned", models.PositiveIntegerField(default=0, verbose_name="free units earned")),
                ("free_used", models.PositiveIntegerField(default=0, verbose_name="free units used")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated at")),
                (
                    "customer",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="reward_ledger",
                        to="copyman.customer",
                        verbose_name="customer",
                    ),
                ),
            ],
            options={
                "verbose_name": "reward ledger",
                "verbose_name_plural": "reward ledgers",
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("free_used__lte", models.F("free_earned"))),
                        name="copyman_ledger_used_lte_earned",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="Transaction",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "total_q",
                    models.PositiveBigIntegerField(
                        default=0,
                        help_text="Sum of paid units x unit price, in minor units",
                        verbose_name="total",
                    ),
                ),
                (
                    "apply_offer",
                    models.BooleanField(
                        default=True,
                        help_text="Whether free units were redeemed at checkout",
                        verbose_name="offer applied",
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="created at")),
                (
                    "customer",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="transactions",
                        to="copyman.customer",
                        verbose_name="customer",
                    ),
                ),
                (
                    "offer",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="transactions",
                        to="copyman.offer",
                        verbose_name="offer",
                    ),
                ),
            ],
            options={
                "verbose_name": "transaction",
                "verbose_name_plural": "transactions",
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(fields=["customer", "-created_at"], name="copyman_tx_customer_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="TransactionItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("quantity", models.PositiveIntegerField(verbose_name="quantity")),
                ("paid_quantity", models.PositiveIntegerField(verbose_name="paid quantity")),
                ("free_quantity", models.PositiveIntegerField(default=0, verbose_name="free quantity")),
                ("unit_price_q", models.PositiveIntegerField(verbose_name="unit price")),
                (
                    "product",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="transaction_items",
                        to="copyman.product",
                        verbose_name="product",
                    ),
                ),
                (
                    "transaction",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="items",
                        to="copyman.transaction",
                        verbose_name="transaction",
                    ),
                ),
            ],
            options={
                "verbose_name": "transaction item",
                "verbose_name_plural": "transaction items",
                "ordering": ["id"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(
                            ("quantity", models.F("paid_quantity") + models.F("free_quantity"))
                        ),
                        name="copyman_item_quantity_split",
                    ),
                ],
            },
        ),
    ]
