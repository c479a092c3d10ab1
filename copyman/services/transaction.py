"""Transaction service - processes a purchase and updates the reward ledger.

One purchase runs through these stages:

    started -> items_processed -> totaled -> committed
                      (failed from any stage)

Everything from the ledger read to the ledger delta happens under the
customer lock inside one transaction.atomic() block, so a failure leaves no
transaction, no items and no ledger change behind.
"""

import logging

from django.db import models, transaction
from django.db.models import Count, F, Sum

from copyman.conf import copyman_settings
from copyman.exceptions import ValidationError
from copyman.gates import Gates
from copyman.locks import customer_lock
from copyman.models import Product, Transaction, TransactionItem
from copyman.protocols import (
    CustomerActivity,
    Invoice,
    InvoiceLine,
    LineResult,
    TransactionReceipt,
    TransactionRequest,
)
from copyman.services import customer as customer_service
from copyman.services.cycle import CycleState, simulate
from copyman.services.ledger import LedgerService
from copyman.services.offers import OfferResolver
from copyman.signals import transaction_committed

logger = logging.getLogger(__name__)


class TransactionStage(models.TextChoices):
    STARTED = "started", "Started"
    ITEMS_PROCESSED = "items_processed", "Items processed"
    TOTALED = "totaled", "Totaled"
    COMMITTED = "committed", "Committed"
    FAILED = "failed", "Failed"


class TransactionService:
    """
    Service for purchase processing and transaction views.

    Uses @classmethod for extensibility (consistent with other services).
    """

    @classmethod
    def process(cls, request: TransactionRequest) -> TransactionReceipt:
        """
        Process one purchase.

        Items are handled in submission order. Items of the offer's product
        run through the cycle simulator, with cycle state carried from one
        item to the next; other items are fully paid.

        Args:
            request: TransactionRequest

        Returns:
            TransactionReceipt

        Raises:
            ValidationError: Malformed submission, unknown customer/product.
                Raised before anything is written.
            ConsistencyError: Ledger invariant violated. Everything is rolled back.
        """
        Gates.submission_shape(request)
        Gates.item_quantities(request)

        customer = customer_service.get_by_mobile(request.customer_mobile)
        if customer is None:
            raise ValidationError(
                "CUSTOMER_NOT_FOUND",
                customer_mobile=request.customer_mobile,
            )

        products = cls._products_for(request)
        apply_offer = (
            copyman_settings.DEFAULT_APPLY_OFFER
            if request.apply_offer is None
            else bool(request.apply_offer)
        )
        offer = OfferResolver.resolve(customer.role_id)

        stage = TransactionStage.STARTED
        try:
            with customer_lock(customer.pk):
                with transaction.atomic():
                    ledger = LedgerService.read_snapshot(customer.pk)
                    state = CycleState(
                        progress=ledger.cycle_progress(offer.buy_quantity) if offer else 0,
                        free_balance=ledger.free_balance,
                    )

                    lines = []
                    units_added = free_earned = free_used = 0
                    for item in request.items:
                        unit_price_q = (
                            item.unit_price_q
                            if item.unit_price_q is not None
                            else products[item.product_id].price_q
                        )

                        if offer is not None and item.product_id == offer.product_id:
                            result = simulate(
                                item.quantity,
                                offer.buy_quantity,
                                offer.free_quantity,
                                apply_offer,
                                state,
                            )
                            state = result.state
                            units_added += item.quantity
                            free_earned += result.earned
                            free_used += result.free_used
                            line = LineResult(
                                product_id=item.product_id,
                                quantity=item.quantity,
                                paid_quantity=result.paid,
                                free_quantity=result.free_used,
                                unit_price_q=unit_price_q,
                                earned=result.earned,
                            )
                        else:
                            line = LineResult(
                                product_id=item.product_id,
                                quantity=item.quantity,
                                paid_quantity=item.quantity,
                                free_quantity=0,
                                unit_price_q=unit_price_q,
                            )
                        lines.append(line)
                    stage = cls._advance(stage, TransactionStage.ITEMS_PROCESSED, customer.pk)

                    total_q = sum(line.line_total_q for line in lines)
                    stage = cls._advance(stage, TransactionStage.TOTALED, customer.pk)

                    tx = Transaction.objects.create(
                        customer=customer,
                        total_q=total_q,
                        apply_offer=apply_offer,
                        offer=offer,
                    )
                    TransactionItem.objects.bulk_create(
                        [
                            TransactionItem(
                                transaction=tx,
                                product_id=line.product_id,
                                quantity=line.quantity,
                                paid_quantity=line.paid_quantity,
                                free_quantity=line.free_quantity,
                                unit_price_q=line.unit_price_q,
                            )
                            for line in lines
                        ]
                    )

                    if units_added > 0:
                        ledger = LedgerService.apply_delta(
                            customer.pk, units_added, free_earned, free_used
                        )
        except Exception:
            logger.exception(
                "Transaction for customer %s failed after stage %s, rolled back",
                customer.pk,
                stage,
            )
            cls._advance(stage, TransactionStage.FAILED, customer.pk)
            raise
        stage = cls._advance(stage, TransactionStage.COMMITTED, customer.pk)

        receipt = TransactionReceipt(
            transaction_id=tx.pk,
            total_q=tx.total_q,
            created_at=tx.created_at,
            apply_offer=apply_offer,
            offer_id=offer.pk if offer else None,
            lines=lines,
            status=LedgerService.build_status(ledger, offer),
        )
        logger.info(
            "Transaction %s committed for customer %s: total=%s units=%s earned=%s used=%s",
            tx.pk,
            customer.pk,
            total_q,
            units_added,
            free_earned,
            free_used,
        )
        transaction_committed.send(sender=Transaction, transaction=tx, receipt=receipt)
        return receipt

    @classmethod
    def invoice(cls, transaction_id: int) -> Invoice:
        """
        Build the invoice view of a committed transaction.

        Raises:
            ValidationError: TRANSACTION_NOT_FOUND
        """
        try:
            tx = Transaction.objects.select_related("customer").get(pk=transaction_id)
        except Transaction.DoesNotExist:
            raise ValidationError("TRANSACTION_NOT_FOUND", transaction_id=transaction_id)

        lines = [
            InvoiceLine(
                product_id=item.product_id,
                product_name=item.product.name,
                quantity=item.quantity,
                paid_quantity=item.paid_quantity,
                free_quantity=item.free_quantity,
                unit_price_q=item.unit_price_q,
                line_total_q=item.line_total_q,
                discount_q=item.discount_q,
            )
            for item in tx.items.select_related("product")
        ]

        return Invoice(
            transaction_id=tx.pk,
            customer_name=tx.customer.name,
            customer_mobile=tx.customer.mobile,
            created_at=tx.created_at,
            total_q=tx.total_q,
            lines=lines,
            units_requested=sum(line.quantity for line in lines),
            units_paid=sum(line.paid_quantity for line in lines),
            units_free=sum(line.free_quantity for line in lines),
            discount_q=sum(line.discount_q for line in lines),
        )

    @classmethod
    def activity(cls, mobile: str, limit: int | None = None) -> CustomerActivity:
        """
        Customer history, page stats and reward status.

        Args:
            mobile: Customer mobile
            limit: Max transactions (default COPYMAN["HISTORY_LIMIT"])

        Raises:
            ValidationError: CUSTOMER_NOT_FOUND
        """
        customer = customer_service.get_by_mobile(mobile)
        if customer is None:
            raise ValidationError("CUSTOMER_NOT_FOUND", customer_mobile=mobile)

        if limit is None:
            limit = copyman_settings.HISTORY_LIMIT

        transactions = list(
            Transaction.objects.filter(customer=customer)
            .order_by("-created_at", "-id")
            .values("id", "total_q", "apply_offer", "created_at")[:limit]
        )
        stats = TransactionItem.objects.filter(transaction__customer=customer).aggregate(
            total_units=Sum(F("paid_quantity") + F("free_quantity")),
            transaction_count=Count("transaction", distinct=True),
        )

        return CustomerActivity(
            customer_id=customer.pk,
            name=customer.name,
            mobile=customer.mobile,
            role_id=customer.role_id,
            role_name=customer.role_name,
            transactions=transactions,
            total_units=stats["total_units"] or 0,
            transaction_count=stats["transaction_count"] or 0,
            rewards=LedgerService.status(customer.pk),
        )

    @classmethod
    def _products_for(cls, request: TransactionRequest) -> dict[int, Product]:
        """Fetch every product referenced by the request or raise PRODUCT_NOT_FOUND."""
        product_ids = {item.product_id for item in request.items}
        products = Product.objects.in_bulk(product_ids)
        missing = sorted(product_ids - set(products))
        if missing:
            raise ValidationError("PRODUCT_NOT_FOUND", product_ids=missing)
        return products

    @classmethod
    def _advance(
        cls,
        stage: TransactionStage,
        to: TransactionStage,
        customer_id: int,
    ) -> TransactionStage:
        logger.debug("Customer %s transaction: %s -> %s", customer_id, stage, to)
        return to
