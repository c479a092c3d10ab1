"""Tests for Copyman models and exceptions."""

import pytest
from django.db import IntegrityError, transaction

from copyman.exceptions import ConsistencyError, CopymanError, ValidationError
from copyman.models import (
    Customer,
    Offer,
    RewardLedger,
    Transaction,
    TransactionItem,
    normalize_mobile,
)
from copyman.services import customer as customer_service


pytestmark = pytest.mark.django_db


class TestCustomer:
    def test_mobile_stored_as_digits(self, customer):
        customer.refresh_from_db()
        assert customer.mobile == "9876543210"

    @pytest.mark.parametrize(
        "raw, expected",
        [("+91 98765-43210", "919876543210"), ("", ""), (None, ""), ("abc", "")],
    )
    def test_normalize_mobile(self, raw, expected):
        assert normalize_mobile(raw) == expected

    def test_role_name(self, customer, customer_student):
        assert customer.role_name == "All"
        assert customer_student.role_name == "Student"

    def test_str(self, customer):
        assert str(customer) == "Asha Rao (CUST-001)"


class TestCustomerService:
    def test_get_by_mobile(self, customer):
        assert customer_service.get_by_mobile("+ 98765 43210") == customer
        assert customer_service.get_by_mobile("") is None
        assert customer_service.get_by_mobile("1111111111") is None

    def test_inactive_not_found(self, customer):
        customer.is_active = False
        customer.save()

        assert customer_service.get_by_mobile("9876543210") is None


class TestOffer:
    def test_is_usable(self, offer_common):
        assert offer_common.is_usable
        offer_common.free_quantity = 0
        assert not offer_common.is_usable

    def test_one_common_offer_per_product(self, offer_common, xerox):
        with pytest.raises(IntegrityError):
            with transaction.atomic():
                Offer.objects.create(product=xerox, buy_quantity=10, free_quantity=1)

    def test_one_offer_per_product_and_role(self, offer_student, xerox, role_student):
        with pytest.raises(IntegrityError):
            with transaction.atomic():
                Offer.objects.create(
                    product=xerox, role=role_student, buy_quantity=10, free_quantity=1
                )

    def test_str(self, offer_common):
        assert str(offer_common) == "Xerox A4: buy 100 get 20 (All)"


class TestRewardLedger:
    def test_derived_values(self, customer):
        ledger = RewardLedger(customer=customer, total_units=230, free_earned=40, free_used=20)

        assert ledger.free_balance == 20
        assert ledger.paid_total == 210
        assert ledger.cycle_progress(100) == 10
        assert ledger.cycles_completed(100) == 2

    def test_no_cycle_without_buy_quantity(self, customer):
        ledger = RewardLedger(customer=customer, total_units=230)

        assert ledger.cycle_progress(0) == 0
        assert ledger.cycles_completed(0) == 0

    def test_used_cannot_exceed_earned(self, customer):
        with pytest.raises(IntegrityError):
            with transaction.atomic():
                RewardLedger.objects.create(customer=customer, free_earned=5, free_used=6)

    def test_one_ledger_per_customer(self, customer):
        RewardLedger.objects.create(customer=customer)

        with pytest.raises(IntegrityError):
            with transaction.atomic():
                RewardLedger.objects.create(customer=customer)


class TestTransactionItem:
    def test_amounts(self, customer, xerox):
        tx = Transaction.objects.create(customer=customer, total_q=2000)
        item = TransactionItem.objects.create(
            transaction=tx,
            product=xerox,
            quantity=30,
            paid_quantity=10,
            free_quantity=20,
            unit_price_q=200,
        )

        assert item.line_total_q == 2000
        assert item.discount_q == 4000

    def test_split_must_add_up(self, customer, xerox):
        tx = Transaction.objects.create(customer=customer)

        with pytest.raises(IntegrityError):
            with transaction.atomic():
                TransactionItem.objects.create(
                    transaction=tx,
                    product=xerox,
                    quantity=30,
                    paid_quantity=10,
                    free_quantity=10,
                    unit_price_q=200,
                )

    def test_customer_with_transactions_is_protected(self, customer):
        from django.db.models import ProtectedError

        Transaction.objects.create(customer=customer)

        with pytest.raises(ProtectedError):
            Customer.objects.filter(pk=customer.pk).delete()


class TestExceptions:
    def test_default_message(self):
        error = ValidationError("CUSTOMER_NOT_FOUND", customer_id=7)

        assert isinstance(error, CopymanError)
        assert str(error) == "[CUSTOMER_NOT_FOUND] Customer not found"
        assert error.as_dict() == {
            "code": "CUSTOMER_NOT_FOUND",
            "message": "Customer not found",
            "data": {"customer_id": 7},
        }

    def test_custom_message(self):
        error = ConsistencyError("LEDGER_INCONSISTENT", message="custom")

        assert error.message == "custom"
        assert error.data == {}

    def test_unknown_code_uses_code(self):
        assert ValidationError("SOMETHING_ELSE").message == "SOMETHING_ELSE"
