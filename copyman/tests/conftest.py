"""Pytest fixtures for Copyman tests."""

import pytest

from copyman.models import Customer, CustomerRole, Offer, Product


@pytest.fixture
def role_student(db):
    """Create student role."""
    return CustomerRole.objects.create(code="student", name="Student")


@pytest.fixture
def role_staff(db):
    """Create staff role (no offer of its own)."""
    return CustomerRole.objects.create(code="staff", name="Staff")


@pytest.fixture
def xerox(db):
    """Create the loyalty product (priced at 2.00)."""
    return Product.objects.create(name="Xerox A4", price_q=200)


@pytest.fixture
def binding(db):
    """Create a product outside the loyalty program."""
    return Product.objects.create(name="Spiral Binding", price_q=3000)


@pytest.fixture
def offer_common(xerox):
    """Buy 100 get 20 free, for every role."""
    return Offer.objects.create(product=xerox, buy_quantity=100, free_quantity=20)


@pytest.fixture
def offer_student(xerox, role_student):
    """Buy 50 get 10 free, students only."""
    return Offer.objects.create(
        product=xerox,
        role=role_student,
        buy_quantity=50,
        free_quantity=10,
    )


@pytest.fixture
def customer(db):
    """Create a customer without role."""
    return Customer.objects.create(
        code="CUST-001",
        name="Asha Rao",
        mobile="98765 43210",
    )


@pytest.fixture
def customer_student(role_student):
    """Create a student customer."""
    return Customer.objects.create(
        code="CUST-STU",
        name="Ravi Kumar",
        mobile="9123456780",
        role=role_student,
    )
