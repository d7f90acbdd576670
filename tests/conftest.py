from decimal import Decimal

import pytest
from werkzeug.security import generate_password_hash

from tshirtshop.config import AppConfig
from tshirtshop.db.session import build_engine, init_db, make_session_factory
from tshirtshop.models import (
    Attribute,
    AttributeValue,
    Category,
    Customer,
    Department,
    Product,
    ProductAttribute,
    ProductCategory,
    Tax,
)
from tshirtshop.services.token_service import TokenService


SECRET = "test-secret"
PASSWORD = "correct-horse"


@pytest.fixture()
def engine():
    eng = build_engine("sqlite:///:memory:")
    init_db(eng)
    yield eng
    eng.dispose()


@pytest.fixture()
def session_factory(engine):
    return make_session_factory(engine)


@pytest.fixture()
def catalog(session_factory):
    """Seed two departments, three categories, four products, their attributes and two taxes."""
    with session_factory() as session:
        regional = Department(department_id=1, name="Regional", description="Proud of your country?")
        nature = Department(department_id=2, name="Nature", description="Find beautiful T-shirts")
        session.add_all([regional, nature])
        session.add_all(
            [
                Category(category_id=1, department_id=1, name="French"),
                Category(category_id=2, department_id=1, name="Italian"),
                Category(category_id=3, department_id=2, name="Animal"),
            ]
        )
        session.add_all(
            [
                Product(product_id=1, name="Arc d'Triomphe", description="Celebrate the Arc",
                        price=Decimal("100.00"), discounted_price=Decimal("80.00"), image="arc.gif"),
                Product(product_id=2, name="Chartres Cathedral", description="The Fur Merchants",
                        price=Decimal("50.00"), discounted_price=Decimal("0.00"), image="chartres.gif"),
                Product(product_id=3, name="Coat of Arms", description="A scarlet banner",
                        price=Decimal("19.99"), discounted_price=Decimal("16.95"), image="coat.gif"),
                Product(product_id=4, name="Gallic Cock", description="The rooster is a symbol",
                        price=Decimal("18.99"), discounted_price=Decimal("0.00"), image="cock.gif"),
            ]
        )
        session.flush()
        session.add_all(
            [
                ProductCategory(product_id=1, category_id=1),
                ProductCategory(product_id=2, category_id=1),
                ProductCategory(product_id=3, category_id=2),
                ProductCategory(product_id=4, category_id=3),
            ]
        )
        session.add_all(
            [
                Attribute(attribute_id=1, name="Size"),
                Attribute(attribute_id=2, name="Color"),
                Tax(tax_id=1, tax_type="Sales Tax at 8.5%", tax_percentage=Decimal("8.50")),
                Tax(tax_id=2, tax_type="No Tax", tax_percentage=Decimal("0.00")),
            ]
        )
        session.flush()
        session.add_all(
            [
                AttributeValue(attribute_value_id=1, attribute_id=1, value="S"),
                AttributeValue(attribute_value_id=2, attribute_id=1, value="M"),
                AttributeValue(attribute_value_id=3, attribute_id=1, value="L"),
                AttributeValue(attribute_value_id=4, attribute_id=2, value="White"),
                AttributeValue(attribute_value_id=5, attribute_id=2, value="Red"),
            ]
        )
        session.flush()
        session.add_all(
            [
                ProductAttribute(product_id=1, attribute_value_id=5),
                ProductAttribute(product_id=1, attribute_value_id=1),
                ProductAttribute(product_id=1, attribute_value_id=3),
            ]
        )
    return session_factory


@pytest.fixture()
def customer_id(session_factory):
    with session_factory() as session:
        customer = Customer(name="Ada", email="ada@example.com", password=generate_password_hash(PASSWORD))
        session.add(customer)
        session.flush()
        return customer.customer_id


@pytest.fixture()
def tokens():
    return TokenService(SECRET, ttl_hours=24)


@pytest.fixture()
def app_config():
    return AppConfig(
        database_url="sqlite:///:memory:",
        secret_key=SECRET,
        stripe_secret_key="sk_test_123",
        stripe_api_base="https://stripe.test",
    )


@pytest.fixture()
def password():
    return PASSWORD
