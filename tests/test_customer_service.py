import pytest

from tshirtshop.errors import Conflict, NotFound, Unauthorized, ValidationError
from tshirtshop.models import Customer
from tshirtshop.services.customer_service import CustomerService


@pytest.fixture()
def customers(session_factory, tokens):
    return CustomerService(session_factory, tokens)


class TestRegister:
    def test_register_returns_usable_credential(self, customers, tokens, session_factory):
        result = customers.register(name="Grace", email="Grace@Example.com", password="longenough")
        assert result["customer"]["email"] == "grace@example.com"
        assert "password" not in result["customer"]
        assert result["expires_in"] == "24h"
        assert tokens.verify(result["accessToken"]).unwrap() == result["customer"]["customer_id"]
        with session_factory() as session:
            stored = session.get(Customer, result["customer"]["customer_id"])
            assert stored.password != "longenough"

    @pytest.mark.parametrize(
        "name,email,password,code",
        [
            ("Grace", "grace@example.com", "short", "USR_01"),
            ("", "grace@example.com", "longenough", "USR_02"),
            ("Grace", "not-an-email", "longenough", "USR_03"),
            ("G" * 51, "grace@example.com", "longenough", "USR_07"),
        ],
    )
    def test_validation(self, customers, name, email, password, code):
        with pytest.raises(ValidationError) as exc:
            customers.register(name=name, email=email, password=password)
        assert exc.value.code == code

    def test_duplicate_email(self, customers, customer_id):
        with pytest.raises(Conflict):
            customers.register(name="Ada Two", email="ADA@example.com", password="longenough")


class TestLogin:
    def test_login(self, customers, customer_id, tokens, password):
        result = customers.login(email="ada@example.com", password=password)
        assert result["customer"]["customer_id"] == customer_id
        assert tokens.verify(result["accessToken"]).customer_id == customer_id

    def test_wrong_password(self, customers, customer_id):
        with pytest.raises(Unauthorized) as exc:
            customers.login(email="ada@example.com", password="wrong-password")
        assert exc.value.code == "USR_05"

    def test_unknown_email_same_error(self, customers):
        with pytest.raises(Unauthorized) as exc:
            customers.login(email="nobody@example.com", password="whatever1")
        assert exc.value.code == "USR_05"


class TestProfile:
    def test_update_profile_ignores_unknown_fields(self, customers, customer_id, password):
        data = customers.update_profile(customer_id, {"name": "Ada L.", "mob_phone": "555", "password": "x"})
        assert data["name"] == "Ada L."
        assert data["mob_phone"] == "555"
        assert customers.login(email="ada@example.com", password=password)

    def test_update_address(self, customers, customer_id):
        data = customers.update_address(customer_id, {"address_1": "1 Main St", "city": "Lagos", "shipping_region_id": "2"})
        assert data["address_1"] == "1 Main St"
        assert data["shipping_region_id"] == 2

    def test_optional_fields_can_be_cleared(self, customers, customer_id):
        customers.update_profile(customer_id, {"mob_phone": "555", "day_phone": "444"})
        data = customers.update_profile(customer_id, {"mob_phone": "", "day_phone": None})
        assert data["mob_phone"] is None
        assert data["day_phone"] is None

        customers.update_address(customer_id, {"address_1": "1 Main St", "address_2": "Flat 2", "shipping_region_id": 3})
        data = customers.update_address(customer_id, {"address_2": "  ", "shipping_region_id": ""})
        assert data["address_1"] == "1 Main St"
        assert data["address_2"] is None
        assert data["shipping_region_id"] == 1

    @pytest.mark.parametrize("fields", [{"name": ""}, {"email": ""}, {"name": None}])
    def test_required_fields_cannot_be_cleared(self, customers, customer_id, fields):
        with pytest.raises(ValidationError):
            customers.update_profile(customer_id, fields)
        assert customers.get_profile(customer_id)["name"] == "Ada"

    def test_credit_card_is_masked(self, customers, customer_id):
        data = customers.update_credit_card(customer_id, "4242 4242 4242 4242")
        assert data["credit_card"] == "XXXXXXXX4242"

    def test_invalid_credit_card(self, customers, customer_id):
        with pytest.raises(ValidationError):
            customers.update_credit_card(customer_id, "12ab")

    def test_unknown_customer(self, customers):
        with pytest.raises(NotFound):
            customers.get_profile(999)
