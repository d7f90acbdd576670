from sqlalchemy import Column, Integer, String
from .base import Base


class Customer(Base):
    __tablename__ = "customer"

    customer_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(50), nullable=False)
    email = Column(String(100), nullable=False, unique=True)
    password = Column(String(255), nullable=False)
    credit_card = Column(String(255), nullable=True)
    address_1 = Column(String(100), nullable=True)
    address_2 = Column(String(100), nullable=True)
    city = Column(String(100), nullable=True)
    region = Column(String(100), nullable=True)
    postal_code = Column(String(100), nullable=True)
    country = Column(String(100), nullable=True)
    shipping_region_id = Column(Integer, nullable=False, default=1)
    day_phone = Column(String(100), nullable=True)
    eve_phone = Column(String(100), nullable=True)
    mob_phone = Column(String(100), nullable=True)

    def to_safe_dict(self):
        card = self.credit_card or ""
        return {
            "customer_id": self.customer_id,
            "name": self.name,
            "email": self.email,
            "credit_card": ("XXXXXXXX" + card[-4:]) if card else None,
            "address_1": self.address_1,
            "address_2": self.address_2,
            "city": self.city,
            "region": self.region,
            "postal_code": self.postal_code,
            "country": self.country,
            "shipping_region_id": self.shipping_region_id,
            "day_phone": self.day_phone,
            "eve_phone": self.eve_phone,
            "mob_phone": self.mob_phone,
        }
