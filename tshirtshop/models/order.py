from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship
from .base import Base, utcnow


class Order(Base):
    __tablename__ = "orders"

    order_id = Column(Integer, primary_key=True, autoincrement=True)
    customer_id = Column(Integer, ForeignKey("customer.customer_id"), nullable=False, index=True)
    total_amount = Column(Numeric(10, 2), nullable=False, default=0)
    status = Column(String(32), nullable=False, default="pending")
    created_on = Column(DateTime, nullable=False, default=utcnow)
    shipped_on = Column(DateTime, nullable=True)
    comments = Column(String(255), nullable=True)
    shipping_address = Column(String(255), nullable=True)
    shipping_id = Column(Integer, nullable=True)
    tax_id = Column(Integer, nullable=True)
    auth_code = Column(String(50), nullable=True)
    reference = Column(String(50), nullable=True)

    details = relationship(
        "OrderDetail",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderDetail.item_id",
    )

    def to_dict(self):
        return {
            "order_id": self.order_id,
            "customer_id": self.customer_id,
            "total_amount": f"{self.total_amount:.2f}",
            "status": self.status,
            "created_on": self.created_on.isoformat() if self.created_on else None,
            "shipped_on": self.shipped_on.isoformat() if self.shipped_on else None,
            "comments": self.comments,
            "shipping_address": self.shipping_address,
            "shipping_id": self.shipping_id,
            "tax_id": self.tax_id,
            "reference": self.reference,
        }


class OrderDetail(Base):
    __tablename__ = "order_detail"

    item_id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(Integer, ForeignKey("orders.order_id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Integer, nullable=False)
    attributes = Column(String(1000), nullable=False, default="")
    product_name = Column(String(100), nullable=False)
    quantity = Column(Integer, nullable=False)
    unit_cost = Column(Numeric(10, 2), nullable=False)

    order = relationship("Order", back_populates="details")

    def to_dict(self):
        return {
            "product_id": self.product_id,
            "attributes": self.attributes,
            "product_name": self.product_name,
            "quantity": self.quantity,
            "unit_cost": f"{self.unit_cost:.2f}",
            "subtotal": f"{self.unit_cost * self.quantity:.2f}",
        }
