from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from .base import Base, utcnow


class CartItem(Base):
    __tablename__ = "shopping_cart"

    item_id = Column(Integer, primary_key=True, autoincrement=True)
    cart_id = Column(String(32), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("product.product_id"), nullable=False)
    attributes = Column(String(1000), nullable=False, default="")
    quantity = Column(Integer, nullable=False)
    # set when the line was converted into an order but kept in the table
    order_id = Column(Integer, ForeignKey("orders.order_id"), nullable=True, index=True)
    added_on = Column(DateTime, nullable=False, default=utcnow)

    product = relationship("Product")

    def to_dict(self):
        return {
            "item_id": self.item_id,
            "cart_id": self.cart_id,
            "product_id": self.product_id,
            "attributes": self.attributes,
            "quantity": self.quantity,
        }
