from sqlalchemy import Column, DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship
from .base import Base, utcnow


class Review(Base):
    __tablename__ = "review"

    review_id = Column(Integer, primary_key=True, autoincrement=True)
    customer_id = Column(Integer, ForeignKey("customer.customer_id"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("product.product_id"), nullable=False, index=True)
    review = Column(Text, nullable=False)
    rating = Column(Integer, nullable=False)
    created_on = Column(DateTime, nullable=False, default=utcnow)

    customer = relationship("Customer")

    def to_dict(self):
        return {
            "review_id": self.review_id,
            "product_id": self.product_id,
            "customer_id": self.customer_id,
            "review": self.review,
            "rating": self.rating,
            "created_on": self.created_on.isoformat() if self.created_on else None,
        }
