from sqlalchemy import Column, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship
from .base import Base


class Product(Base):
    __tablename__ = "product"

    product_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=False, default="")
    price = Column(Numeric(10, 2), nullable=False)
    discounted_price = Column(Numeric(10, 2), nullable=False, default=0)
    image = Column(String(150), nullable=True)
    image_2 = Column(String(150), nullable=True)
    thumbnail = Column(String(150), nullable=True)
    display = Column(Integer, nullable=False, default=0)

    categories = relationship("Category", secondary="product_category", back_populates="products")
    attribute_values = relationship(
        "AttributeValue", secondary="product_attribute", order_by="AttributeValue.attribute_value_id"
    )


class ProductCategory(Base):
    __tablename__ = "product_category"

    product_id = Column(Integer, ForeignKey("product.product_id"), primary_key=True)
    category_id = Column(Integer, ForeignKey("category.category_id"), primary_key=True)
