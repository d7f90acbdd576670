from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from .base import Base


class Attribute(Base):
    __tablename__ = "attribute"

    attribute_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)

    values = relationship("AttributeValue", back_populates="attribute", order_by="AttributeValue.attribute_value_id")

    def to_dict(self):
        return {"attribute_id": self.attribute_id, "name": self.name}


class AttributeValue(Base):
    __tablename__ = "attribute_value"

    attribute_value_id = Column(Integer, primary_key=True, autoincrement=True)
    attribute_id = Column(Integer, ForeignKey("attribute.attribute_id"), nullable=False, index=True)
    value = Column(String(100), nullable=False)

    attribute = relationship("Attribute", back_populates="values")

    def to_dict(self):
        return {"attribute_value_id": self.attribute_value_id, "value": self.value}


class ProductAttribute(Base):
    __tablename__ = "product_attribute"

    product_id = Column(Integer, ForeignKey("product.product_id"), primary_key=True)
    attribute_value_id = Column(Integer, ForeignKey("attribute_value.attribute_value_id"), primary_key=True)
