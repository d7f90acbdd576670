from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from .base import Base


class Department(Base):
    __tablename__ = "department"

    department_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    description = Column(String(1000), nullable=True)

    categories = relationship("Category", back_populates="department")

    def to_dict(self):
        return {"department_id": self.department_id, "name": self.name, "description": self.description}


class Category(Base):
    __tablename__ = "category"

    category_id = Column(Integer, primary_key=True, autoincrement=True)
    department_id = Column(Integer, ForeignKey("department.department_id"), nullable=False)
    name = Column(String(100), nullable=False)
    description = Column(String(1000), nullable=True)

    department = relationship("Department", back_populates="categories")
    products = relationship("Product", secondary="product_category", back_populates="categories")

    def to_dict(self):
        return {
            "category_id": self.category_id,
            "department_id": self.department_id,
            "name": self.name,
            "description": self.description,
        }
