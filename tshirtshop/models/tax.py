from sqlalchemy import Column, Integer, Numeric, String
from .base import Base


class Tax(Base):
    __tablename__ = "tax"

    tax_id = Column(Integer, primary_key=True, autoincrement=True)
    tax_type = Column(String(100), nullable=False)
    tax_percentage = Column(Numeric(10, 2), nullable=False)

    def to_dict(self):
        return {
            "tax_id": self.tax_id,
            "tax_type": self.tax_type,
            "tax_percentage": f"{self.tax_percentage:.2f}",
        }
