# models/inventory.py

from sqlalchemy import Column, Integer, String, Float
from sqlalchemy.orm import validates

from core.database import Base
from models.enums import InventoryCategory


class InventoryItem(Base):
    __tablename__ = "inventory_items"

    id = Column(Integer, primary_key=True, index=True)

    # Stock code, e.g. INV-001
    item_id = Column(String, unique=True, index=True, nullable=False)

    name = Column(String, nullable=False)
    category = Column(String, nullable=False)

    current_stock = Column(Integer, nullable=False, default=0)
    unit_price = Column(Float, nullable=False, default=0.0)
    reorder_level = Column(Integer, nullable=False, default=0)
    last_usage_rate = Column(Float, nullable=False, default=0.0)  # units per week

    @validates("category")
    def _validate_category(self, key, value):
        return InventoryCategory.parse(value, "inventory category").value

    @property
    def is_low_stock(self) -> bool:
        return self.current_stock <= self.reorder_level

    def to_dict(self):
        return {
            "id": self.item_id,
            "name": self.name,
            "category": self.category,
            "current_stock": self.current_stock,
            "unit_price": self.unit_price,
            "reorder_level": self.reorder_level,
            "last_usage_rate": self.last_usage_rate,
        }

    def __repr__(self):
        return f"<InventoryItem {self.item_id} - {self.name}>"
