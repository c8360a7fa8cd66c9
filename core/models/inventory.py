"""Inventory domain models."""

from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, Field


class InventoryCategory(str, Enum):
    """Fixed inventory categories, in display order."""

    BEVERAGES = "Beverages"
    PACKAGING = "Packaging"
    CLEANING = "Cleaning"
    MERCHANDISE = "Merchandise"

    @property
    def accent(self) -> str:
        """Accent colour used for this category's section."""
        return _ACCENTS[self]


_ACCENTS = {
    InventoryCategory.BEVERAGES: "blue",
    InventoryCategory.PACKAGING: "orange",
    InventoryCategory.CLEANING: "teal",
    InventoryCategory.MERCHANDISE: "purple",
}


class InventoryItem(BaseModel):
    """Full inventory item as stored."""

    id: UUID
    category: InventoryCategory
    name: str = Field(..., min_length=1, max_length=255)
    sku: str = Field(..., min_length=1, max_length=64)
    last_ordered: datetime
    out_of_stock: bool = False
    quantity: int = Field(0, ge=0)

    model_config = {"frozen": True}

    def is_low_stock(self, threshold: int) -> bool:
        """Whether the counted quantity is under the reorder threshold."""
        return self.quantity < threshold
