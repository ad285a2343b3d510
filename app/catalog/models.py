"""
==============================================================================
Product Models Module
==============================================================================

Pydantic models for catalog items.

Field names are snake_case in Python; the wire format uses the camelCase
alias "inStock".

==============================================================================
"""

from typing import Union

from pydantic import BaseModel, ConfigDict, Field


class ProductCandidate(BaseModel):
    """
    Validated, normalized product payload without an id.

    Produced by ProductValidator and consumed by ProductCatalog.insert
    and ProductCatalog.replace.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=2)
    description: str = Field(..., min_length=5)
    price: Union[int, float] = Field(..., gt=0)
    category: str = Field(..., min_length=2)
    in_stock: bool = Field(..., alias="inStock")


class Product(BaseModel):
    """
    Product stored in the catalog.

    Attributes:
        id: Opaque identifier assigned on insert, never reused
        name: Display name (trimmed, at least 2 characters)
        description: Description (trimmed, at least 5 characters)
        price: Positive price
        category: Category name (trimmed, at least 2 characters)
        in_stock: Stock flag, serialized as "inStock"
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="Product identifier")
    name: str = Field(..., min_length=2)
    description: str = Field(..., min_length=5)
    price: Union[int, float] = Field(..., gt=0)
    category: str = Field(..., min_length=2)
    in_stock: bool = Field(..., alias="inStock")

    @classmethod
    def from_candidate(cls, product_id: str, candidate: ProductCandidate) -> "Product":
        """Create a stored product from a candidate and an id."""
        return cls(id=product_id, **candidate.model_dump())

    def to_dict(self) -> dict:
        """Serialize with wire field names."""
        return self.model_dump(by_alias=True)
