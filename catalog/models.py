# catalog/models.py
from decimal import Decimal
from typing import Any, Dict, List, Optional

from bson import Decimal128, ObjectId
from pydantic import BaseModel, ConfigDict, Field


class ProductIn(BaseModel):
    model_config = ConfigDict(extra="ignore")

    # accepted so clients can send back what they listed; never persisted
    id: Optional[str] = None
    # required with no zero-value fallback, unlike the other fields
    name: str
    price: Decimal = Field(ge=0, max_digits=34)
    categories: List[int] = Field(default_factory=list)
    description: str = ""
    image: str = ""
    status: bool = False


class Product(BaseModel):
    id: str
    name: str
    # goes out as a decimal string, e.g. "19.99"
    price: Decimal
    categories: List[int] = Field(default_factory=list)
    description: str = ""
    image: str = ""
    status: bool = False


def to_document(product_id: ObjectId, p: ProductIn) -> Dict[str, Any]:
    return {
        "_id": product_id,
        "name": p.name,
        "price": Decimal128(p.price),
        "categories": list(p.categories),
        "description": p.description,
        "image": p.image,
        "status": p.status,
    }


def _as_decimal(value: Any) -> Decimal:
    if isinstance(value, Decimal128):
        return value.to_decimal()
    if value is None:
        return Decimal("0")
    return Decimal(str(value))


def from_document(doc: Dict[str, Any]) -> Product:
    """
    Builds a Product from a stored document. Documents written by other
    tools may miss fields, so every field falls back to its zero value.
    """
    return Product(
        id=str(doc["_id"]),
        name=doc.get("name") or "",
        price=_as_decimal(doc.get("price")),
        categories=doc.get("categories") or [],
        description=doc.get("description") or "",
        image=doc.get("image") or "",
        status=bool(doc.get("status", False)),
    )
