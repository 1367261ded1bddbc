from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional

from pydantic import BaseModel, Field, validator

class ItemPayload(BaseModel):
	"""Body of both ``POST /api/items`` and ``PUT /api/items/{id}``."""

	name: str = Field(max_length=200)
	sku: str = Field(max_length=100)
	quantity: int = Field(ge=0)
	price: Decimal = Field(ge=0, le=Decimal("9999999999.99"))
	description: Optional[str] = None
	category: Optional[str] = Field(None, max_length=100)

	@validator("name", "sku")
	def required_text(cls, v):
		v = v.strip()
		if not v:
			raise ValueError("must not be empty")
		return v

	@validator("price")
	def two_decimal_places(cls, v):
		return v.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)

	@validator("description", "category")
	def blank_is_null(cls, v):
		if v is None:
			return None
		v = v.strip()
		return v or None

class ItemOut(BaseModel):
	id: int
	name: str
	sku: str
	quantity: int
	price: float
	description: Optional[str] = None
	category: Optional[str] = None
	owner_id: int
	created_at: Optional[datetime] = None
	updated_at: Optional[datetime] = None

	class Config:
		from_attributes = True

class ItemPage(BaseModel):
	items: List[ItemOut]
	total: int
	page: int
	totalPages: int

class ItemStats(BaseModel):
	total: int
	totalValue: float
	lowStock: int
