import math
from typing import List, Optional

from sqlalchemy.orm import Session

from stockroom.core.errors import NotFound
from stockroom.db.models import Item
from stockroom.db.stores import ItemStore
from stockroom.schemas.items import ItemPayload

ITEM_NOT_FOUND = "Item not found"


class ItemService:
	"""Owner-scoped item operations.

	Every method takes the caller's user id and never touches another
	user's rows. A row owned by someone else is reported exactly like a
	missing one.
	"""

	def __init__(self, db: Session):
		self.items = ItemStore(db)

	def list(
		self,
		user_id: int,
		page: int = 1,
		page_size: int = 10,
		search: Optional[str] = None,
		category: Optional[str] = None,
	) -> dict:
		search = search.strip() if search else None
		category = category.strip() if category else None
		offset = (page - 1) * page_size
		rows, total = self.items.list_items(user_id, offset, page_size, search=search, category=category)
		return {
			"items": rows,
			"total": total,
			"page": page,
			"totalPages": math.ceil(total / page_size),
		}

	def get(self, user_id: int, item_id: int) -> Item:
		item = self.items.get_item(user_id, item_id)
		if item is None:
			raise NotFound(ITEM_NOT_FOUND)
		return item

	def create(self, user_id: int, payload: ItemPayload) -> Item:
		return self.items.create_item(user_id, payload.model_dump())

	def update(self, user_id: int, item_id: int, payload: ItemPayload) -> Item:
		item = self.items.update_item(user_id, item_id, payload.model_dump())
		if item is None:
			raise NotFound(ITEM_NOT_FOUND)
		return item

	def delete(self, user_id: int, item_id: int) -> None:
		if not self.items.delete_item(user_id, item_id):
			raise NotFound(ITEM_NOT_FOUND)

	def stats(self, user_id: int, low_stock_threshold: int) -> dict:
		total, value, low = self.items.stats(user_id, low_stock_threshold)
		return {
			"total": total,
			"totalValue": round(float(value), 2),
			"lowStock": int(low),
		}

	def categories(self, user_id: int) -> List[str]:
		return list(self.items.categories(user_id))
