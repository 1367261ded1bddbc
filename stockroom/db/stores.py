"""Credential store and item store.

These are the only classes that talk to the ORM. Each one wraps the
request's ``Session``; unique-constraint violations are translated to the
matching ``Conflict`` subclass and every other database failure becomes
``PersistenceError``.
"""

from contextlib import contextmanager
from typing import Iterable, Optional, Tuple, Type

from sqlalchemy import case, func, or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from stockroom.core.errors import Conflict, DuplicateIdentity, DuplicateSku, PersistenceError
from stockroom.core.logging import log_event
from stockroom.db.models import MAX_ID, EmailConfirmation, Item, User

ITEM_FIELDS = ("name", "sku", "quantity", "price", "description", "category")


def _is_unique_violation(exc: IntegrityError) -> bool:
	text = str(getattr(exc, "orig", exc)).lower()
	return "unique" in text or "duplicate key" in text

def _escape_like(value: str) -> str:
	return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class _Store:
	def __init__(self, db: Session):
		self.db = db

	@contextmanager
	def _reading(self):
		try:
			yield
		except SQLAlchemyError as exc:
			log_event("db_read_failed", error=str(exc))
			raise PersistenceError() from exc

	def _commit(self, conflict: Type[Conflict]) -> None:
		try:
			self.db.commit()
		except IntegrityError as exc:
			self.db.rollback()
			if _is_unique_violation(exc):
				raise conflict() from exc
			log_event("db_write_failed", error=str(exc.orig))
			raise PersistenceError() from exc
		except SQLAlchemyError as exc:
			self.db.rollback()
			log_event("db_write_failed", error=str(exc))
			raise PersistenceError() from exc


class UserStore(_Store):
	def get(self, user_id: int) -> Optional[User]:
		if not 0 < user_id <= MAX_ID:
			return None
		with self._reading():
			return self.db.query(User).filter(User.id == user_id).first()

	def find_by_username(self, username: str) -> Optional[User]:
		with self._reading():
			return self.db.query(User).filter(User.username == username).first()

	def create_user(
		self,
		username: str,
		email: Optional[str],
		password_hash: str,
		is_confirmed: bool = True,
		confirmation_token: Optional[str] = None,
		confirmation_expires_at=None,
	) -> User:
		user = User(
			username=username,
			email=email,
			password_hash=password_hash,
			is_confirmed=is_confirmed,
		)
		self.db.add(user)
		if confirmation_token:
			# same transaction: a failed token insert leaves no user behind
			self.db.add(EmailConfirmation(user=user, token=confirmation_token, expires_at=confirmation_expires_at))
		self._commit(DuplicateIdentity)
		self.db.refresh(user)
		return user

	def find_confirmation(self, token: str) -> Optional[EmailConfirmation]:
		with self._reading():
			return self.db.query(EmailConfirmation).filter(EmailConfirmation.token == token).first()

	def mark_confirmed(self, confirmation: EmailConfirmation, used_at) -> User:
		user = confirmation.user
		user.is_confirmed = True
		confirmation.used_at = used_at
		self._commit(Conflict)
		return user


class ItemStore(_Store):
	def _owned(self, owner_id: int):
		return self.db.query(Item).filter(Item.owner_id == owner_id)

	def list_items(
		self,
		owner_id: int,
		offset: int,
		limit: int,
		search: Optional[str] = None,
		category: Optional[str] = None,
	) -> Tuple[list, int]:
		query = self._owned(owner_id)
		if search:
			pattern = f"%{_escape_like(search)}%"
			query = query.filter(or_(
				Item.name.ilike(pattern, escape="\\"),
				Item.sku.ilike(pattern, escape="\\"),
			))
		if category:
			query = query.filter(Item.category == category)
		with self._reading():
			total = query.count()
			rows = (
				query.order_by(Item.created_at.desc(), Item.id.desc())
				.offset(offset)
				.limit(limit)
				.all()
			)
		return rows, total

	def get_item(self, owner_id: int, item_id: int) -> Optional[Item]:
		if not 0 < item_id <= MAX_ID:
			return None
		with self._reading():
			return self._owned(owner_id).filter(Item.id == item_id).first()

	def create_item(self, owner_id: int, fields: dict) -> Item:
		item = Item(owner_id=owner_id, **{key: fields.get(key) for key in ITEM_FIELDS})
		self.db.add(item)
		self._commit(DuplicateSku)
		self.db.refresh(item)
		return item

	def update_item(self, owner_id: int, item_id: int, fields: dict) -> Optional[Item]:
		item = self.get_item(owner_id, item_id)
		if item is None:
			return None
		for key in ITEM_FIELDS:
			setattr(item, key, fields.get(key))
		self._commit(DuplicateSku)
		self.db.refresh(item)
		return item

	def delete_item(self, owner_id: int, item_id: int) -> bool:
		item = self.get_item(owner_id, item_id)
		if item is None:
			return False
		self.db.delete(item)
		self._commit(Conflict)
		return True

	def stats(self, owner_id: int, low_stock_threshold: int):
		low_stock = func.sum(case((Item.quantity < low_stock_threshold, 1), else_=0))
		with self._reading():
			count, value, low = (
				self.db.query(
					func.count(Item.id),
					func.sum(Item.price * Item.quantity),
					low_stock,
				)
				.filter(Item.owner_id == owner_id)
				.one()
			)
		return count or 0, value or 0, low or 0

	def categories(self, owner_id: int) -> Iterable[str]:
		with self._reading():
			rows = (
				self.db.query(Item.category)
				.filter(Item.owner_id == owner_id, Item.category.is_not(None))
				.distinct()
				.order_by(Item.category.asc())
				.all()
			)
		return [row[0] for row in rows]
