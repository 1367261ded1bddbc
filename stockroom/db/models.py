from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text, UniqueConstraint, Boolean, Numeric
from sqlalchemy.orm import relationship
from datetime import datetime
from stockroom.db.base import Base

# largest id an INTEGER column holds on every supported backend
MAX_ID = 2**31 - 1

class User(Base):
	__tablename__ = "users"

	id = Column(Integer, primary_key=True, index=True)
	username = Column(String, unique=True, index=True, nullable=False)
	email = Column(String, unique=True, index=True, nullable=True)
	password_hash = Column(String, nullable=False)
	is_confirmed = Column(Boolean, nullable=False, default=True)
	created_at = Column(DateTime, default=datetime.utcnow)
	updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

	items = relationship("Item", back_populates="owner")

class Item(Base):
	__tablename__ = "items"
	__table_args__ = (UniqueConstraint("owner_id", "sku", name="uq_items_owner_sku"),)

	id = Column(Integer, primary_key=True, index=True)
	name = Column(String, nullable=False)
	sku = Column(String, nullable=False)
	quantity = Column(Integer, nullable=False, default=0)
	price = Column(Numeric(12, 2), nullable=False, default=0)
	description = Column(Text, nullable=True)
	category = Column(String, index=True, nullable=True)
	owner_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
	created_at = Column(DateTime, default=datetime.utcnow, index=True)
	updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

	owner = relationship("User", back_populates="items")

class EmailConfirmation(Base):
	__tablename__ = "email_confirmations"

	id = Column(Integer, primary_key=True, index=True)
	user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
	token = Column(String, unique=True, index=True, nullable=False)
	expires_at = Column(DateTime, nullable=False)
	used_at = Column(DateTime, nullable=True)
	created_at = Column(DateTime, default=datetime.utcnow)

	user = relationship("User")
