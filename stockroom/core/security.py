from fastapi import Depends, Request, Response
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from stockroom.core.config import Settings, get_settings
from stockroom.core.errors import Unauthorized
from stockroom.db.models import MAX_ID
from stockroom.db.session import get_db
from stockroom.db.stores import UserStore

# fixed bcrypt cost factor
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=10)

def _normalize_password(password: str) -> str:
	# bcrypt only considers the first 72 bytes; truncate consistently to avoid errors.
	raw = password.encode("utf-8")
	if len(raw) <= 72:
		return password
	return raw[:72].decode("utf-8", errors="ignore")

def hash_password(password: str) -> str:
	return pwd_context.hash(_normalize_password(password))

def verify_password(password: str, password_hash: str) -> bool:
	return pwd_context.verify(_normalize_password(password), password_hash)

def set_session_cookie(response: Response, user_id: int, settings: Settings) -> None:
	response.set_cookie(
		key=settings.SESSION_COOKIE_NAME,
		value=str(user_id),
		max_age=settings.SESSION_MAX_AGE_SECONDS,
		path="/",
		httponly=True,
		secure=settings.secure_cookies,
		samesite="strict",
	)

def clear_session_cookie(response: Response, settings: Settings) -> None:
	response.set_cookie(
		key=settings.SESSION_COOKIE_NAME,
		value="",
		max_age=0,
		path="/",
		httponly=True,
		secure=settings.secure_cookies,
		samesite="strict",
	)

def parse_session_cookie(value: str | None) -> int | None:
	if not value:
		return None
	value = value.strip()
	if not (value.isascii() and value.isdigit()):
		return None
	user_id = int(value)
	return user_id if 0 < user_id <= MAX_ID else None

def get_current_user_id(
	request: Request,
	db: Session = Depends(get_db),
	settings: Settings = Depends(get_settings),
) -> int:
	"""Resolve the session cookie to the id of an existing user.

	The cookie is unsigned, so this only proves the id exists. Every item
	query is additionally scoped by the returned id.
	"""
	user_id = parse_session_cookie(request.cookies.get(settings.SESSION_COOKIE_NAME))
	if user_id is None:
		raise Unauthorized()
	if UserStore(db).get(user_id) is None:
		raise Unauthorized()
	return user_id
