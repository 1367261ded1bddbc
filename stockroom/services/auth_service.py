import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from stockroom.core.config import Settings
from stockroom.core.emailer import send_email
from stockroom.core.errors import EmailNotConfirmed, InvalidCredentials, ValidationError
from stockroom.core.logging import log_event
from stockroom.core.security import hash_password, verify_password
from stockroom.db.models import User
from stockroom.db.stores import UserStore
from stockroom.schemas.auth import LoginRequest, RegisterRequest


@dataclass
class RegistrationResult:
	user_id: int
	pending_confirmation: bool = False


class AuthService:
	def __init__(self, db: Session, settings: Settings):
		self.users = UserStore(db)
		self.settings = settings

	def register(self, payload: RegisterRequest) -> RegistrationResult:
		needs_confirmation = self.settings.REQUIRE_EMAIL_CONFIRMATION
		if needs_confirmation and not payload.email:
			raise ValidationError("Email is required")

		token = expires_at = None
		if needs_confirmation:
			token = secrets.token_urlsafe(32)
			expires_at = datetime.utcnow() + timedelta(hours=self.settings.CONFIRMATION_TOKEN_HOURS)

		user = self.users.create_user(
			username=payload.username,
			email=payload.email,
			password_hash=hash_password(payload.password),
			is_confirmed=not needs_confirmation,
			confirmation_token=token,
			confirmation_expires_at=expires_at,
		)
		log_event("user_registered", user_id=user.id, username=user.username)

		if needs_confirmation:
			self._send_confirmation(user, token)
			return RegistrationResult(user_id=user.id, pending_confirmation=True)
		return RegistrationResult(user_id=user.id)

	def login(self, payload: LoginRequest) -> User:
		user = self.users.find_by_username(payload.username)
		# Same error for unknown user and wrong password.
		if not user or not verify_password(payload.password, user.password_hash):
			log_event("user_login_failed", username=payload.username)
			raise InvalidCredentials()
		if not user.is_confirmed:
			raise EmailNotConfirmed()
		log_event("user_login", user_id=user.id)
		return user

	def confirm_email(self, token: str) -> User:
		row = self.users.find_confirmation(token)
		if not row or row.used_at:
			raise ValidationError("Invalid token")
		now = datetime.utcnow()
		if row.expires_at < now:
			raise ValidationError("Token expired")
		user = self.users.mark_confirmed(row, used_at=now)
		log_event("user_confirmed", user_id=user.id)
		return user

	def _send_confirmation(self, user: User, token: str) -> None:
		link = f"{self.settings.APP_BASE_URL}/login?confirm_token={token}"
		error = send_email(
			self.settings,
			user.email,
			"Confirm your email",
			f"Confirm your Stockroom account by visiting: {link}",
		)
		if error:
			log_event("confirm_email_send_failed", user_id=user.id, error=error)
