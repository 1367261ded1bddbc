import os
from dotenv import load_dotenv
from fastapi import Request

load_dotenv()

def _env_bool(name: str, default: str) -> bool:
	return os.getenv(name, default).lower() == "true"

class Settings:
	APP_NAME = "Stockroom"

	def __init__(self, **overrides):
		self.DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./stockroom.db")
		self.AUTO_CREATE_TABLES = _env_bool("AUTO_CREATE_TABLES", "true")

		self.ENVIRONMENT = os.getenv("ENVIRONMENT", "development")

		self.SESSION_COOKIE_NAME = "auth_user_id"
		self.SESSION_MAX_AGE_SECONDS = int(os.getenv("SESSION_MAX_AGE_SECONDS", "86400"))

		self.LOW_STOCK_THRESHOLD = int(os.getenv("LOW_STOCK_THRESHOLD", "10"))

		self.REQUIRE_EMAIL_CONFIRMATION = _env_bool("REQUIRE_EMAIL_CONFIRMATION", "false")
		self.CONFIRMATION_TOKEN_HOURS = int(os.getenv("CONFIRMATION_TOKEN_HOURS", "24"))
		self.APP_BASE_URL = os.getenv("APP_BASE_URL", "http://localhost:8000")

		self.SMTP_HOST = os.getenv("SMTP_HOST", "")
		self.SMTP_PORT = int(os.getenv("SMTP_PORT", "587"))
		self.SMTP_USER = os.getenv("SMTP_USER", "")
		self.SMTP_PASSWORD = os.getenv("SMTP_PASSWORD", "")
		self.SMTP_FROM = os.getenv("SMTP_FROM", "")
		self.SMTP_USE_TLS = _env_bool("SMTP_USE_TLS", "true")

		for key, value in overrides.items():
			if not hasattr(self, key):
				raise AttributeError(f"Unknown setting: {key}")
			setattr(self, key, value)

	@property
	def secure_cookies(self) -> bool:
		return self.ENVIRONMENT == "production"

settings = Settings()

def get_settings(request: Request) -> Settings:
	return getattr(request.app.state, "settings", settings)
