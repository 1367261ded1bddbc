from typing import Optional

from pydantic import BaseModel, EmailStr, Field, validator

class RegisterRequest(BaseModel):
	username: str = Field(min_length=1, max_length=50)
	email: Optional[EmailStr] = None
	password: str = Field(min_length=6, max_length=128)

	@validator("username")
	def username_not_blank(cls, v):
		v = v.strip()
		if not v:
			raise ValueError("Username is required")
		return v

	@validator("email", pre=True)
	def blank_email_is_absent(cls, v):
		if v is None:
			return None
		if isinstance(v, str):
			v = v.strip().lower()
			return v or None
		return v

class LoginRequest(BaseModel):
	username: str = Field(min_length=1)
	password: str = Field(min_length=1)

	@validator("username")
	def username_trimmed(cls, v):
		v = v.strip()
		if not v:
			raise ValueError("Username is required")
		return v

class ConfirmEmailRequest(BaseModel):
	token: str = Field(min_length=1)

class RegisterResponse(BaseModel):
	message: str
	userId: int
	pendingConfirmation: bool = False

class LoginResponse(BaseModel):
	message: str
	userId: int

class MessageResponse(BaseModel):
	message: str
