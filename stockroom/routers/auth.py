from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.orm import Session

from stockroom.db.session import get_db
from stockroom.schemas.auth import (
	RegisterRequest, LoginRequest, ConfirmEmailRequest,
	RegisterResponse, LoginResponse, MessageResponse,
)
from stockroom.core.config import Settings, get_settings
from stockroom.core.security import set_session_cookie, clear_session_cookie
from stockroom.core.logging import log_event, request_id
from stockroom.services.auth_service import AuthService

router = APIRouter(prefix="/api/auth", tags=["auth"])

@router.post("/register", response_model=RegisterResponse, status_code=201)
def register(
	request: Request,
	response: Response,
	payload: RegisterRequest,
	db: Session = Depends(get_db),
	settings: Settings = Depends(get_settings),
):
	result = AuthService(db, settings).register(payload)
	if result.pending_confirmation:
		response.status_code = 200
		log_event("registration_pending", user_id=result.user_id, request_id=request_id(request))
		return {
			"message": "Registered. Please confirm your email before logging in.",
			"userId": result.user_id,
			"pendingConfirmation": True,
		}
	return {"message": "Registered", "userId": result.user_id}

@router.post("/login", response_model=LoginResponse)
def login(
	request: Request,
	response: Response,
	payload: LoginRequest,
	db: Session = Depends(get_db),
	settings: Settings = Depends(get_settings),
):
	user = AuthService(db, settings).login(payload)
	set_session_cookie(response, user.id, settings)
	log_event("session_started", user_id=user.id, request_id=request_id(request))
	return {"message": "Login successful", "userId": user.id}

@router.post("/logout", response_model=MessageResponse)
def logout(response: Response, settings: Settings = Depends(get_settings)):
	clear_session_cookie(response, settings)
	return {"message": "Logged out"}

@router.post("/confirm", response_model=MessageResponse)
def confirm_email(
	payload: ConfirmEmailRequest,
	db: Session = Depends(get_db),
	settings: Settings = Depends(get_settings),
):
	AuthService(db, settings).confirm_email(payload.token)
	return {"message": "Email confirmed"}
