import logging

from fastapi import Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from starlette import status

from stockroom.core.logging import log_event, request_id


class AppError(Exception):
	status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
	message = "Something went wrong"

	def __init__(self, message: str | None = None, details=None):
		super().__init__(message or self.message)
		if message:
			self.message = message
		self.details = details


class ValidationError(AppError):
	status_code = status.HTTP_400_BAD_REQUEST
	message = "Validation error"


class Unauthorized(AppError):
	status_code = status.HTTP_401_UNAUTHORIZED
	message = "Unauthorized"


class InvalidCredentials(Unauthorized):
	message = "Invalid username or password"


class Forbidden(AppError):
	status_code = status.HTTP_403_FORBIDDEN
	message = "Forbidden"


class EmailNotConfirmed(Forbidden):
	message = "Email not confirmed"


class NotFound(AppError):
	status_code = status.HTTP_404_NOT_FOUND
	message = "Not found"


class Conflict(AppError):
	status_code = status.HTTP_409_CONFLICT
	message = "Already exists"


class DuplicateIdentity(Conflict):
	message = "Username or email already taken"


class DuplicateSku(Conflict):
	message = "SKU already exists"


class PersistenceError(AppError):
	message = "Could not complete the request, please try again later"


def error_response(request: Request, status_code: int, message: str, details=None):
	# Ensure details is serializable
	if isinstance(details, Exception):
		details = str(details)
	return JSONResponse(
		status_code=status_code,
		content={
			"error": {
				"message": message,
				"details": jsonable_encoder(details),
				"request_id": request_id(request),
			}
		},
	)

def _first_error_message(errors) -> str:
	if not errors:
		return "Validation error"
	first = errors[0]
	field = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path"))
	msg = first.get("msg", "invalid value")
	return f"{field}: {msg}" if field else msg

async def app_error_handler(request: Request, exc: AppError):
	return error_response(request, exc.status_code, exc.message, details=exc.details)

async def validation_exception_handler(request: Request, exc: RequestValidationError):
	errors = exc.errors()
	return error_response(
		request,
		status.HTTP_400_BAD_REQUEST,
		_first_error_message(errors),
		details=[{"loc": e.get("loc"), "msg": e.get("msg"), "type": e.get("type")} for e in errors],
	)

async def unhandled_exception_handler(request: Request, exc: Exception):
	log_event(
		"unhandled_error",
		level=logging.ERROR,
		error=repr(exc),
		path=request.url.path,
		request_id=request_id(request),
	)
	return error_response(request, status.HTTP_500_INTERNAL_SERVER_ERROR, PersistenceError.message)
