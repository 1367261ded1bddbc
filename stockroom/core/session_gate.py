"""Cookie gate for the browser pages.

Runs before any handler. It looks only at the request path and whether a
session cookie is present; it never checks the cookie against the
database. API routes resolve the cookie themselves through
``get_current_user_id``.
"""

from enum import Enum

from fastapi import Request
from fastapi.responses import RedirectResponse

from stockroom.core.config import get_settings

LOGIN_PATH = "/login"
DASHBOARD_PATH = "/dashboard"
PROTECTED_PREFIXES = (DASHBOARD_PATH,)
AUTH_PAGE_PREFIXES = (LOGIN_PATH, "/register")


class GateDecision(str, Enum):
	ALLOW = "allow"
	PASS = "pass"
	REDIRECT_LOGIN = "redirect_login"
	REDIRECT_DASHBOARD = "redirect_dashboard"


def _matches(path: str, prefixes) -> bool:
	return any(path == prefix or path.startswith(prefix + "/") for prefix in prefixes)

def decide(path: str, has_cookie: bool) -> GateDecision:
	if _matches(path, PROTECTED_PREFIXES):
		return GateDecision.ALLOW if has_cookie else GateDecision.REDIRECT_LOGIN
	if _matches(path, AUTH_PAGE_PREFIXES) and has_cookie:
		return GateDecision.REDIRECT_DASHBOARD
	return GateDecision.PASS

async def session_gate_middleware(request: Request, call_next):
	cookie_name = get_settings(request).SESSION_COOKIE_NAME
	decision = decide(request.url.path, bool(request.cookies.get(cookie_name)))
	if decision is GateDecision.REDIRECT_LOGIN:
		return RedirectResponse(LOGIN_PATH, status_code=307)
	if decision is GateDecision.REDIRECT_DASHBOARD:
		return RedirectResponse(DASHBOARD_PATH, status_code=307)
	return await call_next(request)
