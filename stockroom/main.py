from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.responses import FileResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from pathlib import Path
from fastapi.exceptions import RequestValidationError

from stockroom.core.config import Settings, settings as default_settings
from stockroom.core.logging import request_id_middleware, log_event
from stockroom.core.errors import (
	AppError, app_error_handler, validation_exception_handler, unhandled_exception_handler,
)
from stockroom.core.session_gate import session_gate_middleware, DASHBOARD_PATH
from stockroom.db.session import Database

from stockroom.routers.auth import router as auth_router
from stockroom.routers.items import router as items_router


@asynccontextmanager
async def lifespan(app: FastAPI):
	owned = app.state.db is None
	if owned:
		app.state.db = Database(app.state.settings.DATABASE_URL)
		log_event("database_opened", url=app.state.db.engine.url.render_as_string(hide_password=True))
	if app.state.settings.AUTO_CREATE_TABLES:
		app.state.db.create_all()
	try:
		yield
	finally:
		if owned:
			app.state.db.dispose()
			app.state.db = None
			log_event("database_closed")

def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
	settings = settings or default_settings
	app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)
	app.state.settings = settings
	app.state.db = database

	static_dir = Path(__file__).resolve().parent / "static"

	# Middleware: the last one added runs first, so request ids wrap the gate.
	app.middleware("http")(session_gate_middleware)
	app.middleware("http")(request_id_middleware)

	# Consistent error envelope
	app.add_exception_handler(AppError, app_error_handler)
	app.add_exception_handler(RequestValidationError, validation_exception_handler)
	app.add_exception_handler(Exception, unhandled_exception_handler)

	# Routers
	app.include_router(auth_router)
	app.include_router(items_router)

	app.mount("/static", StaticFiles(directory=static_dir), name="static")

	@app.get("/")
	def index():
		return RedirectResponse(DASHBOARD_PATH, status_code=307)

	@app.get("/login")
	def login_page():
		return FileResponse(static_dir / "login.html")

	@app.get("/register")
	def register_page():
		return FileResponse(static_dir / "register.html")

	@app.get("/dashboard")
	def dashboard_page():
		return FileResponse(static_dir / "dashboard.html")

	@app.get("/health")
	def health():
		return {"status": "OK"}

	return app

app = create_app()
