from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from stockroom.db.base import Base


class Database:
	"""Engine plus session factory for one database URL.

	Built once at process start (or by a test fixture) and handed to the
	app; nothing in the package creates an engine at import time.
	"""

	def __init__(self, url: str, echo: bool = False):
		self.url = url
		kwargs = {"echo": echo}
		if url.startswith("sqlite"):
			kwargs["connect_args"] = {"check_same_thread": False}
			if ":memory:" in url or url.rstrip("/") in ("sqlite:", "sqlite+pysqlite:"):
				# a single shared connection keeps the in-memory database alive
				kwargs["poolclass"] = StaticPool
		self.engine = create_engine(url, **kwargs)
		self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

	def create_all(self) -> None:
		# import for side effect: registers tables on Base.metadata
		from stockroom.db import models  # noqa: F401
		Base.metadata.create_all(bind=self.engine)

	def session(self):
		return self.SessionLocal()

	def dispose(self) -> None:
		self.engine.dispose()

def get_db(request: Request):
	db = request.app.state.db.session()
	try:
		yield db
	finally:
		db.close()
