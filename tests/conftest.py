import pytest
from fastapi.testclient import TestClient

from stockroom.core.config import Settings
from stockroom.db.session import Database
from stockroom.main import create_app

TEST_DATABASE_URL = "sqlite+pysqlite:///:memory:"


@pytest.fixture()
def database():
	db = Database(TEST_DATABASE_URL)
	db.create_all()
	try:
		yield db
	finally:
		db.dispose()


@pytest.fixture()
def db_session(database):
	session = database.session()
	try:
		yield session
	finally:
		session.close()


@pytest.fixture()
def settings():
	return Settings(
		DATABASE_URL=TEST_DATABASE_URL,
		AUTO_CREATE_TABLES=False,
		ENVIRONMENT="test",
		REQUIRE_EMAIL_CONFIRMATION=False,
		SMTP_HOST="",
	)


@pytest.fixture()
def app(settings, database):
	return create_app(settings=settings, database=database)


@pytest.fixture()
def make_client(app):
	clients = []

	def _make(target_app=None):
		client = TestClient(target_app or app)
		clients.append(client)
		return client

	yield _make
	for client in clients:
		client.close()


@pytest.fixture()
def client(make_client):
	return make_client()


@pytest.fixture()
def signed_in(make_client):
	"""Return a factory that registers a user and yields a logged-in client."""

	def _signed_in(username="alice", password="secret1", email=None):
		client = make_client()
		res = client.post(
			"/api/auth/register",
			json={"username": username, "email": email, "password": password},
		)
		assert res.status_code == 201, res.text
		res = client.post("/api/auth/login", json={"username": username, "password": password})
		assert res.status_code == 200, res.text
		return client

	return _signed_in


def item_body(**overrides):
	body = {
		"name": "Dell XPS 13",
		"sku": "XPS-13",
		"quantity": 5,
		"price": 19.99,
		"description": "Ultrabook",
		"category": "Laptop",
	}
	body.update(overrides)
	return body
