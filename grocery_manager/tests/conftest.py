import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from grocery_manager.app.api.deps import get_db
from grocery_manager.app.core.config import Settings
from grocery_manager.app.db.models.models_v1 import Base, Item, Reading
from grocery_manager.app.main import create_app

CUSTOMER_NUMBER = "4242"


@pytest.fixture(scope="function")
def engine():
    """
    SQLite en mémoire, une base neuve par test.

    StaticPool = une seule connexion partagée, donc le client HTTP (thread
    du TestClient) et db_session voient les mêmes données.
    """
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=eng)
    try:
        yield eng
    finally:
        Base.metadata.drop_all(bind=eng)
        eng.dispose()


@pytest.fixture(scope="function")
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture(scope="function")
def db_session(session_factory) -> Session:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def settings():
    return Settings(
        database_url="sqlite://",
        customer_number=CUSTOMER_NUMBER,
        ingest_enabled=False,
    )


@pytest.fixture
def client(settings, session_factory):
    app = create_app(settings=settings)

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def make_item(db_session):
    def _make(item_no, current, desired, name=None, size="1 unit"):
        item = Item(
            item_no=item_no,
            item_name=name or f"Item {item_no}",
            size=size,
            current_stock_level=current,
            desired_stock_level=desired,
        )
        db_session.add(item)
        db_session.commit()
        return item

    return _make


@pytest.fixture
def make_reading(db_session):
    def _make(input, processed=None):
        reading = Reading(input=input, processed=processed)
        db_session.add(reading)
        db_session.commit()
        return reading

    return _make
