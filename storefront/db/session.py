from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine, Session
from storefront.core.config import settings


def build_engine(database_url: str):
    # check_same_thread is needed for SQLite, remove for PostgreSQL
    if database_url.startswith("sqlite"):
        connect_args = {"check_same_thread": False}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            # In-memory databases live on a single shared connection
            return create_engine(database_url, connect_args=connect_args, poolclass=StaticPool)
        return create_engine(database_url, connect_args=connect_args)
    return create_engine(database_url)


engine = build_engine(settings.DATABASE_URL)

def get_session():
    with Session(engine) as session:
        yield session

def create_db_and_tables(bind=None):
    # Import models so they register with SQLModel metadata
    import storefront.models  # noqa: F401
    SQLModel.metadata.create_all(bind or engine)
