from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from nutritrack.core.config import settings


def build_engine(database_url: str):
    if database_url.startswith("sqlite"):
        # Sessions are handed across FastAPI's threadpool
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            echo=False
        )
    return create_engine(
        database_url,
        pool_size=10,  # Number of connections to maintain in the pool
        max_overflow=20,  # Additional connections that can be created on demand
        pool_pre_ping=True,  # Verify connections before use
        pool_recycle=3600,  # Recycle connections after 1 hour
        echo=False
    )

engine = build_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

def init_db():
    # Import models so every table is registered on Base.metadata
    import nutritrack.models  # noqa: F401
    Base.metadata.create_all(bind=engine)

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
