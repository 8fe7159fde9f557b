from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from planner.config import settings

connect_args = {"check_same_thread": False} if settings.database_url.startswith("sqlite") else {}

engine = create_engine(settings.database_url, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

def init_db():
    """Create all tables"""
    import planner.models  # noqa: F401  registers models on Base
    Base.metadata.create_all(bind=engine)
