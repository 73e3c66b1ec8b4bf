# pagecraft/db/session.py
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from pagecraft.core.settings import settings

ENGINE_URL = settings.SQLALCHEMY_DATABASE_URL

_engine_kwargs: dict = {"pool_pre_ping": True}
if not ENGINE_URL.startswith("sqlite"):
    _engine_kwargs["pool_recycle"] = 1800  # keep connections fresh behind managed poolers
else:
    _engine_kwargs["connect_args"] = {"check_same_thread": False}

engine = create_engine(ENGINE_URL, **_engine_kwargs)

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
