import os
from sqlalchemy import create_engine
from sqlalchemy.engine import URL, make_url
from sqlalchemy.orm import sessionmaker, declarative_base

POSTGRES_HOST = os.environ.get('TASKFLOW_DB_HOST')
POSTGRES_PORT = os.environ.get('TASKFLOW_DB_PORT')
POSTGRES_USER = os.environ.get('TASKFLOW_DB_USER')
POSTGRES_PASSWORD = os.environ.get('TASKFLOW_DB_PASSWORD')
POSTGRES_DB = os.environ.get('TASKFLOW_DB_NAME')

# Full URL override, e.g. sqlite:// for local runs and tests
DATABASE_URL_OVERRIDE = os.environ.get('TASKFLOW_DATABASE_URL')

if DATABASE_URL_OVERRIDE:
    DATABASE_URL = make_url(DATABASE_URL_OVERRIDE)
else:
    DATABASE_URL = URL.create(
        drivername="postgresql",
        username=POSTGRES_USER,
        password=POSTGRES_PASSWORD,
        host=POSTGRES_HOST,
        database=POSTGRES_DB,
        port=POSTGRES_PORT
    )

engine = create_engine(DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
