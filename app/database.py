from typing import Annotated
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from fastapi import Depends
from functools import lru_cache


from pydantic_settings import BaseSettings, SettingsConfigDict




class Settings(BaseSettings):
    DEBUG: int = 1
    DEBUG_DATABASE_URL: str = "sqlite:///./files_manager.db"
    DATABASE_URL: str = "sqlite:///./files_manager.db"
    REDIS_URL: str = "redis://localhost:6379/0"
    FOLDER_PATH: str = "/tmp/files_manager"
    AWS_ACCESS_KEY_ID: str = ""
    AWS_SECRET_ACCESS_KEY: str = ""
    AWS_REGION: str = "af-south-1"
    S3_BUCKET_NAME: str = ""
    SESSION_TTL_SECONDS: int = 86400
    SESSION_KEY_PREFIX: str = "auth_"
    FILE_QUEUE_NAME: str = "fileQueue"
    PAGE_SIZE: int = 20

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings():
    return Settings()


DEBUG = int(get_settings().DEBUG)

if DEBUG:
    SQLALCHEMY_DATABASE_URL =  get_settings().DEBUG_DATABASE_URL
else:
    SQLALCHEMY_DATABASE_URL =  get_settings().DATABASE_URL


def make_engine(url: str):
    # handlers run on a thread pool, sqlite connections must be shareable
    if url.startswith("sqlite"):
        return create_engine(url, connect_args={"check_same_thread": False})
    return create_engine(url, pool_pre_ping=True)


engine = make_engine(SQLALCHEMY_DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

db_dependency = Annotated[Session, Depends(get_db)]
