# app/core/database.py

from typing import Iterator

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

Base = declarative_base()


class Database:
    """
    Handle explícito do banco: criado no startup da aplicação,
    descartado no shutdown e entregue às rotas via dependência.
    """

    def __init__(self, url: str) -> None:
        self.url = url

        # Para SQLite, é importante usar connect_args={"check_same_thread": False}
        if url.startswith("sqlite"):
            kwargs = {"connect_args": {"check_same_thread": False}}
            # Banco em memória precisa de uma única conexão compartilhada
            if url in ("sqlite://", "sqlite:///:memory:"):
                kwargs["poolclass"] = StaticPool
            self.engine = create_engine(url, echo=False, future=True, **kwargs)
        else:
            self.engine = create_engine(
                url,
                echo=False,
                future=True,
                pool_pre_ping=True,
            )

        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def create_all(self) -> None:
        Base.metadata.create_all(bind=self.engine)

    def session(self) -> Session:
        return self.SessionLocal()

    def dispose(self) -> None:
        self.engine.dispose()


# Dependência usada nos endpoints
def get_db(request: Request) -> Iterator[Session]:
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
