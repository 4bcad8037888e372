# main.py

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from app.core.config import Settings, settings as default_settings
from app.core.database import Database
from app.core.errors import register_exception_handlers
from app.core.logging import configure_logging

# Importa os models para registrá-los no Base.metadata
from app.models.client import Client  # noqa: F401
from app.models.supplier import Supplier  # noqa: F401
from app.models.fee import Fee  # noqa: F401
from app.models.operation import Operation  # noqa: F401
from app.models.invoice import Invoice, InvoiceItem  # noqa: F401
from app.models.receipt import Receipt  # noqa: F401

from app.api.clients import router as clients_router
from app.api.suppliers import router as suppliers_router
from app.api.fees import router as fees_router
from app.api.operations import router as operations_router
from app.api.invoices import router as invoices_router
from app.api.receipts import router as receipts_router
from app.api.reports import router as reports_router
from app.api.exchange import router as exchange_router

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings
    configure_logging(settings.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Banco aberto no startup e descartado no shutdown
        database = Database(settings.DATABASE_URL)
        database.create_all()
        app.state.database = database
        logger.info("Banco conectado: %s", database.engine.url.render_as_string(hide_password=True))
        try:
            yield
        finally:
            database.dispose()
            logger.info("Banco desconectado")

    app = FastAPI(
        title="Desembaraço Aduaneiro API",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings

    # === CORS: liberar acesso do front ===
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],            # libera GET, POST, PUT, DELETE, OPTIONS etc.
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(clients_router)
    app.include_router(suppliers_router)
    app.include_router(fees_router)
    app.include_router(operations_router)
    app.include_router(invoices_router)
    app.include_router(receipts_router)
    app.include_router(reports_router)
    app.include_router(exchange_router)

    @app.get("/health")
    def health_check():
        return {"status": "ok"}

    return app


app = create_app()
