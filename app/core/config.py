# app/core/config.py

import os
from decimal import Decimal
from typing import Optional

from dotenv import load_dotenv

# Caminho da raiz do projeto (onde está o main.py e o .env)
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
ENV_PATH = os.path.join(BASE_DIR, ".env")

# Carrega variáveis do arquivo .env, se existir
if os.path.exists(ENV_PATH):
    load_dotenv(ENV_PATH)


class Settings:
    def __init__(
        self,
        database_url: Optional[str] = None,
        cors_origins: Optional[list[str]] = None,
        log_level: Optional[str] = None,
    ) -> None:
        # SQLite por padrão se não houver .env
        self.DATABASE_URL: str = database_url or os.getenv(
            "DATABASE_URL",
            "sqlite:///./desembaraco.db",
        )

        if cors_origins is None:
            raw = os.getenv("CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000")
            cors_origins = [o.strip() for o in raw.split(",") if o.strip()]
        self.CORS_ORIGINS: list[str] = cors_origins

        self.LOG_LEVEL: str = (log_level or os.getenv("LOG_LEVEL", "INFO")).upper()

        # Cotação USD-BRL usada para pré-preencher o câmbio da fatura
        self.USD_BRL_URL: str = os.getenv(
            "USD_BRL_URL",
            "https://economia.awesomeapi.com.br/json/last/USD-BRL",
        )

        # IOF aplicado sobre frete + despesas locais (só aparece no PDF)
        self.IOF_RATE_PCT: Decimal = Decimal(os.getenv("IOF_RATE_PCT", "3.5"))

        # Dados bancários impressos no demonstrativo
        self.BANK_NAME: str = os.getenv("BANK_NAME", "BANCO INTER")
        self.BANK_AGENCY: str = os.getenv("BANK_AGENCY", "0001")
        self.BANK_ACCOUNT: str = os.getenv("BANK_ACCOUNT", "36215776-6")
        self.BANK_PIX: str = os.getenv("BANK_PIX", "CNPJ: 39.344.589/0001-80")
        self.PAYMENT_INSTRUCTIONS: str = os.getenv(
            "PAYMENT_INSTRUCTIONS",
            "Enviar comprovante para baixa e desbloqueio da carga no terminal Bandeirantes.",
        )


settings = Settings()
