# app/models/client.py

from datetime import datetime
from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    Numeric,
    DateTime,
    Enum,
)
from sqlalchemy.orm import relationship
from app.core.database import Base


class Client(Base):
    __tablename__ = "clients"

    id = Column(Integer, primary_key=True, index=True)

    shipper = Column(String(255), nullable=False)
    consignee = Column(String(255), nullable=False)
    cnpj = Column(String(20), unique=True, index=True, nullable=False)  # só dígitos

    # Rota
    port_origin = Column(String(100), nullable=True)
    port_destination = Column(String(100), nullable=True)

    weight = Column(Numeric(12, 2), nullable=True)
    notify = Column(String(255), nullable=True)

    # Conhecimento de embarque
    bl = Column(String(100), nullable=False)
    bl_date = Column(DateTime, nullable=False)

    invoice_number = Column(String(100), nullable=True)
    reference_number = Column(String(100), unique=True, index=True, nullable=False)
    birth_date = Column(DateTime, nullable=True)
    freight_type = Column(Enum("FOB", "EXW", name="freight_type"), nullable=False)

    # Contato
    contact_name = Column(String(255), nullable=True)
    contact_email = Column(String(255), nullable=True)
    contact_phone = Column(String(20), nullable=True)
    address = Column(Text, nullable=True)
    city = Column(String(100), nullable=True)
    state = Column(String(2), nullable=True)
    zip_code = Column(String(10), nullable=True)

    notes = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    operations = relationship("Operation", back_populates="client")

    @property
    def port_route(self) -> str:
        if self.port_origin and self.port_destination:
            return f"{self.port_origin} / {self.port_destination}"
        return self.port_origin or self.port_destination or ""
