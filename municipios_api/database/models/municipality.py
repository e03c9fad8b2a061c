"""
Municipality model for the record store.
"""
from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from municipios_api.database.connection import Base


class MunicipalityRecord(Base):
    """
    Stored IBGE municipality.

    The primary key is the IBGE code, copied verbatim from the upstream
    payload, so it is never generated by the database.
    """

    __tablename__ = "municipios"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    nome: Mapped[str] = mapped_column(String(200))

    def __repr__(self) -> str:
        return f"<MunicipalityRecord(id={self.id}, nome='{self.nome}')>"
