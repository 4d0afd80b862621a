"""SQLAlchemy models for contabil database."""

from datetime import datetime, UTC
from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class Client(Base):
    """Business client model."""

    __tablename__ = "clients"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    accounts = relationship("ChartAccount", back_populates="client", cascade="all, delete-orphan")
    movements = relationship("Movement", back_populates="client", cascade="all, delete-orphan")
    mappings = relationship("CategoryMapping", back_populates="client", cascade="all, delete-orphan")


class ChartAccount(Base):
    """Chart-of-accounts entry model."""

    __tablename__ = "chart_accounts"

    id = Column(Integer, primary_key=True)
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=False)
    code = Column(String, nullable=False)
    name = Column(String, nullable=False)
    level = Column(Integer, nullable=False)
    kind = Column(String, default="analytic", nullable=False)
    alias = Column(String, nullable=True)
    report_type = Column(String, nullable=True)
    report_category = Column(String, nullable=True)
    is_mapped = Column(Boolean, default=False, nullable=False)

    __table_args__ = (UniqueConstraint("client_id", "code", name="uq_client_account_code"),)

    # Relationships
    client = relationship("Client", back_populates="accounts")


class Movement(Base):
    """Monthly ledger balances of one account, year and statement type."""

    __tablename__ = "movements"

    id = Column(Integer, primary_key=True)
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=False, index=True)
    account_code = Column(String, nullable=False)
    name = Column(String, nullable=False)
    level = Column(Integer, nullable=False)
    statement_type = Column(String, nullable=False)
    year = Column(Integer, nullable=False)
    category = Column(String, nullable=True)
    # Twelve floats, January through December
    monthly_values = Column(JSON, nullable=False)
    is_mapped = Column(Boolean, default=False, nullable=False)
    imported_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    client = relationship("Client", back_populates="movements")


class CategoryMapping(Base):
    """Account code to canonical category mapping model."""

    __tablename__ = "category_mappings"

    id = Column(Integer, primary_key=True)
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=False)
    account_code = Column(String, nullable=False)
    account_name = Column(String, nullable=False)
    category = Column(String, nullable=False)
    updated_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (UniqueConstraint("client_id", "account_code", name="uq_client_mapping_code"),)

    # Relationships
    client = relationship("Client", back_populates="mappings")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
