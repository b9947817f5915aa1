import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    Integer,
    MetaData,
    String,
    Uuid,
)
from sqlalchemy.orm import declarative_base

# Define naming conventions for constraints and indexes
# https://alembic.sqlalchemy.org/en/latest/naming.html
convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=convention)
Base = declarative_base(metadata=metadata)


class ReadinessResult(Base):
    """
    One completed AI Readiness Check.

    Rows are written once and never updated. ``totals`` is a snapshot of the
    per-category metrics at submission time; ``pdf_locator`` is the artifact
    store locator of the durable report, or NULL when the upload failed.
    """
    __tablename__ = "ai_readiness_results"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    slug = Column(String(16), nullable=False, unique=True)
    totals = Column(JSON, nullable=False)
    avg = Column(Integer, nullable=False)
    user_name = Column(String(255), nullable=True)
    user_email = Column(String(255), nullable=True)
    company = Column(String(255), nullable=True)
    pdf_locator = Column(String(1024), nullable=True)
    catalog_version = Column(String(32), nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        index=True,
    )

    def __repr__(self) -> str:
        return f"<ReadinessResult slug={self.slug} avg={self.avg}>"
