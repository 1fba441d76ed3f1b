from datetime import datetime, timezone

from sqlalchemy import Boolean, ForeignKey, Index, Integer, String, false, func
from sqlalchemy.dialects.postgresql import TIMESTAMP
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shared.database.postgres import Base


class Certificate(Base):
    __tablename__ = "certificates"
    __mapper_args__ = {"eager_defaults": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    certificate_code: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    # sha256(certificate_code), lowercase hex, never written on its own
    hash: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    # Weak reference: deleting the event keeps its certificates
    event_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("events.id", ondelete="SET NULL"),
        nullable=True,
    )
    issued_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )
    revoked: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )

    event = relationship("Event", lazy="select")

    __table_args__ = (
        Index("ix_certificates_event_id", "event_id"),
        Index("ix_certificates_updated_at", "updated_at"),
    )

    def __repr__(self) -> str:
        return f"<Certificate(id={self.id}, code={self.certificate_code}, revoked={self.revoked})>"
