"""Key model."""

import uuid
from datetime import datetime

from sqlalchemy import Boolean, String, Uuid, false
from sqlalchemy.orm import Mapped, mapped_column

from tsg.core.constants import KEYS_TABLE_NAME
from tsg.database.types import UTCDateTime
from .base import Base


class KeyRecord(Base):
    __tablename__ = KEYS_TABLE_NAME

    id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    name: Mapped[str] = mapped_column(String, nullable=False)
    fingerprint: Mapped[str] = mapped_column(String, nullable=False, default="")
    material: Mapped[str] = mapped_column(String, nullable=False, default="")
    account_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    archived: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )
    created_at: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)
