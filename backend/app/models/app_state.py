"""App state model - scalar key/value pairs such as the last-open marker and goals."""

from sqlalchemy import Column, String, Text, DateTime
from sqlalchemy.sql import func

from app.database import Base


class AppState(Base):
    """
    One scalar value per key.
    Replaces the secure key/value storage of the mobile client.
    """
    __tablename__ = "app_state"

    key = Column(String(100), primary_key=True)
    value = Column(Text, nullable=True)

    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
