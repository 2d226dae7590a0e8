"""Database models for the request log."""

from datetime import datetime

from sqlalchemy import Column, DateTime, Float, Integer, String, Text

from salestracker.core.database import Base


class Log(Base):
    """One handled HTTP request."""

    __tablename__ = "log"

    id = Column(Integer, primary_key=True, index=True)
    timestamp = Column(DateTime, default=datetime.now, index=True)
    method = Column(String(10), nullable=False)
    path = Column(String(500), nullable=False)
    query_string = Column(String(2000), nullable=True)
    status_code = Column(Integer, nullable=False)
    client_ip = Column(String(64), nullable=True)
    processing_time = Column(Float, nullable=True)  # in milliseconds
    user_agent = Column(String(500), nullable=True)
    username = Column(String(100), nullable=True)
    hostname = Column(String(255), nullable=True)
    application_id = Column(String(100), nullable=True)
    error_detail = Column(Text, nullable=True)
