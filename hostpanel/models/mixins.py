from sqlalchemy import Column, DateTime, Text
from datetime import datetime


class ManagedEntityMixin:
    """Columns shared by every table driven by the task processor."""

    # Error text of the last failed convergence, cleared on success
    status_message = Column(Text, nullable=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
