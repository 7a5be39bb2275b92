from sqlalchemy import Column, Integer, String, DateTime, Index
from hostpanel.database import Base
from hostpanel.models.mixins import ManagedEntityMixin
from datetime import datetime
import enum


class AdminType(str, enum.Enum):
    ADMIN = "admin"
    RESELLER = "reseller"
    USER = "user"


class Admin(ManagedEntityMixin, Base):
    """Panel account. Only customer accounts (admin_type 'user') are converged."""

    __tablename__ = "admin"

    admin_id = Column(Integer, primary_key=True, autoincrement=True)
    admin_name = Column(String(200), unique=True, nullable=False)
    admin_type = Column(String(10), nullable=False, default=AdminType.USER.value)
    created_by = Column(Integer, nullable=True)
    email = Column(String(255), nullable=True)
    admin_status = Column(String(255), nullable=False, default="toadd")
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    __table_args__ = (Index("idx_admin_status", "admin_status"),)
