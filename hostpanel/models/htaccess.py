from sqlalchemy import Column, Integer, String, Text, Index
from hostpanel.database import Base
from hostpanel.models.mixins import ManagedEntityMixin


class HtaccessUser(ManagedEntityMixin, Base):
    __tablename__ = "htaccess_users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    dmn_id = Column(Integer, nullable=False, index=True)
    uname = Column(String(255), nullable=False)
    upass = Column(String(255), nullable=False)
    status = Column(String(255), nullable=False, default="toadd")

    __table_args__ = (Index("idx_htaccess_users_status", "status"),)


class HtaccessGroup(ManagedEntityMixin, Base):
    __tablename__ = "htaccess_groups"

    id = Column(Integer, primary_key=True, autoincrement=True)
    dmn_id = Column(Integer, nullable=False, index=True)
    ugroup = Column(String(255), nullable=False)
    # Comma-separated htaccess_users ids
    members = Column(Text, nullable=True)
    status = Column(String(255), nullable=False, default="toadd")

    __table_args__ = (Index("idx_htaccess_groups_status", "status"),)


class Htaccess(ManagedEntityMixin, Base):
    """Protected area of a domain."""

    __tablename__ = "htaccess"

    id = Column(Integer, primary_key=True, autoincrement=True)
    dmn_id = Column(Integer, nullable=False, index=True)
    user_id = Column(String(255), nullable=True)
    group_id = Column(String(255), nullable=True)
    auth_type = Column(String(255), nullable=False, default="Basic")
    auth_name = Column(String(255), nullable=False)
    path = Column(String(255), nullable=False)
    status = Column(String(255), nullable=False, default="toadd")

    __table_args__ = (Index("idx_htaccess_status", "status"),)
