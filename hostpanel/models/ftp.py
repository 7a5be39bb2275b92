from sqlalchemy import Column, Integer, String, Index
from hostpanel.database import Base
from hostpanel.models.mixins import ManagedEntityMixin


class FtpUser(ManagedEntityMixin, Base):
    __tablename__ = "ftp_users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    userid = Column(String(255), unique=True, nullable=False)
    admin_id = Column(Integer, nullable=False, index=True)
    homedir = Column(String(255), nullable=False)
    status = Column(String(255), nullable=False, default="toadd")

    __table_args__ = (Index("idx_ftp_users_status", "status"),)
