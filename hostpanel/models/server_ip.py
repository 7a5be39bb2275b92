from sqlalchemy import Column, Integer, String, Index
from hostpanel.database import Base
from hostpanel.models.mixins import ManagedEntityMixin


class ServerIp(ManagedEntityMixin, Base):
    __tablename__ = "server_ips"

    ip_id = Column(Integer, primary_key=True, autoincrement=True)
    ip_number = Column(String(45), unique=True, nullable=False)
    ip_card = Column(String(255), nullable=True)
    ip_netmask = Column(Integer, nullable=True)
    ip_status = Column(String(255), nullable=False, default="toadd")

    __table_args__ = (Index("idx_server_ips_status", "ip_status"),)
