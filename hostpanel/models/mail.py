from sqlalchemy import Column, Integer, String, Index
from hostpanel.database import Base
from hostpanel.models.mixins import ManagedEntityMixin


class MailUser(ManagedEntityMixin, Base):
    __tablename__ = "mail_users"

    mail_id = Column(Integer, primary_key=True, autoincrement=True)
    mail_acc = Column(String(255), nullable=False)
    mail_addr = Column(String(254), unique=True, nullable=False)
    domain_id = Column(Integer, nullable=False, index=True)
    # normal_mail, alias_forward, ...
    mail_type = Column(String(30), nullable=False, default="normal_mail")
    quota = Column(Integer, nullable=True)
    status = Column(String(255), nullable=False, default="toadd")

    __table_args__ = (Index("idx_mail_users_status", "status"),)
