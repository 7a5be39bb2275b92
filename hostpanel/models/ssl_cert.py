from sqlalchemy import Column, Integer, String, Text, Index, UniqueConstraint
from hostpanel.database import Base
from hostpanel.models.mixins import ManagedEntityMixin


class SslCert(ManagedEntityMixin, Base):
    __tablename__ = "ssl_certs"

    cert_id = Column(Integer, primary_key=True, autoincrement=True)
    domain_id = Column(Integer, nullable=False)
    # dmn, als, sub or alssub
    domain_type = Column(String(15), nullable=False, default="dmn")
    private_key = Column(Text, nullable=False)
    certificate = Column(Text, nullable=False)
    ca_bundle = Column(Text, nullable=True)
    status = Column(String(255), nullable=False, default="toadd")

    __table_args__ = (
        UniqueConstraint("domain_id", "domain_type", name="unique_ssl_cert_domain"),
        Index("idx_ssl_certs_status", "status"),
    )
