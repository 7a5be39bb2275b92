from sqlalchemy import Column, Integer, String, Text, Index
from hostpanel.database import Base
from hostpanel.models.mixins import ManagedEntityMixin


class Domain(ManagedEntityMixin, Base):
    __tablename__ = "domain"

    domain_id = Column(Integer, primary_key=True, autoincrement=True)
    domain_name = Column(String(200), unique=True, nullable=False)
    domain_admin_id = Column(Integer, nullable=False, index=True)
    domain_ip_id = Column(Integer, nullable=True)
    document_root = Column(String(255), nullable=False, default="/htdocs")
    domain_status = Column(String(255), nullable=False, default="toadd")

    __table_args__ = (Index("idx_domain_status", "domain_status"),)


class DomainAlias(ManagedEntityMixin, Base):
    __tablename__ = "domain_aliasses"

    alias_id = Column(Integer, primary_key=True, autoincrement=True)
    domain_id = Column(Integer, nullable=False, index=True)
    alias_name = Column(String(200), unique=True, nullable=False)
    alias_mount = Column(String(200), nullable=False, default="/")
    alias_status = Column(String(255), nullable=False, default="toadd")

    __table_args__ = (Index("idx_alias_status", "alias_status"),)


class Subdomain(ManagedEntityMixin, Base):
    __tablename__ = "subdomain"

    subdomain_id = Column(Integer, primary_key=True, autoincrement=True)
    domain_id = Column(Integer, nullable=False, index=True)
    subdomain_name = Column(String(200), nullable=False)
    subdomain_mount = Column(String(200), nullable=False, default="/")
    subdomain_status = Column(String(255), nullable=False, default="toadd")

    __table_args__ = (Index("idx_subdomain_status", "subdomain_status"),)


class SubdomainAlias(ManagedEntityMixin, Base):
    __tablename__ = "subdomain_alias"

    subdomain_alias_id = Column(Integer, primary_key=True, autoincrement=True)
    alias_id = Column(Integer, nullable=False, index=True)
    subdomain_alias_name = Column(String(200), nullable=False)
    subdomain_alias_mount = Column(String(200), nullable=False, default="/")
    subdomain_alias_status = Column(String(255), nullable=False, default="toadd")

    __table_args__ = (Index("idx_subdomain_alias_status", "subdomain_alias_status"),)


class DomainDns(ManagedEntityMixin, Base):
    """Custom DNS resource record attached to a domain or a domain alias."""

    __tablename__ = "domain_dns"

    domain_dns_id = Column(Integer, primary_key=True, autoincrement=True)
    domain_id = Column(Integer, nullable=False, index=True)
    alias_id = Column(Integer, nullable=False, default=0)
    domain_dns = Column(Text, nullable=False)
    domain_class = Column(String(10), nullable=False, default="IN")
    domain_type = Column(String(10), nullable=False, default="A")
    domain_text = Column(Text, nullable=False)
    owned_by = Column(String(255), nullable=False, default="custom_dns_feature")
    domain_dns_status = Column(String(255), nullable=False, default="toadd")

    __table_args__ = (Index("idx_domain_dns_status", "domain_dns_status"),)
