from .admin import Admin, AdminType
from .domain import Domain, DomainAlias, DomainDns, Subdomain, SubdomainAlias
from .ftp import FtpUser
from .htaccess import Htaccess, HtaccessGroup, HtaccessUser
from .mail import MailUser
from .plugin import Plugin
from .server_ip import ServerIp
from .ssl_cert import SslCert

__all__ = [
    "Admin",
    "AdminType",
    "Domain",
    "DomainAlias",
    "DomainDns",
    "FtpUser",
    "Htaccess",
    "HtaccessGroup",
    "HtaccessUser",
    "MailUser",
    "Plugin",
    "ServerIp",
    "SslCert",
    "Subdomain",
    "SubdomainAlias",
]
