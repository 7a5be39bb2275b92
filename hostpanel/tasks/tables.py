"""
Managed tables, in processing order.

Rows are converged table by table in the order below, then by ascending
primary key. IPs and certificates come first because domains depend on
them; protected areas come after the htaccess users and groups they refer
to; plugin backends run last.
"""

from hostpanel.models import (
    Admin,
    AdminType,
    Domain,
    DomainAlias,
    DomainDns,
    FtpUser,
    Htaccess,
    HtaccessGroup,
    HtaccessUser,
    MailUser,
    Plugin,
    ServerIp,
    SslCert,
    Subdomain,
    SubdomainAlias,
)
from hostpanel.tasks.status_model import ConvergenceAction, EntityStatus, TableStatusModel

PLUGIN_TABLE = TableStatusModel(
    table="plugin",
    model=Plugin,
    status_attr="plugin_status",
    message_attr="plugin_error",
    actions={
        EntityStatus.TOINSTALL: ConvergenceAction.PROVISION,
        EntityStatus.TOENABLE: ConvergenceAction.PROVISION,
        EntityStatus.TOCHANGE: ConvergenceAction.RECONFIGURE,
        EntityStatus.TOUPDATE: ConvergenceAction.RECONFIGURE,
        EntityStatus.TODISABLE: ConvergenceAction.DISABLE,
        EntityStatus.TODELETE: ConvergenceAction.REMOVE,
    },
    terminals={
        ConvergenceAction.PROVISION: EntityStatus.ENABLED,
        ConvergenceAction.RECONFIGURE: EntityStatus.ENABLED,
        ConvergenceAction.DISABLE: EntityStatus.DISABLED,
    },
    extra_filter=lambda model: model.plugin_backend == "yes",
    requeue_statuses=frozenset({EntityStatus.TOCHANGE.value, EntityStatus.ENABLED.value}),
)

MANAGED_TABLES: tuple[TableStatusModel, ...] = (
    TableStatusModel("server_ips", ServerIp, "ip_status"),
    TableStatusModel("ssl_certs", SslCert, "status"),
    TableStatusModel(
        "admin",
        Admin,
        "admin_status",
        extra_filter=lambda model: model.admin_type == AdminType.USER.value,
    ),
    TableStatusModel("domain", Domain, "domain_status"),
    TableStatusModel("domain_aliasses", DomainAlias, "alias_status"),
    TableStatusModel("subdomain", Subdomain, "subdomain_status"),
    TableStatusModel("subdomain_alias", SubdomainAlias, "subdomain_alias_status"),
    TableStatusModel("domain_dns", DomainDns, "domain_dns_status"),
    TableStatusModel("ftp_users", FtpUser, "status"),
    TableStatusModel("mail_users", MailUser, "status"),
    TableStatusModel("htaccess_users", HtaccessUser, "status"),
    TableStatusModel("htaccess_groups", HtaccessGroup, "status"),
    TableStatusModel("htaccess", Htaccess, "status"),
    PLUGIN_TABLE,
)


def get_table(name: str) -> TableStatusModel | None:
    """Return the managed table with the given name, or None."""
    for table in MANAGED_TABLES:
        if table.table == name:
            return table
    return None
