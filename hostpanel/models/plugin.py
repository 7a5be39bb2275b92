from sqlalchemy import Column, Integer, String, Text, Index
from hostpanel.database import Base


class Plugin(Base):
    """
    Persisted plugin record.

    Only plugins with status 'enabled' get their setup listeners registered.
    Plugins with a backend part (plugin_backend == 'yes') are also converged
    by the task processor.
    """

    __tablename__ = "plugin"

    plugin_id = Column(Integer, primary_key=True, autoincrement=True)
    plugin_name = Column(String(50), unique=True, nullable=False)
    plugin_type = Column(String(20), nullable=False, default="Admin")
    plugin_info = Column(Text, nullable=True)
    plugin_config = Column(Text, nullable=True)
    plugin_status = Column(String(255), nullable=False, default="toinstall")
    plugin_error = Column(Text, nullable=True)
    plugin_backend = Column(String(3), nullable=False, default="no")

    __table_args__ = (Index("idx_plugin_status", "plugin_status"),)

    @property
    def is_enabled(self) -> bool:
        return self.plugin_status == "enabled"

    @property
    def has_backend(self) -> bool:
        return self.plugin_backend == "yes"
