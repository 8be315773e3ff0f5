from sqlalchemy import Column, String, Integer, DateTime, Index, func
from loghub.db import Base


class LogInstance(Base):
    __tablename__ = "sp_log_instance"

    id = Column(Integer, primary_key=True, autoincrement=True)
    log_key = Column(String(64), nullable=False, index=True)  # addon key
    org_id = Column(String(64), nullable=True)
    cluster_name = Column(String(128), nullable=False)
    project_id = Column(String(64), nullable=False, default="")
    workspace = Column(String(32), nullable=False, default="")
    log_type = Column(String(32), nullable=True)
    created = Column(DateTime, server_default=func.now())
    updated = Column(DateTime, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index("idx_log_instance_group", "cluster_name", "project_id", "workspace"),
    )

    def to_dict(self):
        return {
            "id": self.id,
            "log_key": self.log_key,
            "org_id": self.org_id,
            "cluster_name": self.cluster_name,
            "project_id": self.project_id,
            "workspace": self.workspace,
            "log_type": self.log_type,
            "created": self.created.isoformat() if self.created else None,
        }
