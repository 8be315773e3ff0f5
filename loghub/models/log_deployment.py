from sqlalchemy import Column, String, Integer, Text, DateTime, Index, func
from loghub.db import Base

# log_type values
LOG_TYPE_LOG_SERVICE = "log-service"
LOG_TYPE_LOG_ANALYTICS = "log-analytics"

# cluster_type values
CLUSTER_TYPE_SELF_HOSTED = 0
CLUSTER_TYPE_MANAGED = 1  # ES only reachable through the cluster dialer


class LogDeployment(Base):
    __tablename__ = "sp_log_deployment"

    id = Column(Integer, primary_key=True, autoincrement=True)
    org_id = Column(String(64), nullable=False)
    cluster_name = Column(String(128), nullable=False)
    cluster_type = Column(Integer, nullable=False, default=CLUSTER_TYPE_SELF_HOSTED)
    es_url = Column(String(1024), nullable=False, default="")  # comma-separated
    es_config = Column(Text, nullable=True)  # JSON: securityEnable / securityUsername / securityPassword
    collector_url = Column(String(255), nullable=True)
    domain = Column(String(255), nullable=True)
    log_type = Column(String(32), nullable=False, default=LOG_TYPE_LOG_ANALYTICS)
    created = Column(DateTime, server_default=func.now())
    updated = Column(DateTime, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index("idx_log_deployment_org_cluster", "org_id", "cluster_name"),
    )

    def to_dict(self):
        """Convert to dictionary for API responses (credentials are not exposed)"""
        return {
            "id": self.id,
            "org_id": self.org_id,
            "cluster_name": self.cluster_name,
            "cluster_type": self.cluster_type,
            "es_url": self.es_url,
            "collector_url": self.collector_url,
            "domain": self.domain,
            "log_type": self.log_type,
            "created": self.created.isoformat() if self.created else None,
            "updated": self.updated.isoformat() if self.updated else None,
        }
