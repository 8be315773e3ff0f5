"""
Read/write access to registered log deployments and log instances.

Lookups raise ``sqlalchemy.exc.SQLAlchemyError`` on database failures; the
query layer decides how to degrade.
"""
import logging
from typing import Callable, Iterable, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..db import SessionLocal
from ..models.log_deployment import LogDeployment
from ..models.log_instance import LogInstance

logger = logging.getLogger(__name__)


class LogDeploymentStore:
    """Queries over ``sp_log_deployment``"""

    def __init__(self, session_factory: Callable[[], Session] = SessionLocal):
        self._session_factory = session_factory

    def query_by_org_and_clusters(self, org_id: str, cluster_names: Iterable[str] = ()) -> List[LogDeployment]:
        """All deployments of an org, optionally restricted to some clusters"""
        stmt = select(LogDeployment).where(LogDeployment.org_id == str(org_id))
        names = [name for name in cluster_names if name]
        if names:
            stmt = stmt.where(LogDeployment.cluster_name.in_(names))
        stmt = stmt.order_by(LogDeployment.id)
        with self._session_factory() as db:
            rows = list(db.scalars(stmt))
            db.expunge_all()
        return rows

    def create(self, **fields) -> LogDeployment:
        with self._session_factory() as db:
            row = LogDeployment(**fields)
            db.add(row)
            db.commit()
            db.refresh(row)
            db.expunge(row)
        logger.info("registered log deployment org=%s cluster=%s", row.org_id, row.cluster_name)
        return row


class LogInstanceStore:
    """Queries over ``sp_log_instance``"""

    def __init__(self, session_factory: Callable[[], Session] = SessionLocal):
        self._session_factory = session_factory

    def get_by_log_key(self, log_key: str) -> Optional[LogInstance]:
        stmt = (
            select(LogInstance)
            .where(LogInstance.log_key == log_key)
            .order_by(LogInstance.id)
            .limit(1)
        )
        with self._session_factory() as db:
            row = db.scalars(stmt).first()
            if row is not None:
                db.expunge(row)
        return row

    def list_by_cluster_project_workspace(self, cluster_name: str, project_id: str, workspace: str) -> List[LogInstance]:
        stmt = (
            select(LogInstance)
            .where(
                LogInstance.cluster_name == cluster_name,
                LogInstance.project_id == project_id,
                LogInstance.workspace == workspace,
            )
            .order_by(LogInstance.id)
        )
        with self._session_factory() as db:
            rows = list(db.scalars(stmt))
            db.expunge_all()
        return rows

    def create(self, **fields) -> LogInstance:
        with self._session_factory() as db:
            row = LogInstance(**fields)
            db.add(row)
            db.commit()
            db.refresh(row)
            db.expunge(row)
        logger.info("registered log instance key=%s cluster=%s", row.log_key, row.cluster_name)
        return row
