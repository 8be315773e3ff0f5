from .log_deployment import LogDeployment
from .log_instance import LogInstance

__all__ = ["LogDeployment", "LogInstance"]
