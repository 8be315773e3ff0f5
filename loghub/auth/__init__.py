from .org import require_org

__all__ = ["require_org"]
