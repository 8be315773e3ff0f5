from typing import Any, Dict, List, Optional, Tuple
from pydantic import BaseModel, Field, field_validator


class LogFilter(BaseModel):
    key: str
    value: str = ""


class LogRequest(BaseModel):
    cluster_name: str = Field("", description="Cluster of the addon, required together with addon")
    addon: str = Field("", description="Log addon key, '*' characters are ignored")
    filters: List[LogFilter] = Field(default_factory=list)
    start: int = Field(0, ge=0, description="Range start, epoch milliseconds")
    end: int = Field(0, ge=0, description="Range end, epoch milliseconds (0 = now)")
    query: str = Field("", description="Free-text query_string")
    size: int = Field(100, ge=1, description="Maximum number of hits")
    sort: str = Field("desc", pattern="^(asc|desc)$")
    debug: bool = False

    @field_validator("cluster_name", "addon", "query", mode="before")
    @classmethod
    def none_as_empty(cls, v):
        return "" if v is None else v

    def filter_pairs(self) -> List[Tuple[str, str]]:
        return [(f.key, f.value) for f in self.filters]

    @classmethod
    def parse_tags(cls, tags: List[str]) -> List[LogFilter]:
        """Parse repeated ``key=value`` query parameters"""
        filters = []
        for tag in tags or []:
            key, sep, value = tag.partition("=")
            key = key.strip()
            if not key:
                raise ValueError(f"invalid tag filter: {tag!r}")
            filters.append(LogFilter(key=key, value=value.strip()))
        return filters


class ESClientInfo(BaseModel):
    urls: str
    log_version: str
    indices: List[str]


class LogTargetsResponse(BaseModel):
    org_id: str
    clients: List[ESClientInfo]


class LogSearchResponse(BaseModel):
    total: int
    hits: List[Dict[str, Any]]
    failed: List[str] = Field(default_factory=list)
    debug: Optional[List[str]] = None
