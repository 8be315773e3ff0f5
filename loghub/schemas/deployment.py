from typing import Optional
from pydantic import BaseModel, Field, field_validator


class LogDeploymentCreate(BaseModel):
    org_id: str = Field(..., max_length=64)
    cluster_name: str = Field(..., min_length=1, max_length=128)
    cluster_type: int = Field(0, ge=0, le=1, description="0 = self-hosted, 1 = managed (dialed through the cluster proxy)")
    es_url: str = Field("", max_length=1024, description="Comma-separated Elasticsearch URLs")
    es_config: Optional[str] = Field(None, description="JSON security config")
    collector_url: Optional[str] = None
    domain: Optional[str] = None
    log_type: str = Field("log-analytics", pattern="^(log-service|log-analytics)$")

    @field_validator("es_url")
    @classmethod
    def validate_es_url(cls, v: str) -> str:
        urls = [u.strip() for u in v.split(",") if u.strip()]
        for url in urls:
            if not url.startswith(("http://", "https://")):
                raise ValueError("URL must start with http:// or https://")
            if " " in url:
                raise ValueError("URL cannot contain spaces")
        return ",".join(urls)


class LogDeploymentOut(BaseModel):
    id: int
    org_id: str
    cluster_name: str
    cluster_type: int
    es_url: str
    collector_url: Optional[str]
    domain: Optional[str]
    log_type: str
    created: Optional[str]
    updated: Optional[str]


class LogInstanceCreate(BaseModel):
    log_key: str = Field(..., min_length=1, max_length=64)
    org_id: Optional[str] = Field(None, max_length=64)
    cluster_name: str = Field(..., min_length=1, max_length=128)
    project_id: str = Field("", max_length=64)
    workspace: str = Field("", max_length=32)
    log_type: Optional[str] = Field(None, pattern="^(log-service|log-analytics)$")


class LogInstanceOut(BaseModel):
    id: int
    log_key: str
    org_id: Optional[str]
    cluster_name: str
    project_id: str
    workspace: str
    log_type: Optional[str]
    created: Optional[str]
