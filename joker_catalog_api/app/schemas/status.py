"""
Pydantic models for the service introspection endpoints.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel


class HealthStatus(BaseModel):
    status: str
    timestamp: str
    uptime: float
    version: str
    total_jokers: int
    dropped_jokers: int
    cache_age_seconds: Optional[float] = None
    cache_ttl_seconds: float
    stale: bool = False
    last_reload_error: Optional[str] = None
    memory_usage: Optional[Dict[str, int]] = None
    environment: str


class ApiStatus(BaseModel):
    api_status: str
    version: str
    updated_at: str
    total_jokers: int
    endpoints: List[str]
