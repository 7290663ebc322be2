from __future__ import annotations

from pathlib import Path
from typing import List, Optional
import yaml
from pydantic import BaseModel, Field


# ---- DNS collaborator ----
class DnsConfig(BaseModel):
    timeout: float = Field(default=5.0, gt=0, description="Resolver lifetime per query, seconds")
    nameservers: List[str] = Field(default_factory=list)  # empty -> system resolver


# ---- Default formats for date/time rules (strftime syntax) ----
class FormatConfig(BaseModel):
    date: str = "%Y-%m-%d"
    date_time: str = "%Y-%m-%d %H:%M:%S"
    time: str = "%H:%M"
    time_with_seconds: str = "%H:%M:%S"
    date_range: str = "%Y-%m-%d %H:%M"


# ---- Root config ----
class SieveConfig(BaseModel):
    dns: DnsConfig = Field(default_factory=DnsConfig)
    formats: FormatConfig = Field(default_factory=FormatConfig)


# ---- Loader ----
def load_config(path: Optional[Path]) -> SieveConfig:
    if not path:
        return SieveConfig()
    data = yaml.safe_load(Path(path).read_text()) or {}
    return SieveConfig(**data)
