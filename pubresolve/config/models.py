from pydantic import BaseModel
from typing import Literal


class PubResolveConfig(BaseModel):
    record_file: str = "_publish.yml"
    render: bool = True
    log_level: Literal["debug", "info", "warn", "error"] = "info"
    log_format: Literal["text", "json"] = "text"
