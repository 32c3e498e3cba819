from __future__ import annotations

from typing import Literal, Optional
from pydantic import BaseModel, Field

DisplayTarget = Literal["statusbar", "title"]
InsertionMode = Literal["prepend", "append"]


class AppConfig(BaseModel):
    gtm_executable: str = "gtm"
    min_version: str = "1.1.0"
    update_interval_seconds: float = Field(default=30.0, gt=0)
    command_timeout_seconds: Optional[float] = Field(default=None, gt=0)
    display_target: DisplayTarget = "statusbar"
    insertion: InsertionMode = "prepend"
    label: str = "GTM"
    fresh_marker: str = "*"

    def to_reporter_config(self) -> dict:
        return {
            "update_interval_seconds": self.update_interval_seconds,
            "label": self.label,
            "fresh_marker": self.fresh_marker,
        }
