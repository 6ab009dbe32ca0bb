"""Alertmanager webhook payload and JSON log record models."""

from datetime import datetime
import json
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Alert(BaseModel):
    """Single alert inside an Alertmanager notification."""

    status: str = ""
    starts_at: Optional[datetime] = Field(default=None, alias="startsAt")
    ends_at: Optional[datetime] = Field(default=None, alias="endsAt")
    labels: Dict[str, Optional[str]] = Field(default_factory=dict)
    annotations: Dict[str, Optional[str]] = Field(default_factory=dict)

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("status", mode="before")
    @classmethod
    def _null_status(cls, value):
        return "" if value is None else value

    @field_validator("labels", "annotations", mode="before")
    @classmethod
    def _null_mapping(cls, value):
        return {} if value is None else value


class AlertmanagerPayload(BaseModel):
    """Webhook body posted by Alertmanager; only the alert list is used."""

    alerts: List[Alert] = Field(default_factory=list)

    @field_validator("alerts", mode="before")
    @classmethod
    def _null_alerts(cls, value):
        return [] if value is None else value


def decode_payload(body):
    """Validate the first JSON value in body; anything after it is ignored"""
    text = body.decode("utf-8", errors="replace").lstrip(" \t\r\n")
    document, _ = json.JSONDecoder().raw_decode(text)
    return AlertmanagerPayload.model_validate(document)


class LogRecord(BaseModel):
    """One line of the day log file, serialized by alias in field order."""

    timestamp: str = Field(alias="ts")
    ip: str
    hostname: str = Field(alias="hname")
    kpi: str
    value: str = "1"
    count: str = Field(alias="cnt")
    summary: str = Field(alias="app_sub_name")

    model_config = ConfigDict(populate_by_name=True)

    def to_json_line(self):
        return self.model_dump_json(by_alias=True) + "\n"
