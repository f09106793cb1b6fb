"""Pydantic models describing the analysis report consumed by the CLI."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from issueflow.domain.model import ComponentStatus, ComponentType, Severity


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class ReportBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class RawIssuePayload(ReportBaseModel):
    rule_key: str = Field(alias="rule")
    line: int | None = None
    message: str | None = None
    line_hash: str | None = Field(default=None, alias="lineHash")
    severity: Severity = Severity.MAJOR
    on_disabled_rule: bool = Field(default=False, alias="onDisabledRule")
    attributes: dict[str, str] = Field(default_factory=dict)

    _normalize_message = field_validator("message", "line_hash", mode="before")(_blank_to_none)

    @field_validator("line")
    @classmethod
    def _positive_line(cls, value: int | None) -> int | None:
        if value is not None and value < 1:
            raise ValueError("Issue line must be positive")
        return value


class OriginalFilePayload(ReportBaseModel):
    uuid: str
    key: str


class ComponentPayload(ReportBaseModel):
    uuid: str
    key: str
    type: ComponentType = ComponentType.FILE
    status: ComponentStatus = ComponentStatus.CHANGED
    original_file: OriginalFilePayload | None = Field(default=None, alias="originalFile")
    issues: list[RawIssuePayload] = Field(default_factory=list)
    children: list[ComponentPayload] = Field(default_factory=list)

    @model_validator(mode="after")
    def _issues_only_on_files(self) -> ComponentPayload:
        if self.issues and self.type is not ComponentType.FILE:
            raise ValueError(f"Only file components can carry issues: {self.key}")
        return self


ComponentPayload.model_rebuild()


class ReportPayload(ReportBaseModel):
    analysis_date: datetime = Field(alias="analysisDate")
    root: ComponentPayload

    @field_validator("analysis_date")
    @classmethod
    def _ensure_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)
