from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class AuditRequest(BaseModel):
    url: Optional[str] = None


class FormattedNode(BaseModel):
    html: str
    message: str
    # axe selectors, or the fallback text when the node has none
    target: Any


class FormattedFinding(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = None
    impact: str
    description: str
    help: Optional[str] = None
    help_url: Optional[str] = Field(default=None, alias="helpUrl")
    tags: List[str] = []
    page_url: str = Field(default="", alias="pageUrl")
    nodes: List[FormattedNode] = []


class RuleSummary(BaseModel):
    id: Optional[str] = None
    title: Optional[str] = None
    description: str
    tags: List[str] = []


class AuditReport(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    url: str
    passes: List[FormattedFinding]
    violations: List[FormattedFinding]
    incomplete: List[FormattedFinding]
    inapplicable: List[FormattedFinding]
    tests_run: List[RuleSummary] = Field(alias="testsRun")


class HealthStatus(BaseModel):
    status: str
    timestamp: str
    uptime: float


class ErrorBody(BaseModel):
    error: str
