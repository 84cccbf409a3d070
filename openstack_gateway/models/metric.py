# Gnocchi(metric) API 응답 스키마
# See the documentation: https://gnocchi.osci.io/rest.html

from datetime import datetime
from typing import List, Optional, Tuple

from pydantic import BaseModel


class ArchivePolicyDefinition(BaseModel):
    timespan: str
    granularity: str
    points: int


class ArchivePolicy(BaseModel):
    name: str
    back_window: int
    definition: List[ArchivePolicyDefinition]
    aggregation_methods: List[str]


class MetricResource(BaseModel):
    creator: str
    started_at: str
    revision_start: str
    ended_at: Optional[str] = None
    user_id: Optional[str] = None
    project_id: Optional[str] = None
    original_resource_id: str
    id: str
    type: str
    revision_end: Optional[str] = None
    created_by_user_id: str
    created_by_project_id: str


class MetricBase(BaseModel):
    id: str
    creator: str
    name: str
    unit: Optional[str] = None
    archive_policy: ArchivePolicy
    created_by_user_id: str
    created_by_project_id: str


class MetricSummary(MetricBase):
    resource_id: Optional[str] = None


class MetricResponse(MetricBase):
    resource: MetricResource


MetricsResponse = List[MetricSummary]

# [timestamp, granularity(초), value]
MetricMeasure = Tuple[datetime, float, float]
MetricMeasureResponse = List[MetricMeasure]
