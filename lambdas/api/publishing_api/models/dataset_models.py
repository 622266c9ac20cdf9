"""Dataset domain models."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SourceType(str, Enum):
    """How a dataset entered the system."""

    FILE_UPLOAD = "FileUpload"
    INGEST_API = "IngestApi"


class S3Key(BaseModel):
    """Locations of the original upload and its derived JSON form."""

    raw: str = Field(..., min_length=1, description="Key of the uploaded file")
    json_: str = Field(
        ..., alias="json", min_length=1, description="Key of the parsed JSON file"
    )

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class DatasetInfo(BaseModel):
    """Upload metadata used to create a new dataset."""

    fileName: str
    createdBy: str
    s3Key: S3Key
    sourceType: SourceType = SourceType.FILE_UPLOAD

    model_config = ConfigDict(frozen=True)


class Dataset(BaseModel):
    """Uploaded dataset referenced by chart and table widgets."""

    id: str
    fileName: str
    createdBy: str
    s3Key: S3Key
    updatedAt: Optional[datetime] = None
    sourceType: SourceType = SourceType.FILE_UPLOAD

    model_config = ConfigDict(frozen=True)
