"""Request models for the widget and dataset routes."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .dataset_models import S3Key, SourceType


class CreateWidgetRequest(BaseModel):
    """Request model for creating a widget.

    ``widgetType`` and ``content`` are left loose here; the widget factory
    validates them per variant so errors name the offending content field.
    """

    name: str = Field(..., min_length=1, max_length=200, description="Widget name")
    widgetType: str = Field(..., description="Text, Chart or Table")
    content: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Validate and clean the name."""
        if not v.strip():
            raise ValueError("Name cannot be empty or whitespace only")
        return v.strip()

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Intro",
                "widgetType": "Text",
                "content": {"text": "Welcome to the dashboard"},
            }
        }
    )


class UpdateWidgetRequest(BaseModel):
    """Request model for updating a widget's name and content."""

    name: str = Field(..., min_length=1, max_length=200)
    content: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Name cannot be empty or whitespace only")
        return v.strip()


class WidgetOrderEntry(BaseModel):
    id: str = Field(..., min_length=1)
    order: int = Field(..., ge=0)


class SetWidgetOrderRequest(BaseModel):
    """Request model for reordering the widgets of a dashboard."""

    widgets: List[WidgetOrderEntry] = Field(..., min_length=1)


class DuplicateWidgetsRequest(BaseModel):
    """Request model for copying a dashboard's widgets into another dashboard."""

    dashboardId: str = Field(..., min_length=1, description="Target dashboard ID")


class CreateDatasetRequest(BaseModel):
    """Request model for registering an uploaded dataset."""

    fileName: str = Field(..., min_length=1)
    s3Key: S3Key
    sourceType: Optional[SourceType] = None
