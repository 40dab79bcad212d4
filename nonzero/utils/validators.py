"""Input validation using Pydantic."""

from datetime import date, datetime
from typing import Optional, Dict, Any, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator, ValidationError as PydanticValidationError

from nonzero.utils.exceptions import ValidationError


class TaskCreate(BaseModel):
    """Validation schema for a new task."""
    model_config = ConfigDict(extra='forbid')

    name: str = Field(..., min_length=1, max_length=100, description="Task name")
    task_type: str = Field(..., description="boolean, count or time")
    minimum_value: float = Field(..., ge=0, description="Threshold for a non-zero day")
    goal_value: Optional[float] = Field(None, gt=0, description="Optional daily goal")
    unit: Optional[str] = Field(None, max_length=30, description="Unit for count tasks")
    created_at: Optional[Union[datetime, date]] = Field(None, description="Creation day")
    is_archived: bool = False
    sort_order: int = 0

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError('name must not be blank')
        return v.strip()

    @field_validator('task_type')
    @classmethod
    def validate_task_type(cls, v):
        allowed = ['boolean', 'count', 'time']
        if v not in allowed:
            raise ValueError(f'task_type must be one of {allowed}')
        return v


class EntryCreate(BaseModel):
    """Validation schema for logging a value."""
    model_config = ConfigDict(extra='forbid')

    task_id: str = Field(..., min_length=1)
    day: Union[datetime, date] = Field(..., description="Day the value belongs to")
    value: float = Field(..., ge=0, description="0/1, count or minutes")
    note: Optional[str] = Field(None, max_length=500)


class Settings(BaseModel):
    """Runtime settings read by the analytics service on every call."""
    model_config = ConfigDict(validate_assignment=True)

    day_score_criteria: int = Field(default=10, ge=0, le=100, description="Percent of tasks for a non-zero day")
    log_level: str = Field(default='INFO')
    log_file: Optional[str] = Field(default=None)

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v):
        allowed = ['DEBUG', 'INFO', 'WARNING', 'ERROR']
        if v.upper() not in allowed:
            raise ValueError(f'log_level must be one of {allowed}')
        return v.upper()


def validate_request(data: Dict[str, Any], schema: type[BaseModel]) -> BaseModel:
    """
    Validate data against a Pydantic schema.

    Args:
        data: Input dictionary
        schema: Pydantic model class

    Returns:
        Validated model instance

    Raises:
        ValidationError: If validation fails
    """
    try:
        return schema(**data)
    except PydanticValidationError as e:
        errors = []
        for error in e.errors():
            field = '.'.join(str(x) for x in error['loc'])
            errors.append(f"{field}: {error['msg']}")
        raise ValidationError(
            message="Validation failed",
            error_code="VALIDATION_ERROR",
            details={"errors": errors}
        )
