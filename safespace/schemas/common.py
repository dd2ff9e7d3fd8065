# safespace/schemas/common.py
from datetime import datetime

from pydantic import BaseModel, field_validator

from safespace.core.timezone import as_utc


class RowModel(BaseModel):
    """Base for rows read back from the store."""

    class Config:
        from_attributes = True

    @field_validator("*", mode="after")
    @classmethod
    def _utc_datetimes(cls, value):
        # SQLite drops tzinfo on the way back
        if isinstance(value, datetime):
            return as_utc(value)
        return value
