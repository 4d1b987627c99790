"""
Location and opening hours models
"""
from typing import Dict, Optional

from pydantic import BaseModel, Field, model_validator

WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]

HHMM_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class DayHours(BaseModel):
    open: str = Field("09:00", pattern=HHMM_PATTERN)
    close: str = Field("18:00", pattern=HHMM_PATTERN)
    closed: bool = False

    @model_validator(mode="after")
    def check_order(self):
        # Zero padded HH:MM compares correctly as text
        if not self.closed and self.close <= self.open:
            raise ValueError(f"closing time {self.close} must be after opening time {self.open}")
        return self


class LocationUpdate(BaseModel):
    address_line1: Optional[str] = None
    address_line2: Optional[str] = None
    city: Optional[str] = None
    state_province: Optional[str] = None
    postal_code: Optional[str] = None
    country: Optional[str] = None
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    timezone: Optional[str] = None
    opening_hours: Optional[Dict[str, DayHours]] = None

    @model_validator(mode="after")
    def check_weekdays(self):
        if self.opening_hours:
            unknown = sorted(set(self.opening_hours) - set(WEEKDAYS))
            if unknown:
                raise ValueError(f"Unknown weekday(s) in opening_hours: {', '.join(unknown)}")
        return self


class GeocodeResult(BaseModel):
    latitude: float
    longitude: float
    display_name: Optional[str] = None
