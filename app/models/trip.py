"""
Trip models - Request and response payloads for plan generation.
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Union


Scalar = Union[int, float, str]

REQUIRED_FIELDS = ["origin_city", "destination", "budget_amount", "number_of_days"]


class TripRequest(BaseModel):
    """Caller-supplied parameters describing the desired trip."""

    model_config = ConfigDict(populate_by_name=True)

    origin_city: Optional[Scalar] = Field(
        None,
        alias="fromCity",
        description="City the trip starts from"
    )
    destination: Optional[Scalar] = Field(
        None,
        description="Where the group is travelling to"
    )
    budget_amount: Optional[Scalar] = Field(
        None,
        alias="budget",
        description="Total budget in rupees"
    )
    number_of_days: Optional[Scalar] = Field(
        None,
        alias="days",
        description="Trip length in days"
    )
    group_type: Optional[Scalar] = Field(
        None,
        alias="groupType",
        description="e.g. 'friends', 'family', 'solo'"
    )
    transport_mode: Optional[Scalar] = Field(
        None,
        alias="transport",
        description="Preferred way to travel, e.g. 'train'"
    )

    def get_missing_fields(self) -> list[str]:
        """Required fields that are absent or empty (None, "", 0)."""
        return [name for name in REQUIRED_FIELDS if not getattr(self, name)]

    def is_complete(self) -> bool:
        return not self.get_missing_fields()


class PlanResponse(BaseModel):
    plan: str


class ErrorResponse(BaseModel):
    error: str
