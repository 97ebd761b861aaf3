"""
API Routes for the trip plan service.
"""
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ..models.trip import TripRequest, PlanResponse, ErrorResponse
from ..services.errors import TripPlannerError
from ..services.planner import TripPlanner, get_planner

router = APIRouter(tags=["trip-planner"])


@router.post(
    "/generate",
    response_model=PlanResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}
)
async def generate_plan(request: TripRequest, planner: TripPlanner = Depends(get_planner)):
    """Generate a day-wise plan for the requested trip."""
    try:
        plan = await planner.generate(request)
    except TripPlannerError as e:
        return JSONResponse(
            status_code=e.status_code,
            content=ErrorResponse(error=e.message).model_dump()
        )

    return PlanResponse(plan=plan)
