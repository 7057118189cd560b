"""Simulation API endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Request

from npcsim.api.schemas import (
    ActivityResponse,
    AdvanceRequest,
    AdvanceResponse,
    InteractionInfo,
    LocationInteractionsResponse,
    MoveInfo,
)
from npcsim.core.interaction.models import InteractionResult
from npcsim.core.logging import get_logger
from npcsim.engine.simulation import ClockRewindError, SimulationContext

logger = get_logger(__name__)

router = APIRouter(prefix="/sim", tags=["simulation"])


def get_simulation(request: Request) -> SimulationContext:
    """SimulationContext 인스턴스 반환 (의존성 주입)"""
    simulation: SimulationContext = request.app.state.simulation
    return simulation


def _interaction_info(result: InteractionResult) -> InteractionInfo:
    return InteractionInfo(
        interaction_id=result.interaction_id,
        npc1_id=result.npc1_id,
        npc2_id=result.npc2_id,
        type=result.type.value,
        description=result.description,
        relationship_change=result.relationship_change,
        timestamp=result.timestamp,
        location=result.location,
    )


@router.post("/advance", response_model=AdvanceResponse)
def advance(
    request: AdvanceRequest,
    simulation: SimulationContext = Depends(get_simulation),
) -> AdvanceResponse:
    """시계를 진행하고 이동/보이는 상호작용을 반환. 과거 시각이면 400."""
    try:
        tick = simulation.advance(request.current_time)
    except ClockRewindError as e:
        logger.info(f"Advance rejected: {e}")
        raise HTTPException(status_code=400, detail=str(e)) from e
    return AdvanceResponse(
        current_time=tick.current_time,
        moves=[
            MoveInfo(
                npc_id=m.npc_id,
                npc_name=m.npc_name,
                old_location_id=m.old_location_id,
                new_location_id=m.new_location_id,
                activity=m.activity,
            )
            for m in tick.moves
        ],
        interactions=[_interaction_info(r) for r in tick.interactions],
    )


@router.get("/npcs/{npc_id}/activity", response_model=ActivityResponse)
def get_activity(
    npc_id: str,
    simulation: SimulationContext = Depends(get_simulation),
) -> ActivityResponse:
    """현재 시각 기준 NPC 활동"""
    slot = simulation.scheduler.get_current_activity(npc_id, simulation.current_time)
    if slot is None:
        raise HTTPException(status_code=404, detail=f"NPC not found: {npc_id}")
    return ActivityResponse(
        npc_id=npc_id,
        location=slot.location,
        activity=slot.activity,
        start_time=slot.start_time,
        end_time=slot.end_time,
        priority=slot.priority.name.lower(),
        appointment_id=slot.appointment_id,
    )


@router.get(
    "/locations/{location_id}/interactions",
    response_model=LocationInteractionsResponse,
)
def get_location_interactions(
    location_id: str,
    limit: int = 5,
    simulation: SimulationContext = Depends(get_simulation),
) -> LocationInteractionsResponse:
    """장소의 최근 보이는 상호작용 (최신순)"""
    results = simulation.interactions.get_recent_location_interactions(location_id, limit)
    return LocationInteractionsResponse(
        location_id=location_id,
        interactions=[_interaction_info(r) for r in results],
    )
