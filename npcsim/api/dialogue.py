"""Dialogue API endpoints."""

from fastapi import APIRouter, Depends, HTTPException

from npcsim.api.schemas import (
    DialogueResponseModel,
    EndConversationResponse,
    RespondRequest,
    ResponseOption,
    SkillCheckInfo,
    SkillCheckResultInfo,
)
from npcsim.api.simulation import get_simulation
from npcsim.core.dialogue.errors import DialogueError
from npcsim.core.dialogue.models import DialogueResult
from npcsim.core.logging import get_logger
from npcsim.core.npc.models import NPCData
from npcsim.engine.simulation import SimulationContext

logger = get_logger(__name__)

router = APIRouter(prefix="/dialogue", tags=["dialogue"])


def _get_npc_or_404(simulation: SimulationContext, npc_id: str) -> NPCData:
    npc = simulation.registry.get_npc(npc_id)
    if npc is None:
        raise HTTPException(status_code=404, detail=f"NPC not found: {npc_id}")
    return npc


def _to_response(npc_id: str, result: DialogueResult) -> DialogueResponseModel:
    skill_check = None
    if result.skill_check is not None:
        skill_check = SkillCheckInfo(
            ability=result.skill_check.ability.value,
            difficulty_class=result.skill_check.difficulty_class,
            check_type=result.skill_check.check_type,
        )
    check_result = None
    if result.skill_check_result is not None:
        check_result = SkillCheckResultInfo(
            roll=result.skill_check_result.roll,
            total=result.skill_check_result.total,
            success=result.skill_check_result.success,
            critical=result.skill_check_result.critical,
        )
    return DialogueResponseModel(
        npc_id=npc_id,
        text=result.text,
        available_responses=[
            ResponseOption(response_id=r.response_id, text=r.text)
            for r in result.available_responses
        ],
        skill_check=skill_check,
        conversation_ended=result.conversation_ended,
        relationship_change=result.relationship_change,
        quest_accepted=result.quest_accepted,
        quest_refused=result.quest_refused,
        skill_check_result=check_result,
    )


@router.post("/{npc_id}/start", response_model=DialogueResponseModel)
def start_dialogue(
    npc_id: str,
    simulation: SimulationContext = Depends(get_simulation),
) -> DialogueResponseModel:
    """대화 시작"""
    npc = _get_npc_or_404(simulation, npc_id)
    result = simulation.dialogue.start_conversation(npc)
    return _to_response(npc_id, result)


@router.post("/{npc_id}/respond", response_model=DialogueResponseModel)
def respond(
    npc_id: str,
    request: RespondRequest,
    simulation: SimulationContext = Depends(get_simulation),
) -> DialogueResponseModel:
    """응답 선택. 활성 대화/노드/응답이 없으면 404."""
    npc = _get_npc_or_404(simulation, npc_id)
    try:
        result = simulation.dialogue.select_response(npc, request.response_id)
    except DialogueError as e:
        logger.info(f"Dialogue lookup failed: {e}")
        raise HTTPException(status_code=404, detail=str(e)) from e
    return _to_response(npc_id, result)


@router.post("/{npc_id}/end", response_model=EndConversationResponse)
def end_dialogue(
    npc_id: str,
    simulation: SimulationContext = Depends(get_simulation),
) -> EndConversationResponse:
    """대화 중단 (활성 대화가 없으면 ended=false)"""
    ended = simulation.dialogue.end_conversation(npc_id)
    return EndConversationResponse(npc_id=npc_id, ended=ended)
