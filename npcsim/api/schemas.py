"""API request/response schemas."""

from typing import Optional

from pydantic import BaseModel, Field


# === Request Schemas ===


class AdvanceRequest(BaseModel):
    """시계 진행 요청"""

    current_time: int = Field(..., ge=0, description="절대 게임 시각 (분)")


class RespondRequest(BaseModel):
    """대화 응답 선택 요청"""

    response_id: str = Field(..., min_length=1, description="선택한 응답 ID")


# === Response Schemas ===


class MoveInfo(BaseModel):
    """위치가 바뀐 NPC"""

    npc_id: str
    npc_name: str
    old_location_id: str
    new_location_id: str
    activity: str


class InteractionInfo(BaseModel):
    """NPC 간 상호작용"""

    interaction_id: str
    npc1_id: str
    npc2_id: str
    type: str
    description: str
    relationship_change: int
    timestamp: int
    location: str


class AdvanceResponse(BaseModel):
    """틱 처리 결과"""

    current_time: int
    moves: list[MoveInfo] = []
    interactions: list[InteractionInfo] = []


class ActivityResponse(BaseModel):
    """NPC 현재 활동"""

    npc_id: str
    location: str
    activity: str
    start_time: int
    end_time: Optional[int] = None
    priority: str
    appointment_id: Optional[str] = None


class LocationInteractionsResponse(BaseModel):
    """장소의 최근 상호작용"""

    location_id: str
    interactions: list[InteractionInfo] = []


class ResponseOption(BaseModel):
    """노출된 대화 선택지"""

    response_id: str
    text: str


class SkillCheckInfo(BaseModel):
    """현재 노드의 기능 판정"""

    ability: str
    difficulty_class: int
    check_type: str


class SkillCheckResultInfo(BaseModel):
    """직전 선택에서 일어난 판정 결과"""

    roll: int
    total: int
    success: bool
    critical: bool


class DialogueResponseModel(BaseModel):
    """대화 턴 결과"""

    npc_id: str
    text: str
    available_responses: list[ResponseOption] = []
    skill_check: Optional[SkillCheckInfo] = None
    conversation_ended: bool = False
    relationship_change: int = 0
    quest_accepted: Optional[str] = None
    quest_refused: Optional[str] = None
    skill_check_result: Optional[SkillCheckResultInfo] = None


class EndConversationResponse(BaseModel):
    """대화 중단 결과"""

    npc_id: str
    ended: bool


class ErrorResponse(BaseModel):
    """에러 응답"""

    success: bool = False
    error: str
    detail: Optional[str] = None
