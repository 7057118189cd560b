"""관계 수치 계산

전부 순수 함수 — 외부 의존 없음.
"""

from npcsim.core.relationship.models import (
    RELATIONSHIP_MAX,
    RELATIONSHIP_MIN,
    RelationshipRecord,
    RelationshipType,
)


def derive_relationship_type(value: int) -> RelationshipType:
    """수치 → 관계 단계. 모든 곳에서 이 함수 하나만 사용한다.

    ≤-75 enemy, ≤-30 disliked, ≤-10 unfriendly, <10 neutral,
    <30 friendly, <75 friend, 그 외 close_friend
    """
    if value <= -75:
        return RelationshipType.ENEMY
    if value <= -30:
        return RelationshipType.DISLIKED
    if value <= -10:
        return RelationshipType.UNFRIENDLY
    if value < 10:
        return RelationshipType.NEUTRAL
    if value < 30:
        return RelationshipType.FRIENDLY
    if value < 75:
        return RelationshipType.FRIEND
    return RelationshipType.CLOSE_FRIEND


def describe_relationship(value: int) -> str:
    """프롬프트용 관계 서술"""
    if value <= -75:
        return "extremely hostile"
    if value <= -50:
        return "hostile"
    if value <= -30:
        return "unfriendly"
    if value <= -10:
        return "slightly negative"
    if value < 10:
        return "neutral"
    if value < 30:
        return "slightly positive"
    if value < 50:
        return "friendly"
    if value < 75:
        return "good friends"
    return "very close friends"


def clamp_relationship(value: int) -> int:
    """-100 ~ +100 클램프."""
    return max(RELATIONSHIP_MIN, min(RELATIONSHIP_MAX, value))


def clamp_to(value: int, limit: int) -> int:
    """-limit ~ +limit 클램프."""
    return max(-limit, min(limit, value))


def apply_delta(record: RelationshipRecord, delta: int, current_time: int) -> RelationshipRecord:
    """기록에 변동 적용 → 클램프 → 단계 재계산. 기록을 직접 수정하고 반환."""
    record.value = clamp_relationship(record.value + delta)
    record.type = derive_relationship_type(record.value)
    record.last_interaction_time = current_time
    return record


def apply_decay(value: int, days_since_last: int, decay_per_day: int) -> int:
    """중립(0) 방향 시간 감쇠. 0을 넘어가지 않는다."""
    if days_since_last < 1 or decay_per_day <= 0 or value == 0:
        return value
    amount = days_since_last * decay_per_day
    if value > 0:
        return max(0, value - amount)
    return min(0, value + amount)
