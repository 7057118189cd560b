"""이벤트 유형 상수

각 서비스 구현 시 해당 이벤트를 추가한다.
"""


class EventTypes:
    """이벤트 유형 문자열 상수"""

    # schedule
    NPC_MOVED = "npc_moved"
    APPOINTMENT_ADDED = "appointment_added"
    APPOINTMENT_REMOVED = "appointment_removed"

    # relationship
    RELATIONSHIP_CHANGED = "relationship_changed"
    RELATIONSHIPS_INITIALIZED = "relationships_initialized"

    # interaction
    NPC_INTERACTION = "npc_interaction"

    # dialogue
    DIALOGUE_STARTED = "dialogue_started"
    DIALOGUE_ENDED = "dialogue_ended"
    QUEST_ACCEPTED = "quest_accepted"
    QUEST_REFUSED = "quest_refused"

    # engine
    TICK_PROCESSED = "tick_processed"
