"""대화 엔진 오류

호출자가 잘못된 ID를 넘긴 경우에만 발생한다.
다음 노드가 없는 것은 오류가 아니라 정상 종료.
"""


class DialogueError(Exception):
    """대화 엔진 오류 기본 클래스"""


class ConversationNotFoundError(DialogueError):
    def __init__(self, npc_id: str) -> None:
        super().__init__(f"No active conversation with NPC {npc_id}")
        self.npc_id = npc_id


class DialogueNodeNotFoundError(DialogueError):
    def __init__(self, node_id: str) -> None:
        super().__init__(f"Dialogue node {node_id} not found")
        self.node_id = node_id


class ResponseNotFoundError(DialogueError):
    def __init__(self, response_id: str, node_id: str) -> None:
        super().__init__(f"Response {response_id} not found in dialogue node {node_id}")
        self.response_id = response_id
        self.node_id = node_id
