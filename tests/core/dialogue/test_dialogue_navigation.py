"""시작 노드 선택 테스트"""

from npcsim.core.dialogue.models import DialogueNode
from npcsim.core.dialogue.navigation import (
    GENERIC_GOODBYE_ID,
    GENERIC_GREETING_ID,
    find_node,
    find_starting_node,
)


def _graph():
    return [
        DialogueNode("plain", "Hm?"),
        DialogueNode("intro", "Who are you?", tags=["introduction"]),
        DialogueNode("greet", "Hello again.", tags=["greeting"]),
        DialogueNode("greet-friend", "My friend!", tags=["greeting", "friendly"]),
        DialogueNode("greet-foe", "You again.", tags=["greeting", "hostile"]),
    ]


class TestFindStartingNode:
    def test_first_meeting_always_introduction(self):
        """첫 만남이면 관계 수치와 무관하게 introduction."""
        for relationship in (-10, 0, 10):
            node = find_starting_node(_graph(), True, relationship, "Ann")
            assert node.node_id == "intro"

    def test_friendly_greeting(self):
        assert find_starting_node(_graph(), False, 6, "Ann").node_id == "greet-friend"

    def test_hostile_greeting(self):
        assert find_starting_node(_graph(), False, -6, "Ann").node_id == "greet-foe"

    def test_threshold_is_exclusive(self):
        assert find_starting_node(_graph(), False, 5, "Ann").node_id == "greet"
        assert find_starting_node(_graph(), False, -5, "Ann").node_id == "greet"

    def test_falls_back_to_first_greeting(self):
        graph = [n for n in _graph() if not n.has_tag("friendly")]
        assert find_starting_node(graph, False, 9, "Ann").node_id == "greet"

    def test_no_greeting_uses_first_node(self):
        graph = [DialogueNode("a", "A"), DialogueNode("b", "B")]
        assert find_starting_node(graph, True, 0, "Ann").node_id == "a"

    def test_empty_graph_generic_greeting(self):
        node = find_starting_node([], True, 0, "Ann")
        assert node.node_id == GENERIC_GREETING_ID
        assert "Ann" in node.text
        assert node.responses[0].response_id == GENERIC_GOODBYE_ID
        assert node.responses[0].is_goodbye


class TestFindNode:
    def test_found_and_missing(self):
        assert find_node(_graph(), "greet").text == "Hello again."
        assert find_node(_graph(), "nope") is None
        assert find_node(_graph(), None) is None
