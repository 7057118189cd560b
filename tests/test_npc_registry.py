"""NPC Registry 테스트 (인메모리 / SQLAlchemy)"""

import json
from pathlib import Path

from npcsim.core.dialogue.models import DialogueNode, DialogueResponse
from npcsim.core.npc.models import NPCData
from npcsim.core.relationship.models import RelationshipRecord, RelationshipType
from npcsim.core.schedule.models import NPCSchedule, ScheduleEntry, SpecialAppointment
from npcsim.db.models import NPCModel
from npcsim.services.npc_registry import (
    InMemoryNPCRegistry,
    SqlNPCRegistry,
    npc_from_dict,
    npc_to_dict,
)

SEED_PATH = Path(__file__).resolve().parents[1] / "npcsim" / "data" / "seed_npcs.json"


def _make_npc(npc_id: str = "npc-001", **kwargs) -> NPCData:
    entries = [ScheduleEntry("shop", 0, 24, "Working")]
    defaults = {
        "npc_id": npc_id,
        "name": "Oswin",
        "occupation": "merchant",
        "faction": "merchants guild",
        "location": "shop",
        "current_activity": "Working",
        "schedule": NPCSchedule(
            base_entries=list(entries), entries=list(entries), weekly_overrides={3: "fair"}
        ),
        "special_appointments": [SpecialAppointment("a1", "docks", "Meeting", 600, 660)],
        "relationships": [
            RelationshipRecord("npc-002", 35, RelationshipType.FRIEND, 120, last_decay_time=None)
        ],
        "dialogue": [
            DialogueNode("hello", "Hi.", responses=[DialogueResponse("bye", "Bye.", is_goodbye=True)])
        ],
    }
    defaults.update(kwargs)
    return NPCData(**defaults)


class TestDictConversion:
    def test_round_trip(self):
        npc = _make_npc()
        assert npc_from_dict(npc_to_dict(npc)) == npc

    def test_minimal_dict(self):
        npc = npc_from_dict({"npc_id": "x", "name": "X"})
        assert npc.schedule is None
        assert npc.relationships == []
        assert npc.location == ""

    def test_json_serializable(self):
        json.dumps(npc_to_dict(_make_npc()))


class TestInMemoryRegistry:
    def test_crud(self):
        registry = InMemoryNPCRegistry([_make_npc("a"), _make_npc("b", location="forge")])
        assert registry.get_npc("a").npc_id == "a"
        assert registry.get_npc("ghost") is None
        assert [n.npc_id for n in registry.get_npcs_in_location("forge")] == ["b"]
        assert len(registry.get_all_npcs()) == 2


class TestSqlRegistry:
    def test_add_and_reload(self, db_session):
        SqlNPCRegistry(db_session).add_npc(_make_npc())

        fresh = SqlNPCRegistry(db_session)
        loaded = fresh.get_npc("npc-001")
        assert loaded == _make_npc()
        assert fresh.get_npc("npc-001") is loaded

    def test_update_persists(self, db_session):
        registry = SqlNPCRegistry(db_session)
        npc = _make_npc()
        registry.add_npc(npc)

        npc.location = "docks"
        npc.relationships[0].value = 80
        registry.update_npc(npc)

        row = db_session.get(NPCModel, "npc-001")
        assert row.location == "docks"
        assert row.version == 1
        reloaded = SqlNPCRegistry(db_session).get_npc("npc-001")
        assert reloaded.relationships[0].value == 80

    def test_location_query(self, db_session):
        registry = SqlNPCRegistry(db_session)
        registry.add_npc(_make_npc("a"))
        registry.add_npc(_make_npc("b", location="forge"))
        assert [n.npc_id for n in SqlNPCRegistry(db_session).get_npcs_in_location("forge")] == ["b"]

    def test_update_unknown_inserts(self, db_session):
        registry = SqlNPCRegistry(db_session)
        registry.update_npc(_make_npc("late"))
        assert db_session.get(NPCModel, "late") is not None

    def test_load_packaged_seed(self, db_session):
        registry = SqlNPCRegistry(db_session)
        assert registry.load_seed(SEED_PATH) == 6
        assert registry.load_seed(SEED_PATH) == 0
        hilda = registry.get_npc("npc_hilda")
        assert hilda.occupation == "innkeeper"
        assert any(node.has_tag("introduction") for node in hilda.dialogue)

    def test_bad_seed_entries_skipped(self, db_session, tmp_path, caplog):
        path = tmp_path / "seed.json"
        path.write_text(
            json.dumps([{"npc_id": "ok", "name": "Ok"}, {"name": "no id"}]), encoding="utf-8"
        )
        assert SqlNPCRegistry(db_session).load_seed(path) == 1
        assert "Failed to load NPC seed" in caplog.text
