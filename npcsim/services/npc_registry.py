"""NPC Registry — NPC 조회/갱신 경계

서비스들은 NPC 저장 방식을 모른다. NPCRegistry 인터페이스만 사용한다.
- InMemoryNPCRegistry: 테스트/단독 실행용
- SqlNPCRegistry: SQLAlchemy 세션 기반 (JSON payload 컬럼)
"""

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from npcsim.core.dialogue.loader import node_to_dict, parse_dialogue_graph
from npcsim.core.logging import get_logger
from npcsim.core.npc.models import NPCData
from npcsim.core.relationship.models import RelationshipRecord, RelationshipType
from npcsim.core.schedule.models import NPCSchedule, ScheduleEntry, SpecialAppointment
from npcsim.db.models import NPCModel

logger = get_logger(__name__)


class NPCRegistry(ABC):
    """NPC 저장소 인터페이스 (단순 CRUD)"""

    @abstractmethod
    def get_npc(self, npc_id: str) -> Optional[NPCData]: ...

    @abstractmethod
    def get_npcs_in_location(self, location_id: str) -> List[NPCData]: ...

    @abstractmethod
    def get_all_npcs(self) -> List[NPCData]: ...

    @abstractmethod
    def update_npc(self, npc: NPCData) -> None: ...

    @abstractmethod
    def add_npc(self, npc: NPCData) -> None: ...


class InMemoryNPCRegistry(NPCRegistry):
    """dict 기반 저장소. 반환 객체는 저장된 객체 그 자체."""

    def __init__(self, npcs: Optional[List[NPCData]] = None) -> None:
        self._npcs: Dict[str, NPCData] = {}
        for npc in npcs or []:
            self.add_npc(npc)

    def get_npc(self, npc_id: str) -> Optional[NPCData]:
        return self._npcs.get(npc_id)

    def get_npcs_in_location(self, location_id: str) -> List[NPCData]:
        return [npc for npc in self._npcs.values() if npc.location == location_id]

    def get_all_npcs(self) -> List[NPCData]:
        return list(self._npcs.values())

    def update_npc(self, npc: NPCData) -> None:
        self._npcs[npc.npc_id] = npc

    def add_npc(self, npc: NPCData) -> None:
        self._npcs[npc.npc_id] = npc


class SqlNPCRegistry(NPCRegistry):
    """SQLAlchemy 세션 기반 저장소

    같은 세션 안에서 조회한 NPC는 id별로 캐시해 동일 객체를 돌려준다.
    update_npc가 호출되어야 DB에 반영된다.
    """

    def __init__(self, db_session: Session) -> None:
        self._db = db_session
        self._cache: Dict[str, NPCData] = {}

    # ── 조회 ─────────────────────────────────────────────────

    def get_npc(self, npc_id: str) -> Optional[NPCData]:
        if npc_id in self._cache:
            return self._cache[npc_id]
        row = self._db.get(NPCModel, npc_id)
        if row is None:
            return None
        return self._remember(row)

    def get_npcs_in_location(self, location_id: str) -> List[NPCData]:
        rows = self._db.query(NPCModel).filter(NPCModel.location == location_id).all()
        return [self._remember(r) for r in rows]

    def get_all_npcs(self) -> List[NPCData]:
        rows = self._db.query(NPCModel).all()
        return [self._remember(r) for r in rows]

    # ── 갱신 ─────────────────────────────────────────────────

    def update_npc(self, npc: NPCData) -> None:
        row = self._db.get(NPCModel, npc.npc_id)
        if row is None:
            logger.warning(f"update_npc: unknown NPC {npc.npc_id}, inserting")
            self.add_npc(npc)
            return
        row.name = npc.name
        row.occupation = npc.occupation
        row.faction = npc.faction
        row.location = npc.location
        row.current_activity = npc.current_activity
        row.payload = self._npc_to_payload(npc)
        row.version = row.version + 1
        self._db.commit()
        self._cache[npc.npc_id] = npc

    def add_npc(self, npc: NPCData) -> None:
        model = NPCModel(
            npc_id=npc.npc_id,
            name=npc.name,
            occupation=npc.occupation,
            faction=npc.faction,
            location=npc.location,
            current_activity=npc.current_activity,
            payload=self._npc_to_payload(npc),
            version=0,
        )
        self._db.add(model)
        self._db.commit()
        self._cache[npc.npc_id] = npc
        logger.info(f"NPC registered: {npc.npc_id} ({npc.name}) at {npc.location}")

    def load_seed(self, path: str | Path) -> int:
        """seed JSON(NPC 배열) 로드. 이미 있는 NPC는 건너뛴다. 반환: 추가된 수."""
        path = Path(path)
        with path.open("r", encoding="utf-8") as f:
            raw_list: List[Dict[str, Any]] = json.load(f)

        count = 0
        for raw in raw_list:
            try:
                npc = npc_from_dict(raw)
            except (KeyError, ValueError, TypeError) as e:
                logger.warning("Failed to load NPC seed: %s — %s", raw.get("npc_id", "?"), e)
                continue
            if self._db.get(NPCModel, npc.npc_id) is not None:
                continue
            self.add_npc(npc)
            count += 1
        return count

    # ── ORM ↔ Core 변환 ─────────────────────────────────────

    def _remember(self, row: NPCModel) -> NPCData:
        cached = self._cache.get(row.npc_id)
        if cached is not None:
            return cached
        npc = self._npc_from_orm(row)
        self._cache[npc.npc_id] = npc
        return npc

    @staticmethod
    def _npc_from_orm(row: NPCModel) -> NPCData:
        data = dict(row.payload or {})
        data.update(
            npc_id=row.npc_id,
            name=row.name,
            occupation=row.occupation,
            faction=row.faction,
            location=row.location,
            current_activity=row.current_activity,
        )
        return npc_from_dict(data)

    @staticmethod
    def _npc_to_payload(npc: NPCData) -> Dict[str, Any]:
        payload = npc_to_dict(npc)
        for key in ("npc_id", "name", "occupation", "faction", "location", "current_activity"):
            payload.pop(key, None)
        return payload


# ── dict 변환 (seed JSON / payload 공용) ─────────────────────

def _entry_from_dict(raw: Dict[str, Any]) -> ScheduleEntry:
    return ScheduleEntry(
        location_id=raw["location_id"],
        start_hour=int(raw["start_hour"]),
        end_hour=int(raw["end_hour"]),
        activity=raw["activity"],
    )


def _entry_to_dict(entry: ScheduleEntry) -> Dict[str, Any]:
    return {
        "location_id": entry.location_id,
        "start_hour": entry.start_hour,
        "end_hour": entry.end_hour,
        "activity": entry.activity,
    }


def _schedule_from_dict(raw: Optional[Dict[str, Any]]) -> Optional[NPCSchedule]:
    if not raw:
        return None
    base = [_entry_from_dict(e) for e in raw.get("base_entries", raw.get("entries", []))]
    entries = [_entry_from_dict(e) for e in raw.get("entries", [])] or list(base)
    return NPCSchedule(
        base_entries=base,
        entries=entries,
        weekly_overrides={int(k): v for k, v in raw.get("weekly_overrides", {}).items()},
    )


def npc_from_dict(raw: Dict[str, Any]) -> NPCData:
    """seed/payload dict → NPCData"""
    return NPCData(
        npc_id=raw["npc_id"],
        name=raw["name"],
        occupation=raw.get("occupation"),
        faction=raw.get("faction"),
        location=raw.get("location", ""),
        current_activity=raw.get("current_activity", ""),
        schedule=_schedule_from_dict(raw.get("schedule")),
        special_appointments=[
            SpecialAppointment(
                appointment_id=a["appointment_id"],
                location=a["location"],
                activity=a["activity"],
                start_time=int(a["start_time"]),
                end_time=a.get("end_time"),
            )
            for a in raw.get("special_appointments", [])
        ],
        relationships=[
            RelationshipRecord(
                other_npc_id=r["other_npc_id"],
                value=int(r["value"]),
                type=RelationshipType(r["type"]),
                last_interaction_time=int(r.get("last_interaction_time", 0)),
                last_decay_time=r.get("last_decay_time"),
            )
            for r in raw.get("relationships", [])
        ],
        dialogue=parse_dialogue_graph(raw.get("dialogue", [])),
    )


def npc_to_dict(npc: NPCData) -> Dict[str, Any]:
    """NPCData → JSON 직렬화 가능한 dict"""
    schedule = None
    if npc.schedule is not None:
        schedule = {
            "base_entries": [_entry_to_dict(e) for e in npc.schedule.base_entries],
            "entries": [_entry_to_dict(e) for e in npc.schedule.entries],
            "weekly_overrides": {str(k): v for k, v in npc.schedule.weekly_overrides.items()},
        }
    return {
        "npc_id": npc.npc_id,
        "name": npc.name,
        "occupation": npc.occupation,
        "faction": npc.faction,
        "location": npc.location,
        "current_activity": npc.current_activity,
        "schedule": schedule,
        "special_appointments": [
            {
                "appointment_id": a.appointment_id,
                "location": a.location,
                "activity": a.activity,
                "start_time": a.start_time,
                "end_time": a.end_time,
            }
            for a in npc.special_appointments
        ],
        "relationships": [
            {
                "other_npc_id": r.other_npc_id,
                "value": r.value,
                "type": r.type.value,
                "last_interaction_time": r.last_interaction_time,
                "last_decay_time": r.last_decay_time,
            }
            for r in npc.relationships
        ],
        "dialogue": [node_to_dict(n) for n in npc.dialogue],
    }
