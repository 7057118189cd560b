"""시뮬레이션 API 통합 테스트"""

import random
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from npcsim.api.simulation import router as simulation_router
from npcsim.core.clock import GameClock
from npcsim.core.event_bus import EventBus
from npcsim.db.models import Base
from npcsim.engine.simulation import SimulationContext
from npcsim.services.ai import MockProvider
from npcsim.services.narrative_service import NarrativeService
from npcsim.services.npc_registry import SqlNPCRegistry

SEED_PATH = Path(__file__).resolve().parents[2] / "npcsim" / "data" / "seed_npcs.json"
HOUR = 60


@pytest.fixture()
def simulation():
    db_engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(db_engine)
    db = sessionmaker(bind=db_engine)()

    registry = SqlNPCRegistry(db)
    registry.load_seed(SEED_PATH)
    sim = SimulationContext(
        registry,
        event_bus=EventBus(),
        narrative=NarrativeService(MockProvider()),
        clock=GameClock(),
        rng=random.Random(21),
        visibility=lambda a, b, loc: True,
    )
    sim.manage_existing()
    sim.initialize_all_relationships()
    yield sim
    db.close()


@pytest.fixture()
def client(simulation):
    app = FastAPI()
    app.include_router(simulation_router)
    app.state.simulation = simulation
    with TestClient(app) as tc:
        yield tc


class TestAdvance:
    def test_advance_reports_moves(self, client):
        resp = client.post("/sim/advance", json={"current_time": 14 * HOUR})
        assert resp.status_code == 200
        data = resp.json()
        assert data["current_time"] == 14 * HOUR
        moved = {m["npc_id"]: m["new_location_id"] for m in data["moves"]}
        assert moved["npc_greta"] == "market_square"

    def test_backwards_time_rejected(self, client, simulation):
        client.post("/sim/advance", json={"current_time": 10 * HOUR})
        resp = client.post("/sim/advance", json={"current_time": 9 * HOUR})
        assert resp.status_code == 400
        assert "Cannot move clock back" in resp.json()["detail"]
        assert simulation.current_time == 10 * HOUR

    def test_negative_time_rejected(self, client):
        assert client.post("/sim/advance", json={"current_time": -1}).status_code == 422

    def test_interactions_listed_by_location(self, client, simulation):
        for t in range(0, 24 * HOUR, 30):
            client.post("/sim/advance", json={"current_time": t})

        logged = simulation.interactions.get_recent_location_interactions("market_square", 3)
        data = client.get("/sim/locations/market_square/interactions?limit=3").json()
        assert data["location_id"] == "market_square"
        assert [i["interaction_id"] for i in data["interactions"]] == [
            r.interaction_id for r in logged
        ]


class TestActivity:
    def test_activity_of_known_npc(self, client):
        client.post("/sim/advance", json={"current_time": 9 * HOUR})
        data = client.get("/sim/npcs/npc_oswin/activity").json()
        assert data["location"] == "market_square"
        assert data["activity"] == "Attending to customers"
        assert data["priority"] == "hourly"

    def test_unknown_npc_404(self, client):
        assert client.get("/sim/npcs/ghost/activity").status_code == 404
