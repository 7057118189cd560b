"""FastAPI application entrypoint."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI

from npcsim.api.dialogue import router as dialogue_router
from npcsim.api.health import router as health_router
from npcsim.api.simulation import router as simulation_router
from npcsim.config import settings
from npcsim.core.event_bus import EventBus
from npcsim.core.logging import get_logger, setup_logging
from npcsim.db.database import SessionLocal, init_db
from npcsim.engine.simulation import SimulationContext
from npcsim.services.ai import get_ai_provider
from npcsim.services.narrative_service import NarrativeService
from npcsim.services.npc_registry import SqlNPCRegistry

setup_logging(settings.LOG_LEVEL)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup and shutdown events."""
    # DB 테이블 생성
    logger.info("Creating database tables...")
    init_db()
    logger.info("Database tables created.")

    # AI Provider 및 NarrativeService 초기화
    logger.info("Initializing AI provider...")
    ai_provider = get_ai_provider()
    narrative_service = NarrativeService(ai_provider)
    app.state.narrative_service = narrative_service
    logger.info(f"AI provider initialized: {ai_provider.name}")

    # NPC 저장소 + 시드
    db_session = SessionLocal()
    registry = SqlNPCRegistry(db_session)
    if settings.SEED_NPC_PATH:
        loaded = registry.load_seed(settings.SEED_NPC_PATH)
        logger.info(f"Seed NPCs loaded: {loaded}")

    # SimulationContext 초기화
    logger.info("Initializing simulation...")
    event_bus = EventBus()
    simulation = SimulationContext(registry, event_bus=event_bus, narrative=narrative_service)
    managed = simulation.manage_existing()
    simulation.initialize_all_relationships()
    app.state.simulation = simulation
    app.state.event_bus = event_bus
    logger.info(f"Simulation initialized ({managed} NPCs managed).")

    yield

    # 종료 시 정리
    logger.info("Shutting down...")
    db_session.close()


app = FastAPI(title="NPC Life Simulation", lifespan=lifespan)

app.include_router(health_router)
app.include_router(simulation_router)
app.include_router(dialogue_router)
