"""
FastAPI server for procscene.

Provides REST API endpoints for scene generation and day/night simulation.
"""

import argparse
import time
from typing import Any, Dict, List, Optional, Tuple

import uvicorn
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from .. import __version__
from ..engine import RecordingBackend, SceneConfig, SceneLayout, SceneOrchestrator
from ..engine.config import SUN_DAY_INTENSITY, WHITE


# Pydantic models for API
class SceneRequest(BaseModel):
    forest_size: Optional[int] = Field(None, description="Number of trees (defaults to 10)")
    forest_spread: Optional[float] = Field(None, description="Spread size of trees (defaults to 1.5)")
    pyramid_base_size: Optional[int] = Field(None, description="Pyramid base size, clamped to 3-10")
    seed: Optional[int] = Field(None, description="Random seed for reproducible layouts")
    include_scene_graph: bool = Field(False, description="Also return the built scene graph")

    def to_config(self) -> SceneConfig:
        return SceneConfig(
            forest_size=self.forest_size,
            forest_spread=self.forest_spread,
            pyramid_base_size=self.pyramid_base_size,
            seed=self.seed
        )


class SceneStats(BaseModel):
    trees_requested: int
    trees_placed: int
    placement_attempts: int
    pyramid_levels: int
    pyramid_cubes: int


class SceneResponse(BaseModel):
    layout: SceneLayout
    stats: SceneStats
    scene_graph: Optional[Dict[str, Any]] = None
    generation_time: float


class SimulateRequest(SceneRequest):
    ticks: int = Field(600, ge=1, le=100000, description="Number of ticks to run")
    delta: float = Field(0.1, gt=0.0, le=1.0, description="Simulated seconds per tick")
    include_sun: bool = Field(True, description="Attach a directional sun light")


class Transition(BaseModel):
    time: float
    is_night: bool
    sun_intensity: float
    celestial_intensity: float
    celestial_color: Tuple[float, float, float, float]


class SimulateResponse(BaseModel):
    transitions: List[Transition]
    elapsed: float
    is_night: bool
    timer: float
    celestial_angle: float
    sun_intensity: Optional[float] = None
    generation_time: float


class HealthResponse(BaseModel):
    status: str
    version: str


def build_scene(request: SceneRequest, include_sun: bool = False):
    """Create a recording backend and an initialized orchestrator for a request."""

    backend = RecordingBackend()
    sun = None
    if include_sun:
        sun_node = backend.create_node("Sun")
        sun = backend.create_light(sun_node, "directional", SUN_DAY_INTENSITY, WHITE)

    orchestrator = SceneOrchestrator(config=request.to_config(), backend=backend, sun=sun)
    orchestrator.initialize()
    return orchestrator, backend, sun


def create_app(cors_origins: List[str] = None) -> FastAPI:
    """Create FastAPI application."""

    app = FastAPI(
        title="procscene API",
        description="Generate procedural forest/pyramid scenes and simulate their day/night cycle",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc"
    )

    # Configure CORS
    if cors_origins is None:
        cors_origins = ["*"]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health", response_model=HealthResponse)
    async def health():
        """Health check endpoint."""
        return HealthResponse(status="healthy", version=__version__)

    @app.post("/scene", response_model=SceneResponse)
    async def generate_scene(request: SceneRequest):
        """Generate a scene layout."""

        try:
            start_time = time.time()
            orchestrator, backend, _ = build_scene(request)
            layout = orchestrator.layout

            stats = SceneStats(
                trees_requested=layout.forest.requested,
                trees_placed=len(layout.forest.trees),
                placement_attempts=layout.forest.attempts,
                pyramid_levels=len(layout.pyramid.levels),
                pyramid_cubes=layout.pyramid.cube_count
            )

            return SceneResponse(
                layout=layout,
                stats=stats,
                scene_graph=backend.to_dict() if request.include_scene_graph else None,
                generation_time=time.time() - start_time
            )

        except Exception as e:
            raise HTTPException(status_code=500, detail=f"Scene generation failed: {str(e)}")

    @app.post("/simulate", response_model=SimulateResponse)
    async def simulate(request: SimulateRequest):
        """Run the day/night cycle for a fixed number of ticks."""

        try:
            start_time = time.time()
            orchestrator, _, sun = build_scene(request, include_sun=request.include_sun)

            transitions = [
                Transition(time=elapsed, **lighting.model_dump())
                for elapsed, lighting in orchestrator.simulate(request.ticks, request.delta)
            ]

            return SimulateResponse(
                transitions=transitions,
                elapsed=orchestrator.elapsed,
                is_night=orchestrator.day_night.is_night,
                timer=orchestrator.day_night.timer,
                celestial_angle=orchestrator.celestial_angle,
                sun_intensity=sun.intensity if sun is not None else None,
                generation_time=time.time() - start_time
            )

        except Exception as e:
            raise HTTPException(status_code=500, detail=f"Simulation failed: {str(e)}")

    return app


def main():
    """CLI entry point for API server."""

    parser = argparse.ArgumentParser(description="procscene API Server")
    parser.add_argument("--host", default="0.0.0.0", help="Host to bind server")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind server")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload for development")

    args = parser.parse_args()

    print("Starting procscene API server...")
    print(f"Server: http://{args.host}:{args.port}")
    print(f"Docs: http://{args.host}:{args.port}/docs")

    if args.reload:
        uvicorn.run(
            "procscene.api.server:create_app",
            factory=True,
            host=args.host,
            port=args.port,
            reload=True,
            log_level="info"
        )
    else:
        uvicorn.run(create_app(), host=args.host, port=args.port, log_level="info")


if __name__ == "__main__":
    main()
