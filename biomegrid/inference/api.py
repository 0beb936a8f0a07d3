"""
FastAPI server for map generation.

Provides REST endpoints that return finished grids as JSON.
"""

import argparse
import logging
import time
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field
import uvicorn

from .. import __version__
from ..config import DEFAULT_PRESET, MAX_OCTAVES, PRESETS, get_preset
from ..engine import TerrainComposer
from ..engine.terrain_composer import OUTPUTS
from ..errors import BiomeGridError

logger = logging.getLogger(__name__)

MAX_DIMENSION = 1024


class GenerateRequest(BaseModel):
    seed: int = Field(1, description="Run seed")
    width: Optional[int] = Field(None, le=MAX_DIMENSION, description="Columns (default from preset)")
    height: Optional[int] = Field(None, le=MAX_DIMENSION, description="Rows (default from preset)")
    preset: str = Field(DEFAULT_PRESET, description="Named preset")
    octaves: Optional[int] = Field(None, le=MAX_OCTAVES, description="Override octave count")
    persistence: Optional[float] = Field(None, description="Override persistence")
    scale: Optional[float] = Field(None, description="Override base scale")
    seed_strategy: Optional[str] = Field(None, description="Override seed strategy")
    output: str = Field("colors", description="colors, biomes or elevation")
    include_stats: bool = Field(True, description="Include elevation stats and biome coverage")


class GenerateResponse(BaseModel):
    shape: List[int]
    seed: int
    preset: str
    output: str
    grid: List[List[Any]]
    stats: Optional[Dict[str, float]] = None
    coverage: Optional[Dict[str, float]] = None
    generation_time: float


class HealthResponse(BaseModel):
    status: str
    version: str
    presets: List[str]


def _run_generation(request: GenerateRequest) -> GenerateResponse:
    config = get_preset(request.preset)
    overrides = {
        name: getattr(request, name)
        for name in ("octaves", "persistence", "scale", "seed_strategy")
        if getattr(request, name) is not None
    }
    if overrides:
        config = config.replace(**overrides)

    if request.output not in OUTPUTS:
        raise HTTPException(
            status_code=400,
            detail=f"Unknown output {request.output!r} (available: {', '.join(OUTPUTS)})"
        )

    width = request.width if request.width is not None else config.width
    height = request.height if request.height is not None else config.height

    composer = TerrainComposer(config)
    start_time = time.time()

    stats = coverage = None
    if request.output == "elevation" and not request.include_stats:
        grid = composer.generate(request.seed, width, height).tolist()
    else:
        result = composer.generate_map(request.seed, width, height)
        if request.output == "elevation":
            grid = result["elevation"].tolist()
        else:
            grid = result[request.output]
        if request.include_stats:
            stats = result["stats"]
            coverage = result["coverage"]

    return GenerateResponse(
        shape=[height, width],
        seed=request.seed,
        preset=request.preset,
        output=request.output,
        grid=grid,
        stats=stats,
        coverage=coverage,
        generation_time=time.time() - start_time
    )


def create_app(cors_origins: List[str] = None) -> FastAPI:
    """Create FastAPI application."""

    app = FastAPI(
        title="biomegrid API",
        description="Generate seeded elevation and biome grids",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc"
    )

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
        return HealthResponse(status="healthy", version=__version__, presets=sorted(PRESETS))

    @app.get("/presets")
    async def presets():
        """Available presets and their full configs."""
        return {name: config.to_dict() for name, config in PRESETS.items()}

    @app.post("/generate", response_model=GenerateResponse)
    def generate(request: GenerateRequest):
        """Generate a grid."""
        try:
            return _run_generation(request)
        except BiomeGridError as e:
            logger.warning("Rejected generate request: %s", e)
            raise HTTPException(status_code=400, detail=str(e))

    return app


def main():
    """CLI entry point for API server."""

    parser = argparse.ArgumentParser(description="biomegrid API Server")
    parser.add_argument("--host", default="0.0.0.0", help="Host to bind server")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind server")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload for development")

    args = parser.parse_args()

    print("Starting biomegrid API server...")
    print(f"Server: http://{args.host}:{args.port}")
    print(f"Docs: http://{args.host}:{args.port}/docs")

    if args.reload:
        uvicorn.run(
            "biomegrid.inference.api:create_app",
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
