# ============================================================================
# api/main.py
# ============================================================================
"""
FastAPI Backend for the Auto Centile Calculator

Receives form snapshots, calculates growth centiles per metric via the
external growth-reference API, and returns them in one response.
"""

import json
import sys
import logging
from pathlib import Path
from typing import Any, Dict, Optional
from contextlib import asynccontextmanager

logger = logging.getLogger(__name__)

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from auto_centile.config import (
    FormSettings,
    GrowthApiSettings,
    form_settings,
    growth_api_settings,
    logging_settings,
)
from auto_centile.core import CentileOrchestrator, RawInput
from auto_centile.form import FieldBinding
from auto_centile.growth_api import GrowthAPIClient
from auto_centile.utils import (
    CentileInputError,
    ConfigurationError,
    InvalidRequestError,
    ModuleContextUnavailableError,
    setup_logging,
)


def create_app(
    orchestrator: Optional[CentileOrchestrator] = None,
    api_settings: Optional[GrowthApiSettings] = None,
    settings: Optional[FormSettings] = None,
) -> FastAPI:
    """
    Build the application.

    An explicit orchestrator is used as-is (tests, embedding). Otherwise
    one is built from GrowthApiSettings at startup; if that fails the
    calculation endpoint answers 500 until the configuration is fixed.
    """
    api_settings = api_settings or growth_api_settings
    settings = settings or form_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(
            level=logging_settings.LOG_LEVEL,
            log_file=logging_settings.LOG_FILE,
            format_json=logging_settings.LOG_JSON,
        )
        client = None
        if app.state.orchestrator is None:
            try:
                client = GrowthAPIClient(settings=api_settings)
                app.state.orchestrator = CentileOrchestrator(client=client)
                logger.info("Centile orchestrator ready")
            except ConfigurationError as e:
                app.state.context_error = str(e)
                logger.error(f"Centile orchestrator could not be created: {e}")
        yield
        if client is not None:
            await client.close()

    app = FastAPI(
        title="Auto Centile Calculator API",
        description="Growth centiles and SDS for clinical form measurements",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.orchestrator = orchestrator
    app.state.context_error = None
    app.state.form_settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    # ========================================================================
    # Error handling
    # ========================================================================

    @app.exception_handler(CentileInputError)
    async def input_error_handler(request: Request, exc: CentileInputError):
        logger.info(f"Rejected calculation request: {exc}")
        return JSONResponse(status_code=400, content={"success": False, "error": str(exc)})

    @app.exception_handler(ModuleContextUnavailableError)
    async def context_error_handler(request: Request, exc: ModuleContextUnavailableError):
        logger.error(str(exc))
        return JSONResponse(status_code=500, content={"success": False, "error": str(exc)})

    # ========================================================================
    # Endpoints
    # ========================================================================

    @app.get("/api/health")
    async def health():
        """Health check for monitoring."""
        return {"status": "healthy", "calculator_ready": app.state.orchestrator is not None}

    @app.post("/api/calculate-centiles")
    async def calculate_centiles(
        request: Request,
        orchestrator: CentileOrchestrator = Depends(get_orchestrator),
    ):
        """
        Calculate centiles for every measurement in the snapshot.

        Per-metric failures are embedded under results.<metric>.error with
        a 200; only input and configuration problems fail the request.
        """
        raw = parse_raw_input(await request.body())
        result = await orchestrator.calculate(raw)
        return {"success": True, "results": result.to_dict()}

    @app.get("/api/form-config/{instrument}")
    async def form_config(instrument: str) -> Dict[str, Any]:
        """Whether the calculator attaches to this instrument, and how."""
        form = app.state.form_settings
        return {
            "instrument": instrument,
            "enabled": form.is_target_instrument(instrument),
            "fields": FieldBinding.from_settings(form).to_dict(),
            "debounce_seconds": form.DEBOUNCE_SECONDS,
            "initial_delay_seconds": form.INITIAL_CALCULATION_DELAY,
            "measurement_method": form.HEIGHT_MEASUREMENT_METHOD,
            "date_format": form.DATE_FORMAT_HINT,
        }

    return app


def get_orchestrator(request: Request) -> CentileOrchestrator:
    """Dependency: the configured orchestrator, or a 500."""
    orchestrator = getattr(request.app.state, "orchestrator", None)
    if orchestrator is None:
        reason = getattr(request.app.state, "context_error", None) or "Module context not available"
        raise ModuleContextUnavailableError(reason)
    return orchestrator


def parse_raw_input(body: bytes) -> RawInput:
    """Decode the request body into a RawInput."""
    if not body or not body.strip():
        raise InvalidRequestError("No input data received")
    try:
        data = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise InvalidRequestError(f"Invalid JSON: {e}")
    if not isinstance(data, dict):
        raise InvalidRequestError("Invalid JSON: expected an object")
    try:
        return RawInput.model_validate(data)
    except ValidationError as e:
        fields = ", ".join(str(err["loc"][0]) for err in e.errors() if err.get("loc"))
        raise InvalidRequestError(f"Invalid value for: {fields}")


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
