"""
FastAPI Main Application for the Elion molecule design assistant
"""
import logging
import sys
from contextlib import asynccontextmanager
from datetime import datetime

import httpx
from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from config import settings
from models import (
    ChatReply, ChatRequest, DesignGuidance, DesignGuidanceRequest,
    ExplainRequest, ExplainResponse, PredictRequest, PredictResponse,
    SARRequest, SARResponse, ValidateRequest, ValidateResponse,
)
from core.errors import ElionError, InvalidRequestError, UnknownPropertyError
from core.properties import (
    EXAMPLE_MOLECULES, PANEL_LABELS, PANELS, R_GROUPS, SCAFFOLDS,
    get_properties_for_panel, list_properties,
)
from core.smiles import validate_smiles
from services.credentials import GoogleCredentialProvider
from services.model_gateway import ModelGateway, UnconfiguredGateway
from services.orchestrator import PredictionOrchestrator

logger.remove()
logger.add(sys.stderr, level=settings.log_level)
logging.basicConfig(level=settings.log_level)

EXPLAIN_FALLBACK = "Unable to generate explanation at this time."
CHAT_FALLBACK = "I'm sorry, I encountered an error processing your request. Please try again."
GUIDANCE_FALLBACK = "Unable to generate design guidance at this time."


def build_gateway(http_client: httpx.AsyncClient):
    """Live gateway when an endpoint is configured, otherwise a stand-in that fails every call."""
    if not settings.gateway_configured:
        logger.warning("GOOGLE_CLOUD_PROJECT_ID / VERTEX_AI_PREDICT_ENDPOINT_ID not set; only cached answers available")
        return UnconfiguredGateway()
    credentials = GoogleCredentialProvider(settings.credentials_json)
    return ModelGateway.from_settings(settings, http_client, credentials)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler"""
    logger.info("Starting Elion")
    async with httpx.AsyncClient(timeout=settings.gateway_timeout) as http_client:
        gateway = build_gateway(http_client)
        app.state.gateway_configured = isinstance(gateway, ModelGateway)
        app.state.orchestrator = PredictionOrchestrator(gateway, cache_enabled=settings.answer_cache_enabled)
        yield
    logger.info("Shutting down Elion")


app = FastAPI(
    title="Elion",
    description="Molecule design assistant backed by TxGemma on Vertex AI",
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_orchestrator(request: Request) -> PredictionOrchestrator:
    return request.app.state.orchestrator


# ============= Catalog Endpoints =============

@app.get("/api/v1/properties")
async def get_properties():
    """Property catalog"""
    return {"properties": [prop.to_dict() for prop in list_properties()]}


@app.get("/api/v1/panels")
async def get_panels():
    """Evaluation panels with their ordered property ids"""
    return {
        "panels": [
            {
                "id": panel_id,
                "label": PANEL_LABELS.get(panel_id, panel_id),
                "properties": [prop.id for prop in get_properties_for_panel(panel_id)],
            }
            for panel_id in PANELS
        ]
    }


@app.get("/api/v1/examples")
async def get_examples():
    """Example molecules and SAR building blocks"""
    return {
        "molecules": EXAMPLE_MOLECULES,
        "scaffolds": SCAFFOLDS,
        "rGroups": R_GROUPS,
    }


@app.post("/api/v1/validate", response_model=ValidateResponse)
async def validate(request: ValidateRequest):
    result = validate_smiles(request.smiles)
    return ValidateResponse(valid=result.valid, error=result.error)


# ============= Model Endpoints =============

@app.post("/api/v1/predict", response_model=PredictResponse)
async def predict(request: PredictRequest, orchestrator: PredictionOrchestrator = Depends(get_orchestrator)):
    """
    Predict a panel of properties for one molecule

    Individual property failures come back as error entries; only a
    missing molecule or property list fails the request.
    """
    try:
        predictions = await orchestrator.evaluate(request.smiles, request.properties, request.target)
    except InvalidRequestError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return PredictResponse(predictions=predictions)


@app.post("/api/v1/explain", response_model=ExplainResponse)
async def explain(request: ExplainRequest, orchestrator: PredictionOrchestrator = Depends(get_orchestrator)):
    """Structural rationale for a prediction"""
    try:
        explanation = await orchestrator.explain(request.smiles, request.property_id, request.prediction)
    except (InvalidRequestError, UnknownPropertyError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except (ElionError, httpx.HTTPError) as e:
        logger.error(f"Explanation error: {e}")
        raise HTTPException(status_code=502, detail=EXPLAIN_FALLBACK)
    return ExplainResponse(explanation=explanation)


@app.post("/api/v1/chat", response_model=ChatReply)
async def chat(request: ChatRequest, orchestrator: PredictionOrchestrator = Depends(get_orchestrator)):
    """Conversational design assistant"""
    try:
        return await orchestrator.chat(request.messages, request.current_smiles, request.current_predictions)
    except InvalidRequestError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except (ElionError, httpx.HTTPError) as e:
        logger.error(f"Chat error: {e}")
        raise HTTPException(status_code=502, detail=CHAT_FALLBACK)


@app.post("/api/v1/design-guidance", response_model=DesignGuidance)
async def design_guidance(request: DesignGuidanceRequest, orchestrator: PredictionOrchestrator = Depends(get_orchestrator)):
    """Summary, suggestions and starting molecules for a therapeutic goal"""
    try:
        return await orchestrator.design_guidance(request.goal)
    except InvalidRequestError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except (ElionError, httpx.HTTPError) as e:
        logger.error(f"Design guidance error: {e}")
        raise HTTPException(status_code=502, detail=GUIDANCE_FALLBACK)


@app.post("/api/v1/sar", response_model=SARResponse)
async def sar(request: SARRequest, orchestrator: PredictionOrchestrator = Depends(get_orchestrator)):
    """Enumerate a scaffold's R-group library and evaluate every member"""
    try:
        entries = await orchestrator.evaluate_library(
            request.scaffold, request.r_groups, request.properties, request.scaffold_name
        )
    except InvalidRequestError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return SARResponse(entries=entries)


# ============= Health Check =============

@app.get("/health")
async def health_check(request: Request):
    """Health check endpoint"""
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "services": {
            "gateway": "ready" if getattr(request.app.state, "gateway_configured", False) else "unconfigured",
            "answer_cache": "enabled" if settings.answer_cache_enabled else "disabled",
        }
    }


# ============= Main Entry Point =============

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
