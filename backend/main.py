from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from stemplay.formulas import detect_formulas, suggest_simulation
from stemplay.logging_config import setup_logging
from stemplay.parser import parse_blueprint, parse_blueprint_with_trace, summarize_trace
from stemplay.settings import load_settings

SETTINGS = load_settings()
setup_logging(SETTINGS.log_level, SETTINGS.log_file)
log = logging.getLogger("stemplay.backend")


class BlueprintRequest(BaseModel):
    text: str
    defaultSceneTitle: Optional[str] = None
    includeTrace: bool = False


class FormulaRequest(BaseModel):
    text: str


app = FastAPI(title="STEMPlay Blueprint API", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(SETTINGS.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _check_size(text: str) -> None:
    if len(text) > SETTINGS.max_blueprint_chars:
        raise HTTPException(
            status_code=400,
            detail=f"text is {len(text)} chars, limit is {SETTINGS.max_blueprint_chars}",
        )


@app.get("/api/health")
def health() -> Dict[str, Any]:
    return {"ok": True, "message": "Backend up"}


@app.post("/api/blueprint/parse")
def parse_blueprint_route(req: BlueprintRequest) -> Dict[str, Any]:
	"""Parse blueprint text into a SimulationConfig. Any text parses; only oversize input is rejected."""
	_check_size(req.text)
	cfg, trace = parse_blueprint_with_trace(req.text, req.defaultSceneTitle or SETTINGS.default_scene_title)
	log.info("parsed blueprint: %d chars -> %d objects, %d variables", len(req.text), len(cfg.objects), len(cfg.variables))
	out: Dict[str, Any] = {"success": True, "config": cfg.to_dict()}
	if req.includeTrace:
		out["trace"] = summarize_trace(trace)
	return out


@app.post("/api/formulas/detect")
def detect_formulas_route(req: FormulaRequest) -> Dict[str, Any]:
	"""Spot known kinematics formulas in free text (notes, transcripts)."""
	if not req.text.strip():
		raise HTTPException(status_code=400, detail="Invalid text payload")
	_check_size(req.text)
	matches = detect_formulas(req.text)
	suggested = suggest_simulation(matches)
	if suggested is not None:
		suggested["config"] = parse_blueprint(suggested["blueprint"], SETTINGS.default_scene_title).to_dict()
	return {
		"success": True,
		"formulas": [m.to_dict() for m in matches],
		"suggestedSimulation": suggested,
	}
