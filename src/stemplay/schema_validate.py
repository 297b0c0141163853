# src/stemplay/schema_validate.py
from __future__ import annotations
import math
import re
from typing import Any, Dict, List, Tuple

from .schema import VARIABLE_ROLES

_Number = (int, float)
_NAME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9_]*$")

def _is_opt_number(v: Any) -> bool:
	if v is None:
		return True
	return isinstance(v, _Number) and not isinstance(v, bool) and math.isfinite(v)

def _is_opt_str(v: Any) -> bool:
	return v is None or isinstance(v, str)

def _err(errors: List[str], msg: str) -> None:
	errors.append(msg)

def _check_unique_ids(errors: List[str], rows: List[Any], ctx: str) -> None:
	seen: Dict[str, int] = {}
	for i, row in enumerate(rows):
		if not isinstance(row, dict):
			continue
		rid = row.get("id")
		if not isinstance(rid, str) or not rid:
			_err(errors, f"{ctx}[{i}].id must be a non-empty string.")
			continue
		if rid in seen:
			_err(errors, f"{ctx}[{i}].id '{rid}' duplicates {ctx}[{seen[rid]}].")
		else:
			seen[rid] = i

def _validate_variable_list(errors: List[str], rows: Any, ctx: str) -> List[Dict[str, Any]]:
	if rows is None:
		return []
	if not isinstance(rows, list):
		_err(errors, f"{ctx} must be a list.")
		return []
	out: List[Dict[str, Any]] = []
	for i, row in enumerate(rows):
		if not isinstance(row, dict):
			_err(errors, f"{ctx}[{i}] must be a dict.")
			continue
		name = row.get("name")
		if not isinstance(name, str) or not _NAME_RE.match(name):
			_err(errors, f"{ctx}[{i}].name must be an identifier like 'v' or 'v_0'.")
		for key in ("description", "unit"):
			if not _is_opt_str(row.get(key)):
				_err(errors, f"{ctx}[{i}].{key} must be a string or null.")
		if not _is_opt_number(row.get("initialValue")):
			_err(errors, f"{ctx}[{i}].initialValue must be a finite number or null.")
		role = row.get("role")
		if role is not None and role not in VARIABLE_ROLES:
			_err(errors, f"{ctx}[{i}].role must be one of {'|'.join(VARIABLE_ROLES)}.")
		out.append(row)
	return out

def validate_config(cfg: Dict[str, Any]) -> Tuple[bool, List[str], Dict[str, Any]]:
	"""
	Check a SimulationConfig in its wire (to_dict) form.

	Returns (ok, errors, summary). Never raises on malformed input; every
	problem becomes one entry in `errors`.
	"""
	errors: List[str] = []
	if not isinstance(cfg, dict):
		return False, ["config must be a dict."], {}

	title = cfg.get("sceneTitle")
	if not isinstance(title, str) or not title.strip():
		_err(errors, "sceneTitle must be a non-empty string.")
	if not isinstance(cfg.get("description"), str):
		_err(errors, "description must be a string.")

	# objects
	objects = cfg.get("objects")
	if not isinstance(objects, list) or not objects:
		_err(errors, "objects must be a non-empty list.")
		objects = objects if isinstance(objects, list) else []
	_check_unique_ids(errors, objects, "objects")
	for i, obj in enumerate(objects):
		if not isinstance(obj, dict):
			_err(errors, f"objects[{i}] must be a dict.")
			continue
		label = obj.get("label")
		if not isinstance(label, str) or not label:
			_err(errors, f"objects[{i}].label must be a non-empty string.")
		if not _is_opt_str(obj.get("role")):
			_err(errors, f"objects[{i}].role must be a string or null.")
		_validate_variable_list(errors, obj.get("variables", []), f"objects[{i}].variables")

	# variables
	variables = _validate_variable_list(errors, cfg.get("variables", []), "variables")
	if objects and isinstance(objects[0], dict):
		first_vars = objects[0].get("variables")
		if first_vars is not None and first_vars is cfg.get("variables"):
			_err(errors, "objects[0].variables must be a copy, not the top-level variables list.")

	# timeline
	timeline = cfg.get("timeline", [])
	if not isinstance(timeline, list):
		_err(errors, "timeline must be a list.")
		timeline = []
	_check_unique_ids(errors, timeline, "timeline")
	for i, evt in enumerate(timeline):
		if not isinstance(evt, dict):
			_err(errors, f"timeline[{i}] must be a dict.")
			continue
		if not isinstance(evt.get("label"), str):
			_err(errors, f"timeline[{i}].label must be a string.")
		if not _is_opt_str(evt.get("description")):
			_err(errors, f"timeline[{i}].description must be a string or null.")
		if not _is_opt_number(evt.get("time")):
			_err(errors, f"timeline[{i}].time must be a finite number or null.")

	# Small human-readable summary for CLI/tool output
	summary = {
		"scene_title": title,
		"objects": [
			{"label": o.get("label"), "role": o.get("role"), "n_variables": len(o["variables"]) if isinstance(o.get("variables"), list) else 0}
			for o in objects if isinstance(o, dict)
		],
		"variables": [v.get("name") for v in variables],
		"timeline": {
			"events": len(timeline),
			"timed": sum(1 for e in timeline if isinstance(e, dict) and isinstance(e.get("time"), _Number)),
		},
	}

	ok = len(errors) == 0
	return ok, errors, summary
