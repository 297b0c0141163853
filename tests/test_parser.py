from __future__ import annotations

import json
from pathlib import Path

import pytest

from stemplay.ids import ClockIds, CounterIds
from stemplay.parser import parse_blueprint, parse_blueprint_with_trace, summarize_trace
from stemplay.errors import BlueprintInputError
from stemplay.schema import DEFAULT_DESCRIPTION, DEFAULT_SCENE_TITLE, SimulationConfig
from stemplay.schema_validate import validate_config


PROJECTILE = """\
Scene: Projectile motion in 2D
A ball is launched from flat ground.
Objects:
- Projectile (ball)
- Ground
Variables:
- v: initial velocity (m/s)
- angle: launch angle (degrees)
- g: gravity (m/s²)
Timeline:
- t = 0s: Ball launched
- t = peak: Maximum height reached
- t = landing: Ball hits ground
"""


@pytest.mark.parametrize("text", ["", "   ", "\n\n\t\n", "\x00\x01\x02", "Objects:", "%%% ### !!!"])
def test_degenerate_inputs_still_give_one_object(text: str) -> None:
    cfg = parse_blueprint(text)
    assert len(cfg.objects) >= 1
    ok, errors, _ = validate_config(cfg.to_dict())
    assert ok, errors


def test_empty_input_defaults() -> None:
    cfg = parse_blueprint("")
    assert cfg.scene_title == DEFAULT_SCENE_TITLE
    assert cfg.description == DEFAULT_DESCRIPTION
    assert len(cfg.objects) == 1
    assert cfg.objects[0].label == "Default Object"
    assert cfg.objects[0].role == "body"
    assert cfg.objects[0].variables == []
    assert cfg.variables == []
    assert cfg.timeline == []


def test_none_is_treated_as_empty_and_non_text_is_rejected() -> None:
    assert parse_blueprint(None).scene_title == DEFAULT_SCENE_TITLE
    with pytest.raises(BlueprintInputError):
        parse_blueprint(42)


def test_scene_heading_with_inline_title() -> None:
    cfg = parse_blueprint("Scene: Free Fall\nObjects:\n- Ball")
    assert cfg.scene_title == "Free Fall"
    assert [o.label for o in cfg.objects] == ["Ball"]


def test_default_scene_title_option() -> None:
    cfg = parse_blueprint("Objects:\n- Ball", default_scene_title="Lab 3")
    assert cfg.scene_title == "Lab 3"
    assert parse_blueprint("Scene: Mine", default_scene_title="Lab 3").scene_title == "Mine"


def test_variable_attached_to_first_object() -> None:
    cfg = parse_blueprint("Objects:\n- Cart\nVariables:\n- v: speed (m/s)")
    assert [v.to_dict() for v in cfg.objects[0].variables] == [
        {"name": "v", "description": "speed", "unit": "m/s", "initialValue": None}
    ]
    assert cfg.objects[0].variables is not cfg.variables
    cfg.variables.append(cfg.variables[0])
    assert len(cfg.objects[0].variables) == 1


def test_only_first_object_gets_variables() -> None:
    cfg = parse_blueprint("Objects:\n- Cart\n- Track\nVariables:\nm: mass (kg)")
    assert [v.name for v in cfg.objects[0].variables] == ["m"]
    assert cfg.objects[1].variables == []


def test_explicit_variable_skips_inference() -> None:
    text = "Variables:\n- v: initial velocity (m/s)\nThen F = m a and x = v t"
    cfg = parse_blueprint(text)
    assert len(cfg.variables) == 1
    var = cfg.variables[0]
    assert (var.name, var.description, var.unit) == ("v", "initial velocity", "m/s")
    assert var.role is None


def test_timeline_event_time() -> None:
    cfg = parse_blueprint("Timeline:\n- t = 2.5s: ball lands")
    assert len(cfg.timeline) == 1
    assert cfg.timeline[0].time == 2.5


def test_no_structure_falls_back_to_inference() -> None:
    cfg = parse_blueprint("just some prose with F and m")
    assert cfg.scene_title == DEFAULT_SCENE_TITLE
    assert cfg.description == DEFAULT_DESCRIPTION
    assert len(cfg.objects) == 1
    assert [v.name for v in cfg.variables] == ["F", "m"]
    assert all(v.role == "unknown" for v in cfg.variables)
    assert [v.name for v in cfg.objects[0].variables] == ["F", "m"]


def test_inference_scans_whole_text() -> None:
    cfg = parse_blueprint("Scene: Car\nA car with v and a.\nObjects:\n- Car\nTimeline:\n- t = 1s: x grows")
    # "1s" yields the token "s"
    assert [v.name for v in cfg.variables] == ["v", "a", "t", "s", "x"]


def test_full_projectile_blueprint() -> None:
    cfg = parse_blueprint(PROJECTILE)
    assert cfg.scene_title == "Projectile motion in 2D"
    assert cfg.description == "A ball is launched from flat ground."
    assert [o.label for o in cfg.objects] == ["Projectile (ball)", "Ground"]
    assert [(v.name, v.unit) for v in cfg.variables] == [("v", "m/s"), ("angle", "degrees"), ("g", "m/s²")]
    assert [e.time for e in cfg.timeline] == [0.0, None, None]
    assert cfg.timeline[2].label == "t = landing: Ball hits ground"


def test_same_input_same_id_source_is_identical() -> None:
    a = parse_blueprint(PROJECTILE, ids=CounterIds())
    b = parse_blueprint(PROJECTILE, ids=CounterIds())
    assert a == b
    assert a.to_json() == b.to_json()
    # default id source is call-local
    assert parse_blueprint(PROJECTILE).to_dict() == parse_blueprint(PROJECTILE).to_dict()


def test_pinned_clock_ids_are_reproducible_and_unique() -> None:
    a = parse_blueprint(PROJECTILE, ids=ClockIds(clock=lambda: 1_700_000_000))
    b = parse_blueprint(PROJECTILE, ids=ClockIds(clock=lambda: 1_700_000_000))
    assert a.to_dict() == b.to_dict()
    ids = [o.id for o in a.objects] + [e.id for e in a.timeline]
    assert len(ids) == len(set(ids))


def test_output_is_json_serializable_and_round_trips() -> None:
    cfg = parse_blueprint(PROJECTILE)
    data = json.loads(cfg.to_json())
    assert data["sceneTitle"] == "Projectile motion in 2D"
    assert SimulationConfig.from_dict(data) == cfg


def test_trace_has_one_record_per_non_empty_line() -> None:
    cfg, trace = parse_blueprint_with_trace("intro\n\nObjects:\n- Ball\nloose text\n")
    assert len(trace) == 4
    summary = summarize_trace(trace)
    assert summary["dropped"] == [1, 4]
    assert summary["kinds"] == {"dropped": 2, "heading": 1, "object": 1}
    assert summary["sections"]["objects"] == {"heading": 1, "object": 1, "dropped": 1}
    assert len(cfg.objects) == 1


def test_demo_loose_notes_blueprint() -> None:
    path = Path(__file__).resolve().parents[1] / "demo" / "blueprints" / "loose_notes.txt"
    cfg = parse_blueprint(path.read_text(encoding="utf-8"))
    assert cfg.objects[0].label == "Default Object"
    assert [v.name for v in cfg.variables] == ["F", "m", "a", "u", "v", "t"]
    assert [e.time for e in cfg.timeline] == [0.0, None]
    assert cfg.timeline[1].label == "after 3 seconds it reaches the wall"


def test_indented_object_bullet_is_not_an_object() -> None:
    cfg = parse_blueprint("Objects:\n- Cart\n  - mass 2 kg")
    assert [o.label for o in cfg.objects] == ["Cart"]


def test_indented_variable_line_leaves_inference_in_charge() -> None:
    cfg = parse_blueprint("Variables:\n  v: speed (m/s)\nwith F")
    # no explicit entries, so symbols come from the whole text
    assert [v.name for v in cfg.variables] == ["v", "m", "s", "F"]
    assert all(v.role == "unknown" and v.description is None for v in cfg.variables)


def test_indented_timeline_bullet_is_dropped() -> None:
    cfg, trace = parse_blueprint_with_trace("Timeline:\n- t = 0s: start\n  - sub step")
    assert [e.label for e in cfg.timeline] == ["t = 0s: start"]
    assert summarize_trace(trace)["dropped"] == [3]


def test_indented_scene_text_is_still_collected() -> None:
    cfg = parse_blueprint("Scene: Ramp\n   - a block on a ramp")
    assert cfg.description == "a block on a ramp"


def test_unset_optional_fields_are_left_out_of_wire_dict() -> None:
    inferred = parse_blueprint("just some prose with F").to_dict()
    assert inferred["variables"] == [{"name": "F", "initialValue": None, "role": "unknown"}]
    assert inferred["objects"][0]["role"] == "body"

    explicit = parse_blueprint("Objects:\n- Cart\nVariables:\n- v: speed")
    row = explicit.to_dict()
    assert row["variables"] == [{"name": "v", "description": "speed", "initialValue": None}]
    assert "role" not in row["objects"][0]
    assert SimulationConfig.from_dict(row) == explicit
