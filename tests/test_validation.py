from mazeswipe.maze import Direction
from mazeswipe.websockets.validation import GENERATE, SET_MODE, parse_swipe, validate


def test_swipe_direction_normalized():
    ok, data = parse_swipe({"direction": " Left "})
    assert ok and data == {"direction": Direction.LEFT}


def test_swipe_from_delta():
    ok, data = parse_swipe({"dx": -40, "dy": 12.5})
    assert ok and data["direction"] is Direction.LEFT
    ok, data = parse_swipe({"dx": 2, "dy": -30})
    assert ok and data["direction"] is Direction.UP


def test_direction_wins_over_delta():
    ok, data = parse_swipe({"direction": "down", "dx": 50, "dy": 0})
    assert ok and data["direction"] is Direction.DOWN


def test_swipe_errors():
    assert parse_swipe(None) == (False, {"field": "__root__", "error": "payload must be an object", "code": "type"})
    ok, err = parse_swipe({})
    assert not ok and err["code"] == "required"
    ok, err = parse_swipe({"direction": "diagonal"})
    assert not ok and err["code"] == "choice"
    ok, err = parse_swipe({"direction": 3})
    assert not ok and err["code"] == "type"
    ok, err = parse_swipe({"dx": 0, "dy": 0})
    assert not ok and err == {"field": "dx", "error": "swipe delta must not be zero", "code": "zero"}
    ok, err = parse_swipe({"dx": True, "dy": 1})
    assert not ok and err["field"] == "dx"
    ok, err = parse_swipe({"dx": 5})
    assert not ok and err["field"] == "direction"


def test_set_mode_requires_bool():
    assert validate({"hard": True}, SET_MODE) == (True, {"hard": True})
    ok, err = validate({"hard": 1}, SET_MODE)
    assert not ok and err["code"] == "type"
    ok, err = validate({}, SET_MODE)
    assert not ok and err["code"] == "required"


def test_generate_bounds():
    assert validate({"rows": 11, "seed": 3}, GENERATE) == (True, {"rows": 11, "seed": 3})
    ok, err = validate({"rows": 3}, GENERATE)
    assert not ok and err == {"field": "rows", "error": "must be >= 5", "code": "min"}
    ok, err = validate({"cols": 999}, GENERATE)
    assert not ok and err["code"] == "max"


def test_unknown_schema_type():
    ok, err = validate({"x": 1}, {"x": ("float", True)})
    assert not ok and err["code"] == "schema"


def test_empty_string_rejected():
    ok, err = validate({"direction": "   "}, {"direction": ("str", True)})
    assert not ok and err["code"] == "empty"
