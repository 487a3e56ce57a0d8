import pytest

from WFPutils.exceptions import ValidationError
from WFPutils.params import validate_value
from WFPutils.params.patterns import EMAIL
from WFPutils.schemas.parameter import Parameter


def _param(**kwargs):
    kwargs.setdefault("name", "value")
    return Parameter(**kwargs)


def _reason(param, value) -> str:
    with pytest.raises(ValidationError) as info:
        validate_value(param, value)
    assert info.value.parameter == param.name
    return info.value.reason


def test_none_is_rejected() -> None:
    assert _reason(_param(), None) == "a value is required"


def test_string_rules() -> None:
    param = _param(validation={"pattern": r"^.*\.(pem|crt)$", "min_length": 5, "max_length": 12})
    assert validate_value(param, "cert.pem") == "cert.pem"
    assert "does not match required pattern" in _reason(param, "notes.txt")
    assert "at most 12 characters" in _reason(param, "very/long/path.pem")
    assert "expected string" in _reason(param, 5)


def test_pattern_must_match_whole_value() -> None:
    param = _param(validation={"pattern": r"\d+"})
    assert validate_value(param, "123") == "123"
    assert "does not match" in _reason(param, "123abc")


def test_min_length_counts_characters() -> None:
    param = _param(validation={"min_length": 3})
    assert validate_value(param, "äöü") == "äöü"
    assert _reason(param, "ab") == "must be at least 3 characters long (got: 2)"


def test_string_with_choices() -> None:
    param = _param(choices=["small", "large"])
    assert validate_value(param, "small") == "small"
    assert "not in allowed choices" in _reason(param, "medium")


def test_boolean_coercion() -> None:
    param = _param(type="boolean")
    assert validate_value(param, True) is True
    assert validate_value(param, "TRUE") is True
    assert validate_value(param, " false ") is False
    assert _reason(param, "yes") == "expected true or false, got 'yes'"
    assert _reason(param, 1) == "expected boolean, got number"


def test_number_coercion() -> None:
    param = _param(type="number")
    assert validate_value(param, "42") == 42
    assert isinstance(validate_value(param, "42"), int)
    assert validate_value(param, "2.5") == 2.5
    assert validate_value(param, 7) == 7
    assert _reason(param, True) == "expected number, got boolean"
    assert _reason(param, "abc") == "expected number, got 'abc'"
    assert "finite" in _reason(param, "nan")
    assert "finite" in _reason(param, float("inf"))


def test_number_range() -> None:
    param = _param(type="number", validation={"min": 1, "max": 10})
    assert validate_value(param, 1) == 1
    assert validate_value(param, 10) == 10
    assert _reason(param, 11) == "value 11 is out of range [1, 10]"
    only_min = _param(type="number", validation={"min": 1})
    assert _reason(only_min, 0) == "value 0 is out of range [1, inf]"
    only_max = _param(type="number", validation={"max": 1.5})
    assert _reason(only_max, 2) == "value 2 is out of range [-inf, 1.5]"


def test_number_step() -> None:
    param = _param(type="number", validation={"step": 0.5})
    assert validate_value(param, "1.5") == 1.5
    assert validate_value(param, 0.1 + 0.2 + 0.2) == pytest.approx(0.5)
    assert _reason(param, 1.2) == "value 1.2 must be a multiple of 0.5"


def test_choice_suggests_close_match() -> None:
    param = _param(type="choice", choices=["dev", "staging", "prod"])
    assert validate_value(param, "prod") == "prod"
    reason = _reason(param, "prd")
    assert "not in allowed choices: dev, staging, prod" in reason
    assert "did you mean 'prod'?" in reason
    assert "did you mean" not in _reason(param, "zzz")


def test_multi_choice() -> None:
    param = _param(type="multi_choice", choices=["a", "b", "c"], validation={"min_selections": 1})
    assert validate_value(param, "a, c") == ["a", "c"]
    assert validate_value(param, ("b",)) == ["b"]
    assert _reason(param, []) == "requires between 1 and 3 selections (got: 0)"
    assert _reason(param, ["a", "a"]) == "duplicate selections: a"
    assert "not in allowed choices" in _reason(param, ["d"])
    assert "expected a list" in _reason(param, 3)


def test_multi_choice_max_selections() -> None:
    param = _param(type="multi_choice", choices=["a", "b", "c"], validation={"max_selections": 2})
    assert validate_value(param, []) == []
    assert _reason(param, "a,b,c") == "requires between 0 and 2 selections (got: 3)"


def test_common_pattern() -> None:
    param = _param(validation={"pattern": EMAIL})
    assert validate_value(param, "user@example.com") == "user@example.com"
    assert "does not match" in _reason(param, "user.example.com")


def test_number_too_large_for_float() -> None:
    huge = 10 ** 400
    stepped = _param(type="number", validation={"step": 0.5})
    assert _reason(stepped, huge) == "number is too large to represent"
    assert _reason(stepped, str(huge)) == "number is too large to represent"
    assert _reason(_param(type="number"), huge) == "number is too large to represent"
