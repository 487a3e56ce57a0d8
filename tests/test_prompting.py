import io

import pytest

from WFPutils.cli.prompts import TerminalPromptAdapter
from WFPutils.exceptions import PromptAttemptsExceeded
from WFPutils.params import validate_value
from WFPutils.params.patterns import EMAIL
from WFPutils.resolution.prompting import InputShape, ScriptedPromptAdapter, build_prompt_request
from WFPutils.schemas.parameter import Parameter


def _request(param):
    return build_prompt_request(param, accept=lambda raw: validate_value(param, raw))


def _terminal(answers, **kwargs):
    replies = iter(answers)

    def fake_input(question):
        reply = next(replies)
        if reply is EOFError:
            raise EOFError
        return reply

    output = io.StringIO()
    return TerminalPromptAdapter(input_func=fake_input, output=output, **kwargs), output


def test_request_shapes() -> None:
    assert _request(Parameter(name="s")).shape is InputShape.TEXT
    assert _request(Parameter(name="n", type="number")).shape is InputShape.TEXT
    assert _request(Parameter(name="b", type="bool")).shape is InputShape.YES_NO
    assert _request(Parameter(name="c", type="choice", choices=["x"])).shape is InputShape.SINGLE_CHOICE
    multi = _request(Parameter(name="m", type="multi_choice", choices=["x", "y", "z"],
                               validation={"min_selections": 1}))
    assert multi.shape is InputShape.MULTI_SELECT
    assert (multi.min_selections, multi.max_selections) == (1, 3)
    assert multi.choices == ("x", "y", "z")


def test_request_without_condition_has_no_explanation() -> None:
    request = _request(Parameter(name="owner", required=True))
    assert request.explanation is None
    assert request.label == "owner"
    assert request.required


def test_should_prompt_policy() -> None:
    required = Parameter(name="a", required=True, default="x")
    optional = Parameter(name="b")
    defaulted = Parameter(name="c", default="x")

    adapter = ScriptedPromptAdapter({})
    assert adapter.should_prompt(required)
    assert not adapter.should_prompt(optional)

    eager = ScriptedPromptAdapter({}, prompt_optional=True)
    assert eager.should_prompt(optional)
    assert not eager.should_prompt(defaulted)


def test_max_attempts_must_be_positive() -> None:
    with pytest.raises(ValueError):
        ScriptedPromptAdapter({}, max_attempts=0)


def test_scripted_adapter_declines_when_out_of_answers() -> None:
    param = Parameter(name="n", type="number")
    adapter = ScriptedPromptAdapter({"n": ["x"]})
    assert adapter.prompt(_request(param)) is None
    assert adapter.asked == [("n", None), ("n", "expected number, got 'x'")]


def test_scripted_adapter_attempt_limit() -> None:
    param = Parameter(name="n", type="number")
    adapter = ScriptedPromptAdapter({"n": ["x", "y"]}, max_attempts=1)
    with pytest.raises(PromptAttemptsExceeded):
        adapter.prompt(_request(param))


def test_terminal_yes_no() -> None:
    adapter, output = _terminal(["Y"])
    param = Parameter(name="confirm", type="boolean", description="Confirm deployment",
                      condition="env == 'prod'")
    assert adapter.prompt(_request(param)) is True
    assert "Confirm deployment (asked because condition 'env == 'prod'' is met)" in output.getvalue()


def test_terminal_numbered_choice() -> None:
    adapter, output = _terminal(["2"])
    param = Parameter(name="env", type="choice", choices=["dev", "staging", "prod"])
    assert adapter.prompt(_request(param)) == "staging"
    assert "  3) prod" in output.getvalue()


def test_terminal_choice_by_value() -> None:
    adapter, _ = _terminal(["prod"])
    param = Parameter(name="env", type="choice", choices=["dev", "staging", "prod"])
    assert adapter.prompt(_request(param)) == "prod"


def test_terminal_multi_select() -> None:
    adapter, output = _terminal(["1, tracing"])
    param = Parameter(name="features", type="multi_choice", choices=["metrics", "tracing", "profiling"])
    assert adapter.prompt(_request(param)) == ["metrics", "tracing"]
    assert "Select 0-3, separated by commas" in output.getvalue()


def test_terminal_reasks_with_pattern_hint() -> None:
    adapter, output = _terminal(["not-an-email", "user@example.com"])
    param = Parameter(name="email", required=True, validation={"pattern": EMAIL})
    assert adapter.prompt(_request(param)) == "user@example.com"
    text = output.getvalue()
    assert "Invalid value: value 'not-an-email' does not match required pattern" in text
    assert "Expected: Valid email address, e.g. user@example.com" in text


def test_terminal_empty_answer() -> None:
    adapter, output = _terminal(["", "core"])
    required = Parameter(name="team", required=True)
    assert adapter.prompt(_request(required)) == "core"
    assert "A value is required." in output.getvalue()

    adapter, _ = _terminal([""])
    defaulted = Parameter(name="team", required=True, default="core")
    assert adapter.prompt(_request(defaulted)) is None


def test_terminal_end_of_input_declines() -> None:
    adapter, _ = _terminal([EOFError])
    assert adapter.prompt(_request(Parameter(name="team", required=True))) is None


def test_terminal_question_shows_default() -> None:
    questions = []
    adapter = TerminalPromptAdapter(input_func=lambda q: questions.append(q) or "n",
                                    output=io.StringIO())
    param = Parameter(name="debug", type="boolean", required=True, default=True)
    assert adapter.prompt(_request(param)) is False
    assert questions == ["debug [y/n] (default: y): "]
