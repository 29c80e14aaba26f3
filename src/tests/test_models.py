import pytest
from pydantic import TypeAdapter, ValidationError

from api_chain.models import GetCommentsStep
from api_chain.models import GetStep
from api_chain.models import PostStep
from api_chain.models import Step
from api_chain.models import StepFailed
from api_chain.models import StepSucceeded
from api_chain.models.chain_run import ChainRun, ChainStatus


def test_new_step_defaults() -> None:
    step = GetStep()

    assert step.kind == "GET"
    assert step.url == ""
    assert step.use_last_response is False
    assert step.outcome is None
    assert step.result is None
    assert step.failure is None
    assert step.attempted is False


def test_step_ids_are_unique() -> None:
    assert GetStep().id != GetStep().id


def test_step_union_discriminates_on_kind() -> None:
    adapter = TypeAdapter(list[Step])

    steps = adapter.validate_python(
        [
            {"kind": "GET", "url": "https://x/posts/1"},
            {"kind": "POST", "url": "https://x/posts", "body": {"title": "t"}},
            {"kind": "GET_COMMENTS", "related_id": "3"},
        ]
    )

    assert isinstance(steps[0], GetStep)
    assert isinstance(steps[1], PostStep)
    assert steps[1].body == {"title": "t"}
    assert isinstance(steps[2], GetCommentsStep)
    assert steps[2].related_id == "3"


def test_step_union_rejects_unknown_kind() -> None:
    with pytest.raises(ValidationError):
        TypeAdapter(Step).validate_python({"kind": "DELETE", "url": "https://x"})


def test_result_and_failure_follow_outcome() -> None:
    step = GetStep(url="https://x")

    step.outcome = StepSucceeded(step_id=step.id, index=0, result={"id": 1})
    assert step.result == {"id": 1}
    assert step.failure is None

    step.outcome = StepFailed(step_id=step.id, index=0, failure="HTTP error: status 500")
    assert step.result is None
    assert step.failure == "HTTP error: status 500"
    assert step.attempted is True


def test_assignment_is_validated() -> None:
    step = PostStep()

    with pytest.raises(ValidationError):
        step.body = "not a mapping"  # type: ignore[assignment]


def test_chain_run_completed_flag() -> None:
    assert ChainRun(status=ChainStatus.COMPLETED).completed
    assert not ChainRun(status=ChainStatus.HALTED).completed


def test_comments_step_coerces_numeric_post_id() -> None:
    step = TypeAdapter(Step).validate_python({"kind": "GET_COMMENTS", "related_id": 3})

    assert isinstance(step, GetCommentsStep)
    assert step.related_id == "3"


def test_comments_step_rejects_boolean_post_id() -> None:
    with pytest.raises(ValidationError):
        GetCommentsStep(related_id=True)  # type: ignore[arg-type]


def test_null_response_is_attempted_without_result_or_failure() -> None:
    step = GetStep(url="https://x")
    step.outcome = StepSucceeded(step_id=step.id, index=0, result=None)

    assert step.result is None
    assert step.failure is None
    assert step.attempted is True
