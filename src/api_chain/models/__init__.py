"""Model types for chain steps and runs."""

from api_chain.models.chain_file import ChainFile
from api_chain.models.chain_run import ChainRun
from api_chain.models.chain_run import ChainStatus
from api_chain.models.executor_settings import ExecutorSettings
from api_chain.models.step import GetCommentsStep
from api_chain.models.step import GetStep
from api_chain.models.step import PostStep
from api_chain.models.step import Step
from api_chain.models.step import StepBase
from api_chain.models.step_outcome import StepFailed
from api_chain.models.step_outcome import StepOutcome
from api_chain.models.step_outcome import StepSucceeded

__all__ = [
    "ChainFile",
    "ChainRun",
    "ChainStatus",
    "ExecutorSettings",
    "GetCommentsStep",
    "GetStep",
    "PostStep",
    "Step",
    "StepBase",
    "StepFailed",
    "StepOutcome",
    "StepSucceeded",
]
