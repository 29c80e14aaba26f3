"""Public package exports."""

from api_chain.chain_editor import ChainEditor
from api_chain.chain_executor import ChainExecutor
from api_chain.models import ChainRun
from api_chain.models import ChainStatus
from api_chain.models import ExecutorSettings
from api_chain.models import GetCommentsStep
from api_chain.models import GetStep
from api_chain.models import PostStep

__all__ = [
    "ChainEditor",
    "ChainExecutor",
    "ChainRun",
    "ChainStatus",
    "ExecutorSettings",
    "GetCommentsStep",
    "GetStep",
    "PostStep",
]
