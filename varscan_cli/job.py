"""
Job objects
"""

from typing import List

from .logging import get_logger
from .provision import OutputBinding
from .shell_pipeline import Pipeline

logger = get_logger(__name__)


class StageJob:
    """One tool invocation in the workflow graph"""

    def __init__(
        self,
        pipeline: Pipeline,
        name: str,
        memory_mb: int = 0,
        queue: str = "",
    ):
        self.shell = pipeline
        self.name = name
        self.memory_mb = memory_mb
        self.queue = queue
        self.outputs: List[OutputBinding] = []

    def __hash__(self):
        return hash(self.name)

    def __eq__(self, other: object):
        if isinstance(other, StageJob):
            return self.name == other.name and self.shell == other.shell
        return False

    def __ne__(self, other: object):
        return not self == other

    def __repr__(self):
        return f"StageJob({self.name})"

    def __str__(self):
        return f"StageJob({self.name})"

    @property
    def arguments(self) -> List[str]:
        """The argument list passed verbatim to the shell"""
        return self.shell.arguments()

    def add_file(self, binding: OutputBinding) -> None:
        """Attach an output produced by this job"""
        logger.debug("Binding %s to %s", binding.path, self.name)
        self.outputs.append(binding)
