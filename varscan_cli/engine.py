"""Hand the workflow graph to the execution and provisioning engines"""

import json
import pathlib
import shlex
import sys
from typing import Any, Dict, List, Optional

from .dag import PipelineGraph
from .exceptions import GraphConstructionError
from .logging import get_logger

logger = get_logger(__name__)

SHELL_OPERATORS = (">", "|")


class ProvisionHandle:
    """A declared workflow output"""

    def __init__(
        self,
        path: str,
        content_type: str,
        manual: bool,
        destination: Optional[str] = None,
    ):
        self.path = path
        self.content_type = content_type
        self.manual = manual
        self.destination = destination
        self.annotations: Dict[str, str] = {}

    def add_annotation(self, key: str, value: str) -> None:
        self.annotations[key] = value


class JobHandle:
    """A job as seen by the execution engine"""

    def __init__(self, name: str):
        self.name = name
        self.arguments: List[str] = []
        self.parents: List[JobHandle] = []
        self.memory_mb: Optional[int] = None
        self.queue: Optional[str] = None
        self.files: List[ProvisionHandle] = []

    def add_argument(self, argument: str) -> None:
        self.arguments.append(argument)

    def add_parent(self, parent: "JobHandle") -> None:
        self.parents.append(parent)

    def set_resource_limits(self, memory_mb: int, queue: str) -> None:
        self.memory_mb = memory_mb
        self.queue = queue

    def add_file(self, handle: ProvisionHandle) -> None:
        self.files.append(handle)

    @property
    def command(self) -> str:
        return " ".join(
            x if x in SHELL_OPERATORS else shlex.quote(x)
            for x in self.arguments
        )


class BaseEngine:
    """Receives jobs and outputs in dependency order"""

    def __init__(self) -> None:
        self.jobs: Dict[str, JobHandle] = {}
        self.directories: List[str] = []
        self.outputs: List[ProvisionHandle] = []

    def add_directory(self, path: str) -> None:
        """Declare a directory to create before any job runs"""
        self.directories.append(path)

    def create_job(self, name: str) -> JobHandle:
        if name in self.jobs:
            raise GraphConstructionError(name, "the job was already created")
        handle = JobHandle(name)
        self.jobs[name] = handle
        return handle

    def declare_output(
        self,
        path: str,
        content_type: str,
        manual: bool,
        destination: Optional[str] = None,
    ) -> ProvisionHandle:
        handle = ProvisionHandle(path, content_type, manual, destination)
        self.outputs.append(handle)
        return handle

    def finish(self) -> None:
        """Called once every job has been handed off"""


class DryRunEngine(BaseEngine):
    """Print the commands without running them"""

    def finish(self) -> None:
        for path in self.directories:
            print(f"mkdir -p {shlex.quote(path)}")
        for handle in self.jobs.values():
            print(handle.command)


class ManifestEngine(BaseEngine):
    """Write a JSON description of the graph"""

    def __init__(self, output: Optional[pathlib.Path] = None):
        super().__init__()
        self.output = output

    def to_dict(self) -> Dict[str, Any]:
        return {
            "directories": self.directories,
            "jobs": [
                {
                    "name": handle.name,
                    "arguments": handle.arguments,
                    "parents": [x.name for x in handle.parents],
                    "memory_mb": handle.memory_mb,
                    "queue": handle.queue,
                    "outputs": [
                        {
                            "path": x.path,
                            "destination": x.destination,
                            "content_type": x.content_type,
                            "manual": x.manual,
                            "annotations": x.annotations,
                        }
                        for x in handle.files
                    ],
                }
                for handle in self.jobs.values()
            ]
        }

    def finish(self) -> None:
        if self.output is None:
            json.dump(self.to_dict(), sys.stdout, indent=2)
            sys.stdout.write("\n")
            return
        logger.info("Writing the workflow manifest to %s", self.output)
        with open(self.output, "w") as fh:
            json.dump(self.to_dict(), fh, indent=2)


def handoff(
    dag: PipelineGraph, engine: Optional[BaseEngine] = None
) -> BaseEngine:
    """Declare the directories, then create every job, parents first"""
    if engine is None:
        engine = BaseEngine()
    for path in dag.directories:
        engine.add_directory(path)
    for job in dag.topological_order():
        handle = engine.create_job(job.name)
        for argument in job.arguments:
            handle.add_argument(argument)
        for parent in sorted(dag.parents_of(job), key=lambda x: x.name):
            parent_handle = engine.jobs.get(parent.name)
            if parent_handle is None:
                raise GraphConstructionError(
                    job.name, f"parent '{parent.name}' was not created"
                )
            handle.add_parent(parent_handle)
        handle.set_resource_limits(job.memory_mb, job.queue)
        for binding in job.outputs:
            provision = engine.declare_output(
                str(binding.path),
                binding.content_type,
                binding.manual,
                destination=str(binding.destination),
            )
            provision.add_annotation(*binding.annotation)
            handle.add_file(provision)
        logger.debug("Handed off %s", job.name)
    engine.finish()
    return engine
