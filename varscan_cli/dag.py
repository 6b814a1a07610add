"""
A directed acyclic graph of jobs to hand to the execution engine
"""

from __future__ import annotations

from typing import Dict, FrozenSet, Iterable, Iterator, List, Optional, Set

from .exceptions import GraphConstructionError
from .job import StageJob
from .logging import get_logger

logger = get_logger(__name__)


class PipelineGraph:
    """An append-only directed acyclic graph of stage jobs"""

    def __init__(self) -> None:
        # jobs in the order they were added
        self.jobs: Dict[str, StageJob] = {}
        # parents = {job: {dependencies}}
        self.parents: Dict[StageJob, Set[StageJob]] = {}
        # children = {dependency: [downstream_jobs]}
        self.children: Dict[StageJob, List[StageJob]] = {}
        # working directories, created before any job runs
        self.directories: List[str] = []

    def __len__(self) -> int:
        return len(self.jobs)

    def __iter__(self) -> Iterator[StageJob]:
        return iter(self.jobs.values())

    def __contains__(self, job: object) -> bool:
        return (
            isinstance(job, StageJob) and self.jobs.get(job.name) is job
        )

    def __getitem__(self, name: str) -> StageJob:
        return self.jobs[name]

    def add_directory(self, path: str) -> None:
        if path not in self.directories:
            self.directories.append(path)

    def add_job(
        self,
        job: StageJob,
        dependencies: Optional[Iterable[StageJob]] = None,
    ) -> StageJob:
        """Add a job after all of its dependencies"""
        if job.name in self.jobs:
            raise GraphConstructionError(
                job.name, "a job with this name was already added"
            )
        deps = set(dependencies) if dependencies else set()
        for dependency in deps:
            if dependency is job:
                raise GraphConstructionError(
                    job.name, "a job cannot depend on itself"
                )
            if dependency not in self:
                raise GraphConstructionError(
                    job.name,
                    f"dependency '{dependency.name}' has not been added",
                )

        self.jobs[job.name] = job
        self.parents[job] = deps
        self.children[job] = []
        for dependency in deps:
            self.children[dependency].append(job)
        logger.debug(
            "Added %s with dependencies %s",
            job,
            sorted(x.name for x in deps),
        )
        return job

    def parents_of(self, job: StageJob) -> FrozenSet[StageJob]:
        return frozenset(self.parents[job])

    def children_of(self, job: StageJob) -> List[StageJob]:
        return list(self.children[job])

    def roots(self) -> List[StageJob]:
        """Jobs without dependencies"""
        return [job for job in self if not self.parents[job]]

    def topological_order(self) -> List[StageJob]:
        """Parents before children, ties broken by insertion order"""
        remaining = {job: len(deps) for job, deps in self.parents.items()}
        ready = [job for job in self if remaining[job] == 0]
        order: List[StageJob] = []
        while ready:
            job = ready.pop(0)
            order.append(job)
            for child in self.children[job]:
                remaining[child] -= 1
                if remaining[child] == 0:
                    ready.append(child)
        if len(order) != len(self.jobs):
            stuck = [job.name for job in self if job not in order]
            raise GraphConstructionError(stuck[0], "the graph has a cycle")
        return order

    def validate(self) -> None:
        """Check the graph is acyclic and every job descends from a root"""
        self.topological_order()
        reached: Set[StageJob] = set()
        stack = self.roots()
        while stack:
            job = stack.pop()
            if job in reached:
                continue
            reached.add(job)
            stack.extend(self.children[job])
        for job in self:
            if job not in reached:
                raise GraphConstructionError(
                    job.name, "the job is not reachable from a root"
                )
