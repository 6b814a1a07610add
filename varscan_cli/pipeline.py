"""
A pipeline class
"""

from abc import ABC, abstractmethod
import argparse
import pathlib
import sys
from typing import Any, Dict, FrozenSet, List, Optional, Tuple

import packaging.version

from .config import ConfigSource, PipelineConfig, resolve_config
from .dag import PipelineGraph
from .engine import BaseEngine, DryRunEngine, ManifestEngine, handoff
from .exceptions import VarscanCliError
from .inputs import InputSample, declare_inputs
from .logging import get_logger
from .util import __version__, check_version, override_arg, path_arg

SAMTOOLS_MIN_VERSION = packaging.version.Version("1.9")


class BasePipeline(ABC):
    """A pipeline base class"""

    params: Dict[str, Dict[str, Any]] = {
        # Required arguments
        "ini": {
            "flags": ["-i", "--ini"],
            "nargs": "+",
            "required": True,
            "help": (
                "Workflow ini file(s) of key=value lines. Later files "
                "override earlier ones."
            ),
            "type": path_arg(exists=True, is_file=True),
        },
        # Additional arguments
        "overrides": {
            "flags": ["-s", "--set"],
            "dest": "overrides",
            "nargs": "*",
            "help": "Override a configuration key, as key=value.",
            "type": override_arg,
        },
        "dry_run": {
            "help": "Print the commands without handing off the workflow.",
            "action": "store_true",
        },
        "manifest": {
            "help": (
                "Write the workflow manifest to this file instead of "
                "stdout."
            ),
            "type": path_arg(),
        },
        # Hidden arguments
        "skip_version_check": {
            "help": argparse.SUPPRESS,
            "action": "store_true",
        },
    }

    @classmethod
    def add_arguments(cls, parser: argparse.ArgumentParser):
        for k, kwargs in cls.params.items():
            kwargs = dict(kwargs)
            flags = ["--" + k]
            if "default" in kwargs and "type" not in kwargs:
                kwargs["type"] = type(kwargs["default"])
            if "flags" in kwargs:
                flags = kwargs.pop("flags")
            parser.add_argument(*flags, **kwargs)

    def handle_arguments(self, args: argparse.Namespace):
        """Update self using the argparse object"""
        for k in self.params.keys():
            assert k in self.__dict__
            if k in args.__dict__:
                val = getattr(args, k)
                if val is not None:
                    setattr(self, k, val)

    def setup_logging(self, args: argparse.Namespace) -> None:
        self.logger = get_logger(__name__)
        assert self.logger.parent
        self.logger.parent.setLevel(args.loglevel)
        self.logger.info("Starting varscan-cli version: %s", __version__)

    def __init__(self) -> None:
        self.logger = get_logger(__name__)
        self.ini: List[pathlib.Path] = []
        self.overrides: List[Tuple[str, str]] = []
        self.dry_run = False
        self.manifest: Optional[pathlib.Path] = None
        self.skip_version_check = False

    def main(self, args: argparse.Namespace) -> None:
        """Build the workflow graph and hand it off"""
        self.handle_arguments(args)
        self.setup_logging(args)

        try:
            source = ConfigSource.from_files(self.ini, dict(self.overrides))
            config = resolve_config(source)
            dag = self.build(config)
        except VarscanCliError as e:
            self.logger.error("%s", e)
            sys.exit(2)

        if not self.skip_version_check:
            self.check_versions(config)

        self.run(dag)

    def build(self, config: PipelineConfig) -> PipelineGraph:
        """Declare the inputs, then assemble and check the graph"""
        inputs = declare_inputs(config)
        self.logger.info("Building the DAG")
        dag = self.build_dag(config, inputs)
        dag.validate()
        self.logger.info("Built %s jobs", len(dag))
        return dag

    @abstractmethod
    def build_dag(
        self, config: PipelineConfig, inputs: FrozenSet[InputSample]
    ) -> PipelineGraph:
        pass

    def check_versions(self, config: PipelineConfig) -> None:
        if not check_version(config.samtools, SAMTOOLS_MIN_VERSION):
            sys.exit(2)
        if not check_version(config.java, None):
            sys.exit(2)

    def run(self, dag: PipelineGraph) -> BaseEngine:
        """Hand the DAG to the engine"""
        self.logger.debug("Creating the engine")
        engine: BaseEngine
        if self.dry_run:
            engine = DryRunEngine()
        else:
            engine = ManifestEngine(self.manifest)

        self.logger.info("Handing off the workflow")
        return handoff(dag, engine)
