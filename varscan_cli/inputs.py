"""
Input sample declaration and branch selection
"""

from typing import FrozenSet, Iterable, NamedTuple, Union

from .config import PipelineConfig
from .exceptions import MissingRequiredInputError
from .logging import get_logger

logger = get_logger(__name__)

BAM_TYPE = "application/bam"
TUMOR = "tumor"
NORMAL = "normal"


class InputSample(NamedTuple):
    """A declared input alignment"""

    role: str
    source_path: str
    content_type: str = BAM_TYPE


class PairedBranch(NamedTuple):
    """Tumor with a matched normal"""

    tumor: InputSample
    normal: InputSample


class SingleSampleBranch(NamedTuple):
    """Tumor without a matched normal"""

    tumor: InputSample


Branch = Union[PairedBranch, SingleSampleBranch]


def declare_inputs(config: PipelineConfig) -> FrozenSet[InputSample]:
    """Declare the tumor and, when configured, the normal input"""
    if not config.tumor_bam:
        raise MissingRequiredInputError(TUMOR, "input_files_tumor")
    inputs = {InputSample(TUMOR, config.tumor_bam)}
    if config.normal_bam:
        inputs.add(InputSample(NORMAL, config.normal_bam))
    else:
        logger.debug("No normal input was declared")
    return frozenset(inputs)


def select_branch(inputs: Iterable[InputSample]) -> Branch:
    """Select the graph branch from the declared inputs"""
    by_role = {sample.role: sample for sample in inputs}
    if TUMOR not in by_role:
        raise MissingRequiredInputError(TUMOR, "input_files_tumor")
    if NORMAL in by_role:
        logger.info("Matched normal found, using the paired branch")
        return PairedBranch(by_role[TUMOR], by_role[NORMAL])
    logger.info("No matched normal, using the single-sample branch")
    return SingleSampleBranch(by_role[TUMOR])
