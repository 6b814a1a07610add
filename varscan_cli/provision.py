"""
Output bindings for provisioned workflow files
"""

import pathlib
from typing import NamedTuple, Tuple

from .config import PipelineConfig

TXT_METATYPE = "text/plain"
VCF_METATYPE = "text/vcf"
COPYNUMBER_METATYPE = "text/varscan-copynumber"


class OutputBinding(NamedTuple):
    """A produced file declared as a workflow output"""

    path: pathlib.Path
    destination: pathlib.Path
    content_type: str
    annotation: Tuple[str, str]
    manual: bool


def output_binding(
    config: PipelineConfig,
    path: pathlib.Path,
    content_type: str,
    annotation: Tuple[str, str],
) -> OutputBinding:
    """Bind a working file to its place in `<prefix>_output`"""
    return OutputBinding(
        path=path,
        destination=pathlib.Path(config.output_dir).joinpath(path.name),
        content_type=content_type,
        annotation=annotation,
        manual=config.manual_output,
    )


def calls_metatype(config: PipelineConfig) -> str:
    """Variant calls are VCF or VarScan's native text"""
    return VCF_METATYPE if config.output_vcf else TXT_METATYPE
