"""
Classes for building samtools and VarScan command lines
"""

import pathlib
from typing import List, Optional, Union

from .logging import get_logger

logger = get_logger(__name__)

PathLike = Union[pathlib.Path, str]


class BaseAlgo:
    """A base class for VarScan subcommands"""

    name = "BaseAlgo"

    def build_cmd(self) -> List[str]:
        """Build the subcommand: name, positional inputs, output, flags"""
        cmd: List[str] = [self.name]

        for i in self.__dict__.get("input", []):
            cmd.append(str(i))
        if self.__dict__.get("output") is not None:
            cmd.append(str(self.__dict__["output"]))

        for k, v in self.__dict__.items():
            if k in ("input", "output"):
                continue
            elif v is None:
                continue
            elif isinstance(v, bool):
                # VarScan takes explicit values for its switches
                if v:
                    cmd.append("--" + k.replace("_", "-"))
                    cmd.append("1")
            else:
                cmd.append("--" + k.replace("_", "-"))
                cmd.append(str(v))

        return cmd


class Somatic(BaseAlgo):
    """VarScan somatic"""

    name = "somatic"

    def __init__(
        self,
        input: List[PathLike],
        output: PathLike,
        min_coverage_normal: Optional[int] = None,
        min_coverage_tumor: Optional[int] = None,
        min_var_freq: Optional[float] = None,
        output_vcf: bool = False,
        mpileup: bool = False,
    ):
        self.input = input
        self.output = output
        self.min_coverage_normal = min_coverage_normal
        self.min_coverage_tumor = min_coverage_tumor
        self.min_var_freq = min_var_freq
        self.output_vcf = output_vcf
        self.mpileup = mpileup


class Mpileup2cns(BaseAlgo):
    """VarScan mpileup2cns, writes to stdout"""

    name = "mpileup2cns"

    def __init__(
        self,
        input: List[PathLike],
        min_coverage: Optional[int] = None,
        min_var_freq: Optional[float] = None,
        variants: bool = True,
        output_vcf: bool = False,
    ):
        self.input = input
        self.min_coverage = min_coverage
        self.min_var_freq = min_var_freq
        self.variants = variants
        self.output_vcf = output_vcf


class ProcessSomatic(BaseAlgo):
    """VarScan processSomatic"""

    name = "processSomatic"

    def __init__(self, input: List[PathLike]):
        self.input = input


class CopyNumber(BaseAlgo):
    """VarScan copynumber"""

    name = "copynumber"

    def __init__(
        self,
        input: List[PathLike],
        output: PathLike,
        min_base_qual: Optional[int] = None,
        min_map_qual: Optional[int] = None,
        min_coverage: Optional[int] = None,
        mpileup: bool = False,
    ):
        self.input = input
        self.output = output
        self.min_base_qual = min_base_qual
        self.min_map_qual = min_map_qual
        self.min_coverage = min_coverage
        self.mpileup = mpileup


class CopyCaller(BaseAlgo):
    """VarScan copyCaller"""

    name = "copyCaller"

    def __init__(
        self,
        input: List[PathLike],
        output_file: PathLike,
        mpileup: bool = False,
    ):
        self.input = input
        self.output_file = output_file
        self.mpileup = mpileup


class VarScan:
    """The VarScan jar run through java"""

    def __init__(
        self,
        jar: PathLike,
        java: str = "java",
        java_mem: Optional[str] = None,
        algo: Optional[BaseAlgo] = None,
    ):
        self.jar = jar
        self.java = java
        self.java_mem = java_mem
        self.algo = algo

    def build_cmd(self) -> List[str]:
        """Build a command line for VarScan"""
        if self.algo is None:
            logger.error("No VarScan subcommand for jar '%s'", self.jar)
            raise RuntimeError("Error in command")
        cmd: List[str] = [self.java]
        if self.java_mem:
            cmd.append(self.java_mem)
        cmd.extend(["-jar", str(self.jar)])
        cmd.extend(self.algo.build_cmd())
        return cmd


class Mpileup:
    """samtools mpileup"""

    def __init__(
        self,
        samtools: PathLike,
        reference: PathLike,
        input: List[PathLike],
        interval: Optional[PathLike] = None,
        min_mq: int = 1,
        max_depth: int = 1000000,
        no_baq: bool = True,
    ):
        if not input:
            logger.error("samtools mpileup needs at least one alignment")
            raise RuntimeError("Error in command")
        self.samtools = samtools
        self.reference = reference
        self.input = input
        self.interval = interval
        self.min_mq = min_mq
        self.max_depth = max_depth
        self.no_baq = no_baq

    def build_cmd(self) -> List[str]:
        """Build a command line for samtools mpileup"""
        cmd: List[str] = [
            str(self.samtools),
            "mpileup",
            "-q",
            str(self.min_mq),
            "-f",
            str(self.reference),
        ]
        if self.interval:
            cmd.extend(["-l", str(self.interval)])
        if self.no_baq:
            cmd.append("-B")
        cmd.extend(["-d", str(self.max_depth)])
        cmd.extend(str(x) for x in self.input)
        return cmd
