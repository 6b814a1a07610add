"""
Deterministic file names for every stage
"""

import pathlib
from typing import NamedTuple

from .config import PipelineConfig


class StagePaths(NamedTuple):
    """Intermediate and final file names derived from the output prefix"""

    combined_pileup: pathlib.Path
    tumor_pileup: pathlib.Path
    normal_pileup: pathlib.Path
    somatic_base: pathlib.Path
    snp: pathlib.Path
    indel: pathlib.Path
    snp_hc: pathlib.Path
    indel_hc: pathlib.Path
    germline: pathlib.Path
    copynumber_base: pathlib.Path
    copynumber: pathlib.Path
    copycall: pathlib.Path
    output_dir: pathlib.Path


def processed_name(call_file: pathlib.Path) -> pathlib.Path:
    """Name of the high-confidence file written by `processSomatic`"""
    name = str(call_file)
    if name.endswith(".vcf"):
        return pathlib.Path(name[: -len(".vcf")] + ".Somatic.hc.vcf")
    return pathlib.Path(name + ".Somatic.hc")


def stage_paths(config: PipelineConfig) -> StagePaths:
    """Build every path from the prefix, tmp dir and VCF mode only"""
    tmp_dir = pathlib.Path(config.tmp_dir)

    def tmp(suffix: str) -> pathlib.Path:
        return tmp_dir.joinpath(config.output_prefix + suffix)

    vcf_ext = ".vcf" if config.output_vcf else ""
    somatic_base = tmp(".varscanSomatic")
    snp = pathlib.Path(f"{somatic_base}.snp{vcf_ext}")
    indel = pathlib.Path(f"{somatic_base}.indel{vcf_ext}")
    copynumber_base = tmp(".VarScan.CopyNumber")
    return StagePaths(
        combined_pileup=tmp(".mpileup"),
        tumor_pileup=tmp(".tumor.mpileup"),
        normal_pileup=tmp(".normal.mpileup"),
        somatic_base=somatic_base,
        snp=snp,
        indel=indel,
        snp_hc=processed_name(snp),
        indel_hc=processed_name(indel),
        germline=tmp(".varscanGermline" + vcf_ext),
        copynumber_base=copynumber_base,
        copynumber=pathlib.Path(f"{copynumber_base}.copynumber"),
        copycall=tmp(".VarScan.CopyCaller"),
        output_dir=pathlib.Path(config.output_dir),
    )
