"""
This module contains the functions that accept arguments and return the
command lines for each workflow stage.
"""

import pathlib
from typing import List, Optional

from .config import PipelineConfig
from .driver import (
    BaseAlgo,
    CopyCaller,
    CopyNumber,
    Mpileup,
    Mpileup2cns,
    ProcessSomatic,
    Somatic,
    VarScan,
)
from .shell_pipeline import Command, Pipeline


def varscan(
    config: PipelineConfig,
    algo: BaseAlgo,
    file_output: Optional[pathlib.Path] = None,
) -> Pipeline:
    """Run a VarScan subcommand with the configured java and jar"""
    driver = VarScan(
        config.varscan,
        java=config.java,
        java_mem=config.java_mem,
        algo=algo,
    )
    return Pipeline(Command(*driver.build_cmd()), file_output=file_output)


def cmd_samtools_mpileup(
    config: PipelineConfig,
    bams: List[str],
    out_pileup: pathlib.Path,
) -> Pipeline:
    """Pileup of one or more alignments"""
    mpileup = Mpileup(
        config.samtools,
        config.ref_fasta,
        bams,
        interval=config.interval_bed,
    )
    return Pipeline(Command(*mpileup.build_cmd()), file_output=out_pileup)


def cmd_varscan_somatic(
    config: PipelineConfig,
    normal_pileup: pathlib.Path,
    tumor_pileup: pathlib.Path,
    out_base: pathlib.Path,
) -> Pipeline:
    """Tumor/normal calling from separate pileups"""
    return varscan(
        config,
        Somatic(
            [normal_pileup, tumor_pileup],
            out_base,
            min_coverage_normal=config.normal_coverage_cutoff,
            min_coverage_tumor=config.tumor_coverage_cutoff,
            min_var_freq=config.min_var_freq,
            output_vcf=config.output_vcf,
        ),
    )


def cmd_varscan_somatic_mpileup(
    config: PipelineConfig,
    mpileup: pathlib.Path,
    out_base: pathlib.Path,
) -> Pipeline:
    """Tumor/normal calling from a combined normal+tumor pileup"""
    return varscan(
        config,
        Somatic(
            [mpileup],
            out_base,
            min_coverage_normal=config.normal_coverage_cutoff,
            min_coverage_tumor=config.tumor_coverage_cutoff,
            min_var_freq=config.min_var_freq,
            output_vcf=config.output_vcf,
            mpileup=True,
        ),
    )


def cmd_varscan_germline(
    config: PipelineConfig,
    tumor_pileup: pathlib.Path,
    out_calls: pathlib.Path,
) -> Pipeline:
    """Single-sample consensus calling, variant sites only"""
    return varscan(
        config,
        Mpileup2cns(
            [tumor_pileup],
            min_coverage=config.coverage_cutoff,
            min_var_freq=config.min_var_freq,
            output_vcf=config.output_vcf,
        ),
        file_output=out_calls,
    )


def cmd_varscan_process_somatic(
    config: PipelineConfig,
    calls: pathlib.Path,
) -> Pipeline:
    return varscan(config, ProcessSomatic([calls]))


def cmd_varscan_copynumber(
    config: PipelineConfig,
    normal_pileup: pathlib.Path,
    tumor_pileup: pathlib.Path,
    out_base: pathlib.Path,
) -> Pipeline:
    """Raw tumor/normal depth ratios"""
    return varscan(
        config,
        CopyNumber(
            [normal_pileup, tumor_pileup],
            out_base,
            min_base_qual=config.min_base_quality,
            min_map_qual=config.min_mapping_quality,
            min_coverage=config.coverage_cutoff,
        ),
    )


def cmd_varscan_copynumber_mpileup(
    config: PipelineConfig,
    mpileup: pathlib.Path,
    out_base: pathlib.Path,
) -> Pipeline:
    return varscan(
        config,
        CopyNumber(
            [mpileup],
            out_base,
            min_base_qual=config.min_base_quality,
            min_map_qual=config.min_mapping_quality,
            min_coverage=config.coverage_cutoff,
            mpileup=True,
        ),
    )


def cmd_varscan_copycaller(
    config: PipelineConfig,
    copynumber: pathlib.Path,
    out_calls: pathlib.Path,
    mpileup: bool = False,
) -> Pipeline:
    """Adjust and call copy-number segments from raw ratios"""
    return varscan(
        config,
        CopyCaller([copynumber], out_calls, mpileup=mpileup),
    )
