"""
Stage jobs for the VarScan workflows

Every job gets the same resources: `varscan_mem` GB and the configured
queue.
"""

from . import command_strings as cmds
from .config import PipelineConfig
from .dag import PipelineGraph
from .inputs import NORMAL, TUMOR, InputSample, PairedBranch
from .job import StageJob
from .paths import StagePaths
from .shell_pipeline import Pipeline


def stage_job(
    config: PipelineConfig, pipeline: Pipeline, name: str
) -> StageJob:
    return StageJob(
        pipeline,
        name,
        memory_mb=config.memory_mb,
        queue=config.queue,
    )


def add_working_directories(
    dag: PipelineGraph, config: PipelineConfig
) -> None:
    """Intermediates go to the tmp dir, provisioned files to the output dir"""
    dag.add_directory(config.tmp_dir)
    dag.add_directory(config.output_dir)


def pileup_job(
    config: PipelineConfig, paths: StagePaths, sample: InputSample
) -> StageJob:
    """Pileup of a single tumor or normal alignment"""
    out_pileup = {
        TUMOR: paths.tumor_pileup,
        NORMAL: paths.normal_pileup,
    }[sample.role]
    return stage_job(
        config,
        cmds.cmd_samtools_mpileup(config, [sample.source_path], out_pileup),
        f"mpileup_{sample.role}",
    )


def combined_pileup_job(
    config: PipelineConfig, paths: StagePaths, branch: PairedBranch
) -> StageJob:
    """One pileup over the normal then the tumor alignment"""
    return stage_job(
        config,
        cmds.cmd_samtools_mpileup(
            config,
            [branch.normal.source_path, branch.tumor.source_path],
            paths.combined_pileup,
        ),
        "mpileup",
    )


def somatic_job(config: PipelineConfig, paths: StagePaths) -> StageJob:
    return stage_job(
        config,
        cmds.cmd_varscan_somatic(
            config,
            paths.normal_pileup,
            paths.tumor_pileup,
            paths.somatic_base,
        ),
        "varscan_somatic",
    )


def somatic_mpileup_job(
    config: PipelineConfig, paths: StagePaths
) -> StageJob:
    return stage_job(
        config,
        cmds.cmd_varscan_somatic_mpileup(
            config, paths.combined_pileup, paths.somatic_base
        ),
        "somatic_pileup",
    )


def germline_job(config: PipelineConfig, paths: StagePaths) -> StageJob:
    return stage_job(
        config,
        cmds.cmd_varscan_germline(
            config, paths.tumor_pileup, paths.germline
        ),
        "varscan_germline",
    )


def snp_job(config: PipelineConfig, paths: StagePaths) -> StageJob:
    return stage_job(
        config,
        cmds.cmd_varscan_process_somatic(config, paths.snp),
        "varscan_snps",
    )


def indel_job(config: PipelineConfig, paths: StagePaths) -> StageJob:
    return stage_job(
        config,
        cmds.cmd_varscan_process_somatic(config, paths.indel),
        "varscan_indels",
    )


def copynumber_job(config: PipelineConfig, paths: StagePaths) -> StageJob:
    return stage_job(
        config,
        cmds.cmd_varscan_copynumber(
            config,
            paths.normal_pileup,
            paths.tumor_pileup,
            paths.copynumber_base,
        ),
        "varscan_cna",
    )


def copynumber_mpileup_job(
    config: PipelineConfig, paths: StagePaths
) -> StageJob:
    return stage_job(
        config,
        cmds.cmd_varscan_copynumber_mpileup(
            config, paths.combined_pileup, paths.copynumber_base
        ),
        "varscan_cna",
    )


def copycaller_job(
    config: PipelineConfig, paths: StagePaths, mpileup: bool = False
) -> StageJob:
    return stage_job(
        config,
        cmds.cmd_varscan_copycaller(
            config, paths.copynumber, paths.copycall, mpileup=mpileup
        ),
        "varscan_cna_call",
    )
