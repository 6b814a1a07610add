"""
VarScan2 somatic workflow, with a single-sample fallback

With a matched normal, both samples are piled up independently, then called
jointly and used for copy-number estimation. Without one, the tumor pileup
is called on its own and copy-number stages are skipped.
"""

from typing import FrozenSet

from . import stages
from .config import PipelineConfig
from .dag import PipelineGraph
from .inputs import (
    Branch,
    InputSample,
    PairedBranch,
    SingleSampleBranch,
    select_branch,
)
from .job import StageJob
from .paths import StagePaths, stage_paths
from .pipeline import BasePipeline
from .provision import (
    COPYNUMBER_METATYPE,
    TXT_METATYPE,
    calls_metatype,
    output_binding,
)


def add_paired_branch(
    dag: PipelineGraph,
    config: PipelineConfig,
    paths: StagePaths,
    branch: PairedBranch,
    tumor_pileup: StageJob,
) -> None:
    """Somatic calls and copy-number from separate tumor/normal pileups"""
    normal_pileup = dag.add_job(
        stages.pileup_job(config, paths, branch.normal)
    )
    pileups = {tumor_pileup, normal_pileup}

    somatic = dag.add_job(stages.somatic_job(config, paths), pileups)
    cna = dag.add_job(stages.copynumber_job(config, paths), pileups)
    cna_call = dag.add_job(stages.copycaller_job(config, paths), {cna})

    metatype = calls_metatype(config)
    somatic.add_file(
        output_binding(
            config,
            paths.snp,
            metatype,
            ("SNPS from VarScan2", "Varscan_SNPS"),
        )
    )
    somatic.add_file(
        output_binding(
            config,
            paths.indel,
            metatype,
            ("Indels from VarScan2", "Varscan_Indels"),
        )
    )
    cna.add_file(
        output_binding(
            config,
            paths.copynumber,
            COPYNUMBER_METATYPE,
            ("CNA from VarScan2", "Varscan_CNA"),
        )
    )
    cna_call.add_file(
        output_binding(
            config,
            paths.copycall,
            TXT_METATYPE,
            ("CNV calls from VarScan2", "Varscan_copy_number_calls"),
        )
    )


def add_single_sample_branch(
    dag: PipelineGraph,
    config: PipelineConfig,
    paths: StagePaths,
    tumor_pileup: StageJob,
) -> None:
    """Germline-style calls from the tumor pileup alone"""
    germline = dag.add_job(
        stages.germline_job(config, paths), {tumor_pileup}
    )
    germline.add_file(
        output_binding(
            config,
            paths.germline,
            calls_metatype(config),
            ("Variants from VarScan2", "Varscan_germline"),
        )
    )


def assemble_somatic_graph(
    config: PipelineConfig, branch: Branch
) -> PipelineGraph:
    """Build the graph for the selected branch"""
    paths = stage_paths(config)
    dag = PipelineGraph()
    stages.add_working_directories(dag, config)
    tumor_pileup = dag.add_job(
        stages.pileup_job(config, paths, branch.tumor)
    )
    if isinstance(branch, PairedBranch):
        add_paired_branch(dag, config, paths, branch, tumor_pileup)
    elif isinstance(branch, SingleSampleBranch):
        add_single_sample_branch(dag, config, paths, tumor_pileup)
    else:
        raise TypeError(f"Unknown branch {branch!r}")
    return dag


class SomaticPipeline(BasePipeline):
    """Tumor/normal VarScan2 calling, tumor-only when no normal is given"""

    def build_dag(
        self, config: PipelineConfig, inputs: FrozenSet[InputSample]
    ) -> PipelineGraph:
        return assemble_somatic_graph(config, select_branch(inputs))
