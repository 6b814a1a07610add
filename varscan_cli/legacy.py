"""
Combined SNP/indel/CNA VarScan2 workflow

A single pileup spans the normal and tumor alignments and feeds one somatic
call. SNP processing, indel processing and copy-number estimation all
follow the somatic call; copy-number calling follows the estimation.
"""

from typing import FrozenSet

from . import stages
from .config import PipelineConfig
from .dag import PipelineGraph
from .exceptions import MissingRequiredInputError
from .inputs import NORMAL, Branch, InputSample, PairedBranch, select_branch
from .paths import stage_paths
from .pipeline import BasePipeline
from .provision import (
    COPYNUMBER_METATYPE,
    TXT_METATYPE,
    calls_metatype,
    output_binding,
)


def assemble_legacy_graph(
    config: PipelineConfig, branch: Branch
) -> PipelineGraph:
    """Build the combined-pileup graph; a matched normal is required"""
    if not isinstance(branch, PairedBranch):
        raise MissingRequiredInputError(NORMAL, "input_files_normal")

    paths = stage_paths(config)
    dag = PipelineGraph()
    stages.add_working_directories(dag, config)

    mpileup = dag.add_job(stages.combined_pileup_job(config, paths, branch))
    somatic = dag.add_job(
        stages.somatic_mpileup_job(config, paths), {mpileup}
    )
    indels = dag.add_job(stages.indel_job(config, paths), {somatic})
    snps = dag.add_job(stages.snp_job(config, paths), {somatic})
    cna = dag.add_job(
        stages.copynumber_mpileup_job(config, paths), {somatic}
    )
    cna_call = dag.add_job(
        stages.copycaller_job(config, paths, mpileup=True), {cna}
    )

    # Provision all files
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
    snps.add_file(
        output_binding(
            config,
            paths.snp_hc,
            metatype,
            ("High confidence SNPS from VarScan2", "Varscan_SNPS_hc"),
        )
    )
    indels.add_file(
        output_binding(
            config,
            paths.indel_hc,
            metatype,
            ("High confidence Indels from VarScan2", "Varscan_Indels_hc"),
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
    return dag


class LegacyPipeline(BasePipeline):
    """Combined-pileup VarScan2 calling with SNP/indel processing"""

    def build_dag(
        self, config: PipelineConfig, inputs: FrozenSet[InputSample]
    ) -> PipelineGraph:
        return assemble_legacy_graph(config, select_branch(inputs))
