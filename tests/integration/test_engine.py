"""
Integration tests for handing the graph to the engine
"""

import json
import os
import pathlib
import sys
import tempfile

import pytest

# Add the parent directory to the path
sys.path.insert(
    0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
)

from varscan_cli.dag import PipelineGraph  # noqa: E402
from varscan_cli.engine import (  # noqa: E402
    BaseEngine,
    DryRunEngine,
    JobHandle,
    ManifestEngine,
    handoff,
)
from varscan_cli.exceptions import GraphConstructionError  # noqa: E402
from varscan_cli.legacy import assemble_legacy_graph  # noqa: E402
from varscan_cli.inputs import declare_inputs, select_branch  # noqa: E402
from varscan_cli.somatic import assemble_somatic_graph  # noqa: E402
from tests.utils.test_helpers import make_config  # noqa: E402


def somatic_dag(**overrides):
    config = make_config(**overrides)
    return assemble_somatic_graph(
        config, select_branch(declare_inputs(config))
    )


class RecordingEngine(BaseEngine):
    """Record the order of collaborator calls"""

    def __init__(self):
        super().__init__()
        self.calls = []

    def add_directory(self, path):
        self.calls.append(("add_directory", path))
        super().add_directory(path)

    def create_job(self, name):
        self.calls.append(("create_job", name))
        return super().create_job(name)

    def declare_output(self, path, content_type, manual, destination=None):
        self.calls.append(("declare_output", path))
        return super().declare_output(path, content_type, manual, destination)


def test_parents_created_before_children():
    engine = RecordingEngine()
    handoff(somatic_dag(), engine)
    created = [name for call, name in engine.calls if call == "create_job"]
    assert created.index("mpileup_tumor") < created.index("varscan_somatic")
    assert created.index("mpileup_normal") < created.index("varscan_somatic")
    assert created.index("varscan_cna") < created.index("varscan_cna_call")
    for handle in engine.jobs.values():
        for parent in handle.parents:
            assert created.index(parent.name) < created.index(handle.name)


def test_handles_mirror_graph():
    dag = somatic_dag(varscan_mem="4", queue="long")
    engine = handoff(dag)
    assert list(engine.jobs) == [job.name for job in dag.topological_order()]
    somatic = engine.jobs["varscan_somatic"]
    assert [x.name for x in somatic.parents] == [
        "mpileup_normal",
        "mpileup_tumor",
    ]
    assert somatic.arguments == dag["varscan_somatic"].arguments
    for handle in engine.jobs.values():
        assert handle.memory_mb == 4096
        assert handle.queue == "long"


def test_outputs_are_declared_with_annotations():
    engine = handoff(somatic_dag(manual_output="yes"))
    files = engine.jobs["varscan_cna_call"].files
    assert len(files) == 1
    assert files[0].path.endswith("PCSI_0001.VarScan.CopyCaller")
    assert files[0].destination == "PCSI_0001_output/PCSI_0001.VarScan.CopyCaller"
    assert files[0].manual is True
    assert files[0].annotations == {
        "CNV calls from VarScan2": "Varscan_copy_number_calls"
    }
    assert len(engine.outputs) == 4


def test_duplicate_job_in_engine():
    engine = BaseEngine()
    engine.create_job("mpileup")
    with pytest.raises(GraphConstructionError):
        engine.create_job("mpileup")


def test_job_handle_command():
    handle = JobHandle("mpileup")
    for arg in ["samtools", "mpileup", "my file.bam", ">", "out.mpileup"]:
        handle.add_argument(arg)
    assert handle.command == "samtools mpileup 'my file.bam' > out.mpileup"


def test_dry_run_prints_commands(capsys):
    handoff(somatic_dag(with_normal=False), DryRunEngine())
    lines = capsys.readouterr().out.strip().split("\n")
    assert len(lines) == 4
    assert lines[:2] == ["mkdir -p /scratch/tmp", "mkdir -p PCSI_0001_output"]
    assert lines[2].startswith("/tools/samtools/1.9/bin/samtools mpileup")
    assert lines[2].endswith("> /scratch/tmp/PCSI_0001.tumor.mpileup")
    assert "mpileup2cns" in lines[3]


def test_directories_declared_before_first_job():
    engine = RecordingEngine()
    handoff(somatic_dag(with_normal=False), engine)
    assert engine.calls[:3] == [
        ("add_directory", "/scratch/tmp"),
        ("add_directory", "PCSI_0001_output"),
        ("create_job", "mpileup_tumor"),
    ]
    assert engine.directories == ["/scratch/tmp", "PCSI_0001_output"]


def test_dry_run_creates_pileup_directory(tmp_path):
    tmp_dir = tmp_path / "tmp"
    engine = handoff(
        somatic_dag(with_normal=False, tmp_dir=str(tmp_dir)), DryRunEngine()
    )
    first = engine.jobs["mpileup_tumor"]
    out_dir = pathlib.Path(first.arguments[first.arguments.index(">") + 1])
    assert str(out_dir.parent) in engine.directories


def test_manifest_file():
    config = make_config()
    dag = assemble_legacy_graph(config, select_branch(declare_inputs(config)))
    with tempfile.TemporaryDirectory() as tmp_dir_str:
        manifest = pathlib.Path(tmp_dir_str) / "workflow.json"
        handoff(dag, ManifestEngine(manifest))
        data = json.loads(manifest.read_text())

    assert data["directories"] == ["/scratch/tmp", "PCSI_0001_output"]
    jobs = {job["name"]: job for job in data["jobs"]}
    assert list(jobs) == [
        "mpileup",
        "somatic_pileup",
        "varscan_indels",
        "varscan_snps",
        "varscan_cna",
        "varscan_cna_call",
    ]
    assert jobs["varscan_snps"]["parents"] == ["somatic_pileup"]
    assert jobs["mpileup"]["parents"] == []
    assert jobs["varscan_cna"]["memory_mb"] == 8192
    assert jobs["somatic_pileup"]["outputs"][0]["content_type"] == "text/plain"


def test_manifest_stdout(capsys):
    handoff(somatic_dag(with_normal=False), ManifestEngine())
    data = json.loads(capsys.readouterr().out)
    assert [job["name"] for job in data["jobs"]] == [
        "mpileup_tumor",
        "varscan_germline",
    ]


def test_empty_graph():
    engine = handoff(PipelineGraph())
    assert engine.jobs == {}
