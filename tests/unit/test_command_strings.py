"""
Unit tests for the stage command lines
"""

import os
import pathlib
import sys

import pytest

# Add the parent directory to the path so we can import varscan_cli
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..")))

from varscan_cli import command_strings as cmds
from varscan_cli.driver import CopyCaller, Mpileup, Somatic, VarScan
from varscan_cli.paths import processed_name, stage_paths
from tests.utils.test_helpers import make_config

JAVA = ["java", "-Xmx8g", "-jar", "/tools/varscan/2.4.2/VarScan.jar"]


class TestDrivers:
    """Test the samtools and VarScan drivers"""

    def test_algo_flags(self):
        algo = Somatic(
            ["n.pileup", "t.pileup"],
            "out",
            min_coverage_normal=8,
            min_var_freq=0.1,
            output_vcf=True,
            mpileup=False,
        )
        assert algo.build_cmd() == [
            "somatic",
            "n.pileup",
            "t.pileup",
            "out",
            "--min-coverage-normal",
            "8",
            "--min-var-freq",
            "0.1",
            "--output-vcf",
            "1",
        ]

    def test_copycaller_output_flag(self):
        algo = CopyCaller(["x.copynumber"], "x.called")
        assert algo.build_cmd() == [
            "copyCaller",
            "x.copynumber",
            "--output-file",
            "x.called",
        ]

    def test_varscan_without_heap(self):
        driver = VarScan("VarScan.jar", algo=CopyCaller(["a"], "b"))
        assert driver.build_cmd()[:3] == ["java", "-jar", "VarScan.jar"]

    def test_varscan_needs_algo(self):
        with pytest.raises(RuntimeError):
            VarScan("VarScan.jar").build_cmd()

    def test_mpileup_needs_input(self):
        with pytest.raises(RuntimeError):
            Mpileup("samtools", "ref.fa", [])


class TestStageCommands:
    """Test the exact argument lists for each stage"""

    def setup_method(self):
        self.config = make_config()
        self.paths = stage_paths(self.config)

    def test_mpileup(self):
        pipeline = cmds.cmd_samtools_mpileup(
            self.config, ["/data/t.bam"], self.paths.tumor_pileup
        )
        assert pipeline.arguments() == [
            "/tools/samtools/1.9/bin/samtools",
            "mpileup",
            "-q",
            "1",
            "-f",
            "/refs/hg19_random.fa",
            "-B",
            "-d",
            "1000000",
            "/data/t.bam",
            ">",
            "/scratch/tmp/PCSI_0001.tumor.mpileup",
        ]

    def test_mpileup_with_interval(self):
        config = make_config(interval_bed="/refs/exome.bed")
        pipeline = cmds.cmd_samtools_mpileup(
            config, ["/data/n.bam", "/data/t.bam"], self.paths.combined_pileup
        )
        args = pipeline.arguments()
        assert args[6:8] == ["-l", "/refs/exome.bed"]
        assert args[-4:] == [
            "/data/n.bam",
            "/data/t.bam",
            ">",
            "/scratch/tmp/PCSI_0001.mpileup",
        ]

    def test_somatic(self):
        pipeline = cmds.cmd_varscan_somatic(
            self.config,
            self.paths.normal_pileup,
            self.paths.tumor_pileup,
            self.paths.somatic_base,
        )
        assert pipeline.arguments() == JAVA + [
            "somatic",
            "/scratch/tmp/PCSI_0001.normal.mpileup",
            "/scratch/tmp/PCSI_0001.tumor.mpileup",
            "/scratch/tmp/PCSI_0001.varscanSomatic",
            "--min-coverage-normal",
            "8",
            "--min-coverage-tumor",
            "6",
            "--min-var-freq",
            "0.1",
        ]

    def test_somatic_vcf(self):
        config = make_config(output_vcf="true")
        paths = stage_paths(config)
        pipeline = cmds.cmd_varscan_somatic(
            config, paths.normal_pileup, paths.tumor_pileup, paths.somatic_base
        )
        assert pipeline.arguments()[-2:] == ["--output-vcf", "1"]

    def test_somatic_mpileup(self):
        pipeline = cmds.cmd_varscan_somatic_mpileup(
            self.config, self.paths.combined_pileup, self.paths.somatic_base
        )
        args = pipeline.arguments()
        assert args[4:7] == [
            "somatic",
            "/scratch/tmp/PCSI_0001.mpileup",
            "/scratch/tmp/PCSI_0001.varscanSomatic",
        ]
        assert args[-2:] == ["--mpileup", "1"]

    def test_germline(self):
        pipeline = cmds.cmd_varscan_germline(
            self.config, self.paths.tumor_pileup, self.paths.germline
        )
        assert pipeline.arguments() == JAVA + [
            "mpileup2cns",
            "/scratch/tmp/PCSI_0001.tumor.mpileup",
            "--min-coverage",
            "20",
            "--min-var-freq",
            "0.1",
            "--variants",
            "1",
            ">",
            "/scratch/tmp/PCSI_0001.varscanGermline",
        ]

    def test_process_somatic(self):
        pipeline = cmds.cmd_varscan_process_somatic(
            self.config, self.paths.snp
        )
        assert pipeline.arguments() == JAVA + [
            "processSomatic",
            "/scratch/tmp/PCSI_0001.varscanSomatic.snp",
        ]

    def test_copynumber(self):
        pipeline = cmds.cmd_varscan_copynumber(
            self.config,
            self.paths.normal_pileup,
            self.paths.tumor_pileup,
            self.paths.copynumber_base,
        )
        assert pipeline.arguments() == JAVA + [
            "copynumber",
            "/scratch/tmp/PCSI_0001.normal.mpileup",
            "/scratch/tmp/PCSI_0001.tumor.mpileup",
            "/scratch/tmp/PCSI_0001.VarScan.CopyNumber",
            "--min-base-qual",
            "20",
            "--min-map-qual",
            "20",
            "--min-coverage",
            "20",
        ]

    def test_copynumber_mpileup(self):
        pipeline = cmds.cmd_varscan_copynumber_mpileup(
            self.config, self.paths.combined_pileup, self.paths.copynumber_base
        )
        assert pipeline.arguments() == JAVA + [
            "copynumber",
            "/scratch/tmp/PCSI_0001.mpileup",
            "/scratch/tmp/PCSI_0001.VarScan.CopyNumber",
            "--min-base-qual",
            "20",
            "--min-map-qual",
            "20",
            "--min-coverage",
            "20",
            "--mpileup",
            "1",
        ]

    def test_copycaller(self):
        pipeline = cmds.cmd_varscan_copycaller(
            self.config, self.paths.copynumber, self.paths.copycall
        )
        assert pipeline.arguments() == JAVA + [
            "copyCaller",
            "/scratch/tmp/PCSI_0001.VarScan.CopyNumber.copynumber",
            "--output-file",
            "/scratch/tmp/PCSI_0001.VarScan.CopyCaller",
        ]
        legacy = cmds.cmd_varscan_copycaller(
            self.config, self.paths.copynumber, self.paths.copycall, True
        )
        assert legacy.arguments()[-2:] == ["--mpileup", "1"]

    def test_custom_java(self):
        config = make_config(java="/usr/lib/jvm/bin/java", java_mem="-Xmx2g")
        pipeline = cmds.cmd_varscan_process_somatic(config, self.paths.snp)
        assert pipeline.arguments()[:2] == ["/usr/lib/jvm/bin/java", "-Xmx2g"]


class TestStagePaths:
    """Test derived file names"""

    def test_suffixes(self):
        paths = stage_paths(make_config())
        tmp = "/scratch/tmp/PCSI_0001"
        assert str(paths.combined_pileup) == tmp + ".mpileup"
        assert str(paths.snp) == tmp + ".varscanSomatic.snp"
        assert str(paths.indel) == tmp + ".varscanSomatic.indel"
        assert str(paths.snp_hc) == tmp + ".varscanSomatic.snp.Somatic.hc"
        assert str(paths.copynumber) == tmp + ".VarScan.CopyNumber.copynumber"
        assert str(paths.copycall) == tmp + ".VarScan.CopyCaller"
        assert str(paths.output_dir) == "PCSI_0001_output"

    def test_vcf_suffixes(self):
        paths = stage_paths(make_config(output_vcf="yes"))
        tmp = "/scratch/tmp/PCSI_0001"
        assert str(paths.snp) == tmp + ".varscanSomatic.snp.vcf"
        assert str(paths.indel_hc) == (
            tmp + ".varscanSomatic.indel.Somatic.hc.vcf"
        )
        assert str(paths.germline) == tmp + ".varscanGermline.vcf"

    def test_processed_name(self):
        assert processed_name(pathlib.Path("a.snp")) == pathlib.Path(
            "a.snp.Somatic.hc"
        )
        assert processed_name(pathlib.Path("a.snp.vcf")) == pathlib.Path(
            "a.snp.Somatic.hc.vcf"
        )

    def test_filenames_ignore_thresholds(self):
        first = stage_paths(make_config(minimum_variant_freq="0.1"))
        second = stage_paths(
            make_config(minimum_variant_freq="0.25", coverage_cutoff="30")
        )
        assert first == second
