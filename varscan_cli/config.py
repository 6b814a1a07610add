"""
Workflow configuration: key/value sources and the resolved PipelineConfig
"""

import math
import pathlib
from typing import Dict, Iterable, Mapping, NamedTuple, Optional, Union

from importlib_resources import files

from .exceptions import (
    InvalidConfigurationValueError,
    MissingConfigurationError,
)
from .logging import get_logger

logger = get_logger(__name__)

# Checked in this order; the first missing key is reported
REQUIRED_KEYS = (
    "input_files_tumor",
    "ref_fasta",
    "samtools",
    "varscan",
    "varscan_mem",
    "minimum_variant_freq",
    "tumor_coverage_cutoff",
    "external_name",
    "manual_output",
)

TRUE_VALUES = ("true", "yes", "1")
FALSE_VALUES = ("false", "no", "0")


def parse_properties(
    text: str, source: Optional[str] = None
) -> Dict[str, str]:
    """Parse SeqWare-style `key=value` lines

    A malformed line is reported by its number, prefixed with `source`.
    """
    properties: Dict[str, str] = {}
    for lineno, line in enumerate(text.splitlines(), start=1):
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            raise InvalidConfigurationValueError(
                f"{source} line {lineno}" if source else f"line {lineno}",
                line,
                "a 'key=value' line",
            )
        key, value = line.split("=", 1)
        properties[key.strip()] = value.strip()
    return properties


def load_properties(path: Union[str, pathlib.Path]) -> Dict[str, str]:
    """Read a `key=value` ini file"""
    try:
        with open(path, encoding="utf-8") as fh:
            text = fh.read()
    except UnicodeDecodeError as e:
        raise InvalidConfigurationValueError(
            str(path), f"byte {e.start}", "a UTF-8 text file"
        ) from e
    return parse_properties(text, str(path))


DEFAULTS = parse_properties(
    files("varscan_cli.data").joinpath("defaults.ini").read_text()
)


class ConfigSource:
    """Key to string lookup with required and optional access"""

    def __init__(self, properties: Optional[Mapping[str, str]] = None):
        self.properties: Dict[str, str] = dict(properties or {})

    @classmethod
    def from_files(
        cls,
        paths: Iterable[Union[str, pathlib.Path]],
        overrides: Optional[Mapping[str, str]] = None,
    ) -> "ConfigSource":
        """Later files override earlier ones; overrides win over files"""
        properties: Dict[str, str] = {}
        for path in paths:
            logger.debug("Reading configuration from %s", path)
            properties.update(load_properties(path))
        if overrides:
            properties.update(overrides)
        return cls(properties)

    def __contains__(self, key: str) -> bool:
        return self._lookup(key) is not None

    def _lookup(self, key: str) -> Optional[str]:
        value = self.properties.get(key)
        if value is None or not value.strip():
            return None
        return value.strip()

    def get(self, key: str) -> str:
        """Return a required value"""
        value = self._lookup(key)
        if value is None:
            raise MissingConfigurationError(key)
        return value

    def get_optional(
        self, key: str, default: Optional[str] = None
    ) -> Optional[str]:
        """Return a value, or the default when the key is absent or blank"""
        value = self._lookup(key)
        if value is None:
            return default
        return value


class PipelineConfig(NamedTuple):
    """Resolved, read-only workflow parameters"""

    tumor_bam: str
    normal_bam: Optional[str]
    ref_fasta: str
    interval_bed: Optional[str]
    samtools: str
    java: str
    java_mem: str
    varscan: str
    varscan_mem: int
    min_var_freq: float
    min_base_quality: int
    min_mapping_quality: int
    coverage_cutoff: int
    tumor_coverage_cutoff: int
    normal_coverage_cutoff: int
    queue: str
    manual_output: bool
    output_vcf: bool
    output_prefix: str
    tmp_dir: str

    @property
    def memory_mb(self) -> int:
        return self.varscan_mem * 1024

    @property
    def output_dir(self) -> str:
        return self.output_prefix + "_output"


def parse_int(key: str, value: str, minimum: Optional[int] = None) -> int:
    try:
        res = int(value)
    except ValueError:
        raise InvalidConfigurationValueError(key, value, "an integer")
    if minimum is not None and res < minimum:
        raise InvalidConfigurationValueError(
            key, value, f"an integer of at least {minimum}"
        )
    return res


def parse_float(
    key: str,
    value: str,
    low: Optional[float] = None,
    high: Optional[float] = None,
) -> float:
    try:
        res = float(value)
    except ValueError:
        raise InvalidConfigurationValueError(key, value, "a number")
    if not math.isfinite(res):
        raise InvalidConfigurationValueError(key, value, "a finite number")
    if (low is not None and res < low) or (high is not None and res > high):
        raise InvalidConfigurationValueError(
            key, value, f"a number between {low} and {high}"
        )
    return res


def parse_bool(key: str, value: str) -> bool:
    lowered = value.lower()
    if lowered in TRUE_VALUES:
        return True
    if lowered in FALSE_VALUES:
        return False
    raise InvalidConfigurationValueError(
        key, value, "a boolean (true/false, yes/no, 1/0)"
    )


def resolve_config(
    source: Union[ConfigSource, Mapping[str, str]],
) -> PipelineConfig:
    """Resolve every workflow parameter from a configuration source"""
    if not isinstance(source, ConfigSource):
        source = ConfigSource(source)

    required = {key: source.get(key) for key in REQUIRED_KEYS}

    def optional(key: str) -> Optional[str]:
        return source.get_optional(key, DEFAULTS.get(key))

    def optional_int(key: str) -> int:
        return parse_int(key, optional(key) or "", minimum=0)

    config = PipelineConfig(
        tumor_bam=required["input_files_tumor"],
        normal_bam=optional("input_files_normal"),
        ref_fasta=required["ref_fasta"],
        interval_bed=optional("interval_bed"),
        samtools=required["samtools"],
        java=optional("java") or "java",
        java_mem=optional("java_mem") or "",
        varscan=required["varscan"],
        varscan_mem=parse_int(
            "varscan_mem", required["varscan_mem"], minimum=1
        ),
        min_var_freq=parse_float(
            "minimum_variant_freq",
            required["minimum_variant_freq"],
            low=0.0,
            high=1.0,
        ),
        min_base_quality=optional_int("min_base_quality"),
        min_mapping_quality=optional_int("min_mapping_quality"),
        coverage_cutoff=optional_int("coverage_cutoff"),
        tumor_coverage_cutoff=parse_int(
            "tumor_coverage_cutoff",
            required["tumor_coverage_cutoff"],
            minimum=0,
        ),
        normal_coverage_cutoff=optional_int("normal_coverage_cutoff"),
        queue=optional("queue") or "",
        manual_output=parse_bool(
            "manual_output", required["manual_output"]
        ),
        output_vcf=parse_bool("output_vcf", optional("output_vcf") or "0"),
        output_prefix=required["external_name"],
        tmp_dir=optional("tmp_dir") or "tmp",
    )
    for field, value in config._asdict().items():
        logger.debug("Resolved %s=%s", field, value)
    return config
