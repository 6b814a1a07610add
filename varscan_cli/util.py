"""
Utility functions
"""

import argparse
import pathlib
import shutil
import subprocess as sp
from typing import Callable, List, Optional, Tuple

import packaging.version

from .logging import get_logger

__version__ = "0.3.0"

logger = get_logger(__name__)


def check_version(
    cmd: str,
    version: Optional[packaging.version.Version],
) -> bool:
    """Check the version of an executable"""
    cmd_list: List[str] = cmd.split()
    exec_file = shutil.which(cmd_list[0])
    if not exec_file:
        logger.error("Error: no '%s' found in the PATH", cmd)
        return False

    if version is None:
        return True

    cmd_list.append("--version")
    cmd_version_str = (
        sp.check_output(cmd_list).decode("utf-8", "ignore").strip()
    )
    # handle, e.g. samtools which outputs multiple lines.
    cmd_version_str = cmd_version_str.split("\n")[0].split()[-1].split("-")[0]
    try:
        cmd_version = packaging.version.Version(cmd_version_str)
    except packaging.version.InvalidVersion:
        logger.error(
            "Error: could not parse the version of '%s' from '%s'",
            cmd,
            cmd_version_str,
        )
        return False
    if cmd_version < version:
        logger.error(
            "Error: the pipeline requires %s version '%s' or later "
            "but %s '%s' was found",
            cmd,
            version,
            cmd,
            cmd_version,
        )
        return False
    return True


def path_arg(
    exists: Optional[bool] = None,
    is_dir: Optional[bool] = None,
    is_file: Optional[bool] = None,
) -> Callable[[str], pathlib.Path]:
    """pathlib checked types for argparse"""

    def _path_arg(arg: str) -> pathlib.Path:
        p = pathlib.Path(arg)

        attrs = [exists, is_dir, is_file]
        attr_names = ["exists", "is_dir", "is_file"]

        for attr_val, attr_name in zip(attrs, attr_names):
            if attr_val is None:  # Skip attributes that are not defined
                continue

            m = getattr(p, attr_name)
            if m() != attr_val:
                raise argparse.ArgumentTypeError(
                    "The supplied path argument needs the attribute"
                    f" {attr_name}={attr_val}, but {attr_name}={m()}"
                )
        return p

    return _path_arg


def override_arg(arg: str) -> Tuple[str, str]:
    """A `key=value` configuration override for argparse"""
    if "=" not in arg:
        raise argparse.ArgumentTypeError(
            f"Expected a key=value configuration override, got '{arg}'"
        )
    key, value = arg.split("=", 1)
    if not key.strip():
        raise argparse.ArgumentTypeError(
            f"The configuration override '{arg}' has an empty key"
        )
    return key.strip(), value.strip()
