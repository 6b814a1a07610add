"""Shell command lines handed to the execution engine"""

from __future__ import annotations
import pathlib
import shlex
from typing import Any, List, Optional


class Command:
    """Represents a single command (e.g., 'samtools', 'java')."""

    def __init__(self, executable: str, *args: str) -> None:
        self.executable = executable
        self.args = list(args)

    def arguments(self) -> List[str]:
        return [self.executable] + [str(x) for x in self.args]

    def __str__(self) -> str:
        return shlex.join(self.arguments())

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}({self.executable}, "
            + ", ".join([repr(x) for x in self.args])
            + ")"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Command):
            return NotImplemented
        return self.executable == other.executable and self.args == other.args

    def __hash__(self) -> int:
        return hash(tuple([self.executable] + self.args))


class Pipeline:
    """Represents a sequence of commands connected by pipes (|)."""

    def __init__(
        self,
        *nodes: Command,
        file_output: Optional[pathlib.Path] = None,
    ):
        self.nodes = list(nodes)
        assert self.nodes  # Nodes cannot be empty
        self.file_output = file_output

    def arguments(self) -> List[str]:
        """The argument list, with pipes and the redirection as tokens"""
        res = self.nodes[0].arguments()
        for node in self.nodes[1:]:
            res.append("|")
            res.extend(node.arguments())
        if self.file_output:
            res.extend([">", str(self.file_output)])
        return res

    def __str__(self) -> str:
        res = [str(self.nodes[0])]
        for node in self.nodes[1:]:
            res.append(" | ")
            res.append(str(node))
        if self.file_output:
            res.append(f" >'{self.file_output}'")
        return "".join(res)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            + ", ".join(repr(x) for x in self.nodes)
            + f", file_output={self.file_output})"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Pipeline):
            return NotImplemented
        return (
            self.nodes == other.nodes
            and self.file_output == other.file_output
        )

    def __hash__(self) -> int:
        attrs: List[Any] = self.nodes + [self.file_output]
        return hash(tuple(attrs))
