"""Syslog tag: the ``program[pid]:`` prefix that follows the host."""
from dataclasses import dataclass


@dataclass
class Tag:
    program: str = ""
    pid: str = ""
    has_colon: bool = True

    def render(self) -> str:
        """Render as ``program``, ``program[pid]``, plus ``:`` when has_colon is set."""
        colon = ":" if self.has_colon else ""
        if not self.pid:
            return f"{self.program}{colon}"
        return f"{self.program}[{self.pid}]{colon}"

    def __str__(self) -> str:
        return self.render()
