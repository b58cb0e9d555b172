"""ToolRunner: runs external build tools as blocking subprocesses."""

import subprocess
import sys
from typing import List, Optional

MISSING_EXECUTABLE_RETURNCODE = 127


class ToolRunner:
    """Runs external commands and hands back the CompletedProcess.

    There is no timeout: a hung tool hangs the caller.

    Args:
        verbose: When True, echo each command to stderr before running it.
    """

    def __init__(self, verbose: bool = False):
        self._verbose = verbose

    def run(
        self, cmd: List[str], cwd: Optional[str] = None, capture_output: bool = False,
    ) -> subprocess.CompletedProcess:
        if self._verbose:
            print(f"$ {' '.join(cmd)}", file=sys.stderr)
        try:
            return subprocess.run(
                cmd, cwd=cwd, capture_output=capture_output, text=True,
            )
        except FileNotFoundError:
            return subprocess.CompletedProcess(
                cmd, MISSING_EXECUTABLE_RETURNCODE,
                stdout="" if capture_output else None,
                stderr=f"{cmd[0]}: command not found" if capture_output else None,
            )
