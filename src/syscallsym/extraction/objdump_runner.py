"""Run an external objdump to produce an intel-syntax listing."""

from __future__ import annotations

import subprocess
from pathlib import Path

from syscallsym.errors import DisassemblyError
from syscallsym.utils.logging import get_logger

log = get_logger(__name__)


def run_objdump(
    binary_path: Path,
    objdump: str = "objdump",
    timeout: int = 300,
    extra_args: list[str] | None = None,
) -> str:
    """Return ``objdump -d -M intel`` output for ``binary_path``."""
    binary_path = Path(binary_path)
    if not binary_path.is_file():
        raise DisassemblyError(f"Binary not found: {binary_path}")

    cmd = [objdump, "-d", "-M", "intel", "--no-show-raw-insn"]
    if extra_args:
        cmd.extend(extra_args)
    cmd.append(str(binary_path))

    log.info("running_objdump", cmd=" ".join(cmd))

    try:
        result = subprocess.run(cmd, capture_output=True, text=True, timeout=timeout)
    except FileNotFoundError as exc:
        raise DisassemblyError(f"objdump executable not found: {objdump}") from exc
    except subprocess.TimeoutExpired as exc:
        raise DisassemblyError(f"objdump timed out after {timeout}s") from exc

    if result.returncode != 0:
        log.error("objdump_failed", returncode=result.returncode, stderr=result.stderr[:500])
        raise DisassemblyError(f"objdump exited with status {result.returncode}")

    return result.stdout
