"""Pydantic configuration models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from syscallsym.config.defaults import (
    DEFAULT_ARCHITECTURE,
    DEFAULT_DISASSEMBLY_BACKEND,
    DEFAULT_HEADER_SEARCH_PATHS,
    DEFAULT_OBJDUMP_TIMEOUT,
    DEFAULT_OUTPUT_FORMAT,
    DEFAULT_SYMBOL_PREFIX,
)


class SyscallTableConfig(BaseModel):
    search_paths: list[str] = Field(default_factory=lambda: list(DEFAULT_HEADER_SEARCH_PATHS))
    # architecture -> explicit header path, checked before search_paths
    paths: dict[str, str] = Field(default_factory=dict)


class ResolverConfig(BaseModel):
    stop_at_function_boundary: bool = False
    max_backtrack: int | None = Field(default=None, ge=1)


class EmissionConfig(BaseModel):
    prefix: str = DEFAULT_SYMBOL_PREFIX
    format: Literal["table", "json", "csv", "objcopy"] = DEFAULT_OUTPUT_FORMAT


class DisassemblyConfig(BaseModel):
    backend: Literal["capstone", "objdump"] = DEFAULT_DISASSEMBLY_BACKEND
    objdump_path: str = "objdump"
    timeout: int = DEFAULT_OBJDUMP_TIMEOUT


class SyscallSymConfig(BaseModel):
    architecture: str = DEFAULT_ARCHITECTURE
    syscall_table: SyscallTableConfig = Field(default_factory=SyscallTableConfig)
    resolver: ResolverConfig = Field(default_factory=ResolverConfig)
    emission: EmissionConfig = Field(default_factory=EmissionConfig)
    disassembly: DisassemblyConfig = Field(default_factory=DisassemblyConfig)
