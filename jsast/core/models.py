"""
Pydantic models for subprocess results and parser status.
"""

from __future__ import annotations

from pathlib import Path
from typing import List

from pydantic import BaseModel, Field


class InvocationResult(BaseModel):
    """Outcome of one successful parser script run; failures are raised instead."""
    args: List[str] = Field(default_factory=list)
    returncode: int
    output: str = ""
    elapsed: float = 0.0


class ParserInfo(BaseModel):
    """Resolved locations of the external tooling used by a parser instance."""
    node_path: Path
    script_path: Path
    schema_path: Path
