"""Financial advice module."""
from .client import AdvisoryClient
from .prompt import SYSTEM_INSTRUCTION, build_prompt

__all__ = ["AdvisoryClient", "SYSTEM_INSTRUCTION", "build_prompt"]
