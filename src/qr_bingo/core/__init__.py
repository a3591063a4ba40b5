"""Sheet generation and lifecycle."""

from .generator import GenerationParams, SheetGenerator
from .session import BingoSession, ScanOutcome

__all__ = ["GenerationParams", "SheetGenerator", "BingoSession", "ScanOutcome"]
