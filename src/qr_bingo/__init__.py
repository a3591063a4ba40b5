"""QR-scanned bingo sheet engine."""

from .models import Payload, Position, Sheet, Slot, Variation
from .version import __version__

__all__ = ["Payload", "Position", "Sheet", "Slot", "Variation", "__version__"]
