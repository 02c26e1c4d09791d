"""Bar conversion components (DataFrame interop, Heikin-Ashi)."""

from .frames import bars_from_frame, bars_from_records, bars_to_frame
from .heikin_ashi import convert_to_heikin_ashi

__all__ = [
    "bars_from_frame",
    "bars_from_records",
    "bars_to_frame",
    "convert_to_heikin_ashi",
]
