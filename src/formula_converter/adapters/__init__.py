"""
Adapters between the converter and the outside world.

- frames: pandas DataFrame <-> grid conversion
- sheets_client: gspread-backed reading and writing of worksheet ranges
  (import ``formula_converter.adapters.sheets_client`` directly; it
  depends on the converter, which itself uses ``frames``)
"""

from formula_converter.adapters.frames import frame_from_grid, grid_from_frame

__all__ = [
    "frame_from_grid",
    "grid_from_frame",
]
