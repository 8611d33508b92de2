"""Constants for the drag-to-connect matching game."""

# Hit radius in percent units of the render surface.
DEFAULT_HIT_RADIUS: float = 4.0
ENDPOINT_DRAW_RADIUS_PX: int = 10
CONNECTION_LINE_WIDTH_PX: int = 3
RESULT_TOAST_DURATION_MS: int = 3000
MATCHING_GAME_TYPE: str = "matching"
