"""
UI/view constants centralized for reuse across view modules.
"""

from __future__ import annotations

WINDOW_TITLE: str = "Image Categorizer"

# Preview defaults
DEFAULT_THUMBNAIL_SIZE: str = "preview"  # "thumbnail" or "preview", overridable by settings.json
PREVIEW_MIN_HEIGHT_PX: int = 300
ALBUM_LIST_MIN_WIDTH_PX: int = 240

# Window sizing
WINDOW_SIZE_RATIO: float = 0.6
STATUS_TIMEOUT_MS: int = 3000
