"""
Dependency initialization for the comparator package.

Handles PIL, numpy and tqdm imports with proper error handling and
configuration.
"""

from __future__ import annotations

import warnings
import logging
from typing import Optional, Any

from ..config import MAX_IMAGE_PIXELS

# Module-level logger
_logger = logging.getLogger(__name__)

# Check for required dependencies
try:
    from PIL import Image
    import numpy as np
except ImportError:
    raise ImportError(
        "Required packages not found!\n"
        "Install with: pip install Pillow numpy"
    )

# Raise PIL's decompression bomb limit for large scans and panoramas
Image.MAX_IMAGE_PIXELS = MAX_IMAGE_PIXELS

# Anything over the limit still raises DecompressionBombError
warnings.filterwarnings("ignore", category=Image.DecompressionBombWarning)

# Resampling filter used for every resize; both images of a pair must use the same one
RESAMPLE_FILTER = Image.Resampling.BILINEAR

# Optional: tqdm for progress bars
HAS_TQDM = False
_tqdm_class: Optional[Any] = None

try:
    from tqdm import tqdm as _tqdm_import
    HAS_TQDM = True
    _tqdm_class = _tqdm_import
except ImportError:
    pass


__all__ = [
    'Image',
    'np',
    'RESAMPLE_FILTER',
    'HAS_TQDM',
    '_tqdm_class',
    '_logger',
]
