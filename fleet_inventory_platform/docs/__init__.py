"""
API documentation configuration and examples.
"""

from .examples import *
from .responses import *

__all__ = [
    "API_EXAMPLES",
    "LAYOUT_TEMPLATE_EXAMPLES",
    "SPACE_BATCH_EXAMPLES",
    "ZONE_EXAMPLES",
    "ERROR_RESPONSES",
]
