"""binquote - quote engine for bin-based liquidity pairs."""

from binquote.constants import DEFAULT_ENGINE_CONFIG, EngineConfig
from binquote.errors import BinQuoteError
from binquote.pair import Bin, PairSnapshot
from binquote.variants import ALMM, DLMM, PoolVariant

__version__ = "0.1.0"
__all__ = [
    "ALMM",
    "DLMM",
    "Bin",
    "BinQuoteError",
    "DEFAULT_ENGINE_CONFIG",
    "EngineConfig",
    "PairSnapshot",
    "PoolVariant",
    "__version__",
]
