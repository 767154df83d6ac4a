"""Mathematical primitives for the quote engine.

- most_significant_bit: bit-width search over uint256
- u128x128: 128.128 binary fixed point (log2, pow, conversions)
"""

from binquote.math.bit_math import most_significant_bit
from binquote.math.u128x128 import ONE, log2, pow, split, to_fixed

__all__ = ["most_significant_bit", "ONE", "log2", "pow", "split", "to_fixed"]
