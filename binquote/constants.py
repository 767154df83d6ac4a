"""Engine constants for the bin-based quote engine.

All process-wide parameters live in one frozen dataclass so tests can run the
engine against alternate scales without touching module state.
"""

from dataclasses import dataclass

# 128.128 binary fixed point
SCALE_OFFSET = 128
SCALE = 1 << SCALE_OFFSET

BASIS_POINT_MAX = 10_000

# Fee units: 1e9 == 100%
PRECISION_DECIMALS = 9
PRECISION = 10**PRECISION_DECIMALS
MAX_FEE = 100_000_000  # 10%

# Storage ids are real ids shifted into [0, 2^24)
REAL_ID_SHIFT = 1 << 23

MAX_LIQUIDITY_PER_BIN = (
    65251743116719673010965625540244653191619923014385985379600384103134737
)


@dataclass(frozen=True)
class EngineConfig:
    """Constants shared by the price ladder, fee math and swap router.

    Attributes:
        scale_offset: Fractional bits of the fixed-point price (128)
        basis_point_max: One hundred percent in basis points (10,000)
        precision: One hundred percent in fee units (1e9)
        precision_decimals: Decimal exponent of precision (9)
        max_fee: Largest total fee accepted by the fee formulas (10%)
        variable_fee_rounding: Divisor the squared volatility term is
            rounded up to before it is truncated to fee units
        real_id_shift: Offset between real and storage bin ids (2^23)
        max_liquidity_per_bin: Ceiling on price * x + (y << 128) for one bin
    """

    scale_offset: int = SCALE_OFFSET
    basis_point_max: int = BASIS_POINT_MAX
    precision: int = PRECISION
    precision_decimals: int = PRECISION_DECIMALS
    max_fee: int = MAX_FEE
    variable_fee_rounding: int = 100
    real_id_shift: int = REAL_ID_SHIFT
    max_liquidity_per_bin: int = MAX_LIQUIDITY_PER_BIN

    @property
    def scale(self) -> int:
        """Fixed-point representation of 1.0."""
        return 1 << self.scale_offset

    @property
    def max_storage_id(self) -> int:
        """Exclusive upper bound of the storage id space."""
        return self.real_id_shift << 1


DEFAULT_ENGINE_CONFIG = EngineConfig()
