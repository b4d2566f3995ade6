"""
Tests for base fee and gas usage series derivation.
"""

import pytest

from chainpulse.shared.exceptions import MalformedBlockData
from chainpulse.transformation.series import (
    derive_base_fee_series,
    derive_gas_usage_series,
)
from fixtures.chain import make_block


@pytest.fixture
def window():
    return [
        make_block(
            100 + i,
            base_fee_per_gas=str((i + 1) * 1_500_000_000),
            gas_used=str(i * 3_000_000),
            gas_limit="30000000",
        )
        for i in range(10)
    ]


class TestBaseFeeSeries:
    def test_one_gwei(self):
        series = derive_base_fee_series([make_block(1, base_fee_per_gas="1000000000")])

        assert series[0].block_number == 1
        assert series[0].value == 1.0

    def test_fractional_gwei(self):
        series = derive_base_fee_series([make_block(1, base_fee_per_gas="7")])

        assert series[0].value == pytest.approx(7e-9)

    def test_aligned_with_window(self, window):
        series = derive_base_fee_series(window)

        assert len(series) == len(window)
        assert [p.block_number for p in series] == [b.number for b in window]
        assert all(p.value >= 0 for p in series)

    def test_idempotent(self, window):
        assert derive_base_fee_series(window) == derive_base_fee_series(window)

    def test_missing_base_fee_is_malformed(self):
        with pytest.raises(MalformedBlockData) as exc_info:
            derive_base_fee_series([make_block(7, base_fee_per_gas=None)])

        assert exc_info.value.block_number == 7
        assert exc_info.value.field == "base_fee_per_gas"

    def test_non_numeric_base_fee_is_malformed(self):
        with pytest.raises(MalformedBlockData):
            derive_base_fee_series([make_block(7, base_fee_per_gas="0xzz")])

    def test_empty_window(self):
        assert derive_base_fee_series([]) == []


class TestGasUsageSeries:
    def test_half_full_block(self):
        series = derive_gas_usage_series(
            [make_block(1, gas_used="5000000", gas_limit="10000000")]
        )

        assert series[0].value == 50.0

    def test_values_within_percentage_bounds(self, window):
        series = derive_gas_usage_series(window)

        assert len(series) == len(window)
        assert [p.block_number for p in series] == [b.number for b in window]
        assert all(0.0 <= p.value <= 100.0 for p in series)

    def test_full_block(self):
        series = derive_gas_usage_series(
            [make_block(1, gas_used="30000000", gas_limit="30000000")]
        )

        assert series[0].value == 100.0

    def test_idempotent(self, window):
        assert derive_gas_usage_series(window) == derive_gas_usage_series(window)

    def test_zero_gas_limit_is_malformed(self):
        with pytest.raises(MalformedBlockData) as exc_info:
            derive_gas_usage_series([make_block(3, gas_limit="0")])

        assert exc_info.value.field == "gas_limit"

    def test_non_numeric_gas_used_is_malformed(self):
        with pytest.raises(MalformedBlockData) as exc_info:
            derive_gas_usage_series([make_block(3, gas_used="lots")])

        assert exc_info.value.field == "gas_used"

    def test_negative_value_is_malformed(self):
        with pytest.raises(MalformedBlockData):
            derive_gas_usage_series([make_block(3, gas_used="-1")])
