"""Tests for pingreport.models Order and Result."""

import dataclasses

import pytest

from pingreport.models import Order, Result


def make_order(**overrides):
    fields = dict(
        id="abc123",
        user="alice",
        probe="fping",
        step=60,
        pings=5,
        probe_host="192.168.1.5",
        sort_key="192.168.001.005:fping:60:abc123",
        record={"user": "alice", "probe": "fping", "fping": {"host": "192.168.1.5"}},
    )
    fields.update(overrides)
    return Order(**fields)


class TestOrder:
    """Test Order dataclass behavior."""

    def test_order_has_no_result_by_default(self):
        """Test a freshly loaded order carries no result."""
        order = make_order()
        assert order.result is None

    def test_probe_section_lookup(self):
        """Test probe_section returns the sub-record named after the probe."""
        order = make_order()
        assert order.probe_section == {"host": "192.168.1.5"}

    def test_probe_section_without_probe(self):
        """Test probe_section is empty when the order has no probe."""
        order = make_order(probe=None)
        assert order.probe_section == {}

    def test_probe_section_missing(self):
        """Test probe_section is empty when the record has no matching section."""
        order = make_order(probe="tcpping")
        assert order.probe_section == {}

    def test_probe_section_not_a_mapping(self):
        """Test probe_section ignores a scalar value under the probe name."""
        order = make_order(record={"user": "alice", "fping": "oops"})
        assert order.probe_section == {}

    def test_record_not_in_repr(self):
        """Test the raw record stays out of the repr."""
        order = make_order()
        assert "record" not in repr(order)


class TestResult:
    """Test Result dataclass behavior."""

    def test_result_fields(self):
        """Test Result stores its fields as given."""
        result = Result(updated=1000.0, median=0.0123, loss=1)
        assert result.updated == 1000.0
        assert result.median == 0.0123
        assert result.loss == 1

    def test_result_without_median(self):
        """Test a result where every probe failed has no median."""
        result = Result(updated=1000.0, median=None, loss=5)
        assert result.median is None

    def test_result_is_immutable(self):
        """Test results cannot be modified after loading."""
        result = Result(updated=1000.0, median=None, loss=0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            result.loss = 3
