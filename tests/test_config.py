"""Unit tests for DownsampleConfig serialization and the error hierarchy."""

import pytest

from tidychart.config import DownsampleConfig, DownsampleMethod, EngineDefaults
from tidychart.errors import (
    ArgumentError,
    DomainError,
    EncodingResolutionError,
    ParseError,
    TidyChartError,
    UnknownKeyError,
)


def test_to_dict_stores_enum_value():
    assert DownsampleConfig.m4(300).to_dict() == {"method": "m4", "threshold": 300}


def test_from_dict_round_trip():
    config = DownsampleConfig.lttb(640)
    assert DownsampleConfig.from_dict(config.to_dict()) == config


def test_from_dict_defaults():
    config = DownsampleConfig.from_dict({})
    assert config.method is DownsampleMethod.LTTB
    assert config.threshold == EngineDefaults.LTTB_THRESHOLD


def test_from_dict_rejects_unknown_method():
    with pytest.raises(ArgumentError) as exc_info:
        DownsampleConfig.from_dict({"method": "stride"})
    assert "stride" in str(exc_info.value)


@pytest.mark.parametrize(
    "exc, builtin",
    [
        (ParseError("bad", 3), ValueError),
        (EncodingResolutionError("bad"), ValueError),
        (DomainError("bad"), ValueError),
        (ArgumentError("bad"), ValueError),
        (UnknownKeyError("k"), LookupError),
    ],
)
def test_errors_share_base_and_builtin(exc, builtin):
    assert isinstance(exc, TidyChartError)
    assert isinstance(exc, builtin)


def test_parse_error_message_has_line():
    assert str(ParseError("oops", 7)) == "line 7: oops"
