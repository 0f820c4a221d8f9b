# tests/matchup/test_rosters.py
import pytest

from ratio.errors import UnknownGridTypeError
from ratio.matchup.rosters import DEFAULT_GRID_TYPES, GridType, get_grid_type


def test_default_grid_types():
    assert list(DEFAULT_GRID_TYPES) == ["MAG7", "INDICES", "CRYPTO"]
    assert DEFAULT_GRID_TYPES["MAG7"].symbols == (
        "AAPL",
        "MSFT",
        "GOOGL",
        "AMZN",
        "NVDA",
        "META",
        "TSLA",
    )


def test_lookup_case_insensitive():
    assert get_grid_type("mag7").name == "MAG7"
    assert get_grid_type(" Crypto ").name == "CRYPTO"


def test_unknown_grid_type():
    with pytest.raises(UnknownGridTypeError, match="Unknown grid type 'SEMIS'"):
        get_grid_type("SEMIS")


def test_display_name_labels():
    indices = get_grid_type("INDICES")
    assert indices.label("SPY") == "S&P 500"
    assert indices.label("VTI") == "VTI"
    # MAG7 不重命名
    assert get_grid_type("MAG7").label("AAPL") == "AAPL"


def test_custom_grid_types():
    custom = {"SEMIS": GridType(name="SEMIS", title="Semis", symbols=("NVDA", "AMD"))}
    assert get_grid_type("semis", custom).symbols == ("NVDA", "AMD")
    with pytest.raises(UnknownGridTypeError):
        get_grid_type("MAG7", custom)


def test_grid_type_validation():
    with pytest.raises(ValueError, match="no symbols"):
        GridType(name="EMPTY", title="Empty", symbols=())
    with pytest.raises(ValueError, match="duplicate"):
        GridType(name="DUP", title="Dup", symbols=("A", "A"))
