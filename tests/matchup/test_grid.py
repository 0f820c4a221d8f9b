# tests/matchup/test_grid.py
import logging
import random

import pytest

from ratio.board.models import Asset
from ratio.errors import InvalidInputError
from ratio.matchup.grid import (
    build_grid,
    find_asymmetries,
    standings,
    win_loss_record,
    win_loss_records,
)
from ratio.matchup.models import CellKind, Outcome, WinLossRecord
from ratio.matchup.source import DerivedSource, ProvidedSource


def make_asset(symbol: str, percent_above_ma: float) -> Asset:
    return Asset(
        symbol=symbol,
        name=None,
        type="stock",
        rank=1,
        wins=0,
        losses=0,
        win_rate=0.0,
        current_price=100.0,
        ma=100.0,
        percent_above_ma=percent_above_ma,
    )


def test_three_asset_scenario():
    assets = [make_asset("A", 5.0), make_asset("B", -2.0), make_asset("C", 5.0)]
    grid = build_grid(["A", "B", "C"], DerivedSource(assets))

    assert grid.cell("A", "B").outcome is Outcome.WIN
    assert grid.cell("A", "C").outcome is Outcome.TIE
    assert grid.cell("B", "C").outcome is Outcome.LOSS

    a = win_loss_record(grid, "A")
    b = win_loss_record(grid, "B")
    c = win_loss_record(grid, "C")
    assert (a.wins, a.losses, a.win_rate) == (1, 0, 100.0)
    assert (b.wins, b.losses, b.win_rate) == (0, 2, 0.0)
    assert (c.wins, c.losses, c.win_rate) == (1, 0, 100.0)


def test_provided_na_excluded_from_both_records():
    table = {
        "A": {"B": "N/A", "C": "W"},
        "B": {"A": "N/A", "C": {"result": "W", "percent": 2.5}},
        "C": {"A": "L", "B": {"result": "L", "percent": -2.5}},
    }
    grid = build_grid(["A", "B", "C"], ProvidedSource(table))

    assert grid.cell("A", "B").kind is CellKind.INSUFFICIENT_DATA
    assert grid.cell("B", "A").kind is CellKind.INSUFFICIENT_DATA
    assert win_loss_record(grid, "A") == WinLossRecord(wins=1, losses=0)
    assert win_loss_record(grid, "B") == WinLossRecord(wins=1, losses=0)
    assert win_loss_record(grid, "C") == WinLossRecord(wins=0, losses=2)


def test_diagonal_always_self():
    table = {"A": {"A": "W", "B": "W"}, "B": {"A": "L", "B": "L"}}
    grid = build_grid(["A", "B"], ProvidedSource(table))

    for symbol in grid.roster:
        assert grid.cell(symbol, symbol).kind is CellKind.SELF
        assert grid.cell(symbol, symbol).outcome is None
    assert win_loss_record(grid, "A") == WinLossRecord(wins=1, losses=0)


def test_missing_symbol_is_absent_not_result():
    grid = build_grid(["A", "B", "Z"], DerivedSource([make_asset("A", 1.0), make_asset("B", 2.0)]))

    for other in ["A", "B"]:
        assert grid.cell("Z", other).kind is CellKind.ABSENT
        assert grid.cell(other, "Z").kind is CellKind.ABSENT
    assert win_loss_record(grid, "Z") == WinLossRecord()


def test_malformed_cell_isolated(caplog):
    table = {"A": {"B": "W", "C": "?"}, "B": {"A": "L", "C": "W"}, "C": {"A": "T", "B": "L"}}

    with caplog.at_level(logging.WARNING):
        grid = build_grid(["A", "B", "C"], ProvidedSource(table))

    assert grid.cell("A", "C").kind is CellKind.ERROR
    assert grid.cell("B", "C").outcome is Outcome.WIN
    assert win_loss_record(grid, "A") == WinLossRecord(wins=1, losses=0)
    assert "Malformed matchup cell A vs C" in caplog.text


def test_roster_order_preserved():
    roster = ["C", "A", "B"]
    grid = build_grid(roster, DerivedSource([]))
    assert grid.roster == ("C", "A", "B")
    assert list(grid.cells) == roster
    assert list(grid.cells["A"]) == roster


def test_duplicate_roster_rejected():
    with pytest.raises(InvalidInputError, match="duplicate"):
        build_grid(["A", "A"], DerivedSource([]))


def test_display_names_do_not_change_results():
    assets = [make_asset("BTC-USD", 12.0), make_asset("ETH-USD", -4.0)]
    plain = build_grid(["BTC-USD", "ETH-USD"], DerivedSource(assets))
    labelled = build_grid(
        ["BTC-USD", "ETH-USD"],
        DerivedSource(assets),
        display_names={"BTC-USD": "BTC", "ETH-USD": "ETH"},
    )

    assert labelled.label("BTC-USD") == "BTC"
    assert labelled.label("SOL-USD") == "SOL-USD"
    assert plain.cells == labelled.cells
    assert win_loss_records(plain) == win_loss_records(labelled)


def test_symbol_outside_roster_has_empty_record():
    grid = build_grid(["A"], DerivedSource([make_asset("A", 1.0)]))
    record = win_loss_record(grid, "NOPE")
    assert record.wins == record.losses == 0
    assert record.win_rate == 0.0


def test_derived_grid_properties():
    rng = random.Random(7)
    symbols = [f"S{i}" for i in range(8)]

    for _ in range(25):
        # 取整制造平局
        assets = [make_asset(s, float(rng.randint(-3, 3))) for s in symbols]
        roster = symbols + ["MISSING"]
        grid = build_grid(roster, DerivedSource(assets))

        assert find_asymmetries(grid) == []
        for row in roster:
            assert grid.cell(row, row).kind is CellKind.SELF
            for col in roster:
                forward = grid.cell(row, col)
                if forward.kind is CellKind.RESULT:
                    assert grid.cell(col, row).outcome is forward.outcome.opposite

        records = win_loss_records(grid)
        assert sum(r.wins for r in records.values()) == sum(r.losses for r in records.values())
        for record in records.values():
            assert 0 <= record.win_rate <= 100
            if record.total == 0:
                assert record.win_rate == 0


def test_find_asymmetries_in_provided_table(caplog):
    table = {"A": {"B": "W"}, "B": {"A": "W"}}

    with caplog.at_level(logging.WARNING):
        grid = build_grid(["A", "B"], ProvidedSource(table))

    assert find_asymmetries(grid) == [("A", "B")]
    assert "Asymmetric" in caplog.text


def test_standings_order():
    assets = [make_asset("A", 1.0), make_asset("B", 3.0), make_asset("C", 2.0), make_asset("D", 2.0)]
    grid = build_grid(["A", "B", "C", "D"], DerivedSource(assets))

    order = [symbol for symbol, _ in standings(grid)]
    assert order == ["B", "C", "D", "A"]


def test_win_loss_record_win_rate():
    assert WinLossRecord(wins=3, losses=1).win_rate == 75.0
    assert WinLossRecord().win_rate == 0.0


def test_grid_cells_read_only():
    grid = build_grid(["A", "B"], DerivedSource([make_asset("A", 1.0), make_asset("B", 2.0)]))

    with pytest.raises(TypeError):
        grid.cells["A"]["B"] = grid.cell("B", "A")
    with pytest.raises(TypeError):
        grid.cells["C"] = {}
    assert grid.cell("A", "B").outcome is Outcome.LOSS
