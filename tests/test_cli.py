from typer.testing import CliRunner

from entrypoints.cli.find_matches import app

runner = CliRunner()


def test_search_prints_payment_and_salary():
    result = runner.invoke(app, ["search", "--max-price", "200000", "--location", "Manchester"])

    assert result.exit_code == 0, result.output
    assert "1 bed flat, Ancoats" in result.output
    assert "/mo" in result.output
    assert "/yr" in result.output


def test_search_with_no_matches():
    result = runner.invoke(app, ["search", "--max-price", "1000"])

    assert result.exit_code == 0
    assert "No matches found." in result.output


def test_rate_not_offered_exits_with_error():
    result = runner.invoke(app, ["search", "--max-price", "200000", "--rate", "7"])

    assert result.exit_code == 1


def test_rates_command():
    result = runner.invoke(app, ["rates"])

    assert result.exit_code == 0
    assert "3%, 4%, 5%, 6%" in result.output


def test_unreadable_catalog_exits_cleanly(monkeypatch, tmp_path):
    from entrypoints.cli import find_matches
    from firsthome.adapters.config import AppConfig

    monkeypatch.setattr(
        find_matches, "config", AppConfig(LISTING_SOURCE="catalog", CATALOG_PATH=str(tmp_path / "gone.csv"))
    )

    result = runner.invoke(app, ["search", "--max-price", "200000"])

    assert result.exit_code == 1
    assert result.exception is None or isinstance(result.exception, SystemExit)
