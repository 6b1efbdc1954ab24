from __future__ import annotations

import json
from textwrap import dedent

import pytest
from typer.testing import CliRunner

from thorchain_amm.main import app
from thorchain_amm.settings import CONFIG_ENV_VAR

runner = CliRunner()


@pytest.fixture
def config_path(tmp_path, monkeypatch):
    path = tmp_path / "thorchain-amm.toml"
    path.write_text(
        dedent(
            """
            [thorchain_amm]
            gas_rates = { BTC = 25 }

            [[thorchain_amm.pools]]
            asset = "BTC.BTC"
            asset_balance = 1000000000
            rune_balance = 2000000000

            [[thorchain_amm.pools]]
            asset = "ETH.ETH"
            asset_balance = 5000000000
            rune_balance = 1000000000
            """
        ).strip()
    )
    # the CLI writes the config path into the environment; restore it afterwards
    monkeypatch.setenv(CONFIG_ENV_VAR, str(path))
    return path


def test_quote_json_single_swap(config_path):
    result = runner.invoke(
        app, ["--config", str(config_path), "quote", "BTC.BTC", "THOR.RUNE", "1", "--json"]
    )

    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["hops"] == 1
    assert data["output"] == {
        "asset": "THOR.RUNE",
        "base_amount": "165289256",
        "decimals": 8,
    }
    assert data["swap_fee"]["base_amount"] == "16528925"


def test_quote_table_double_swap(config_path):
    result = runner.invoke(app, ["quote", "BTC.BTC", "ETH.ETH", "0.5"])

    assert result.exit_code == 0, result.output
    assert "Quote" in result.stdout
    assert "ETH.ETH" in result.stdout


def test_quote_missing_pool_exits_non_zero(config_path):
    result = runner.invoke(app, ["quote", "LTC.LTC", "THOR.RUNE", "1"])

    assert result.exit_code == 1


def test_quote_rejects_bad_amount(config_path):
    result = runner.invoke(app, ["quote", "BTC.BTC", "THOR.RUNE", "lots"])

    assert result.exit_code == 2


def test_quote_rejects_unknown_asset(config_path):
    result = runner.invoke(app, ["quote", "SOL.SOL", "THOR.RUNE", "1"])

    assert result.exit_code == 2


def test_network_fee_with_explicit_gas_rate(config_path):
    result = runner.invoke(app, ["network-fee", "ETH.ETH", "--gas-rate", "1"])

    assert result.exit_code == 0, result.output
    assert "80000000000000 base units" in result.stdout


def test_network_fee_uses_configured_gas_rate(config_path):
    result = runner.invoke(app, ["network-fee", "BTC.BTC"])

    assert result.exit_code == 0, result.output
    assert "25000 base units" in result.stdout


def test_network_fee_synth_is_flat(config_path):
    result = runner.invoke(app, ["network-fee", "ETH/ETH", "--gas-rate", "50"])

    assert result.exit_code == 0, result.output
    assert "THOR.RUNE (2000000 base units)" in result.stdout


def test_network_fee_without_gas_rate_is_bad_parameter(config_path):
    result = runner.invoke(app, ["network-fee", "DOGE.DOGE"])

    assert result.exit_code == 2


def test_show_config(config_path):
    result = runner.invoke(app, ["--show-config"])

    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert [pool["asset"] for pool in data["pools"]] == ["BTC.BTC", "ETH.ETH"]
    assert data["gas_rates"] == {"BTC": "25"}
