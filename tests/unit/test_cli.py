"""Tests for the throttle-debounce CLI."""

from typer.testing import CliRunner

from throttle_debounce.cli import app, simulate_command

runner = CliRunner()


def test_simulate_queues_overflow_and_runs_everything():
    summary = simulate_command(requests=4, capacity=2, interval=0.1, drain_tick=0.01)

    assert summary["executions"] == 4
    assert summary["queued_peak"] == 2
    assert summary["failures"] == 0
    assert summary["execution_order"] == ["req-0#0", "req-1#1", "req-2#2", "req-3#3"]
    assert summary["final_state"]["queued_requests"] == 0


def test_simulate_deduplicates_shared_keys():
    summary = simulate_command(requests=3, capacity=5, distinct_keys=1, latency=0.02)

    assert summary["executions"] == 1
    assert summary["queued_peak"] == 0


def test_simulate_without_queuing_bypasses_limit():
    summary = simulate_command(requests=4, capacity=2, enable_queuing=False)

    assert summary["executions"] == 4
    assert summary["queued_peak"] == 0
    assert summary["final_state"]["requests_in_current_interval"] == 4


def test_simulate_command_rejects_invalid_capacity():
    result = runner.invoke(app, ["simulate", "--capacity", "0"])

    assert result.exit_code == 1
    assert "Invalid throttler configuration" in result.output


def test_simulate_command_prints_summary():
    result = runner.invoke(app, ["simulate", "--requests", "2", "--capacity", "2"])

    assert result.exit_code == 0
    assert '"executions": 2' in result.output


def test_show_config_prints_settings():
    result = runner.invoke(app, ["show-config"])

    assert result.exit_code == 0
    assert "api_requests_per_interval" in result.output
