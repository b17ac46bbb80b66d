"""
CLI entry points for exercising the API throttler.

Commands:
  - simulate: Fire a burst of calls through an ApiThrottler and report the
    execution order and final throttler state
  - show-config: Print the effective settings (environment + .env) as JSON
"""

from __future__ import annotations

import asyncio
import json
from typing import Any, Dict, List, Optional

import typer

from throttle_debounce.config import settings
from throttle_debounce.models.schema import ApiThrottlerConfig
from throttle_debounce.services.api_throttler import ApiThrottler
from throttle_debounce.utils.logging import get_logger, log_event

app = typer.Typer(help="Call-rate control toolbox CLI.")
logger = get_logger("throttle_debounce.cli")


async def _simulate(
    config: ApiThrottlerConfig,
    requests: int,
    distinct_keys: Optional[int],
    latency: float,
) -> Dict[str, Any]:
    throttler = ApiThrottler(config)
    executed: List[str] = []

    def make_action(label: str):
        async def action() -> str:
            executed.append(label)
            if latency > 0:
                await asyncio.sleep(latency)
            return label

        return action

    calls = []
    for index in range(requests):
        key = f"req-{index % distinct_keys if distinct_keys else index}"
        calls.append(asyncio.ensure_future(throttler.call(key, make_action(f"{key}#{index}"))))
        # Let each call reach its admission decision before the next one.
        await asyncio.sleep(0)
    queued_peak = throttler.queued_requests_count
    results = await asyncio.gather(*calls, return_exceptions=True)
    snapshot = throttler.snapshot()
    throttler.dispose()
    return {
        "requests": requests,
        "executions": len(executed),
        "execution_order": executed,
        "queued_peak": queued_peak,
        "failures": sum(1 for result in results if isinstance(result, BaseException)),
        "final_state": snapshot.model_dump(),
    }


def simulate_command(
    requests: int = 10,
    capacity: int = 3,
    interval: float = 0.5,
    distinct_keys: Optional[int] = None,
    latency: float = 0.0,
    enable_queuing: bool = True,
    enable_deduplication: bool = True,
    drain_tick: float = 0.05,
) -> Dict[str, Any]:
    """
    Core logic for the simulate command.

    Args:
        requests: Number of calls to issue back to back
        capacity: Requests admitted per interval
        interval: Sliding window length in seconds
        distinct_keys: Cycle through this many request keys (None = all unique)
        latency: Seconds each simulated action takes
        enable_queuing: Queue calls that exceed the limit
        enable_deduplication: Coalesce concurrent calls sharing a key
        drain_tick: Drain loop period in seconds

    Returns:
        Summary dictionary with execution order and final throttler state

    Raises:
        pydantic.ValidationError: If the throttler configuration is invalid
    """
    config = ApiThrottlerConfig(
        requests_per_interval=capacity,
        interval=interval,
        enable_queuing=enable_queuing,
        enable_deduplication=enable_deduplication,
        drain_tick=drain_tick,
        name="cli-simulate",
    )
    summary = asyncio.run(_simulate(config, requests, distinct_keys, latency))
    log_event(
        logger,
        "simulation_complete",
        requests=requests,
        executions=summary["executions"],
        queued_peak=summary["queued_peak"],
    )
    return summary


@app.command()
def simulate(
    requests: int = typer.Option(10, min=1, help="Number of calls to issue."),
    capacity: int = typer.Option(3, help="Requests admitted per interval."),
    interval: float = typer.Option(0.5, help="Sliding window length in seconds."),
    distinct_keys: Optional[int] = typer.Option(
        None, min=1, help="Cycle through this many request keys (default: all unique)."
    ),
    latency: float = typer.Option(0.0, min=0.0, help="Seconds each simulated action takes."),
    queuing: bool = typer.Option(True, help="Queue calls that exceed the rate limit."),
    dedup: bool = typer.Option(True, help="Coalesce concurrent calls sharing a key."),
    drain_tick: float = typer.Option(0.05, help="Drain loop period in seconds."),
) -> None:
    """Fire a burst of calls through an ApiThrottler and print what happened."""
    try:
        summary = simulate_command(
            requests=requests,
            capacity=capacity,
            interval=interval,
            distinct_keys=distinct_keys,
            latency=latency,
            enable_queuing=queuing,
            enable_deduplication=dedup,
            drain_tick=drain_tick,
        )
    except ValueError as exc:
        typer.secho(f"Invalid throttler configuration: {exc}", fg=typer.colors.RED)
        raise typer.Exit(code=1) from exc
    typer.echo(json.dumps(summary, indent=2))
    color = typer.colors.GREEN if summary["failures"] == 0 else typer.colors.YELLOW
    typer.secho(
        f"{summary['executions']} executions for {requests} calls "
        f"(peak queue {summary['queued_peak']})",
        fg=color,
    )


@app.command()
def show_config() -> None:
    """Print the effective settings as JSON."""
    typer.echo(json.dumps(settings.model_dump(), indent=2))


if __name__ == "__main__":
    app()
