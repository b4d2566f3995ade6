"""
Command line shell for chainpulse.

Usage:
    chainpulse --rpc-url https://eth.example/rpc --token 0x... --once
    chainpulse --config-dir ./config          # refresh every 12s until Ctrl-C
"""

import argparse
import asyncio
import sys

from chainpulse.config import ConfigState, get_config
from chainpulse.infrastructure.observability import setup_logging
from chainpulse.ingestion.adapters.jsonrpc import JsonRpcProvider
from chainpulse.orchestration import ChartState, DashboardSnapshot, run_refresh_loop


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chainpulse",
        description="Poll an Ethereum RPC endpoint and print per-block fee, "
        "gas usage and ERC-20 transfer volume series.",
    )
    parser.add_argument("--config-dir", default=None, help="Directory with YAML config")
    parser.add_argument("--rpc-url", default=None, help="JSON-RPC endpoint URL")
    parser.add_argument("--token", default=None, help="ERC-20 contract address to track")
    parser.add_argument("--window", type=int, default=None, help="Blocks per window")
    parser.add_argument(
        "--interval", type=float, default=None, help="Refresh interval in seconds"
    )
    parser.add_argument("--once", action="store_true", help="Run a single refresh")
    parser.add_argument(
        "--json-logs", action="store_true", help="Emit JSON logs instead of console"
    )
    return parser


def apply_overrides(settings: ConfigState, args: argparse.Namespace) -> ConfigState:
    """Return a validated copy of ``settings`` with command line flags applied."""
    data = settings.model_dump()
    if args.rpc_url:
        data["provider"]["rpc_url"] = args.rpc_url
    if args.token:
        data["dashboard"]["token_address"] = args.token
    if args.window is not None:
        data["dashboard"]["window_size"] = args.window
    if args.interval is not None:
        data["dashboard"]["refresh_interval"] = args.interval
    if args.json_logs:
        data["logging"]["json_logs"] = True
    return ConfigState.model_validate(data)


def render(snapshot: DashboardSnapshot) -> str:
    """Plain-text rendering of a snapshot."""
    stamp = snapshot.refreshed_at.strftime("%Y-%m-%d %H:%M:%S %Z")
    if snapshot.state == ChartState.ERROR:
        return f"[{stamp}] Failed to load blockchain data: {snapshot.error}"
    if snapshot.state == ChartState.EMPTY:
        return f"[{stamp}] No blockchain data available."

    lines = [f"[{stamp}] blocks {snapshot.blocks[0].number}..{snapshot.blocks[-1].number}"]
    for series, panel in snapshot.panels.items():
        detail = f" ({panel.error})" if panel.error else ""
        lines.append(f"  {series.value:<16} {panel.state.value}{detail}")
    frame = snapshot.to_frame()
    if not frame.empty:
        lines.append(frame.to_string(float_format=lambda v: f"{v:,.2f}"))
    return "\n".join(lines)


async def run(settings: ConfigState, once: bool) -> int:
    async with JsonRpcProvider(settings.provider.to_rpc_config()) as provider:
        await run_refresh_loop(
            provider,
            settings.dashboard,
            on_snapshot=lambda snapshot: print(render(snapshot), flush=True),
            max_cycles=1 if once else None,
            max_concurrency=settings.provider.max_concurrency,
        )
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = apply_overrides(get_config(args.config_dir), args)
    setup_logging(
        level=settings.logging.level,
        json_logs=settings.logging.json_logs,
        include_timestamp=settings.logging.include_timestamp,
    )

    try:
        return asyncio.run(run(settings, once=args.once))
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(main())
