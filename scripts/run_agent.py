#!/usr/bin/env python3
"""CLI script to run the store operations agent."""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from ops_agent.config import load_settings
from ops_agent.runner import abort_active_plan, clear_session, run_agent
from utils.formatting import format_debug_view


def _print_result(result: dict, show_debug: bool, as_json: bool) -> None:
    if as_json:
        print(json.dumps(result, indent=2, default=str))
        return

    print(f"\n🤖 {result['reply']}\n")
    if result.get("plan_status"):
        print(f"   plan: {result['plan_status']}")
    if show_debug and result.get("debug"):
        print(format_debug_view(result["debug"]))


async def _interactive(session_id: str, show_debug: bool, as_json: bool) -> None:
    print(f"Session {session_id}. Commands: /clear, /abort, /quit")
    while True:
        try:
            message = input("you> ").strip()
        except EOFError:
            break

        if not message:
            continue
        if message == "/quit":
            break
        if message == "/clear":
            await clear_session(session_id)
            print("🧹 Session cleared")
            continue
        if message == "/abort":
            plan = await abort_active_plan(session_id)
            print(f"🛑 Aborted plan {plan.id}" if plan else "No active plan")
            continue

        result = await run_agent(message, session_id=session_id)
        session_id = result["session_id"]
        _print_result(result, show_debug, as_json)


def main():
    """Main CLI function."""
    parser = argparse.ArgumentParser(description="Run the Shopify store operations agent")
    parser.add_argument("message", nargs="?", help="Message to send (starts an interactive session if omitted)")
    parser.add_argument("--session", help="Session id to continue")
    parser.add_argument("--debug", action="store_true", help="Print the plan debug view")
    parser.add_argument("--json", action="store_true", help="Print the full result as JSON")
    args = parser.parse_args()

    settings = load_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.message:
            result = asyncio.run(run_agent(args.message, session_id=args.session))
            _print_result(result, args.debug, args.json)
            if result.get("error"):
                sys.exit(1)
        else:
            from sessions import new_session_id
            asyncio.run(_interactive(args.session or new_session_id(), args.debug, args.json))
    except KeyboardInterrupt:
        pass
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
