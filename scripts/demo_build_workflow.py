#!/usr/bin/env python3
"""
demo_build_workflow.py: Build a small branching workflow through the HTTP API.

This script:
  1. Opens a session (a workflow holding only the start node).
  2. Adds an action, a branch, and fills both branch slots.
  3. Undoes and redoes the last two edits, printing the history depth.
  4. Tries to delete the root to show the rejected-edit path.
  5. Prints the validation warnings and the export record.

Usage:
    python scripts/demo_build_workflow.py [--api-url http://localhost:8000] [--save]

Environment:
  API_URL  override the default API base URL (also settable via --api-url flag).
"""

import argparse
import asyncio
import json
import os
import sys
import time

import httpx

DEFAULT_API_URL = os.getenv("API_URL", "http://localhost:8000")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def print_section(title: str) -> None:
    print(f"\n{'=' * 60}")
    print(f"  {title}")
    print("=" * 60)


def print_state(data: dict) -> None:
    print(
        f"  nodes={len(data['workflow']['nodes'])}  "
        f"undo_depth={data['undo_depth']}  redo_depth={data['redo_depth']}  "
        f"warnings={data['warnings']}"
    )


async def wait_for_api(api_url: str, timeout: int = 30) -> None:
    """Block until the API health endpoint responds."""
    deadline = time.monotonic() + timeout
    async with httpx.AsyncClient(timeout=5) as client:
        while time.monotonic() < deadline:
            try:
                resp = await client.get(f"{api_url}/health")
                if resp.status_code == 200:
                    return
            except httpx.ConnectError:
                pass
            await asyncio.sleep(1)
    print(f"ERROR: API at {api_url} did not become ready within {timeout}s.", file=sys.stderr)
    sys.exit(1)


async def add_node(
    client: httpx.AsyncClient,
    base: str,
    parent_id: str,
    node_type: str,
    slot_index: int | None = None,
) -> str:
    payload = {"parent_id": parent_id, "type": node_type}
    if slot_index is not None:
        payload["slot_index"] = slot_index
    resp = await client.post(f"{base}/nodes", json=payload)
    resp.raise_for_status()
    data = resp.json()
    print(f"  + {node_type:<6} under {parent_id[:8]:<8} -> {data['node_id'][:8]}")
    print_state(data)
    return data["node_id"]


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

async def main() -> None:
    parser = argparse.ArgumentParser(description="Demo: build, undo and export a workflow")
    parser.add_argument("--api-url", default=DEFAULT_API_URL, help="Workflow API base URL")
    parser.add_argument("--name", default="demo-approval-flow", help="Workflow name")
    parser.add_argument(
        "--save",
        action="store_true",
        help="Also write the export record to the server's export directory",
    )
    args = parser.parse_args()

    print_section("1. Waiting for API to be ready")
    await wait_for_api(args.api_url)
    print("  API is up.")

    async with httpx.AsyncClient(timeout=10) as client:
        print_section("2. Opening a session")
        resp = await client.post(f"{args.api_url}/api/v1/sessions", json={"name": args.name})
        resp.raise_for_status()
        session = resp.json()
        base = f"{args.api_url}/api/v1/sessions/{session['session_id']}"
        root_id = session["workflow"]["rootId"]
        print(f"  session_id = {session['session_id']}")
        print_state(session)

        print_section("3. Building: start -> action -> branch(True: action, False: end)")
        action_id = await add_node(client, base, root_id, "action")
        branch_id = await add_node(client, base, action_id, "branch")
        await add_node(client, base, branch_id, "action", slot_index=0)
        await add_node(client, base, branch_id, "end", slot_index=1)

        resp = await client.patch(
            f"{base}/nodes/{branch_id}", json={"field": "label", "value": "Approved?"}
        )
        resp.raise_for_status()
        print("  labelled branch 'Approved?'")

        print_section("4. Undo twice, redo twice")
        for action in ("undo", "undo", "redo", "redo"):
            resp = await client.post(f"{base}/{action}")
            resp.raise_for_status()
            data = resp.json()
            print(f"  {action}: applied={data['applied']}")
            print_state(data)

        print_section("5. Deleting the root (expected to be rejected)")
        resp = await client.delete(f"{base}/nodes/{root_id}")
        error = resp.json().get("error", {})
        print(f"  HTTP {resp.status_code}  error_code={error.get('error_code')}")

        print_section("6. Export")
        resp = await client.get(f"{base}/export")
        resp.raise_for_status()
        print(json.dumps(resp.json(), indent=2))

        if args.save:
            resp = await client.post(f"{base}/export/file")
            resp.raise_for_status()
            print(f"  Saved to {resp.json()['location']}")

    print_section("Done")


if __name__ == "__main__":
    asyncio.run(main())
