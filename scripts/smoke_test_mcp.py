#!/usr/bin/env python3
"""
MCP Server Smoke Test — stdio end-to-end check.

Simulates what Claude Desktop does:
    1. Launches world_mcp.server as a subprocess (stdio transport)
    2. Sends JSON-RPC initialize request
    3. Sends tools/list, resources/list, prompts/list
    4. Reads cameradata:///Reception
    5. Calls create_note and reads the new note back
    6. Verifies each response

None of these steps need the renderer: the Command Channel keeps retrying
in the background while the server answers.

Usage:
    python3 scripts/smoke_test_mcp.py

Expected output:
    ✓  initialize — protocol negotiated
    ✓  tools/list — 5 tools registered
    ✓  resources/list — 7 resources registered
    ✓  prompts/list — 2 prompts registered
    ✓  resources/read cameradata:///Reception — preset returned
    ✓  tools/call create_note — note 3 created and readable
    All smoke tests passed.

Exit codes:
    0 — all tests passed
    1 — one or more tests failed
"""

from __future__ import annotations

import json
import os
import subprocess
import sys
import time
from pathlib import Path

# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------

PROJECT_ROOT = Path(__file__).parent.parent
PYTHON = sys.executable
MODULE = "world_mcp.server"

# ---------------------------------------------------------------------------
# JSON-RPC helpers
# ---------------------------------------------------------------------------


def _rpc(method: str, params: dict | None = None, id: int = 1) -> bytes:
    """Encode a JSON-RPC 2.0 request as bytes with newline terminator."""
    msg = {"jsonrpc": "2.0", "id": id, "method": method}
    if params is not None:
        msg["params"] = params
    return (json.dumps(msg) + "\n").encode()


def _read_response(proc: subprocess.Popen) -> dict:
    """Read one JSON-RPC response line from the process stdout."""
    line = proc.stdout.readline()
    if not line:
        raise RuntimeError("Server stdout closed unexpectedly")
    return json.loads(line.decode().strip())


def _call(proc: subprocess.Popen, method: str, params: dict | None, id: int) -> dict:
    proc.stdin.write(_rpc(method, params, id=id))
    proc.stdin.flush()
    return _read_response(proc)


# ---------------------------------------------------------------------------
# Smoke tests
# ---------------------------------------------------------------------------


def run_smoke_tests() -> int:
    """
    Launch server, run all checks, return exit code (0=pass, 1=fail).
    """
    failures: list[str] = []

    print(f"Launching server: {PYTHON} -m {MODULE}")
    proc = subprocess.Popen(
        [PYTHON, "-m", MODULE],
        stdin=subprocess.PIPE,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        cwd=str(PROJECT_ROOT),
        env={
            **os.environ,
            "PYTHONPATH": str(PROJECT_ROOT),
            "MCP_TRANSPORT": "stdio",
        },
    )

    try:
        # Give the server 2 seconds to boot
        time.sleep(2)

        # ----------------------------------------------------------------
        # 1. initialize
        # ----------------------------------------------------------------
        resp = _call(
            proc,
            "initialize",
            {
                "protocolVersion": "2024-11-05",
                "capabilities": {},
                "clientInfo": {"name": "smoke-test", "version": "1.0"},
            },
            id=1,
        )
        if "protocolVersion" not in resp.get("result", {}):
            failures.append(f"initialize: missing protocolVersion — {resp}")
        else:
            print("✓  initialize — protocol negotiated")

        # Send initialized notification (required by the MCP handshake)
        proc.stdin.write(
            (json.dumps({"jsonrpc": "2.0", "method": "notifications/initialized"}) + "\n").encode()
        )
        proc.stdin.flush()

        # ----------------------------------------------------------------
        # 2. tools/list
        # ----------------------------------------------------------------
        resp = _call(proc, "tools/list", None, id=2)
        tools = resp.get("result", {}).get("tools", [])
        expected_tools = {
            "create_note",
            "get_camera_info",
            "send_message",
            "update_camera",
            "set_camera_mode",
        }
        missing = expected_tools - {t["name"] for t in tools}
        if missing:
            failures.append(f"tools/list: missing tools {missing}")
        else:
            print(f"✓  tools/list — {len(tools)} tools registered")

        # ----------------------------------------------------------------
        # 3. resources/list
        # ----------------------------------------------------------------
        resp = _call(proc, "resources/list", None, id=3)
        resources = resp.get("result", {}).get("resources", [])
        expected_uris = {
            "note:///1",
            "note:///2",
            "cameradata:///Reception",
            "cameradata:///ConferenceRoom1",
            "cameradata:///Inception",
            "cameradata:///Restspace",
            "cameradata:///Workspace",
        }
        missing_r = expected_uris - {r["uri"] for r in resources}
        if missing_r:
            failures.append(f"resources/list: missing {missing_r}")
        else:
            print(f"✓  resources/list — {len(resources)} resources registered")

        # ----------------------------------------------------------------
        # 4. prompts/list
        # ----------------------------------------------------------------
        resp = _call(proc, "prompts/list", None, id=4)
        prompts = resp.get("result", {}).get("prompts", [])
        missing_p = {"summarize_notes", "get_camera_info"} - {p["name"] for p in prompts}
        if missing_p:
            failures.append(f"prompts/list: missing {missing_p}")
        else:
            print(f"✓  prompts/list — {len(prompts)} prompts registered")

        # ----------------------------------------------------------------
        # 5. resources/read — camera preset
        # ----------------------------------------------------------------
        resp = _call(proc, "resources/read", {"uri": "cameradata:///Reception"}, id=5)
        contents = resp.get("result", {}).get("contents", [])
        text = contents[0].get("text", "") if contents else ""
        try:
            preset = json.loads(text)
        except ValueError:
            preset = {}
        if preset.get("Name") != "Reception" or "CameraData" not in preset:
            failures.append(f"resources/read: unexpected preset body — {text[:100]}")
        else:
            print("✓  resources/read cameradata:///Reception — preset returned")

        # ----------------------------------------------------------------
        # 6. tools/call — create_note, then read it back
        # ----------------------------------------------------------------
        resp = _call(
            proc,
            "tools/call",
            {"name": "create_note", "arguments": {"title": "Smoke", "content": "from smoke test"}},
            id=6,
        )
        content = resp.get("result", {}).get("content", [])
        text = content[0].get("text", "") if content else ""
        if not text.startswith("Created note 3"):
            failures.append(f"create_note: unexpected response — {text[:100]}")
        else:
            resp = _call(proc, "resources/read", {"uri": "note:///3"}, id=7)
            contents = resp.get("result", {}).get("contents", [])
            if not contents or contents[0].get("text") != "from smoke test":
                failures.append(f"note:///3: unexpected body — {resp}")
            else:
                print("✓  tools/call create_note — note 3 created and readable")

    except Exception as exc:
        failures.append(f"Unexpected error: {exc}")
    finally:
        proc.terminate()
        try:
            proc.wait(timeout=3)
        except subprocess.TimeoutExpired:
            proc.kill()

    # ----------------------------------------------------------------
    # Summary
    # ----------------------------------------------------------------
    print()
    if failures:
        print(f"❌  {len(failures)} smoke test(s) FAILED:")
        for f in failures:
            print(f"   • {f}")
        return 1
    print("✅  All smoke tests passed.")
    return 0


if __name__ == "__main__":
    sys.exit(run_smoke_tests())
