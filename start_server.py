#!/usr/bin/env python3
"""Start the ledger API under uvicorn, honouring the PORT environment variable."""

import os
import subprocess
import sys


def _port() -> int:
    raw = os.environ.get("PORT", "8000")
    try:
        return int(raw)
    except ValueError:
        print(f"Warning: Invalid PORT value '{raw}', using default 8000", file=sys.stderr)
        return 8000


def main() -> int:
    src_path = os.path.abspath("src")
    if not os.path.isdir(src_path):
        print(f"Warning: src directory not found at {src_path}", file=sys.stderr)
        src_path = os.getcwd()

    existing = os.environ.get("PYTHONPATH", "")
    os.environ["PYTHONPATH"] = f"{src_path}{os.pathsep}{existing}" if existing else src_path

    port = _port()
    cmd = [
        sys.executable,
        "-m",
        "uvicorn",
        "courier_ledger.main:app",
        "--host",
        "0.0.0.0",
        "--port",
        str(port),
        "--proxy-headers",
        "--forwarded-allow-ips",
        "*",
    ]

    print(f"Starting ledger API on port {port}...", file=sys.stderr)
    print(f"PYTHONPATH={os.environ['PYTHONPATH']}", file=sys.stderr)
    try:
        return subprocess.call(cmd)
    except KeyboardInterrupt:
        print("Server interrupted by user", file=sys.stderr)
        return 0


if __name__ == "__main__":
    sys.exit(main())
