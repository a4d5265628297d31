#!/usr/bin/env python
"""
Run the Cargo Pricing API under uvicorn.

Usage:
    python scripts/run_api.py

Environment:
    CARGO_PRICING_HOST (default 0.0.0.0), CARGO_PRICING_PORT (default 8000),
    CARGO_PRICING_RELOAD=1 to restart on code changes.
"""
import os
import subprocess
import sys
from pathlib import Path


def main():
    project_root = Path(__file__).parent.parent

    env = os.environ.copy()
    src_path = str(project_root / "src")
    if "PYTHONPATH" in env:
        env["PYTHONPATH"] = f"{src_path}{os.pathsep}{env['PYTHONPATH']}"
    else:
        env["PYTHONPATH"] = src_path

    cmd = [
        sys.executable, "-m", "uvicorn",
        "cargo_pricing.api.main:app",
        "--host", env.get("CARGO_PRICING_HOST", "0.0.0.0"),
        "--port", env.get("CARGO_PRICING_PORT", "8000"),
    ]
    if env.get("CARGO_PRICING_RELOAD") == "1":
        cmd.append("--reload")

    print(f"Starting Cargo Pricing API: {' '.join(cmd)}")
    try:
        subprocess.run(cmd, env=env, cwd=str(project_root))
    except KeyboardInterrupt:
        print("\nAPI stopped.")


if __name__ == "__main__":
    main()
