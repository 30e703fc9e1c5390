#!/usr/bin/env python3
"""
Development startup script.

Starts the mock storefront backend so the cart client can be exercised
against it locally.
"""

import os
import sys
import shutil
import subprocess
from pathlib import Path

from dotenv import load_dotenv

# Project root
PROJECT_ROOT = Path(__file__).parent.parent


def check_dependencies():
    """Check if required dependencies are installed."""
    try:
        import fastapi
        import uvicorn
        import httpx
        import pydantic_settings
        print("✓ All core dependencies installed")
        return True
    except ImportError as e:
        print(f"✗ Missing dependency: {e.name}")
        print("\nRun: pip install -e .[test]")
        return False


def check_env():
    """Check if .env file exists."""
    env_file = PROJECT_ROOT / ".env"
    env_example = PROJECT_ROOT / ".env.example"

    if env_file.exists():
        print("✓ Configuration file found")
        return True
    elif env_example.exists():
        print("! Configuration file not found, copying from example...")
        shutil.copy(env_example, env_file)
        print("✓ Created .env from example")
        return True
    else:
        print("✗ No configuration file found")
        return False


def start_backend():
    """Run the mock backend in the foreground with auto-reload."""
    load_dotenv(PROJECT_ROOT / ".env")
    host = os.getenv("MOCK_BACKEND_HOST", "0.0.0.0")
    port = os.getenv("MOCK_BACKEND_PORT", "5000")

    print(f"\n🏪 Starting mock storefront backend on http://localhost:{port} ...")
    print(f"📍 Cart API:  http://localhost:{port}/api/cart")
    print(f"📍 API docs:  http://localhost:{port}/docs")
    print("\nAny bearer token is accepted and used as the user id.")
    print("Press Ctrl+C to stop")

    process = subprocess.Popen(
        [
            sys.executable, "-m", "uvicorn",
            "mock_backend.main:app",
            "--reload",
            "--host", host,
            "--port", port,
        ],
        cwd=PROJECT_ROOT,
    )

    try:
        process.wait()
    except KeyboardInterrupt:
        print("\n\nShutting down...")
        process.terminate()
        process.wait()
        print("Backend stopped.")


def main():
    print("=" * 60)
    print("Storefront Cart - Development Server")
    print("=" * 60)

    print("\nRunning pre-flight checks...")

    if not check_dependencies():
        sys.exit(1)

    if not check_env():
        sys.exit(1)

    print("\n✓ All checks passed!")
    start_backend()


if __name__ == "__main__":
    main()
