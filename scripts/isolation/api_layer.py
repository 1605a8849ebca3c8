#!/usr/bin/env python3
"""Script to run the echo-service API locally for testing and development."""

import argparse
import os
import sys
from pathlib import Path

import uvicorn
from dotenv import load_dotenv

# Add the project root to the Python path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

# Load .env file from project root
env_file = project_root / ".env"
if env_file.exists():
    load_dotenv(env_file)

# Set default environment variables for echo-service
os.environ.setdefault("SERVICE_NAME", "echo-service")
os.environ.setdefault("LOGGING_LEVEL", "INFO")
os.environ.setdefault("LOG_FORMAT", "json")
os.environ.setdefault("STREAM", "stdout")
os.environ.setdefault("CONTEXT", "development")
os.environ.setdefault("ENVIRONMENT", "development")


def main():
    """Main entry point for the API runner."""
    parser = argparse.ArgumentParser(description="Run the Echo Service API locally.")
    parser.add_argument("--host", type=str, default="0.0.0.0", help="Host to run the service on (default: 0.0.0.0)")
    parser.add_argument("--port", type=int, default=8000, help="Port to run the service on (default: 8000)")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload for development")
    parser.add_argument(
        "--log-level",
        type=str,
        default="info",
        choices=["debug", "info", "warning", "error"],
        help="Logging level (default: info)",
    )
    parser.add_argument(
        "--api-prefix",
        type=str,
        default=None,
        help="Path prefix for the chat route, e.g. /api/chat (default: API_PREFIX env var or /)",
    )

    args = parser.parse_args()

    os.environ["LOGGING_LEVEL"] = args.log_level.upper()
    if args.api_prefix is not None:
        os.environ["API_PREFIX"] = args.api_prefix

    prefix = os.environ.get("API_PREFIX", "").rstrip("/")

    print(f"\n{'=' * 60}")
    print(f"Starting Echo Service API on {args.host}:{args.port}")
    print(f"{'=' * 60}")
    print(f"Environment: {os.environ.get('ENVIRONMENT', 'development')}")
    print(f"Logging level: {os.environ.get('LOGGING_LEVEL', 'INFO')}")
    print(f"\n{'=' * 60}")
    print("Endpoints:")
    print(f"  API Documentation: http://localhost:{args.port}/docs")
    print(f"  Health check: http://localhost:{args.port}{prefix}/health")
    print(f"  Send message: http://localhost:{args.port}{prefix or '/'}")
    print(f"\n{'=' * 60}")
    print("Example usage:")
    print(f'  curl -X POST "http://localhost:{args.port}{prefix or "/"}" \\')
    print('    -H "Content-Type: application/json" \\')
    print('    -d \'{"message": "Hello!"}\'')
    print(f"{'=' * 60}\n")

    # Run the FastAPI application
    uvicorn.run(
        "echo_service.server.main:get_app",
        factory=True,
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=args.log_level,
    )


if __name__ == "__main__":
    main()
