"""
Backend startup script.

Usage:
    python run.py
    python run.py --reload
    python run.py --port 8080
"""

import uvicorn


def main() -> None:
    """Start the FastAPI application."""
    import argparse

    parser = argparse.ArgumentParser(description="Run the service starter backend")
    parser.add_argument("--host", default="0.0.0.0", help="Host to bind to")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind to")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload")

    args = parser.parse_args()

    uvicorn.run(
        "service_starter.api.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        loop="asyncio",
    )


if __name__ == "__main__":
    main()
