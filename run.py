import argparse
import uvicorn
from forumflow.core.config import settings

def main():
    parser = argparse.ArgumentParser(description="Run the ForumFlow API server")
    parser.add_argument(
        "--host",
        default=settings.HOST,
        help=f"Host to run the server on (default: {settings.HOST})"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=settings.PORT,
        help=f"Port to run the server on (default: {settings.PORT})"
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload on code changes (default: based on DEBUG setting)"
    )
    parser.add_argument(
        "--grace",
        type=int,
        default=settings.SHUTDOWN_GRACE_SECONDS,
        help="Seconds to let in-flight requests finish after SIGTERM"
    )

    args = parser.parse_args()

    use_reload = args.reload or settings.DEBUG

    if settings.DEBUG:
        print(f"Starting ForumFlow API in {settings.ENVIRONMENT} mode")
        print(f"Auto-reload: {'enabled' if use_reload else 'disabled'}")
        print(f"Server running at http://{args.host}:{args.port}")
        print(f"  - Swagger UI: http://{args.host}:{args.port}/docs")

    try:
        # uvicorn stops accepting connections on SIGTERM, waits for in-flight
        # requests up to the grace period, then runs the lifespan shutdown
        uvicorn.run(
            "forumflow.main:app",
            host=args.host,
            port=args.port,
            reload=use_reload,
            timeout_graceful_shutdown=args.grace,
        )
    except Exception as e:
        print(f"Error starting server: {e}")
        raise

if __name__ == "__main__":
    main()
