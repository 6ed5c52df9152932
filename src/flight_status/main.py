"""Flight status service entry point.

``create_app`` builds the FastAPI surface, ``run_service`` bootstraps the
process and serves until a shutdown signal, and ``main`` is the console
script.
"""

from __future__ import annotations

import asyncio
import logging
import sys

from fastapi import APIRouter, FastAPI
from prometheus_client import make_asgi_app

from flight_status.api import health_router
from flight_status.core.exceptions import BootstrapError
from flight_status.core.logging_config import setup_logging
from flight_status.middleware import DateRevivingMiddleware
from flight_status.startup.config_schema import ServiceSettings
from flight_status.startup.error_catalog import error_catalog
from flight_status.startup.orchestrator import BootstrapOrchestrator, build_orchestrator
from flight_status.version import get_version

logger = logging.getLogger(__name__)


def create_app(
    settings: ServiceSettings | None = None,
    *,
    api_router: APIRouter | None = None,
) -> FastAPI:
    """Create the FastAPI application.

    Args:
        settings: Process settings (read from the environment when omitted)
        api_router: Domain routes mounted under ``/api``
    """
    settings = settings or ServiceSettings()
    app = FastAPI(
        title="Flight Status Service",
        version=get_version(),
        docs_url=None,
        redoc_url=None,
    )

    app.add_middleware(
        DateRevivingMiddleware, max_request_size=settings.max_request_size
    )

    app.include_router(health_router)
    app.include_router(api_router or APIRouter(), prefix="/api")
    app.mount("/metrics", make_asgi_app())

    return app


async def bootstrap(settings: ServiceSettings, app: FastAPI) -> BootstrapOrchestrator:
    """Run the bootstrap sequence for ``app``.

    The orchestrator is attached to ``app.state.bootstrap`` before it runs so
    route handlers can reach the shared connections.
    """
    orchestrator = build_orchestrator(settings, app)
    app.state.bootstrap = orchestrator
    await orchestrator.run()
    return orchestrator


async def run_service(
    settings: ServiceSettings, *, api_router: APIRouter | None = None
) -> None:
    """Bootstrap, serve until the listener exits, then release resources."""
    app = create_app(settings, api_router=api_router)
    orchestrator: BootstrapOrchestrator | None = None
    try:
        orchestrator = await bootstrap(settings, app)
        await orchestrator.serve_forever()
    finally:
        orchestrator = orchestrator or getattr(app.state, "bootstrap", None)
        if orchestrator is not None:
            await orchestrator.shutdown()


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    import argparse  # noqa: PLC0415 - Main function import

    parser = argparse.ArgumentParser(description="Flight status service")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Override LOG_LEVEL",
    )
    args = parser.parse_args(argv)

    settings, errors = ServiceSettings.validate_from_env()
    if errors or settings is None:
        print("❌ Invalid settings:")  # noqa: T201
        for error in errors:
            print(f"  • {error}")  # noqa: T201
        return 1

    setup_logging(args.log_level or settings.log_level.value, debug=settings.debug)
    logger.info("Starting with %s", settings.get_startup_summary())

    try:
        asyncio.run(run_service(settings))
    except KeyboardInterrupt:
        print("\n❌ Shutdown requested")  # noqa: T201
        return 130
    except BootstrapError as e:
        logger.error("Bootstrap failed: %s", e)  # noqa: TRY400
        context = {key: str(value) for key, value in e.details.items()}
        print("\n" + error_catalog.format_error_help(e.code, context))  # noqa: T201
        return 1
    except Exception as e:
        logger.exception("Unexpected error during startup")
        code = error_catalog.suggest_error_code(str(e))
        if code:
            print("\n" + error_catalog.format_error_help(code))  # noqa: T201
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
