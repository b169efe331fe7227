"""Main entry point for the alumlink application.

Sets up the Typer CLI application, performs dependency injection (Composition Root),
defines CLI commands, and delegates execution to the CommandHandler.
"""

import asyncio
import logging
import sys
from typing import Annotated, Any, Coroutine, Dict, List, Optional

import typer

logger = logging.getLogger(__name__)

# --- Core Layer ---
from alumlink.core.api_facade import ApiFacade
from alumlink.core.command_handler import CommandHandler
from alumlink.core.services.alumni_profile_service import AlumniProfileService

# --- Domain Layer ---
from alumlink.domain.models.mode import ClientMode

# --- Infrastructure Layer ---
# Config
from alumlink.infrastructure.config.settings import (
    get_api_url,
    get_config,
    get_request_timeout,
    get_session_file,
    is_backend_available,
    is_local_identity_mode,
    load_configuration,
    use_real_api,
)
# UI
from alumlink.infrastructure.cli.display import ConsoleDisplay
# Auth & HTTP
from alumlink.infrastructure.auth.session_storage import FileSessionStorage, load_mode_preference
from alumlink.infrastructure.auth.token_provider import AuthTokenProvider, ClientRuntime, StoredSessionToken
from alumlink.infrastructure.http.api_client import ApiClient
# Cache & Resilience
from alumlink.infrastructure.cache.caching_service import ResponseCache
from alumlink.infrastructure.resilience.api_retry import ResilienceController
# Domain services
from alumlink.infrastructure.services.http_services import RealBackend
from alumlink.infrastructure.services.substitute import SubstituteBackend, SubstituteConfig
# Monitoring
from alumlink.infrastructure.monitoring.logger_setup import level_from_name, setup_logging

# --- Dependency Injection Container (Manual) ---

def create_dependencies(use_real_override: Optional[bool] = None) -> Dict[str, Any]:
    """Creates and wires up all dependencies for the application.

    This acts as the Composition Root.

    Args:
        use_real_override: Command-line override of the saved or configured
            API mode.
    """
    dependencies: Dict[str, Any] = {}
    try:
        # 1. Load Configuration First
        load_configuration()
        setup_logging(
            log_level=level_from_name(get_config('logging.level')),
            log_file=get_config('logging.file'),
            log_format=get_config('logging.format', '%(asctime)s - %(name)s - %(levelname)s - %(message)s'),
        )
        logger.info("Configuration and logging initialized.")

        # 2. Instantiate Infrastructure Adapters
        dependencies['ui'] = ConsoleDisplay()
        storage = FileSessionStorage(get_session_file())
        runtime = ClientRuntime(storage=storage, identity_session=StoredSessionToken(storage))
        dependencies['token_provider'] = AuthTokenProvider(runtime, local_identity_mode=is_local_identity_mode())
        dependencies['api_client'] = ApiClient(
            get_api_url(),
            dependencies['token_provider'],
            timeout=get_request_timeout(),
        )
        max_items = get_config('cache.max_items')
        dependencies['cache_service'] = ResponseCache(max_items=int(max_items) if max_items else None)

        # 3. Mode and Facade
        configured_use_real = use_real_override
        if configured_use_real is None:
            configured_use_real = load_mode_preference(storage)
        if configured_use_real is None:
            configured_use_real = use_real_api()
        mode = ClientMode(use_real=configured_use_real, backend_available=is_backend_available())
        substitute_config = SubstituteConfig(
            min_delay_ms=int(get_config('substitute.min_delay_ms', 0)),
            max_delay_ms=int(get_config('substitute.max_delay_ms', 0)),
            error_rate=float(get_config('substitute.error_rate', 0.0)),
        )
        dependencies['facade'] = ApiFacade(
            mode=mode,
            api_client=dependencies['api_client'],
            real=RealBackend.create(dependencies['api_client']),
            substitute=SubstituteBackend.create(substitute_config),
            configured_use_real=configured_use_real,
        )

        # 4. Resilience and Core Services
        dependencies['controller'] = ResilienceController(
            cache_service=dependencies['cache_service'],
            mode_controller=dependencies['facade'],
        )
        dependencies['profile_service'] = AlumniProfileService(dependencies['facade'], dependencies['controller'])

        # 5. Instantiate Command Handler
        dependencies['command_handler'] = CommandHandler(
            facade=dependencies['facade'],
            controller=dependencies['controller'],
            profile_service=dependencies['profile_service'],
            cache_service=dependencies['cache_service'],
            ui=dependencies['ui'],
            session_storage=storage,
        )
        logger.info("All dependencies initialized successfully.")
        return dependencies

    except Exception as e:
        logger.error(f"Fatal Error during application initialization: {e}", exc_info=True)
        if dependencies.get('ui'):
            dependencies['ui'].display_error(f"Application Initialization Failed: {e}")
        else:
            print(f"FATAL ERROR during initialization: {e}", file=sys.stderr)
        sys.exit(1)

# --- Typer App Definition ---
app = typer.Typer(
    name="alumlink",
    help="alumlink: resilient client for the alumni platform API, with a built-in substitute backend.",
    add_completion=False,
)

# --- Helpers for Running Async Commands ---

async def _run_and_close(dependencies: Dict[str, Any], coro: Coroutine[Any, Any, None]) -> None:
    try:
        await coro
    finally:
        await dependencies['api_client'].aclose()


def run_async(dependencies: Dict[str, Any], coro: Coroutine[Any, Any, None]) -> None:
    """Runs an async handler from a sync Typer command, then closes the client."""
    try:
        asyncio.run(_run_and_close(dependencies, coro))
    except Exception as e:
        logger.error(f"Error executing async command: {e}", exc_info=True)
        dependencies['ui'].display_error(f"Command execution failed: {e}")


def _dependencies(ctx: typer.Context) -> Dict[str, Any]:
    use_real = (ctx.obj or {}).get('use_real')
    return create_dependencies(use_real_override=use_real)


def parse_params(values: List[str]) -> Dict[str, str]:
    """Parses repeated 'key=value' options into a dict."""
    params: Dict[str, str] = {}
    for item in values:
        key, sep, value = item.partition('=')
        if not sep or not key:
            raise typer.BadParameter(f"Expected key=value, got '{item}'")
        params[key] = value
    return params

# --- CLI Commands ---

@app.command()
def status(ctx: typer.Context):
    """Initialize the client and show the active API mode."""
    deps = _dependencies(ctx)
    handler: CommandHandler = deps['command_handler']
    run_async(deps, handler.handle_status())

@app.command()
def health(ctx: typer.Context):
    """Probe the backend health endpoint."""
    deps = _dependencies(ctx)
    handler: CommandHandler = deps['command_handler']
    run_async(deps, handler.handle_health())

@app.command(name="use-real")
def use_real(ctx: typer.Context):
    """Switch to the real API if the backend is healthy, and remember it."""
    deps = _dependencies(ctx)
    handler: CommandHandler = deps['command_handler']
    run_async(deps, handler.handle_use_real())

@app.command(name="use-mock")
def use_mock(ctx: typer.Context):
    """Switch to the in-memory substitute backend, and remember it."""
    deps = _dependencies(ctx)
    handler: CommandHandler = deps['command_handler']
    run_async(deps, handler.handle_use_mock())

@app.command()
def get(
    ctx: typer.Context,
    endpoint: Annotated[str, typer.Argument(help="Endpoint below /api, e.g. '/alumni'.")],
    param: Annotated[List[str], typer.Option("--param", "-p", help="Query parameter as key=value. Repeatable.")] = [],
):
    """Send a raw GET request to the backend."""
    params = parse_params(param)
    deps = _dependencies(ctx)
    handler: CommandHandler = deps['command_handler']
    run_async(deps, handler.handle_get(endpoint, params or None))

@app.command()
def alumni(
    ctx: typer.Context,
    search: Annotated[Optional[str], typer.Option("--search", "-s", help="Free-text search.")] = None,
    limit: Annotated[int, typer.Option("--limit", "-l", min=1, help="Page size.")] = 10,
):
    """List or search alumni."""
    deps = _dependencies(ctx)
    handler: CommandHandler = deps['command_handler']
    run_async(deps, handler.handle_alumni(search=search, limit=limit))

@app.command()
def profile(
    ctx: typer.Context,
    profile_id: Annotated[str, typer.Argument(help="Alumni profile id.")],
):
    """Show one alumni profile."""
    deps = _dependencies(ctx)
    handler: CommandHandler = deps['command_handler']
    run_async(deps, handler.handle_profile(profile_id))

@app.command(name="clear-cache")
def clear_cache_command(ctx: typer.Context):
    """Clears the response cache."""
    deps = _dependencies(ctx)
    handler: CommandHandler = deps['command_handler']
    run_async(deps, handler.handle_clear_cache())

@app.callback()
def main_callback(
    ctx: typer.Context,
    real: Annotated[
        Optional[bool],
        typer.Option("--real/--mock", help="Override the saved or configured API mode for this invocation.")
    ] = None,
):
    """Resilient client for the alumni platform API."""
    ctx.obj = {'use_real': real}

# --- Main Execution Guard ---

def cli_entry_point():
    """Function to be called by the script entry point in pyproject.toml."""
    app()

if __name__ == "__main__":
    cli_entry_point()
