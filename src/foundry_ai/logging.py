"""Rich-based logging configuration for FoundryAI.

Colored console output for local development, plain text everywhere else:
- Color-coded log levels
- Component prefixes with distinct colors (ASSISTANT, TOOL, GUARD, ...)
- Auto-detection of TTY so containers get parseable lines
"""

from __future__ import annotations

import logging
import os
import sys

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

FOUNDRY_THEME = Theme({
    "logging.level.debug": "blue",
    "logging.level.info": "green",
    "logging.level.warning": "yellow",
    "logging.level.error": "red bold",
    "logging.level.critical": "red bold reverse",
})

# Component color mapping for log prefixes
COMPONENT_STYLES = {
    "API": "blue bold",
    "ASSISTANT": "yellow bold",
    "TOOL": "cyan",
    "PLAN": "magenta bold",
    "STORE": "green",
    "GUARD": "red bold",
}


def is_tty() -> bool:
    """Check if stdout is a TTY (interactive terminal)."""
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def should_use_rich() -> bool:
    """Determine if Rich logging should be used.

    Returns True if:
    - FOUNDRY_RICH_LOGS=1 is set (force enable)
    - Running in a TTY and FOUNDRY_RICH_LOGS is not explicitly disabled
    """
    env_value = os.environ.get("FOUNDRY_RICH_LOGS", "").lower()

    if env_value in ("1", "true", "yes"):
        return True
    if env_value in ("0", "false", "no"):
        return False

    return is_tty()


def configure_logging(
    level: int | str = logging.INFO,
    force_rich: bool | None = None,
) -> None:
    """Configure logging with Rich console handler.

    Args:
        level: Logging level, as an int or a name like "DEBUG" (default: INFO)
        force_rich: Override auto-detection. None = auto-detect.
    """
    use_rich = force_rich if force_rich is not None else should_use_rich()

    root = logging.getLogger()
    root.handlers.clear()

    if use_rich:
        console = Console(theme=FOUNDRY_THEME, force_terminal=True)

        handler = RichHandler(
            console=console,
            show_time=True,
            show_level=True,
            show_path=False,
            rich_tracebacks=True,
            markup=True,
            log_time_format="[%Y-%m-%d %H:%M:%S]",
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )

    root.addHandler(handler)
    root.setLevel(level.upper() if isinstance(level, str) else level)

    # Silence noisy loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("hpack").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the given name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)


def format_component(component: str) -> str:
    """Format a component name with Rich markup.

    Usage in log messages:
        logger.info(f"{format_component('TOOL')} create_task ok")

    Args:
        component: Component name (API, ASSISTANT, TOOL, ...)

    Returns:
        Rich-formatted component string
    """
    style = COMPONENT_STYLES.get(component.upper(), "white")
    return f"[{style}][{component}][/{style}]"
