import functools
import gzip
import inspect
import logging
import logging.handlers
import os
import shutil
import sys
from gzip import GzipFile
from typing import Callable, ParamSpec, TypeVar

from .config import Settings, settings

logger = logging.getLogger("listenable")
logger.setLevel(getattr(logging, settings.log_level.upper(), logging.WARNING))
formatter = logging.Formatter(
    "%(asctime)s %(levelname)s [%(module)s:%(funcName)s:%(lineno)d] %(message)s"
)


def rotator(source, dest):
    with open(source, "rb") as f_in:
        with gzip.open(dest + ".gz", "wb") as f_out:
            assert isinstance(f_out, GzipFile)
            shutil.copyfileobj(f_in, f_out)
    os.remove(source)


def configure_handlers(
    target: logging.Logger, config: Settings
) -> list[logging.Handler]:
    """Attach the file and stdout handlers enabled in ``config`` to ``target``.

    Returns:
        The handlers that were added
    """
    handlers: list[logging.Handler] = []

    if config.log_file is not None:
        config.log_file.parent.mkdir(parents=True, exist_ok=True)
        log_file_handler = logging.handlers.TimedRotatingFileHandler(
            config.log_file, when="midnight"
        )
        log_file_handler.rotator = rotator
        handlers.append(log_file_handler)

    if config.log_to_stdout:
        handlers.append(logging.StreamHandler(sys.stdout))

    for handler in handlers:
        handler.setFormatter(formatter)
        target.addHandler(handler)
    return handlers


configure_handlers(logger, settings)

P = ParamSpec("P")
R = TypeVar("R")


def log_exception(
    prefix: str = "",
    default_return: R | None = None,
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """
    Decorator that keeps a listener from aborting a dispatch pass.

    Exceptions raised by the wrapped function are logged through the package
    logger and ``default_return`` is returned instead. Any ``{param}``
    placeholders in ``prefix`` are filled from the bound call arguments.

    Usage:
        @log_exception("tick listener for {event.type}")
        def on_tick(event):
            ...

        dispatcher.add_event_listener("tick", on_tick)
    """

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        sig = inspect.signature(func)
        func_name = func.__qualname__

        def bind_arguments(args: tuple, kwargs: dict) -> tuple[dict, str]:
            try:
                bound = sig.bind(*args, **kwargs)
                bound.apply_defaults()
            except TypeError as e:
                logger.warning(
                    f"Failed to bind arguments for listener {func_name}: {e}",
                    stacklevel=3,
                )
                return {}, f"[args={args!r}] " if args else ""
            params = ", ".join(f"{k}={v!r}" for k, v in bound.arguments.items())
            return bound.arguments, f"[{params}] " if params else ""

        def format_prefix(bound_args: dict) -> str:
            if not prefix:
                return ""
            if "{" in prefix and "}" in prefix:
                try:
                    return f"{prefix.format_map(bound_args)}: "
                except (KeyError, ValueError, AttributeError) as e:
                    logger.warning(
                        f"Failed to format prefix '{prefix}' with arguments: {e}",
                        stacklevel=3,
                    )
            return f"{prefix}: "

        @functools.wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            try:
                return func(*args, **kwargs)
            except Exception as e:
                bound_args, args_str = bind_arguments(args, kwargs)
                logger.error(
                    f"{args_str}{format_prefix(bound_args)}{type(e).__name__}: {e}",
                    exc_info=True,
                    stacklevel=2,
                )
                return default_return  # type: ignore[return-value]

        return wrapper  # type: ignore[return-value]

    return decorator
