"""CLI exception handling."""

from __future__ import annotations

import traceback
from collections.abc import Callable
from functools import wraps
from typing import TypeVar

import typer
from pydantic import ValidationError as PydanticValidationError
from rich.console import Console
from rich.panel import Panel

from aqdef.errors import (
    AqdefValidityError,
    ConfigurationError,
    DfqParserError,
    DfqWriterError,
    KKeyProviderError,
)

T = TypeVar("T")

console = Console(stderr=True)


def handle_exceptions(
    verbose: bool = False,
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Turn exceptions raised by CLI commands into formatted panels.

    Every handled exception ends the command with exit code 1.

    Args:
    ----
        verbose: Whether to show full tracebacks.

    Returns:
    -------
        Decorator function.

    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args: object, **kwargs: object) -> T:
            try:
                return func(*args, **kwargs)
            except DfqParserError as e:
                _handle_parser_error(e, verbose)
                raise typer.Exit(1) from None
            except AqdefValidityError as e:
                _handle_error_panel("Invalid AQDEF Structure", str(e))
                raise typer.Exit(1) from None
            except DfqWriterError as e:
                _handle_error_panel("Write Failed", str(e))
                raise typer.Exit(1) from None
            except (ConfigurationError, KKeyProviderError) as e:
                if isinstance(e.__cause__, PydanticValidationError):
                    _handle_pydantic_error(_source_of(e), e.__cause__, verbose)
                else:
                    _handle_error_panel("Configuration Error", str(e))
                raise typer.Exit(1) from None
            except FileNotFoundError as e:
                _handle_file_error(e, verbose)
                raise typer.Exit(1) from None
            except PermissionError as e:
                _handle_permission_error(e, verbose)
                raise typer.Exit(1) from None
            except Exception as e:
                _handle_generic_error(e, verbose)
                raise typer.Exit(1) from None

        return wrapper

    return decorator


def _handle_parser_error(error: DfqParserError, verbose: bool) -> None:
    """Handle DFQ parse failures."""
    cause = error.__cause__ if error.__cause__ is not None else error
    location = f"line {error.line_number}" if error.line_number is not None else "unknown line"
    console.print(
        Panel(
            f"[red]Failed to parse DFQ file at {location}[/red]\n\n{cause}",
            title="Parse Error",
            border_style="red",
        )
    )

    if verbose:
        console.print("\n[dim]Traceback:[/dim]")
        console.print(traceback.format_exc())


def _handle_error_panel(title: str, message: str) -> None:
    console.print(Panel(f"[red]{message}[/red]", title=title, border_style="red"))


def _source_of(error: ConfigurationError | KKeyProviderError) -> str:
    if isinstance(error, ConfigurationError):
        return str(error.path) if error.path is not None else "(unknown)"
    return error.source or "(unknown)"


def _handle_pydantic_error(source: str, error: PydanticValidationError, verbose: bool) -> None:
    """Handle configuration files that fail validation."""
    console.print(f"[red bold]Configuration Validation Failed:[/red bold] {source}")
    console.print()

    for err in error.errors():
        location = ".".join(str(part) for part in err["loc"]) or "(root)"
        console.print(f"[red]✗[/red] {location}")
        console.print(f"  {err['msg']}")
        console.print(f"  [dim]({err['type']})[/dim]")
        console.print()

    if verbose:
        console.print("[dim]Full error:[/dim]")
        console.print(str(error))


def _handle_file_error(error: FileNotFoundError, verbose: bool) -> None:
    """Handle file not found errors."""
    filename = error.filename or "unknown"
    console.print(
        Panel(
            f"[red]File not found: {filename}[/red]\n\n"
            "Please check that the file path is correct.",
            title="Error",
            border_style="red",
        )
    )


def _handle_permission_error(error: PermissionError, verbose: bool) -> None:
    """Handle permission errors."""
    filename = error.filename or "unknown"
    console.print(
        Panel(
            f"[red]Permission denied: {filename}[/red]\n\nCheck file permissions and try again.",
            title="Error",
            border_style="red",
        )
    )


def _handle_generic_error(error: Exception, verbose: bool) -> None:
    """Handle unexpected errors."""
    console.print(
        Panel(
            f"[red]An unexpected error occurred:[/red]\n{error}",
            title="Error",
            border_style="red",
        )
    )

    if verbose:
        console.print("\n[dim]Traceback:[/dim]")
        console.print(traceback.format_exc())
    else:
        console.print("\n[dim]Use --verbose for full traceback[/dim]")
