"""Command-line interface for word picker."""

import logging
from pathlib import Path

import click
from loguru import logger
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from word_picker import install_exception_hook
from word_picker.cache_manager import CacheManager
from word_picker.config import Settings, get_settings
from word_picker.dictionary_client import LookupFailed, LookupOutcome, WordsApiClient
from word_picker.session import WordSession
from word_picker.word_list import Category, WordListManager
from word_picker.word_selector import ROW_WIDTH, Exhausted, WordSelector

console = Console()

CATEGORY_CHOICE = click.Choice([category.value for category in Category], case_sensitive=False)

PLAY_HELP = "[n] next word  [d] define  [t] table  [c] switch category  [r] reset  [q] quit"


def configure_verbose_logging() -> None:
    """Configure verbose debug logging."""
    logger.remove()
    logger.add(
        lambda msg: console.print(msg, end="", markup=False, highlight=False),
        level="DEBUG",
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {message}",
    )
    console.print("[dim]Debug logging enabled[/dim]")


def configure_quiet_logging() -> None:
    """Configure quiet logging - suppress library logs and only show warnings/errors."""
    logger.remove()
    logger.add(lambda msg: None, level="WARNING")

    logging.getLogger("requests").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("requests_cache").setLevel(logging.WARNING)


def load_settings_or_abort() -> Settings:
    """Load settings from the environment / .env file or abort with a helpful message."""
    try:
        return get_settings()
    except ValidationError as e:
        console.print("[bold red]Error:[/bold red] Invalid configuration")
        console.print(f"\nDetails: {e}")
        raise click.Abort from e


def build_selector(
    category: str, primary_file: Path | None, intermediate_file: Path | None
) -> WordSelector:
    """Create a selector from the built-in or file-based word lists."""
    manager = WordListManager()
    try:
        word_lists = manager.build_word_lists(
            str(primary_file) if primary_file else None,
            str(intermediate_file) if intermediate_file else None,
        )
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] Failed to load word list: {e}")
        raise click.Abort from e

    return WordSelector(word_lists, category=Category(category.lower()))


def build_client_or_abort(settings: Settings) -> WordsApiClient:
    """Create the dictionary client, aborting if no API key is configured."""
    if not settings.words_api_key:
        console.print("[bold red]Error:[/bold red] Missing dictionary API key")
        console.print("\nPlease ensure your environment or .env file contains:")
        console.print("  WORDS_API_KEY=your-rapidapi-key-here\n")
        raise click.Abort

    cache = CacheManager(settings.cache_dir)
    return WordsApiClient(
        settings.words_api_key,
        cache.session,
        base_url=settings.words_api_base_url,
        host=settings.words_api_host,
        timeout=settings.lookup_timeout,
    )


def render_word_table(selector: WordSelector) -> Table:
    """Render the active word list with used words struck through."""
    table = Table(title=f"{selector.active_category.value.title()} words", show_header=False)
    for _ in range(ROW_WIDTH):
        table.add_column()

    for row in selector.list_with_usage_markers():
        table.add_row(
            *(
                f"[strike dim]{marker.word}[/strike dim]" if marker.used else marker.word
                for marker in row
            )
        )
    return table


def print_counts(selector: WordSelector) -> None:
    counts = selector.get_counts()
    console.print(f"[dim]Remaining: {counts.remaining} / Total: {counts.total}[/dim]")


def print_lookup(outcome: LookupOutcome) -> None:
    """Print definition and examples, or placeholders when there are none."""
    style = "red" if isinstance(outcome, LookupFailed) else "default"
    definition = escape(outcome.definition_text)
    console.print(f"[bold]Definition:[/bold] [{style}]{definition}[/{style}]")
    console.print("[bold]Examples:[/bold]")
    for line in outcome.example_lines:
        console.print(f"  • [{style}]{escape(line)}[/{style}]")


def word_list_options(func):
    func = click.option(
        "--intermediate-file",
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        help="Replace the built-in intermediate word list (one word per line)",
    )(func)
    func = click.option(
        "--primary-file",
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        help="Replace the built-in primary word list (one word per line)",
    )(func)
    func = click.option(
        "--category",
        "-c",
        type=CATEGORY_CHOICE,
        default=Category.PRIMARY.value,
        show_default=True,
        help="Word category to draw from",
    )(func)
    return func


def verbose_option(func):
    return click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")(func)


def setup_logging(verbose: bool) -> None:
    if verbose:
        configure_verbose_logging()
    else:
        configure_quiet_logging()


@click.group()
def cli() -> None:
    """Pick random practice words and look up their meaning."""
    install_exception_hook()


@cli.command()
@word_list_options
@click.option("--count", "-n", default=1, show_default=True, type=click.IntRange(min=1))
@click.option("--define", "-d", is_flag=True, help="Look up each word's definition and examples")
@verbose_option
def pick(
    category: str,
    primary_file: Path | None,
    intermediate_file: Path | None,
    count: int,
    define: bool,
    verbose: bool,
) -> None:
    """Draw COUNT words without repeats from a category."""
    setup_logging(verbose)
    selector = build_selector(category, primary_file, intermediate_file)
    client = build_client_or_abort(load_settings_or_abort()) if define else None

    with WordSession(selector, client) as session:
        for _ in range(count):
            result = session.generate_word()
            if isinstance(result, Exhausted):
                console.print(f"[yellow]{result.message}[/yellow]")
                break

            console.print(f"[bold cyan]{result}[/bold cyan]")
            if define:
                outcome = session.lookup_now()
                if outcome is not None:
                    print_lookup(outcome)
                console.print()

    print_counts(selector)


@cli.command()
@word_list_options
def table(category: str, primary_file: Path | None, intermediate_file: Path | None) -> None:
    """Show every word in a category."""
    configure_quiet_logging()
    selector = build_selector(category, primary_file, intermediate_file)
    console.print(render_word_table(selector))
    print_counts(selector)


@cli.command()
@word_list_options
@verbose_option
def play(
    category: str, primary_file: Path | None, intermediate_file: Path | None, verbose: bool
) -> None:
    """Interactive session: draw words one at a time and look them up."""
    setup_logging(verbose)
    settings = load_settings_or_abort()
    selector = build_selector(category, primary_file, intermediate_file)
    client = build_client_or_abort(settings) if settings.words_api_key else None

    selector.subscribe(print_counts)
    console.print(PLAY_HELP, markup=False)

    with WordSession(selector, client) as session:
        while True:
            action = click.prompt(">", default="n", show_default=False).strip().lower()

            if action == "q":
                break
            elif action == "n":
                result = session.generate_word()
                if isinstance(result, Exhausted):
                    console.print(f"[yellow]{result.message}[/yellow]")
                else:
                    console.print(f"[bold cyan]{result}[/bold cyan]")

            elif action == "d":
                if client is None:
                    console.print("[yellow]Set WORDS_API_KEY to enable definitions.[/yellow]")
                    continue
                future = session.request_lookup(print_lookup)
                if future is None:
                    console.print("[yellow]Generate a word first.[/yellow]")
                else:
                    future.result()

            elif action == "t":
                console.print(render_word_table(selector))
                print_counts(selector)

            elif action == "c":
                choice = click.prompt("Category", type=CATEGORY_CHOICE)
                selector.select_category(Category(choice.lower()))

            elif action == "r":
                selector.reset()

            else:
                console.print(PLAY_HELP, markup=False)

    selector.unsubscribe(print_counts)


@cli.command("bust-cache")
@click.argument("word", required=False)
@click.option("--all", "clear_all", is_flag=True, help="Clear every cached lookup")
def bust_cache(word: str | None, clear_all: bool) -> None:
    """Remove cached dictionary lookups for WORD."""
    configure_quiet_logging()
    settings = load_settings_or_abort()

    if not word and not clear_all:
        console.print("[bold red]Error:[/bold red] Provide a WORD or --all")
        raise click.Abort

    cache = CacheManager(settings.cache_dir)
    if clear_all:
        cache.clear_all_cache()
        console.print("[green]Cleared all cached lookups[/green]")
        return

    deleted = cache.bust_word_cache(word)
    console.print(f"Deleted [green]{deleted}[/green] cache entries for '{word}'")


if __name__ == "__main__":
    cli()
