import asyncio
import functools
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from config.manager import ConfigKeys, ConfigurationManager
from core.contracts.models import CommitContextResult, ContextOptions
from core.options import resolve_options
from core.pipeline import get_commit_context
from core.prompts import build_commit_prompt
from utils.errors import CommitContextException
from utils.git import find_repo_root
from utils.logger import logger, setup_logger

err_console = Console(stderr=True)


def context_options(func):
    """Options shared by every command that builds a commit context."""
    decorators = [
        click.option("--repo", "repo_path", type=click.Path(file_okay=False), default=".",
                     help="Any directory inside the repository."),
        click.option("-c", "--config", "config_path", type=click.Path(exists=True, dir_okay=False),
                     help="Path to a custom config file."),
        click.option("--staged/--unstaged", "prefer_staged", default=None,
                     help="Describe staged changes (default) or the working tree."),
        click.option("--no-fallback", is_flag=True, default=False,
                     help="Do not fall back to unstaged changes when nothing is staged."),
        click.option("--repo-context/--no-repo-context", "include_repo_context", default=None,
                     help="Include the branch name and recent commits."),
        click.option("--exclude-lockfiles/--include-lockfiles", "exclude_lockfiles", default=None,
                     help="Leave dependency lockfiles out of the diff."),
        click.option("--max-diff-chars", type=click.IntRange(min=0), default=None,
                     help="Truncate the diff after this many characters (0 = no limit)."),
        click.option("-m", "--message", "additional_context", default=None,
                     help="Additional context to include before the diff."),
    ]
    for decorator in reversed(decorators):
        func = decorator(func)
    return func


def build_options(
    prefer_staged: Optional[bool],
    no_fallback: bool,
    include_repo_context: Optional[bool],
    exclude_lockfiles: Optional[bool],
    max_diff_chars: Optional[int],
    additional_context: Optional[str],
) -> ContextOptions:
    """Turns CLI flags into context options. Flags not given stay unset."""
    return ContextOptions(
        prefer_staged=prefer_staged,
        allow_unstaged_fallback=False if no_fallback else None,
        include_repo_context=include_repo_context,
        exclude_lockfiles=exclude_lockfiles,
        max_diff_chars=max_diff_chars,
        additional_context=additional_context,
    )


async def run_context(repo_path: str, config_path: Optional[str], options: ContextOptions) -> CommitContextResult:
    """
    Locates the repository, loads its configuration and builds the context.
    """
    repo_root = await find_repo_root(repo_path)
    manager = ConfigurationManager.get_instance()
    manager.load(custom_config_path=config_path, start_dir=str(repo_root))
    return await get_commit_context(repo_root, options, config=manager)


def handle_errors(func):
    """Reports known errors on stderr and exits with status 1."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        ctx = click.get_current_context()
        verbose = (ctx.obj or {}).get("verbose", False)
        try:
            return func(*args, **kwargs)
        except CommitContextException as e:
            logger.opt(exception=verbose).error(f"{type(e).__name__}: {e}")
            err_console.print(f"[bold red]Error:[/bold red] {e}")
            ctx.exit(1)
    return wrapper


@click.group(invoke_without_command=True)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Enable verbose logging for debugging.",
)
@click.option("--log-file", type=click.Path(dir_okay=False), default=None, help="Also write debug logs to this file.")
@click.pass_context
def cli(ctx, verbose: bool, log_file: Optional[str]):
    """
    Builds the git context used to generate a commit message.

    Runs 'context' when no subcommand is given.
    """
    setup_logger(log_level="DEBUG" if verbose else "WARNING", log_file=log_file)
    ctx.obj = {"verbose": verbose}

    if ctx.invoked_subcommand is None:
        ctx.invoke(context)


@cli.command("context")
@context_options
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the result as JSON.")
@handle_errors
def context(repo_path, config_path, prefer_staged, no_fallback, include_repo_context,
            exclude_lockfiles, max_diff_chars, additional_context, as_json):
    """
    Print the commit context document for the pending changes.
    """
    options = build_options(prefer_staged, no_fallback, include_repo_context,
                            exclude_lockfiles, max_diff_chars, additional_context)
    result = asyncio.run(run_context(repo_path, config_path, options))

    if as_json:
        click.echo(result.model_dump_json(indent=2))
    else:
        click.echo(result.context, nl=False)


@cli.command("prompt")
@context_options
@handle_errors
def prompt(repo_path, config_path, prefer_staged, no_fallback, include_repo_context,
           exclude_lockfiles, max_diff_chars, additional_context):
    """
    Print the full commit message prompt with the context filled in.
    """
    options = build_options(prefer_staged, no_fallback, include_repo_context,
                            exclude_lockfiles, max_diff_chars, additional_context)
    result = asyncio.run(run_context(repo_path, config_path, options))
    if not result.changes:
        raise CommitContextException("No changes found for commit")

    click.echo(build_commit_prompt(result.context, config=ConfigurationManager.get_instance()))


@cli.command("show-config")
@click.option("--repo", "repo_path", type=click.Path(file_okay=False), default=".",
              help="Any directory inside the repository.")
@click.option("-c", "--config", "config_path", type=click.Path(exists=True, dir_okay=False),
              help="Path to a custom config file.")
@handle_errors
def show_config(repo_path, config_path):
    """
    Show the effective configuration values.
    """
    manager = ConfigurationManager.get_instance()
    manager.load(custom_config_path=config_path, start_dir=str(Path(repo_path)))
    resolved = resolve_options(None, manager)

    table = Table(title="commitctx configuration")
    table.add_column("Key", style="cyan")
    table.add_column("Value")
    table.add_row(ConfigKeys.INCLUDE_REPO_CONTEXT, str(resolved.include_repo_context))
    table.add_row(ConfigKeys.EXCLUDE_LOCKFILES, str(resolved.exclude_lockfiles))
    table.add_row(ConfigKeys.MAX_DIFF_CHARS, str(resolved.max_diff_chars))
    table.add_row(ConfigKeys.RECENT_COMMITS, str(resolved.recent_commits))
    custom_prompt = manager.get_config(ConfigKeys.COMMIT_PROMPT)
    table.add_row(ConfigKeys.COMMIT_PROMPT, "custom" if custom_prompt else "built-in")
    table.add_row(ConfigKeys.API_KEY, mask_secret(manager.get_config(ConfigKeys.API_KEY)))
    Console().print(table)


def mask_secret(value: Optional[str]) -> str:
    if not value:
        return "(not set)"
    if len(value) <= 8:
        return "*" * len(value)
    return f"{value[:4]}...{value[-4:]}"


if __name__ == "__main__":
    cli()
