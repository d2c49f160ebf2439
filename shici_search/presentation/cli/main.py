"""
Command line entry point.

    shici-search search shici Poem 床前 明月光
    shici-search index exists shici
    shici-search mapping shici Poem --show
    shici-search new-id -c 3
"""

import sys
from typing import Optional, Tuple

import click

from .commands.index_commands import ACTIONS, IndexCommand
from .commands.search_commands import (
    DeleteDocumentCommand,
    GetDocumentCommand,
    MappingCommand,
    NewIdCommand,
    SearchCommand
)
from .formatters.output_formatter import OutputFormatter
from .handlers.cli_handler import CommandResult
from ...infrastructure.config.config_manager import ConfigManager
from ...infrastructure.search.factory import SearchFactory


class CLIContext:
    """Lazily built services shared by the commands of one invocation."""

    def __init__(self, config_dir: Optional[str], environment: Optional[str], plain: bool):
        self.config_manager = ConfigManager(config_dir=config_dir, environment=environment)
        self.formatter = OutputFormatter(use_rich=not plain)
        self._factory: Optional[SearchFactory] = None
        self._service = None

    @property
    def config(self):
        return self.config_manager.get_config()

    @property
    def search_service(self):
        if self._service is None:
            self._factory = SearchFactory(self.config)
            self._service = self._factory.create_search_service()
        return self._service

    def close(self) -> None:
        if self._factory is not None:
            self._factory.close()


def _finish(result: CommandResult) -> None:
    if result.exit_code:
        sys.exit(result.exit_code)


@click.group()
@click.option("--config-dir", default=None, help="Directory holding base.yaml")
@click.option("--env", "environment", default=None, help="Configuration environment")
@click.option("--plain", is_flag=True, help="Plain text output")
@click.pass_context
def cli(ctx: click.Context, config_dir: Optional[str], environment: Optional[str], plain: bool) -> None:
    """Search the poetry archive index."""
    ctx.obj = CLIContext(config_dir, environment, plain)
    ctx.call_on_close(ctx.obj.close)


@cli.command()
@click.argument("index")
@click.argument("type_name", metavar="TYPE")
@click.argument("tokens", nargs=-1, required=True)
@click.option("--max-results", "-n", type=int, default=None, help="Maximum number of results")
@click.pass_obj
def search(obj: CLIContext, index: str, type_name: str, tokens: Tuple[str, ...], max_results: Optional[int]) -> None:
    """Search INDEX for documents of TYPE matching TOKENS."""
    limit = min(
        max_results or obj.config.get_default_max_results(),
        obj.config.get_max_results_limit()
    )
    command = SearchCommand(obj.formatter, obj.search_service)
    _finish(command.run(index=index, type_name=type_name, tokens=tokens, max_results=limit))


@cli.command()
@click.argument("index")
@click.argument("type_name", metavar="TYPE")
@click.argument("document_id", metavar="ID")
@click.pass_obj
def get(obj: CLIContext, index: str, type_name: str, document_id: str) -> None:
    """Show one document."""
    command = GetDocumentCommand(obj.formatter, obj.search_service)
    _finish(command.run(index=index, type_name=type_name, document_id=document_id))


@cli.command()
@click.argument("index")
@click.argument("type_name", metavar="TYPE")
@click.argument("document_id", metavar="ID")
@click.pass_obj
def delete(obj: CLIContext, index: str, type_name: str, document_id: str) -> None:
    """Delete one document."""
    command = DeleteDocumentCommand(obj.formatter, obj.search_service)
    _finish(command.run(index=index, type_name=type_name, document_id=document_id))


@cli.command()
@click.argument("action", type=click.Choice(ACTIONS))
@click.argument("index")
@click.pass_obj
def index(obj: CLIContext, action: str, index: str) -> None:
    """Create, delete or check an index."""
    command = IndexCommand(obj.formatter, obj.search_service)
    _finish(command.run(action=action, index=index))


@cli.command()
@click.argument("index")
@click.argument("type_name", metavar="TYPE")
@click.option("--show", is_flag=True, help="Only print the derived mapping")
@click.pass_obj
def mapping(obj: CLIContext, index: str, type_name: str, show: bool) -> None:
    """Put the mapping of TYPE into INDEX."""
    command = MappingCommand(obj.formatter, obj.search_service)
    _finish(command.run(index=index, type_name=type_name, show_only=show))


@cli.command("new-id")
@click.option("--count", "-c", type=click.IntRange(min=1), default=1, help="Number of ids")
@click.pass_obj
def new_id(obj: CLIContext, count: int) -> None:
    """Print new document ids."""
    command = NewIdCommand(obj.formatter)
    _finish(command.run(count=count))


def main() -> None:
    """Entry point for the shici-search command."""
    cli()


if __name__ == "__main__":
    main()
