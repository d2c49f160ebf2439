"""
Output formatter for CLI commands.

Renders documents, mappings and command outcomes either as rich
renderables or, with --plain, as tabulate grids and plain strings.
"""

import dataclasses
import json
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from tabulate import tabulate

from ....core.entities import SearchableDocument

Renderable = Union[str, Table, Panel]

PREVIEW_LENGTH = 40


def _preview(value: Any) -> Any:
    if isinstance(value, str) and len(value) > PREVIEW_LENGTH:
        return value[:PREVIEW_LENGTH] + "..."
    if isinstance(value, list):
        return ", ".join(str(v) for v in value)
    return value


class OutputFormatter:
    """
    Formatter for CLI command output.

    Every format_* method returns something print() accepts, so
    commands never need to know which mode is active.
    """

    def __init__(self, use_rich: bool = True, console: Optional[Console] = None):
        """
        Initialize the formatter.

        Args:
            use_rich: Render with rich instead of plain text
            console: Console to print to when rendering with rich
        """
        self.use_rich = use_rich
        self.console = console or (Console() if use_rich else None)

    def format_rows(
        self,
        rows: Sequence[Mapping[str, Any]],
        title: Optional[str] = None
    ) -> Renderable:
        """
        Lay out rows as a table, one column per key of the first row.

        Args:
            rows: Row mappings sharing the same keys
            title: Optional table title

        Returns:
            A rich Table or a tabulate grid
        """
        if not rows:
            return "No data to display"

        columns = list(rows[0].keys())
        if not self.use_rich:
            grid = tabulate([[row.get(c, "") for c in columns] for row in rows], headers=columns, tablefmt="grid")
            return f"{title}\n{grid}" if title else grid

        table = Table(title=title)
        for column in columns:
            table.add_column(column)
        for row in rows:
            table.add_row(*[str(row.get(c, "")) for c in columns])
        return table

    def format_documents(
        self,
        documents: Sequence[SearchableDocument],
        title: Optional[str] = None
    ) -> Renderable:
        """Table of documents with long text shortened."""
        rows: List[Dict[str, Any]] = [
            {f.name: _preview(getattr(doc, f.name)) for f in dataclasses.fields(doc)}
            for doc in documents
        ]
        return self.format_rows(rows, title=title)

    def format_mapping(
        self,
        mapping: Mapping[str, Mapping[str, str]],
        title: Optional[str] = None
    ) -> Renderable:
        """Table of field name, engine type and index mode."""
        rows = [
            {"Field": name, "Type": prop["type"], "Index": prop["index"]}
            for name, prop in mapping.items()
        ]
        return self.format_rows(rows, title=title)

    def format_document(self, document: SearchableDocument) -> str:
        """A single document as indented JSON."""
        return self.format_json(dataclasses.asdict(document))

    @staticmethod
    def format_json(data: Any, pretty: bool = True) -> str:
        return json.dumps(data, indent=2 if pretty else None, ensure_ascii=False)

    def format_error(self, message: str, details: Optional[str] = None) -> Renderable:
        return self._outcome("Error", "red", message, details)

    def format_success(self, message: str, details: Optional[str] = None) -> Renderable:
        return self._outcome("Success", "green", message, details)

    def _outcome(self, label: str, color: str, message: str, details: Optional[str]) -> Renderable:
        if not self.use_rich:
            return f"{label}: {message}" + (f"\n{details}" if details else "")
        text = Text(message, style=f"bold {color}")
        if details:
            text.append("\n" + details, style=color)
        return Panel(text, title=label, border_style=color)

    def print(self, content: Any, style: Optional[str] = None) -> None:
        """
        Print a string or rich renderable.

        Args:
            content: Content to print
            style: Rich style, ignored in plain mode
        """
        if not self.use_rich:
            print(content)
        elif style:
            self.console.print(content, style=style)
        else:
            self.console.print(content)
