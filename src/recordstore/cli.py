"""
Command Line Interface for recordstore.

Inspect and edit store files without writing Python: every command opens the
store as schemaless records with a single string identifier field.

Built with Typer for automatic tab completion.
"""

import json
from contextlib import contextmanager
from pathlib import Path
from typing import Annotated, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .core.config import Settings, get_settings
from .core.logging import setup_logging
from .exceptions import RecordStoreError
from .models.entity import record_type
from .repositories.file_repository import RecordStore

console = Console()

app = typer.Typer(
    name="recordstore",
    help="recordstore - inspect and edit JSON record stores",
    add_completion=True,
    rich_markup_mode="rich",
    no_args_is_help=True,
)

ConfigOption = Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to YAML configuration file")]
BaseDirOption = Annotated[Optional[Path], typer.Option("--base-dir", "-d", help="Store directory (overrides configuration)")]
IdFieldOption = Annotated[str, typer.Option("--id-field", help="Name of the identifier field")]
StoreArgument = Annotated[str, typer.Argument(help="Store name (file stem under the base directory)")]


def version_callback(value: bool):
    if value:
        console.print(f"recordstore version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[bool, typer.Option("--version", callback=version_callback, is_eager=True, help="Show version and exit.")] = False,
):
    """
    recordstore - inspect and edit JSON record stores

    Each store is a single <name>.json file holding a JSON array of records.
    """
    pass


@contextmanager
def _errors_exit():
    """Turn store, validation and decoding errors into a red message and exit code 1."""
    try:
        yield
    except ValidationError as e:
        console.print(f"[red]Invalid record:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    except RecordStoreError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)
    except UnicodeDecodeError as e:
        console.print(f"[red]Error: file is not UTF-8 text ({escape(str(e))})[/red]")
        raise typer.Exit(1)


def _load_settings(config: Optional[Path], base_dir: Optional[Path]) -> Settings:
    settings = get_settings(config)
    if base_dir is not None:
        storage = settings.storage.model_copy(update={"base_dir": base_dir.expanduser()})
        settings = settings.model_copy(update={"storage": storage})
    return settings


def _open_store(store: str, id_field: str, config: Optional[Path], base_dir: Optional[Path]) -> RecordStore:
    settings = _load_settings(config, base_dir)
    setup_logging(settings.log.level, settings.log.format, settings.log.file)
    return settings.open_store(record_type(store, id_field))


def _cell(value) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return json.dumps(value, default=str)


@app.command()
def init(
    store: StoreArgument,
    id_field: IdFieldOption = "id",
    config: ConfigOption = None,
    base_dir: BaseDirOption = None,
):
    """Create the store file if it does not exist."""
    with _errors_exit():
        record_store = _open_store(store, id_field, config, base_dir)

    if not record_store.path.exists():
        console.print(f"[red]Could not create store file: {record_store.path}[/red]")
        raise typer.Exit(1)
    console.print(f"[green]Store ready:[/green] {record_store.path}")


@app.command("list")
def list_records(
    store: StoreArgument,
    id_field: IdFieldOption = "id",
    config: ConfigOption = None,
    base_dir: BaseDirOption = None,
):
    """List all records of a store."""
    with _errors_exit():
        record_store = _open_store(store, id_field, config, base_dir)
        records = [record.model_dump(mode="json") for record in record_store.find_all()]

    if not records:
        console.print("[dim]No records[/dim]")
        return

    columns = [id_field]
    for record in records:
        for key in record:
            if key not in columns:
                columns.append(key)

    table = Table(title=f"{store} ({len(records)})")
    for column in columns:
        table.add_column(column, style="cyan" if column == id_field else None)
    for record in records:
        table.add_row(*(_cell(record.get(column)) for column in columns))

    console.print(table)


@app.command()
def get(
    store: StoreArgument,
    record_id: Annotated[str, typer.Argument(help="Record identifier")],
    id_field: IdFieldOption = "id",
    config: ConfigOption = None,
    base_dir: BaseDirOption = None,
):
    """Show one record as JSON."""
    with _errors_exit():
        record_store = _open_store(store, id_field, config, base_dir)
        record = record_store.find_by_id(record_id)

    if record is None:
        console.print(f"[red]No record with {id_field} '{record_id}' in {store}[/red]")
        raise typer.Exit(1)

    console.print_json(record.model_dump_json())


@app.command()
def put(
    store: StoreArgument,
    data: Annotated[str, typer.Argument(help="Record as a JSON object")],
    id_field: IdFieldOption = "id",
    config: ConfigOption = None,
    base_dir: BaseDirOption = None,
):
    """Insert a record, or replace an identical one."""
    with _errors_exit():
        record_store = _open_store(store, id_field, config, base_dir)
        record = record_store.entity_type.model_validate_json(data)

    if not record.identifier():
        console.print(f"[red]Record has an empty '{id_field}', not saved[/red]")
        raise typer.Exit(1)

    record_store.save(record)
    console.print(f"[green]Saved {record.identifier()} to {store}[/green]")


@app.command("import")
def import_records(
    store: StoreArgument,
    source: Annotated[Path, typer.Argument(help="JSON file holding an array of records", exists=True, dir_okay=False)],
    id_field: IdFieldOption = "id",
    config: ConfigOption = None,
    base_dir: BaseDirOption = None,
):
    """Append every record of a JSON array file. Duplicates are kept."""
    with _errors_exit():
        record_store = _open_store(store, id_field, config, base_dir)
        records = record_store.serializer.decode(source.read_text(encoding="utf-8"))
        record_store.save_all(records)

    console.print(f"[green]Imported {len(records)} record(s) into {store}[/green]")


@app.command()
def delete(
    store: StoreArgument,
    record_id: Annotated[str, typer.Argument(help="Record identifier")],
    id_field: IdFieldOption = "id",
    config: ConfigOption = None,
    base_dir: BaseDirOption = None,
):
    """Delete the first record with an identifier."""
    with _errors_exit():
        record_store = _open_store(store, id_field, config, base_dir)
        with record_store.exclusive():
            existed = record_store.exists(record_id)
            record_store.delete_by_id(record_id)

    if existed:
        console.print(f"[green]Deleted {record_id} from {store}[/green]")
    else:
        console.print(f"[yellow]No record with {id_field} '{record_id}' in {store}[/yellow]")


@app.command()
def count(
    store: StoreArgument,
    id_field: IdFieldOption = "id",
    config: ConfigOption = None,
    base_dir: BaseDirOption = None,
):
    """Print the number of records in a store."""
    with _errors_exit():
        record_store = _open_store(store, id_field, config, base_dir)
        total = record_store.count()

    console.print(total)
