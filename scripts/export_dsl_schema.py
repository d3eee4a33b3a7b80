"""Export the JSON Schema for run configs.

Useful for editor completion and CI validation of files under configs/.
"""

from __future__ import annotations

import json
from pathlib import Path

import typer

from evolution_engine.dsl import RunSpec

app = typer.Typer(help="Export JSON Schema for `RunSpec`.")


@app.command()
def main(
    out: Path = typer.Argument(..., help="Output path (usually .json)."),
    pretty: bool = typer.Option(True, help="Write pretty-printed JSON."),
) -> None:
    schema = RunSpec.model_json_schema()
    text = json.dumps(schema, indent=2 if pretty else None, sort_keys=False)
    out.write_text(text)
    typer.echo(f"Wrote run config schema to {out}")


if __name__ == "__main__":
    app()
