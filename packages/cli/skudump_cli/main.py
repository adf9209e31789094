import typer

from skudump_cli.commands.dump_cmd import dump

app = typer.Typer(
    name="skudump",
    help="Dump regional Google Cloud SKU pricing to JSON",
    add_completion=False,
)

app.command()(dump)


if __name__ == "__main__":
    app()
