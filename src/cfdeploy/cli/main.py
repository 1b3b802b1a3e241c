"""Entry point for the cfdeploy command line."""

import click

from cfdeploy import __version__
from cfdeploy.cli.commands.hash import hash_command
from cfdeploy.cli.commands.upload import upload_command


@click.group()
@click.version_option(__version__, prog_name="cfdeploy")
def main() -> None:
    """Fingerprint and upload Cloud Functions source."""


main.add_command(hash_command)
main.add_command(upload_command)


if __name__ == "__main__":
    main()
