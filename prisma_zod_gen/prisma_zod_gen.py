import json
import logging

import click

from .cli_utils import reconstruct_command_line
from .pipeline import (
    DeclarationSourceError,
    GeneratorConfig,
    OutputMode,
    OutputValidationError,
    PipelineGenerator,
)


@click.command()
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option("--enum-namespace", default=None, type=str, help="Namespace holding the enum declarations (default: $Enums)")
@click.option("--force/--no-force", default=None, help="Overwrite the output file if it exists")
@click.option(
    "--add-generation-comment",
    is_flag=True,
    default=False,
    help="Start the generated module with a comment naming the generator",
)
@click.option("--verbose", "-v", is_flag=True, default=False)
@click.argument("path", default="client/index.d.ts", type=click.Path(resolve_path=True))
@click.argument("output", default="prisma-zod-schemas.ts", type=click.Path(resolve_path=True))
def prisma_zod_gen(config, enum_namespace, force, add_generation_comment, verbose, path, output):
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    if config is not None:
        with open(config, encoding="utf-8") as f:
            config = GeneratorConfig.from_dict(json.load(f))
    else:
        config = GeneratorConfig()

    # CLI flags override the config file
    if enum_namespace:
        config.enum_namespace = enum_namespace
    if force is not None:
        config.output.mode = OutputMode.FORCE if force else OutputMode.ERROR_IF_EXISTS
    if add_generation_comment:
        config.add_generation_comment = True

    codegen = PipelineGenerator(path, config, command_line=reconstruct_command_line(prisma_zod_gen))
    try:
        codegen.write(output)
    except (DeclarationSourceError, OutputValidationError, FileExistsError) as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"Generated {click.format_filename(output, shorten=True)}")
