import json
import logging

import click

from . import __version__
from .cli_utils import reconstruct_command_line
from .pipeline import AtomicWriter, CodeWriteError, DeriveConfig, DeriveError, OutputMode, PipelineGenerator
from .pipeline.declaration import load_declarations

logger = logging.getLogger(__name__)


@click.command()
@click.option("--config", "-c", default=None, type=click.Path(exists=True, dir_okay=False, resolve_path=True))
@click.option("--module", "-m", default=None, type=str, help="Module the declared types are imported from")
@click.option("--serialize/--no-serialize", default=None, help="Derive serialization (default: on)")
@click.option("--deserialize/--no-deserialize", default=None, help="Derive deserialization (default: on)")
@click.option("--force", "-f", is_flag=True, default=False, help="Overwrite OUTPUT if it exists")
@click.option("--format", "format_code", is_flag=True, default=False, help="Run the configured formatter on the output")
@click.option("--verbose", "-v", is_flag=True, default=False)
@click.argument("path", type=click.Path(exists=True, dir_okay=False, resolve_path=True))
@click.argument("output", type=click.Path(dir_okay=False, resolve_path=True))
def miniserde_derive(config, module, serialize, deserialize, force, format_code, verbose, path, output):
    """Generate serialize / deserialize code for the declarations in PATH into OUTPUT."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if config is not None:
        with open(config) as f:
            config = DeriveConfig.from_dict(json.load(f))
    else:
        config = DeriveConfig()

    # CLI flags override the config file
    if module is not None:
        config.source_module = module
    if serialize is not None:
        config.derive_serialize = serialize
    if deserialize is not None:
        config.derive_deserialize = deserialize
    if force:
        config.output.mode = OutputMode.FORCE
    if format_code:
        config.formatter.enabled = True

    command_line = reconstruct_command_line(miniserde_derive)
    try:
        document = load_declarations(path)
        codegen = PipelineGenerator(
            document,
            config,
            generation_comment=f"Generated by miniserde_derive v{__version__} : {command_line}",
        )
        out = codegen.generate()
        AtomicWriter().write_output(output, out, config.output)
    except (DeriveError, CodeWriteError, FileExistsError) as e:
        raise click.ClickException(str(e)) from e

    logger.info("Derived %d declarations into %s", len(document.declarations), output)
