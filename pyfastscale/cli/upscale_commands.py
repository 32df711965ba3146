"""
Upscaling CLI Commands for PyFastScale

Command line interface for upscaling a single image file.
"""

import sys

import click

import pyfastscale as pfs


def logging_options(command):
    """Add the shared --json-logs and --log-file options to a command."""
    command = click.option(
        "--log-file",
        type=click.Path(dir_okay=False),
        default=None,
        help="Also write log records to this file",
    )(command)
    command = click.option(
        "--json-logs",
        is_flag=True,
        help="Emit one JSON object per log record",
    )(command)
    return command


def build_upscaler(
    config_path=None, verbose=False, json_logs=False, log_file=None, **overrides
):
    """
    Configure logging, the Taichi backend and an Upscaler from CLI options.

    Args:
        config_path: Optional YAML/JSON configuration file
        verbose: Log at DEBUG level instead of INFO
        json_logs: Format log records as JSON lines
        log_file: Optional file receiving the log records as well
        **overrides: Config fields given on the command line (None = unset)
    """
    pfs.logs.configure_logging(
        level="DEBUG" if verbose else "INFO",
        json_logs=json_logs,
        log_file=log_file,
    )
    if config_path is not None:
        config = pfs.pipeline.load_config(config_path)
    else:
        config = pfs.pipeline.UpscaleConfig()
    config = config.with_overrides(**overrides)
    pfs.init_backend(config.arch)
    return pfs.pipeline.Upscaler(config)


@click.command()
@click.argument("input_image", type=click.Path(exists=True, dir_okay=False))
@click.argument("output_image", type=click.Path(dir_okay=False), required=False)
@click.option(
    "--scale",
    "-s",
    type=click.IntRange(min=1),
    default=None,
    help="Integer upscaling factor (default: 4)",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="YAML or JSON configuration file",
)
@click.option(
    "--arch",
    type=click.Choice(["cpu", "gpu"]),
    default=None,
    help="Taichi backend (default: cpu)",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@logging_options
def upscale(
    input_image, output_image, scale, config_path, arch, verbose, json_logs, log_file
):
    """
    Upscale an image and sharpen its edges.

    Resamples INPUT_IMAGE by an integer factor, then runs the edge
    enhancement and colour blending passes. Transparent images (PNG, GIF
    with a transparent index) use the alpha-aware passes.

    INPUT_IMAGE: Path to a JPEG, PNG or GIF file
    OUTPUT_IMAGE: Output path (default: upscaled_<name> next to the input)

    Examples:

        # Upscale 4x next to the input
        pfs-upscale photo.jpg

        # Upscale 2x to a chosen file
        pfs-upscale logo.png logo_big.png --scale 2

        # With verbose output
        pfs-upscale -v sprite.gif

        # JSON log lines into a file
        pfs-upscale photo.jpg --json-logs --log-file upscale.log
    """
    try:
        upscaler = build_upscaler(
            config_path,
            verbose,
            json_logs=json_logs,
            log_file=log_file,
            scale_factor=scale,
            arch=arch,
        )
        if verbose:
            click.echo(
                f"Upscaling '{input_image}' by {upscaler.config.scale_factor}x..."
            )

        written = upscaler.upscale_file(input_image, output_image)

        click.echo(f"Upscaled '{input_image}' -> '{written}'")

    except FileNotFoundError:
        click.echo(f"Error: Input file '{input_image}' not found", err=True)
        sys.exit(1)

    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    upscale()
