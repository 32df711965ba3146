"""
Folder CLI Commands for PyFastScale

Command line interface for monitoring a folder and for one-shot batch
upscaling of a folder.
"""

import json
import sys

import click

import pyfastscale as pfs
from .upscale_commands import build_upscaler, logging_options


@click.command()
@click.argument("input_dir", type=click.Path(file_okay=False), required=False)
@click.argument("output_dir", type=click.Path(file_okay=False), required=False)
@click.option(
    "--interval",
    "-i",
    type=click.FloatRange(min=0),
    default=None,
    help="Seconds between folder scans (default: 2)",
)
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
@click.option("--once", is_flag=True, help="Scan a single time and exit")
@click.option(
    "--max-cycles",
    type=click.IntRange(min=1),
    default=None,
    help="Stop after this many scans (default: run until interrupted)",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@logging_options
def watch(
    input_dir,
    output_dir,
    interval,
    scale,
    config_path,
    once,
    max_cycles,
    verbose,
    json_logs,
    log_file,
):
    """
    Monitor INPUT_DIR and upscale every new image into OUTPUT_DIR.

    Each image is processed once; images that fail are retried on the next
    scan. Output files are named upscaled_<name>.

    INPUT_DIR: Folder to monitor (default: input_images)
    OUTPUT_DIR: Destination folder (default: upscaled_images)

    Examples:

        # Watch the default folders
        pfs-watch

        # Watch custom folders every 5 seconds
        pfs-watch incoming/ done/ --interval 5

        # Process what is there now and exit
        pfs-watch incoming/ done/ --once
    """
    try:
        upscaler = build_upscaler(
            config_path,
            verbose,
            json_logs=json_logs,
            log_file=log_file,
            input_folder=input_dir,
            output_folder=output_dir,
            scan_interval=interval,
            scale_factor=scale,
        )
        config = upscaler.config
        click.echo(
            f"Monitoring '{config.input_folder}' -> '{config.output_folder}' "
            f"(every {config.scan_interval:g}s, Ctrl+C to stop)"
        )

        monitor = pfs.watch.FolderMonitor(upscaler)
        monitor.run(max_cycles=1 if once else max_cycles)

        if verbose:
            click.echo(f"Processed {len(monitor.processed)} image(s)")

    except KeyboardInterrupt:
        click.echo("Monitoring stopped")

    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@click.command()
@click.argument("input_dir", type=click.Path(file_okay=False))
@click.argument("output_dir", type=click.Path(file_okay=False))
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
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@logging_options
def batch(input_dir, output_dir, scale, config_path, verbose, json_logs, log_file):
    """
    Upscale every image of INPUT_DIR into OUTPUT_DIR once.

    Prints a JSON summary with the number of processed images, the number
    of errors and one entry per file. Exits with status 1 when the input
    folder does not exist or any image failed.

    Examples:

        pfs-batch input_images/ upscaled_images/
    """
    try:
        upscaler = build_upscaler(
            config_path,
            verbose,
            json_logs=json_logs,
            log_file=log_file,
            scale_factor=scale,
        )
        summary = pfs.watch.process_folder(upscaler, input_dir, output_dir)
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(json.dumps(summary, indent=2))
    if not summary["success"] or summary["errors"]:
        sys.exit(1)


if __name__ == "__main__":
    watch()
