"""
Preview CLI Commands for PyFastScale

Renders an image and its upscaled result side by side with matplotlib.
"""

import sys

import click


def render_comparison(original, upscaled, output, dpi=100):
    """
    Save a two-panel figure of ``original`` and ``upscaled`` rasters.

    Both panels are drawn at the same display size, with nearest-neighbour
    interpolation so the source pixels stay visible.

    Args:
        original: Source Raster
        upscaled: Upscaled Raster
        output: Destination image path
        dpi: Figure resolution
    """
    import matplotlib

    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    fig, axes = plt.subplots(1, 2, figsize=(10, 5))
    try:
        for ax, raster, title in (
            (axes[0], original, "Original"),
            (axes[1], upscaled, "Upscaled"),
        ):
            ax.imshow(raster.pixels, interpolation="nearest")
            ax.set_title(f"{title} ({raster.nx}x{raster.ny})")
            ax.axis("off")
        fig.tight_layout()
        fig.savefig(output, dpi=dpi)
    finally:
        plt.close(fig)
    return output


@click.command()
@click.argument("original_image", type=click.Path(exists=True, dir_okay=False))
@click.argument("upscaled_image", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False),
    default="preview.png",
    show_default=True,
    help="Output preview image",
)
@click.option("--dpi", type=click.IntRange(min=10), default=100, show_default=True)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
def compare(original_image, upscaled_image, output, dpi, verbose):
    """
    Save a side-by-side preview of ORIGINAL_IMAGE and UPSCALED_IMAGE.

    Examples:

        pfs-compare photo.jpg upscaled_images/upscaled_photo.jpg -o preview.png
    """
    try:
        import pyfastscale as pfs

        original = pfs.io.load_raster(original_image)
        upscaled = pfs.io.load_raster(upscaled_image)
        if verbose:
            click.echo(
                f"Original {original.nx}x{original.ny}, "
                f"upscaled {upscaled.nx}x{upscaled.ny}"
            )

        render_comparison(original, upscaled, output, dpi=dpi)

        click.echo(f"Saved preview to '{output}'")

    except ImportError as e:
        click.echo(f"Error: Missing dependency - {e}", err=True)
        click.echo("Install matplotlib with: pip install matplotlib", err=True)
        sys.exit(1)

    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    compare()
