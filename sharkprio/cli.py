# Command Line Interface for sharkprio
from pathlib import Path
from typing import List, Optional

import typer
from typing_extensions import Annotated

from sharkprio.commands import (
    score_priority,
    generate_distance_to_port,
    summarise_zones,
    reclassify_layer,
)
from sharkprio.raster import ZonalStat

app = typer.Typer(
    name="sharkprio",
    help="Raster tools for shark conservation priority scoring",
    add_completion=False,
)


@app.command()
def score(
    config_path: Annotated[
        Optional[Path],
        typer.Option(
            "--config",
            help="YAML config with 'scoring', 'layers' and 'zone' sections. Defaults to config/default.yaml.",
            exists=True, readable=True, resolve_path=True
        )
    ] = None,
    output_dir: Annotated[
        Path,
        typer.Option(
            help="Directory to save priority.tif, priority_decile.tif and scored_cells.csv.",
            writable=True, resolve_path=True, file_okay=False, dir_okay=True
        )
    ] = Path("outputs/priority"),
    target_zone: Annotated[
        Optional[float],
        typer.Option("--zone", help="Zone to score. Overrides zone.target in the config.")
    ] = None,
    zone_path: Annotated[
        Optional[Path],
        typer.Option(
            "--zone-layer",
            help="Zone mask raster. Overrides zone.layer in the config.",
            exists=True, readable=True, resolve_path=True
        )
    ] = None,
    base_dir: Annotated[
        Optional[Path],
        typer.Option(help="Directory that relative layer paths in the config are resolved against.")
    ] = None,
    cog: Annotated[bool, typer.Option("--cog", help="Write Cloud Optimized GeoTIFFs.")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable verbose logging.")] = False
) -> None:
    """
    Scores cells of a zone for conservation priority and ranks them into deciles.
    """
    try:
        outputs = score_priority(
            config_path=config_path,
            output_dir=output_dir,
            target_zone=target_zone,
            zone_path=zone_path,
            base_dir=base_dir,
            cog=cog,
            verbose=verbose,
        )
    except (FileNotFoundError, ValueError) as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=1)
    if not outputs:
        typer.echo("No data to score in the selected zone.", err=True)
        raise typer.Exit(code=3)


@app.command()
def distance(
    ports_path: Annotated[
        Path,
        typer.Option(
            ...,
            "--ports",
            help="Vector file of port locations (points).",
            exists=True, readable=True, resolve_path=True
        )
    ],
    template_path: Annotated[
        Path,
        typer.Option(
            ...,
            "--template",
            help="Raster defining the output grid and CRS.",
            exists=True, readable=True, resolve_path=True
        )
    ],
    output_path: Annotated[
        Path,
        typer.Option("--output", help="Path to save the distance raster.", resolve_path=True)
    ] = Path("data/rasters/distance_to_port.tif"),
    mask_to_template: Annotated[
        bool,
        typer.Option("--mask/--no-mask", help="Leave cells missing in the template missing.")
    ] = True,
    cog: Annotated[bool, typer.Option("--cog", help="Write a Cloud Optimized GeoTIFF.")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable verbose logging.")] = False
) -> None:
    """
    Generates a distance-to-port raster on the grid of a template raster.
    """
    generate_distance_to_port(
        ports_path=ports_path,
        template_path=template_path,
        output_path=output_path,
        mask_to_template=mask_to_template,
        cog=cog,
        verbose=verbose,
    )


@app.command()
def zonal(
    values_path: Annotated[
        Path,
        typer.Option(..., "--values", help="Raster to summarise.", exists=True, readable=True, resolve_path=True)
    ],
    zones_path: Annotated[
        Path,
        typer.Option(..., "--zones", help="Zone raster.", exists=True, readable=True, resolve_path=True)
    ],
    output_path: Annotated[
        Path,
        typer.Option("--output", help="CSV to save the summary to.", resolve_path=True)
    ] = Path("outputs/zonal_summary.csv"),
    stat: Annotated[
        ZonalStat,
        typer.Option(case_sensitive=False, help="Statistic to calculate per zone.")
    ] = ZonalStat.MEAN,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable verbose logging.")] = False
) -> None:
    """
    Summarises a raster within each zone of a zone raster.
    """
    summarise_zones(
        values_path=values_path,
        zones_path=zones_path,
        output_path=output_path,
        stat=stat,
        verbose=verbose,
    )


@app.command(name="reclassify")
def reclassify_command(
    input_path: Annotated[
        Path,
        typer.Option(..., "--input", help="Raster to reclassify.", exists=True, readable=True, resolve_path=True)
    ],
    output_path: Annotated[
        Path,
        typer.Option(..., "--output", help="Path to save the reclassified raster.", resolve_path=True)
    ],
    rules: Annotated[
        List[str],
        typer.Option(..., "--rule", help="Rule as 'low,high,new' for values in (low, high]. Repeatable.")
    ],
    include_lowest: Annotated[
        bool,
        typer.Option("--include-lowest", help="Include the lower bound of the first rule.")
    ] = False,
    cog: Annotated[bool, typer.Option("--cog", help="Write a Cloud Optimized GeoTIFF.")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable verbose logging.")] = False
) -> None:
    """
    Reclassifies raster values by interval.
    """
    try:
        reclassify_layer(
            input_path=input_path,
            output_path=output_path,
            rules=rules,
            include_lowest=include_lowest,
            cog=cog,
            verbose=verbose,
        )
    except ValueError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
