"""Command-line interface for genannot.

ARCHITECTURE:
    CLI Commands → AnnotationEngine / ReferenceCache → JSON Output

Three workflows: annotate (VCF file), fetch (warm the reference cache), version

Key Design:
- Typer framework for auto-help and type validation
- Settings from options, environment variables or a .env file
- Flexible I/O: stdout or JSON file output
"""

import json
from pathlib import Path
from typing import Any, Optional

import typer
from dotenv import load_dotenv

from genannot.api.reference_cache import ReferenceCache
from genannot.constants import (
    GENE_LOCATIONS_CACHE_KEY,
    GENE_LOCATIONS_URL,
    HPO_CACHE_KEY,
    HPO_DISEASES_TO_GENES_TO_PHENOTYPES_URL,
    OMIM_CACHE_KEY,
    OMIM_MORBIDMAP_URL,
)
from genannot.engine import AnnotationEngine
from genannot.exceptions import AnnotationError
from genannot.parsers import parse_gene_location_lines, parse_hpo_lines, parse_omim_lines
from genannot.utils.vcf import VCF_SCHEMA, read_vcf_records

load_dotenv()

app = typer.Typer(
    name="genannot",
    help="Annotate genomic variants with OMIM/HPO phenotypes and CADD scores",
    add_completion=False,
)


def to_jsonable(value: Any) -> Any:
    """Convert annotation output to JSON-compatible values (sets become sorted lists)."""
    if isinstance(value, dict):
        return {key: to_jsonable(item) for key, item in value.items()}
    if isinstance(value, (set, frozenset)):
        return sorted(value, key=str)
    if isinstance(value, (list, tuple)):
        return [to_jsonable(item) for item in value]
    return value


@app.command()
def annotate(
    input_file: Path = typer.Argument(..., help="Input VCF file (plain or gzipped)"),
    cadd: Optional[Path] = typer.Option(
        None, "--cadd", "-c", envvar="GENANNOT_CADD_PATH", help="CADD score file (TSV or tabix-indexed)"
    ),
    omim_hpo: bool = typer.Option(True, "--omim-hpo/--no-omim-hpo", help="Enable OMIM/HPO annotation"),
    cache_dir: Optional[Path] = typer.Option(
        None, "--cache-dir", envvar="GENANNOT_CACHE_DIR", help="Reference dataset cache directory"
    ),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output JSON file"),
    log: bool = typer.Option(True, "--log/--no-log", help="Enable annotation run logging"),
) -> None:
    """Annotate every record of a VCF file."""

    if not input_file.exists():
        print(f"Error: Input file not found: {input_file}")
        raise typer.Exit(1)

    if not omim_hpo and cadd is None:
        print("Error: Nothing to do, enable OMIM/HPO or pass --cadd")
        raise typer.Exit(1)

    try:
        engine = AnnotationEngine.from_sources(
            cache=ReferenceCache(cache_dir=cache_dir),
            cadd_path=cadd,
            enable_omim_hpo=omim_hpo,
            enable_logging=log,
        )
    except AnnotationError as e:
        print(f"Error: Failed to load reference data: {e}")
        raise typer.Exit(1)

    with engine:
        try:
            records = list(read_vcf_records(input_file))
        except AnnotationError as e:
            print(f"Error: {e}")
            raise typer.Exit(1)

        print(f"\nLoaded {len(records)} variants from {input_file}")
        results = engine.annotate_records(records, VCF_SCHEMA)

    output_data = to_jsonable(results)
    if output:
        with open(output, "w") as f:
            json.dump(output_data, f, indent=2)
        print(f"Results saved to {output}")
    else:
        print(json.dumps(output_data, indent=2))


@app.command()
def fetch(
    cache_dir: Optional[Path] = typer.Option(
        None, "--cache-dir", envvar="GENANNOT_CACHE_DIR", help="Reference dataset cache directory"
    ),
) -> None:
    """Download the reference datasets into the cache and report record counts."""

    cache = ReferenceCache(cache_dir=cache_dir)
    datasets = [
        ("HPO", HPO_DISEASES_TO_GENES_TO_PHENOTYPES_URL, HPO_CACHE_KEY, parse_hpo_lines),
        ("OMIM", OMIM_MORBIDMAP_URL, OMIM_CACHE_KEY, parse_omim_lines),
        ("Gene locations", GENE_LOCATIONS_URL, GENE_LOCATIONS_CACHE_KEY, parse_gene_location_lines),
    ]

    failed = False
    for label, url, cache_key, parse in datasets:
        try:
            lines = cache.fetch(url, cache_key)
            records = parse(lines)
        except AnnotationError as e:
            print(f"  {label}: FAILED ({e})")
            failed = True
            continue
        print(f"  {label}: {len(records)} records ({cache.path_for(cache_key)})")

    if failed:
        raise typer.Exit(1)


@app.command()
def version() -> None:
    """Show version information."""
    from genannot import __version__
    print(f"genannot version {__version__}")


if __name__ == "__main__":
    app()
