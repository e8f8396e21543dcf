"""Command-line interface for romnames."""

import sys
import logging
import argparse
from pathlib import Path
from typing import List, Optional, Tuple

from rich import box
from rich.console import Console
from rich.table import Table

from romnames import __version__
from romnames.config.loader import ConfigError, default_config, get_config_value, load_config
from romnames.config.validator import ValidationError, validate_config
from romnames.dats.dat_parser import DatError, DatParser, DatSource
from romnames.naming import (
    NamingConvention,
    ParseError,
    RegionError,
    TokenizedName,
    best_guess,
    parse,
    region_resolve,
    to_name_info,
    to_normalized_region_string,
    to_string,
)
from romnames.naming.tosec import TOSECName
from romnames.naming.tosec.tokens import Warn, WarnKind

logger = logging.getLogger(__name__)

CONVENTION_CHOICES = ['auto', 'tosec', 'nointro', 'goodtools']

_CONVENTIONS = {
    'tosec': NamingConvention.TOSEC,
    'nointro': NamingConvention.NOINTRO,
    'goodtools': NamingConvention.GOODTOOLS,
}


def create_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser."""
    parser = argparse.ArgumentParser(
        prog='romnames',
        description='Parse TOSEC, No-Intro and GoodTools ROM file names',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Parse a name, guessing its naming convention
  romnames parse "Star Jacker (Japan, Europe, Australia, New Zealand) (Rev 1)"

  # Normalize a TOSEC name and show its tokens
  romnames parse --convention tosec --strict --tokens "Xevious (1982)(Namco)(JP)"

  # Resolve a region string
  romnames regions "Japan, Europe"

  # Summarize a No-Intro DAT
  romnames dat "Nintendo - Game Boy.dat" --source No-Intro
        """
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    parser.add_argument(
        '--config',
        type=Path,
        metavar='PATH',
        help='Path to config.yaml (default: ./config.yaml if present)'
    )

    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Logging level. Overrides config.'
    )

    parser.add_argument(
        '--format',
        choices=['table', 'plain'],
        dest='output_format',
        help='Output format. Overrides config.'
    )

    subparsers = parser.add_subparsers(dest='command', metavar='COMMAND')
    subparsers.required = True

    parse_cmd = subparsers.add_parser('parse', help='Parse file names')
    parse_cmd.add_argument('names', nargs='+', metavar='NAME', help='File names without extension')
    parse_cmd.add_argument(
        '--convention',
        choices=CONVENTION_CHOICES,
        help='Naming convention (default: naming.convention from config)'
    )
    parse_cmd.add_argument(
        '--strict',
        action='store_true',
        help='Normalize TOSEC names to the strict convention'
    )
    parse_cmd.add_argument(
        '--tokens',
        action='store_true',
        help='Print the token stream of each name'
    )

    regions_cmd = subparsers.add_parser('regions', help='Resolve a region string')
    regions_cmd.add_argument('region', metavar='STRING', help='Region string, e.g. "USA, Europe"')
    regions_cmd.add_argument(
        '--convention',
        choices=CONVENTION_CHOICES,
        default='auto',
        help='Region syntax (default: best guess)'
    )

    dat_cmd = subparsers.add_parser('dat', help='Parse a Logiqx XML DAT file')
    dat_cmd.add_argument('path', type=Path, metavar='PATH', help='DAT file')
    dat_cmd.add_argument(
        '--source',
        required=True,
        choices=[source.value for source in DatSource],
        help='Catalog the DAT comes from'
    )
    dat_cmd.add_argument(
        '--no-header-check',
        action='store_true',
        help='Do not verify the DAT header homepage'
    )

    return parser


def _setup_logging(config: dict) -> None:
    """
    Setup logging configuration from config.

    Args:
        config: Configuration dictionary
    """
    logging_config = config.get('logging', {})

    # Get log level
    level_str = logging_config.get('level', 'WARNING').upper()
    level = getattr(logging, level_str, logging.WARNING)

    handlers = []

    if logging_config.get('console', True):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
        handlers.append(console_handler)

    # File handler (if configured)
    log_file = logging_config.get('file')
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    # Configure root logger
    logging.basicConfig(
        level=level,
        handlers=handlers,
        force=True  # Override any existing configuration
    )


def _load_config(config_path: Optional[Path]) -> dict:
    """Load config.yaml, falling back to the defaults when none exists."""
    if config_path is None and not (Path.cwd() / "config.yaml").exists():
        return default_config()
    return load_config(config_path)


def main(argv: Optional[list] = None) -> int:
    """
    Main entry point for romnames CLI.

    Args:
        argv: Command-line arguments (default: sys.argv)

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    # Load and validate configuration
    try:
        config = _load_config(args.config)
        validate_config(config)
    except (ConfigError, ValidationError) as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    # Apply CLI overrides
    if args.log_level:
        config['logging']['level'] = args.log_level
    if args.output_format:
        config['output']['format'] = args.output_format

    try:
        _setup_logging(config)
    except OSError as e:
        print(f"Error: Could not create log file: {e}", file=sys.stderr)
        return 1

    console = Console()
    if args.command == 'parse':
        return run_parse(config, args, console)
    if args.command == 'regions':
        return run_regions(config, args, console)
    return run_dat(config, args, console)


def _detect_and_parse(name: str) -> TokenizedName:
    """
    Parse a name whose convention is unknown.

    No-Intro is strict, so a successful No-Intro parse is trusted. TOSEC is
    chosen next if the name carries a date or the TOSEC ``ZZZ-UNK-`` marker;
    anything else is read as GoodTools.
    """
    try:
        return parse(NamingConvention.NOINTRO, name)
    except ParseError:
        pass
    tosec_name = parse(NamingConvention.TOSEC, name)
    kinds = {t.kind for t in tosec_name if isinstance(t, Warn)}
    if WarnKind.ZZZ_UNKNOWN in kinds or WarnKind.MISSING_DATE not in kinds:
        return tosec_name
    logger.debug(f"'{name}' has no TOSEC date, reading it as GoodTools")
    return parse(NamingConvention.GOODTOOLS, name)


def _parse_name(name: str, convention: str, config: dict) -> TokenizedName:
    if convention == 'auto':
        parsed = _detect_and_parse(name)
    else:
        parsed = parse(_CONVENTIONS[convention], name)

    if isinstance(parsed, TOSECName):
        if get_config_value(config, 'naming.drop_trailing', False):
            parsed = parsed.without_trailing()
        if get_config_value(config, 'naming.strict', False):
            parsed = parsed.into_strict()
    return parsed


def run_parse(config: dict, args: argparse.Namespace, console: Console) -> int:
    """Parse each name and print its NameInfo."""
    convention = args.convention or get_config_value(config, 'naming.convention', 'auto')
    if args.strict:
        config['naming']['strict'] = True

    results: List[Tuple[str, TokenizedName]] = []
    failed = 0
    for name in args.names:
        try:
            results.append((name, _parse_name(name, convention, config)))
        except ParseError as e:
            print(f"Error: {e}", file=sys.stderr)
            failed += 1

    if config['output']['format'] == 'plain':
        for _, parsed in results:
            _print_plain(parsed, args.tokens)
    elif results:
        console.print(_name_table(results))
        if args.tokens:
            for _, parsed in results:
                console.print(f"[bold]{to_string(parsed)}[/bold]", markup=True, highlight=False)
                for token in parsed:
                    console.print(f"  {token!r}", markup=False, highlight=False)

    return 1 if failed else 0


def _print_plain(parsed: TokenizedName, show_tokens: bool) -> None:
    print(to_string(parsed))
    for key, value in to_name_info(parsed).as_record().items():
        print(f"  {key}: {'' if value is None else value}")
    if show_tokens:
        for token in parsed:
            print(f"  token: {token!r}")


def _name_table(results: List[Tuple[str, TokenizedName]]) -> Table:
    table = Table(title="Parsed Names", box=box.ROUNDED, show_header=True)
    table.add_column("Name", style="bold")
    table.add_column("Convention")
    table.add_column("Release Title")
    table.add_column("Region")
    table.add_column("Version")
    table.add_column("Part", justify="right")
    table.add_column("Status")
    table.add_column("Flags")

    for _, parsed in results:
        info = to_name_info(parsed)
        flags = [label for label, on in (("demo", info.is_demo),
                                         ("unlicensed", info.is_unlicensed),
                                         ("system", info.is_system)) if on]
        table.add_row(
            to_string(parsed),
            info.naming_convention.value,
            info.release_title,
            to_normalized_region_string(info.region),
            info.version or "",
            str(info.part_number) if info.part_number is not None else "",
            info.status.value,
            ", ".join(flags),
        )
    return table


def run_regions(config: dict, args: argparse.Namespace, console: Console) -> int:
    """Resolve a region string and print canonical codes."""
    if args.convention == 'auto':
        fragments = None
        regions = best_guess(args.region)
    else:
        try:
            fragments, regions = region_resolve(_CONVENTIONS[args.convention], args.region)
        except RegionError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

    if config['output']['format'] == 'plain':
        print(to_normalized_region_string(regions))
        return 0

    table = Table(title="Regions", box=box.ROUNDED)
    table.add_column("Code", style="bold")
    table.add_column("Region")
    for region in regions:
        table.add_row(region.code, region.name.replace('_', ' ').title())
    console.print(table)
    if fragments is not None:
        console.print(f"Fragments: {', '.join(fragments)}", markup=False, highlight=False)
    return 0


def run_dat(config: dict, args: argparse.Namespace, console: Console) -> int:
    """Parse a DAT file and print a summary."""
    check_header = get_config_value(config, 'dats.check_header', True) and not args.no_header_check
    dat_parser = DatParser(
        args.source,
        check_header=check_header,
        skip_unparseable=get_config_value(config, 'dats.skip_unparseable', True),
    )
    try:
        entries = dat_parser.parse_file(args.path)
    except DatError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    with_info = sum(1 for entry in entries if entry.info is not None)
    roms = sum(len(entry.rom_entries) for entry in entries)
    serials = sum(len(entry.serials) for entry in entries)
    rows = [
        ("Source", dat_parser.source.value),
        ("Entries", str(len(entries))),
        ("With name info", str(with_info)),
        ("Unparseable names", str(len(dat_parser.skipped))),
        ("ROMs", str(roms)),
        ("Serials", str(serials)),
    ]

    if config['output']['format'] == 'plain':
        for label, value in rows:
            print(f"{label}: {value}")
        return 0

    table = Table(title=str(args.path.name), box=box.ROUNDED, show_header=False)
    table.add_column("Stage", style="bold")
    table.add_column("Value", justify="right")
    for label, value in rows:
        table.add_row(label, value)
    console.print(table)
    return 0


if __name__ == '__main__':
    sys.exit(main())
