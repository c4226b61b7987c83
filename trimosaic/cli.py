import argparse
import sys

from .config import load_config, validate_config, setup_paths, register_configs
from .errors import MissingInputError, TriMosaicError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='trimosaic',
        description="TriMosaic - Approximate images with translucent triangles",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="Passing a .json triangle list as input re-renders it instead."
    )

    parser.add_argument('input', nargs='?', help='Input image path (or saved .json triangle list)')
    parser.add_argument('--config', type=str, default='config.yaml',
                        help='Path to configuration file')
    parser.add_argument('--output', type=str, help='Output PNG path')
    parser.add_argument('--svg', type=str, help='Output SVG path')
    parser.add_argument('--json', type=str, help='Output JSON triangle list path')
    parser.add_argument('--compare', type=str, help='Output side-by-side comparison path')
    parser.add_argument('--scale', type=float, help='Scale factor for vector and replayed output')
    parser.add_argument('--triangles_n', type=int, help='Override number of triangles')
    parser.add_argument('--candidates', type=int, help='Override candidates per round')
    parser.add_argument('--opacity', type=int, help='Override triangle opacity (0-255)')
    parser.add_argument('--proxy_size', type=int, help='Override evaluation resolution (0 = full)')
    parser.add_argument('--workers', type=int, help='Override number of worker threads/processes')
    parser.add_argument('--seed', type=int, help='Random seed')
    parser.add_argument('--quiet', action='store_true', help='Disable the progress bar')
    parser.add_argument('overrides', nargs='*', help='Additional config overrides')

    return parser


def build_overrides(args: argparse.Namespace) -> list:
    """Translate command line flags into OmegaConf dotlist overrides."""
    overrides = []
    if args.output:
        overrides.append(f'output.png={args.output}')
    if args.svg:
        overrides.append(f'output.svg={args.svg}')
    if args.json:
        overrides.append(f'output.json={args.json}')
    if args.compare:
        overrides.append(f'output.compare={args.compare}')
    if args.scale is not None:
        overrides.append(f'output.scale={args.scale}')
    if args.triangles_n is not None:
        overrides.append(f'triangles_n={args.triangles_n}')
    if args.candidates is not None:
        overrides.append(f'search.candidates={args.candidates}')
    if args.opacity is not None:
        overrides.append(f'search.opacity={args.opacity}')
    if args.proxy_size is not None:
        overrides.append(f'search.proxy_size={args.proxy_size}')
    if args.workers is not None:
        overrides.append(f'search.workers={args.workers}')
    if args.seed is not None:
        overrides.append(f'search.seed={args.seed}')
    if args.quiet:
        overrides.append('logging.progress=false')
    overrides.extend(args.overrides)
    return overrides


def run(argv=None) -> None:
    """Parse arguments and run. Errors propagate to the caller."""
    register_configs()

    args = build_parser().parse_intermixed_args(argv)
    if not args.input:
        raise MissingInputError()

    # Load config with overrides
    cfg = load_config(args.config, build_overrides(args))

    # Validate configuration
    validate_config(cfg)

    # Setup paths
    setup_paths(cfg)

    from .pipeline import approximate_image, replay_vector
    if args.input.lower().endswith('.json'):
        replay_vector(args.input, cfg)
    else:
        approximate_image(args.input, cfg)


def main(argv=None):
    """Main CLI entry point for TriMosaic."""
    try:
        run(argv)
    except AssertionError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        sys.exit(2)
    except TriMosaicError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
