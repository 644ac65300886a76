"""Command-line interface for density and biome queries."""

import argparse
import sys
import time


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="worldgen", description="Sample terrain density and biomes"
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default="default",
        help="Config name or path to a TOML file (default: default)",
    )
    parser.add_argument("--seed", type=int, default=None, help="Override the config seed")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")

    commands = parser.add_subparsers(dest="command", required=True)

    sample = commands.add_parser("sample", help="Sample a density function at a block")
    sample.add_argument("name", help="Router entry (e.g. final_density) or document name")
    sample.add_argument("x", type=int)
    sample.add_argument("y", type=int)
    sample.add_argument("z", type=int)
    sample.add_argument("--trace", action="store_true", help="Print every node evaluated")

    biome = commands.add_parser("biome", help="Classify the biome at a quarter position")
    biome.add_argument("x", type=int, help="Quarter x (block x / 4)")
    biome.add_argument("y", type=int, help="Quarter y (block y / 4)")
    biome.add_argument("z", type=int, help="Quarter z (block z / 4)")

    column = commands.add_parser("column", help="Fill a chunk and print one block column")
    column.add_argument("chunk_x", type=int)
    column.add_argument("chunk_z", type=int)
    column.add_argument("--local-x", type=int, default=0, help="Block x inside the chunk (0-15)")
    column.add_argument("--local-z", type=int, default=0, help="Block z inside the chunk (0-15)")
    column.add_argument("--step", type=int, default=8, help="Print every n-th block (default: 8)")
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    args = build_parser().parse_args(argv)

    # Import here to avoid slow startup for --help
    import tomllib

    from pydantic import ValidationError

    from .config import find_config, load_config
    from .engine import TerrainEngine
    from .exceptions import WorldgenError
    from .logging import configure_logging
    from .types import BlockPos

    try:
        if args.command == "column" and not (0 <= args.local_x < 16 and 0 <= args.local_z < 16):
            raise WorldgenError("Local coordinates must be in 0..15")

        config = load_config(find_config(args.config))
        if args.seed is not None:
            config = config.model_copy(update={"seed": args.seed})
        configure_logging("debug" if args.verbose else config.log_level)

        start_time = time.time()
        engine = TerrainEngine.from_config(config)
        if args.verbose:
            print(f"Engine built in {time.time() - start_time:.2f}s (seed {config.seed})")

        if args.command == "sample":
            pos = BlockPos(args.x, args.y, args.z)
            if args.trace:
                value, trace = engine.trace_density(args.name, pos)
                for description, node_value in trace:
                    print(f"{node_value: .10f}  {description}")
            else:
                value = engine.sample_density(args.name, pos)
            print(f"{args.name} at {pos}: {value!r}")

        elif args.command == "biome":
            pos = BlockPos(args.x, args.y, args.z)
            print(f"climate: {engine.climate_at(pos)}")
            print(f"biome: {engine.classify_biome(pos)}")

        elif args.command == "column":
            density = engine.chunk_density(args.chunk_x, args.chunk_z)
            min_y = engine.settings.noise.min_y
            min_y -= min_y % engine.settings.cell_height
            column = density[args.local_x, :, args.local_z]
            for i in range(len(column) - 1, -1, -max(args.step, 1)):
                marker = "#" if column[i] > 0 else "."
                print(f"{min_y + i:5d} {marker} {column[i]: .6f}")

    except (WorldgenError, FileNotFoundError, ValidationError, tomllib.TOMLDecodeError) as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
