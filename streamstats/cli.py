import argparse
import sys
from contextlib import nullcontext

from streamstats.bench.reader import InvalidInputError, ValueReader
from streamstats.bench.runner import StatsRunner
from streamstats.config import configure_logging, load_config
from streamstats.export.result_sink import OUTPUT_FORMATS, ResultSink

EXIT_OK = 0
EXIT_INVALID_INPUT = 1
EXIT_CONFIG_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="streamstats",
        description="Read whitespace separated numbers and print min, max, mean, Pct90 and Pct95.",
    )
    parser.add_argument("-i", "--input", default=None,
                        help="file to read numbers from ('-' for stdin, the default)")
    parser.add_argument("-c", "--config", default=None,
                        help="YAML config file (keys: input, log_level, export.format)")
    parser.add_argument("-f", "--format", choices=OUTPUT_FORMATS, default=None,
                        help="report format (default: text)")
    parser.add_argument("--log-level", default=None,
                        help="diagnostic log level on stderr (default: WARNING)")
    return parser


def main(argv=None, stdin=None, stdout=None, stderr=None, env=None) -> int:
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout
    stderr = stderr if stderr is not None else sys.stderr

    args = build_parser().parse_args(argv)

    try:
        cfg = load_config(
            config_path=args.config,
            env=env,
            input_path=args.input,
            output_format=args.format,
            log_level=args.log_level,
        )
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=stderr)
        return EXIT_CONFIG_ERROR

    logger = configure_logging(cfg.log_level, stderr)
    logger.debug("Effective config: %s", cfg)

    runner = StatsRunner(
        reader=ValueReader(),
        result_sink=ResultSink(stream=stdout, output_format=cfg.output_format),
    )

    try:
        source = open(cfg.input_path, "r", encoding="utf-8") if cfg.input_path else nullcontext(stdin)
    except OSError as e:
        print(f"Error: cannot open input {cfg.input_path}: {e.strerror}", file=stderr)
        return EXIT_CONFIG_ERROR

    with source as lines:
        try:
            runner.run(lines, source=cfg.input_path or "<stdin>")
        except InvalidInputError as e:
            logger.debug("%s", e)
            print("Invalid input data", file=stderr)
            return EXIT_INVALID_INPUT

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
