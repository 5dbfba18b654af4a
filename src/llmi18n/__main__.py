"""llmi18n entry point.

Usage:
    python -m llmi18n [FILE] [OPTIONS]

Options:
    --config PATH      Path to YAML config file
    --lang LANG        Target language (e.g. de)
    --model NAME       Ollama model name
    --host URL         Ollama server URL
    --log-level LEVEL  Logging level
    --help             Show this help message
    --version          Show version
"""

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

from dotenv import load_dotenv

from . import __version__
from .config.loader import load_config
from .llm.client import normalize_host
from .llm.errors import OllamaError
from .translate import Translator


def setup_logging(level: str) -> None:
    """Configure logging based on config."""
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="llmi18n",
        description="Translate the quoted strings of a file with a local Ollama model",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  llmi18n i18n/en.yaml                  # Translate to German with mistral
  llmi18n i18n/en.yaml --lang fr        # Translate to French
  cat en.toml | llmi18n - --model llama2

Environment:
  OLLAMA_HOST               Ollama server URL
  LLMI18N_MODEL             Model name
  LLMI18N_TARGET_LANGUAGE   Target language
  LLMI18N_LOG_LEVEL         Logging level
""",
    )

    parser.add_argument(
        "file",
        nargs="?",
        default="-",
        help="File to translate ('-' reads stdin)",
    )

    parser.add_argument(
        "--config",
        type=Path,
        help="Path to YAML config file",
        metavar="PATH",
    )

    parser.add_argument("--lang", help="Target language", metavar="LANG")
    parser.add_argument("--model", help="Ollama model name", metavar="NAME")
    parser.add_argument("--host", help="Ollama server URL", metavar="URL")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"llmi18n v{__version__}",
    )

    return parser.parse_args(argv)


def read_input(source: str) -> str:
    """Read the text to translate from a file or stdin."""
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def main(argv: list[str] | None = None) -> int:
    """Main entry point for llmi18n.

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    load_dotenv()
    args = parse_args(argv)

    # Load configuration
    try:
        config = load_config(path=args.config)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except (ValueError, TypeError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1

    if args.lang:
        config.translation = replace(config.translation, target_language=args.lang)
    if args.model:
        config.translation = replace(config.translation, model=args.model)
    if args.host:
        config.ollama = replace(config.ollama, host=normalize_host(args.host))
    if args.log_level:
        config.logging = replace(config.logging, level=args.log_level)

    setup_logging(config.logging.level)
    logger = logging.getLogger("llmi18n")

    try:
        text = read_input(args.file)
    except OSError as e:
        logger.error(f"Cannot read input: {e}")
        return 1

    logger.info(
        f"Translating {args.file} to {config.translation.target_language} "
        f"with {config.translation.model} at {config.ollama.host}"
    )

    translator = Translator.from_config(config)
    try:
        result = translator.translate(text)
    except OllamaError as e:
        logger.error(f"Translation failed: {e}")
        return 1

    print(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
