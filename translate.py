"""
Command-line interface for document translation
"""
import sys
import argparse
import asyncio
from pathlib import Path

from doctranslate.config import (
    TARGET_LANGUAGE, SOURCE_LANGUAGE, GLOSSARY_PATH, MAX_RETRIES, RETRY_DELAY_MS,
    TRANSLATION_DELAY_MS, MAX_CHUNK_LENGTH, TranslationConfig
)
from doctranslate.core.exceptions import ConfigurationError, TranslationError
from doctranslate.core.glossary import Glossary
from doctranslate.core.pipeline import DocumentPipeline
from doctranslate.core.providers import GoogleTranslateProvider
from doctranslate.utils.file_utils import get_target_path, translate_directory, translate_file
from doctranslate.utils.unified_logger import setup_cli_logger, LogType


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Translate markdown/text documents and JSON description fields, keeping code, URLs and glossary terms intact."
    )
    parser.add_argument("-r", "--root", default=".", help="Directory to translate recursively (default: current directory).")
    parser.add_argument("-i", "--input", default=None, help="Translate a single file instead of a directory.")
    parser.add_argument("-tl", "--target_lang", default=TARGET_LANGUAGE, help=f"Target language code (default: {TARGET_LANGUAGE}).")
    parser.add_argument("-sl", "--source_lang", default=SOURCE_LANGUAGE, help=f"Source language code or 'auto' (default: {SOURCE_LANGUAGE}).")
    parser.add_argument("--glossary", default=GLOSSARY_PATH, help=f"Glossary JSON file, relative to the root (default: {GLOSSARY_PATH}).")
    parser.add_argument("--max-retries", type=int, default=MAX_RETRIES, help=f"Retries per chunk after the first attempt (default: {MAX_RETRIES}).")
    parser.add_argument("--retry-delay", type=int, default=RETRY_DELAY_MS, help=f"Base retry delay in ms (default: {RETRY_DELAY_MS}).")
    parser.add_argument("--translation-delay", type=int, default=TRANSLATION_DELAY_MS, help=f"Pause between chunks and files in ms (default: {TRANSLATION_DELAY_MS}).")
    parser.add_argument("--max-chunk-length", type=int, default=MAX_CHUNK_LENGTH, help=f"Maximum characters per request (default: {MAX_CHUNK_LENGTH}).")
    parser.add_argument("--strict", action="store_true", help="Fail a document when placeholders survive restoration.")
    parser.add_argument("--no-color", action="store_true", help="Disable colored output.")
    return parser


async def run(args, config: TranslationConfig) -> int:
    """Run the translation; returns the process exit code."""
    root = Path(args.root)
    async with GoogleTranslateProvider.from_config(config) as provider:
        if args.input:
            glossary = Glossary.load(root / config.glossary_path)
            pipeline = DocumentPipeline(provider, config, glossary)
            target = get_target_path(args.input, config.target_language)
            await translate_file(args.input, target, pipeline)
            return 0

        summary = await translate_directory(root, config, provider)
        return 1 if summary.failed else 0


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logger = setup_cli_logger(enable_colors=not args.no_color)

    try:
        config = TranslationConfig.from_cli_args(args)
    except ConfigurationError as e:
        parser.error(str(e))

    try:
        return asyncio.run(run(args, config))
    except (TranslationError, OSError, UnicodeDecodeError) as e:
        logger.error(f"Translation failed: {e}", LogType.ERROR_DETAIL, {
            'details': str(e),
            'file': args.input or args.root
        })
        return 1


if __name__ == "__main__":
    sys.exit(main())
