"""
File utilities for translation operations
"""
import os
import asyncio
import aiofiles
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Awaitable, Callable, List, Optional, Union

from doctranslate.config import TranslationConfig, SIDE_BY_SIDE_EXTENSIONS
from doctranslate.core.adapters import FormatAdapter, JsonAdapter, TxtAdapter
from doctranslate.core.exceptions import TranslationError
from doctranslate.core.glossary import Glossary
from doctranslate.core.pipeline import DocumentPipeline
from doctranslate.core.providers.base import TranslationProvider
from doctranslate.utils.unified_logger import LogType, get_logger

PathLike = Union[str, Path]


@dataclass
class BatchSummary:
    """Counts for one batch run."""
    translated: int = 0
    skipped: int = 0
    failed: int = 0
    failed_files: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            'translated': self.translated,
            'skipped': self.skipped,
            'failed': self.failed,
        }


def get_target_path(file_path: PathLike, target_language: str) -> Path:
    """
    Get the output path for a source file.

    .txt and .json files get a side-by-side copy (notes.txt -> notes.zh.txt)
    so the original is kept; other files (.md, ...) are overwritten in place.
    """
    path = Path(file_path)
    if path.suffix in SIDE_BY_SIDE_EXTENSIONS:
        return path.with_name(f"{path.stem}.{target_language}{path.suffix}")
    return path


def is_translated_output(file_name: str, target_language: str) -> bool:
    """True for files this tool wrote itself, e.g. notes.zh.txt."""
    return any(file_name.endswith(f".{target_language}{ext}") for ext in SIDE_BY_SIDE_EXTENSIONS)


def should_ignore(file_path: PathLike, root: PathLike, config: TranslationConfig) -> bool:
    """
    Check whether a path is excluded by the ignore rules.

    Args:
        file_path: File or directory being visited
        root: Root of the walk; ignore_dirs are matched on paths relative to it
        config: Translation configuration with the ignore lists
    """
    path = Path(file_path)
    try:
        relative_parts = path.relative_to(root).parts
    except ValueError:
        relative_parts = path.parts

    if relative_parts and relative_parts[0] in config.ignore_dirs:
        return True

    if path.name in config.ignore_files:
        return True

    return is_translated_output(path.name, config.target_language)


def _mentions_description(path: Path) -> bool:
    try:
        return '"description"' in path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError):
        return False


def find_files(root: PathLike, config: TranslationConfig) -> List[Path]:
    """
    Find every file that needs translating under root.

    Selects files with a configured extension, plus JSON files that contain a
    "description" key. Directories in ignore_dirs are not descended into.
    """
    root_path = Path(root)
    files: List[Path] = []

    for current_dir, dir_names, file_names in os.walk(root_path):
        current = Path(current_dir)
        dir_names[:] = sorted(d for d in dir_names if not should_ignore(current / d, root_path, config))

        for name in sorted(file_names):
            path = current / name
            if should_ignore(path, root_path, config):
                continue
            if path.suffix in config.file_extensions:
                files.append(path)
            elif path.suffix == '.json' and _mentions_description(path):
                files.append(path)

    return files


def needs_translation(source_path: PathLike, target_path: PathLike) -> bool:
    """
    Decide whether a source file must be (re)translated.

    In-place targets are always translated. Side-by-side targets only when
    missing or older than the source.
    """
    source, target = Path(source_path), Path(target_path)
    if source == target:
        return True
    try:
        return source.stat().st_mtime > target.stat().st_mtime
    except FileNotFoundError:
        return True


def create_adapter(file_path: PathLike, pipeline: DocumentPipeline) -> FormatAdapter:
    """Pick the format adapter for a file by extension."""
    path = Path(file_path)
    if path.suffix == '.json':
        return JsonAdapter(pipeline, source_name=str(path))
    return TxtAdapter(pipeline)


async def translate_file(file_path: PathLike, target_path: PathLike, pipeline: DocumentPipeline) -> None:
    """
    Translate one file and write the result.

    Nothing is written unless the whole document translated successfully.
    """
    async with aiofiles.open(file_path, 'r', encoding='utf-8') as f:
        content = await f.read()

    adapter = create_adapter(file_path, pipeline)
    translated = await adapter.translate(content)

    target = Path(target_path)
    target.parent.mkdir(parents=True, exist_ok=True)
    async with aiofiles.open(target, 'w', encoding='utf-8') as f:
        await f.write(translated)


async def translate_directory(root: PathLike, config: TranslationConfig,
                              provider: TranslationProvider,
                              glossary: Optional[Glossary] = None,
                              sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep) -> BatchSummary:
    """
    Translate every eligible file under root, one document at a time.

    A failing document is logged and counted; the batch carries on with the
    next one. The configured translation delay is taken between documents.

    Returns:
        BatchSummary with translated/skipped/failed counts
    """
    logger = get_logger()
    if glossary is None:
        glossary = Glossary.load(Path(root) / config.glossary_path)
    pipeline = DocumentPipeline(provider, config, glossary, sleep=sleep)
    summary = BatchSummary()

    files = find_files(root, config)
    logger.info("Translation Started", LogType.TRANSLATION_START, {
        'target_lang': config.target_language,
        'glossary_entries': len(glossary),
        'total_files': len(files)
    })

    for file_path in files:
        target_path = get_target_path(file_path, config.target_language)

        if not needs_translation(file_path, target_path):
            logger.info(f"Skipping {file_path} (up to date)", LogType.FILE_OPERATION)
            summary.skipped += 1
            continue

        try:
            logger.info(f"Translating: {file_path}", LogType.FILE_OPERATION)
            await translate_file(file_path, target_path, pipeline)
        except (TranslationError, OSError, UnicodeDecodeError) as e:
            logger.error(f"Failed: {file_path}", LogType.ERROR_DETAIL, {
                'details': str(e),
                'file': str(file_path)
            })
            summary.failed += 1
            summary.failed_files.append(str(file_path))
        else:
            kept = " (original kept)" if target_path != file_path else ""
            logger.info(f"Translated: {target_path}{kept}", LogType.FILE_OPERATION)
            summary.translated += 1

        # Pause between documents, success or not
        await pipeline.gateway.pause()

    logger.info("Translation Completed", LogType.TRANSLATION_END, {'stats': summary.to_dict()})
    return summary
