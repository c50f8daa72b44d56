"""
Centralized configuration class
"""
import os
import logging
from pathlib import Path
from dataclasses import dataclass, field, asdict
from typing import Tuple
from dotenv import load_dotenv

from doctranslate.core.exceptions import ConfigurationError

# Setup debug logger for configuration
_config_logger = logging.getLogger('config')

# Check for DEBUG_MODE early (before .env is loaded, check environment)
_debug_mode = os.getenv('DEBUG_MODE', 'false').lower() == 'true'
if _debug_mode:
    logging.basicConfig(level=logging.DEBUG, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    _config_logger.setLevel(logging.DEBUG)

# Load .env from the current working directory if present
_env_file = Path.cwd() / '.env'
_dotenv_result = load_dotenv(_env_file)
if _debug_mode:
    _config_logger.debug(f"load_dotenv({_env_file}) returned: {_dotenv_result}")

# Load from environment variables with defaults
TARGET_LANGUAGE = os.getenv('TARGET_LANGUAGE', 'zh')
SOURCE_LANGUAGE = os.getenv('SOURCE_LANGUAGE', 'en')
API_ENDPOINT = os.getenv('API_ENDPOINT', 'https://translate.googleapis.com/translate_a/single')
TRANSLATE_KEY = os.getenv('TRANSLATE_KEY', '')
REQUEST_TIMEOUT = int(os.getenv('REQUEST_TIMEOUT', '30'))

# Retry and pacing (milliseconds)
MAX_RETRIES = int(os.getenv('MAX_RETRIES', '3'))
RETRY_DELAY_MS = int(os.getenv('RETRY_DELAY_MS', '2000'))
TRANSLATION_DELAY_MS = int(os.getenv('TRANSLATION_DELAY_MS', '500'))
RETRY_STRATEGY = os.getenv('RETRY_STRATEGY', 'linear')

# Chunking: provider request limit in characters
MAX_CHUNK_LENGTH = int(os.getenv('MAX_CHUNK_LENGTH', '5000'))

GLOSSARY_PATH = os.getenv('GLOSSARY_PATH', 'glossary.json')
STRICT_RESTORATION = os.getenv('STRICT_RESTORATION', 'false').lower() == 'true'

# Debug mode (reload after .env is loaded)
DEBUG_MODE = os.getenv('DEBUG_MODE', 'false').lower() == 'true'

# File discovery defaults
DEFAULT_FILE_EXTENSIONS = ('.txt', '.md')
DEFAULT_IGNORE_DIRS = ('node_modules', '.git', '.github', 'scripts', 'assets')
DEFAULT_IGNORE_FILES = ('package.json', 'package-lock.json', 'glossary.json', '.gitignore')

# Extensions written next to the source as name.<lang>.<ext> instead of overwritten
SIDE_BY_SIDE_EXTENSIONS = ('.txt', '.json')

if DEBUG_MODE or _debug_mode:
    _config_logger.setLevel(logging.DEBUG)
    _config_logger.debug("="*60)
    _config_logger.debug("LOADED CONFIGURATION VALUES:")
    _config_logger.debug(f"   TARGET_LANGUAGE: {TARGET_LANGUAGE}")
    _config_logger.debug(f"   SOURCE_LANGUAGE: {SOURCE_LANGUAGE}")
    _config_logger.debug(f"   API_ENDPOINT: {API_ENDPOINT}")
    _config_logger.debug(f"   TRANSLATE_KEY: {'***' + TRANSLATE_KEY[-4:] if TRANSLATE_KEY else '(not set)'}")
    _config_logger.debug(f"   MAX_RETRIES: {MAX_RETRIES}")
    _config_logger.debug(f"   RETRY_DELAY_MS: {RETRY_DELAY_MS}")
    _config_logger.debug(f"   TRANSLATION_DELAY_MS: {TRANSLATION_DELAY_MS}")
    _config_logger.debug(f"   MAX_CHUNK_LENGTH: {MAX_CHUNK_LENGTH}")
    _config_logger.debug(f"   GLOSSARY_PATH: {GLOSSARY_PATH}")
    _config_logger.debug("="*60)


@dataclass(frozen=True)
class TranslationConfig:
    """Immutable configuration shared by every pipeline component"""

    # Core settings
    target_language: str = TARGET_LANGUAGE
    source_language: str = SOURCE_LANGUAGE
    api_endpoint: str = API_ENDPOINT
    api_key: str = TRANSLATE_KEY
    timeout: int = REQUEST_TIMEOUT

    # Retry and pacing
    max_retries: int = MAX_RETRIES
    retry_delay: int = RETRY_DELAY_MS
    translation_delay: int = TRANSLATION_DELAY_MS
    retry_strategy: str = RETRY_STRATEGY

    # Chunking
    max_chunk_length: int = MAX_CHUNK_LENGTH

    # Glossary and restoration
    glossary_path: str = GLOSSARY_PATH
    strict_restoration: bool = STRICT_RESTORATION

    # File discovery
    file_extensions: Tuple[str, ...] = DEFAULT_FILE_EXTENSIONS
    ignore_dirs: Tuple[str, ...] = DEFAULT_IGNORE_DIRS
    ignore_files: Tuple[str, ...] = field(default=DEFAULT_IGNORE_FILES)

    # Interface-specific
    enable_colors: bool = True

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """Reject values the pipeline cannot run with. Raises ConfigurationError."""
        if not self.target_language:
            raise ConfigurationError("target_language must not be empty")
        if self.max_retries < 0:
            raise ConfigurationError(
                f"max_retries must be >= 0, got {self.max_retries}",
                context={'max_retries': self.max_retries}
            )
        if self.retry_delay < 0 or self.translation_delay < 0:
            raise ConfigurationError(
                "retry_delay and translation_delay must be >= 0",
                context={'retry_delay': self.retry_delay, 'translation_delay': self.translation_delay}
            )
        if self.max_chunk_length <= 0:
            raise ConfigurationError(
                f"max_chunk_length must be positive, got {self.max_chunk_length}",
                context={'max_chunk_length': self.max_chunk_length}
            )
        if self.retry_strategy not in ('linear', 'exponential'):
            raise ConfigurationError(f"Unknown retry_strategy: {self.retry_strategy}")

    @property
    def retry_delay_seconds(self) -> float:
        return self.retry_delay / 1000

    @property
    def translation_delay_seconds(self) -> float:
        return self.translation_delay / 1000

    @classmethod
    def from_cli_args(cls, args) -> 'TranslationConfig':
        """Create config from CLI arguments"""
        return cls(
            target_language=args.target_lang,
            source_language=args.source_lang,
            glossary_path=args.glossary,
            max_retries=args.max_retries,
            retry_delay=args.retry_delay,
            translation_delay=args.translation_delay,
            max_chunk_length=args.max_chunk_length,
            strict_restoration=getattr(args, 'strict', STRICT_RESTORATION),
            enable_colors=not getattr(args, 'no_color', False),
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization (API key masked)"""
        data = asdict(self)
        if data['api_key']:
            data['api_key'] = '***' + data['api_key'][-4:]
        return data
