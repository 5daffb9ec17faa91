"""Storage services: naming, staging, committing and removing stored files."""

from .commit_engine import CommitEngine
from .identity_encoder import IdentityEncoder
from .key_generator import KEY_ALPHABET, KeyGenerator
from .path_resolver import PathResolver
from .removal_engine import RemovalEngine
from .staging_buffer import StagingBuffer, parse_extension, parse_original_filename

__all__ = [
    "IdentityEncoder",
    "KeyGenerator",
    "KEY_ALPHABET",
    "PathResolver",
    "StagingBuffer",
    "CommitEngine",
    "RemovalEngine",
    "parse_original_filename",
    "parse_extension",
]
