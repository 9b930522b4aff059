"""Language detection and import statement parsing."""

from .languages import Language, detect_language, file_extension, EXTENSION_LANGUAGES, RESOLUTION_SUFFIXES
from .import_extractor import ImportExtractor

__all__ = [
    "Language", "detect_language", "file_extension", "EXTENSION_LANGUAGES", "RESOLUTION_SUFFIXES",
    "ImportExtractor",
]
