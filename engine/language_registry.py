"""Registry of bundled language word lists."""

import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from engine.errors import InvalidLanguage, LanguageAssetError
from engine.models import LanguageAsset

log = logging.getLogger("typetrainer.languages")

DEFAULT_LANGUAGE: str = "english"
LANGUAGES_DIR: Path = Path(__file__).parent / "languages"


class LanguageRegistry:
    """Lists and reads the language assets found in a directory.

    The list of available languages is computed once, when the registry is
    created. The application creates one registry at startup and hands it
    to every component that needs it.
    """

    def __init__(self, languages_dir: Optional[Path] = None):
        """Initialize registry.

        Args:
            languages_dir: Directory holding ``<language>.json`` files
                (defaults to the bundled word lists)
        """
        self.languages_dir = Path(languages_dir) if languages_dir else LANGUAGES_DIR
        self._languages = self._detect_languages()
        log.debug(f"Detected languages: {self._languages}")

    def _detect_languages(self) -> list[str]:
        if not self.languages_dir.is_dir():
            log.warning(f"Languages directory not found: {self.languages_dir}")
            return []
        return sorted(
            (p.stem for p in self.languages_dir.glob("*.json") if p.is_file()),
            key=str.lower,
        )

    def available_languages(self) -> list[str]:
        return list(self._languages)

    def has_language(self, language: str) -> bool:
        return language in self._languages

    def read_language(self, language: str) -> LanguageAsset:
        """Read and validate a language asset.

        Args:
            language: Language name, e.g. 'english'

        Returns:
            The deserialized word list

        Raises:
            InvalidLanguage: If the language is not available
            LanguageAssetError: If the asset cannot be read or is malformed
        """
        if not self.has_language(language):
            raise InvalidLanguage(language)

        path = self.languages_dir / f"{language}.json"
        try:
            content = path.read_text(encoding="utf-8")
            asset = LanguageAsset.model_validate(json.loads(content))
        except (OSError, json.JSONDecodeError, ValidationError) as e:
            raise LanguageAssetError(
                language, f"Failed to load language {language} from {path}: {e}"
            ) from e

        log.info(f"Loaded {len(asset.words)} {language} words from {path}")
        return asset
