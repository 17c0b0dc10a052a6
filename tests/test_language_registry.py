"""Tests for LanguageRegistry."""

import json

import pytest

from engine.errors import InvalidLanguage, LanguageAssetError
from engine.language_registry import DEFAULT_LANGUAGE, LanguageRegistry
from engine.models import LanguageAsset


class TestLanguageRegistry:
    """Test language detection and loading."""

    def test_available_languages_sorted(self, registry):
        assert registry.available_languages() == ["broken", "empty", "english", "pirate"]

    def test_available_languages_is_a_copy(self, registry):
        registry.available_languages().append("klingon")
        assert not registry.has_language("klingon")

    def test_has_language(self, registry):
        assert registry.has_language("pirate")
        assert not registry.has_language("klingon")

    def test_detected_once(self, registry, languages_dir):
        """Test that files added after creation are not picked up."""
        (languages_dir / "late.json").write_text(json.dumps({"name": "late", "words": ["x"]}))
        assert not registry.has_language("late")

    def test_read_language(self, registry):
        asset = registry.read_language("pirate")
        assert isinstance(asset, LanguageAsset)
        assert asset.name == "pirate"
        assert asset.words == ["arr", "ahoy", "matey", "plank"]

    def test_read_unknown_language(self, registry):
        with pytest.raises(InvalidLanguage) as exc_info:
            registry.read_language("klingon")
        assert exc_info.value.language == "klingon"
        assert "klingon" in str(exc_info.value)

    def test_read_invalid_json(self, registry):
        with pytest.raises(LanguageAssetError) as exc_info:
            registry.read_language("broken")
        assert exc_info.value.language == "broken"
        assert isinstance(exc_info.value.__cause__, json.JSONDecodeError)

    def test_read_empty_word_list(self, registry):
        with pytest.raises(LanguageAssetError):
            registry.read_language("empty")

    def test_blank_words_dropped(self, languages_dir):
        (languages_dir / "sparse.json").write_text(
            json.dumps({"name": "sparse", "words": ["one", "  ", "", " two "], "author": "x"})
        )
        asset = LanguageRegistry(languages_dir).read_language("sparse")
        assert asset.words == ["one", "two"]

    def test_only_blank_words_rejected(self, languages_dir):
        (languages_dir / "blank.json").write_text(
            json.dumps({"name": "blank", "words": [" ", ""]})
        )
        with pytest.raises(LanguageAssetError):
            LanguageRegistry(languages_dir).read_language("blank")

    def test_missing_directory(self, tmp_path):
        registry = LanguageRegistry(tmp_path / "nope")
        assert registry.available_languages() == []
        with pytest.raises(InvalidLanguage):
            registry.read_language(DEFAULT_LANGUAGE)


class TestBundledLanguages:
    """Test the word lists shipped with the package."""

    def test_bundled_languages_present(self):
        registry = LanguageRegistry()
        for language in ("english", "german", "spanish"):
            assert registry.has_language(language)

    @pytest.mark.parametrize("language", ["english", "german", "spanish"])
    def test_bundled_language_valid(self, language):
        asset = LanguageRegistry().read_language(language)
        assert asset.name == language
        assert len(asset.words) >= 100
        assert all(" " not in w for w in asset.words)
