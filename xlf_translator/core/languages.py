"""
Language registry.

Maps a human-facing language name (the store column header) to its XLF
language code. The store's columns are user-editable, so the languages that
can actually be exported are the configured ones that also exist as columns.
"""

from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence

from xlf_translator.exceptions import UnknownLanguage


class LanguageRegistry:
    """Ordered mapping of language name -> XLF code."""

    def __init__(self, languages: Mapping[str, str]):
        self._languages: Dict[str, str] = dict(languages)

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "LanguageRegistry":
        return cls(config["languages"])

    @property
    def names(self) -> List[str]:
        return list(self._languages)

    def __contains__(self, name: object) -> bool:
        return name in self._languages

    def __iter__(self) -> Iterator[str]:
        return iter(self._languages)

    def __len__(self) -> int:
        return len(self._languages)

    def available_languages(self, columns: Optional[Sequence[str]]) -> List[str]:
        """
        Configured languages that also exist as store columns.

        Keeps the configured order. Without columns every configured
        language is returned.
        """
        if columns is None:
            return self.names
        present = set(columns)
        return [name for name in self._languages if name in present]

    def code_for(self, name: str) -> str:
        """Get the XLF language code for a display name."""
        try:
            return self._languages[name]
        except KeyError:
            raise UnknownLanguage(
                f"Unknown language: {name}",
                details={"language": name, "configured": self.names},
            ) from None

    def resolve(self, name: str, columns: Optional[Sequence[str]]) -> str:
        """Get the code for a language that is both configured and present in the store."""
        available = self.available_languages(columns)
        if name not in available:
            raise UnknownLanguage(
                f"Invalid language: {name}. Available languages: {', '.join(available)}",
                details={"language": name, "available": available},
            )
        return self._languages[name]
