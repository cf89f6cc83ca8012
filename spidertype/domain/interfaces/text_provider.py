"""Target text provider protocol."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class TextProvider(Protocol):
    """Protocol for pools of practice texts keyed by language id."""

    def get_random_text(self, language_id: str) -> str:
        """Pick a practice text for a language.

        Args:
            language_id: Identifier of the snippet pool (e.g. "python").

        Returns:
            str: The target text to type.

        Raises:
            ValueError: If the language is not known.
        """
        ...

    def list_languages(self) -> list[str]:
        """List the language ids this provider can serve."""
        ...
