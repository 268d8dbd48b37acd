"""
JSON catalog localizer.

Catalogs live in ``<locales_dir>/<culture>.json`` as flat ``{"key": "text"}``
objects. Text is formatted with ``str.format`` after lookup.
"""

import json
import logging
import os
from typing import Dict, Iterable, Optional, Sequence

logger = logging.getLogger(__name__)


class Localizer:
    """Looks up display strings by key and culture."""

    def __init__(self, locales_dir: str, default_culture: str = 'en'):
        self.locales_dir = locales_dir
        self.default_culture = default_culture
        self._catalogs: Dict[str, Dict[str, str]] = {}

    def get(self, key: str, culture: Optional[str] = None, args: Sequence = ()) -> str:
        """
        Return the localized text for key.

        Args:
            key: Resource identifier, e.g. 'contact.saved'
            culture: Culture name such as 'fr' or 'fr-CA'; the default culture when None
            args: Positional values applied with str.format

        Returns:
            The formatted text, or the key itself when no catalog defines it
        """
        text = None
        for candidate in self._fallback_chain(culture or self.default_culture):
            text = self._catalog(candidate).get(key)
            if text is not None:
                break

        if text is None:
            logger.warning(f"Missing localization key '{key}' for culture '{culture}'")
            text = key

        if args:
            try:
                return text.format(*args)
            except (IndexError, KeyError, ValueError):
                logger.warning(f"Could not format localization key '{key}' with {len(args)} args")
        return text

    def _fallback_chain(self, culture: str) -> Iterable[str]:
        chain = [culture]
        neutral = culture.replace('_', '-').split('-')[0]
        if neutral and neutral not in chain:
            chain.append(neutral)
        if self.default_culture not in chain:
            chain.append(self.default_culture)
        return chain

    def _catalog(self, culture: str) -> Dict[str, str]:
        if culture not in self._catalogs:
            path = os.path.join(self.locales_dir, f"{culture}.json")
            try:
                with open(path, encoding='utf-8') as f:
                    self._catalogs[culture] = json.load(f)
                logger.info(f"Loaded localization catalog {path}")
            except FileNotFoundError:
                self._catalogs[culture] = {}
        return self._catalogs[culture]
