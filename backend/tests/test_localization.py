"""Unit tests for the JSON catalog localizer."""
from __future__ import annotations

import json

import pytest

from services.localization import Localizer


@pytest.fixture()
def locales_dir(tmp_path):
    (tmp_path / 'en.json').write_text(json.dumps({
        'greeting': 'Hello {0}',
        'farewell': 'Goodbye',
    }), encoding='utf-8')
    (tmp_path / 'fr.json').write_text(json.dumps({
        'greeting': 'Bonjour {0}',
    }), encoding='utf-8')
    return tmp_path


def test_get_formats_positional_args(locales_dir) -> None:
    localizer = Localizer(str(locales_dir))

    assert localizer.get('greeting', 'fr', ('Ada',)) == 'Bonjour Ada'


def test_get_uses_default_culture_when_none(locales_dir) -> None:
    localizer = Localizer(str(locales_dir), default_culture='en')

    assert localizer.get('greeting', None, ('Ada',)) == 'Hello Ada'


def test_regional_culture_falls_back_to_neutral(locales_dir) -> None:
    localizer = Localizer(str(locales_dir))

    assert localizer.get('greeting', 'fr-CA', ('Ada',)) == 'Bonjour Ada'


def test_missing_key_in_culture_falls_back_to_default(locales_dir) -> None:
    localizer = Localizer(str(locales_dir))

    assert localizer.get('farewell', 'fr') == 'Goodbye'


def test_unknown_key_returns_key(locales_dir, caplog) -> None:
    localizer = Localizer(str(locales_dir))

    assert localizer.get('nope', 'en') == 'nope'
    assert "Missing localization key 'nope'" in caplog.text


def test_bad_format_args_return_unformatted_text(locales_dir) -> None:
    localizer = Localizer(str(locales_dir))

    assert localizer.get('farewell', 'en', ('extra',)) == 'Goodbye'
    assert localizer.get('greeting', 'en', ()) == 'Hello {0}'
