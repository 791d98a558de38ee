import pytest
from actracker.core.types import ThemeInfo
from actracker.collectors.theme import is_theme_supported, get_theme_info, LEGACY_THEMES, SUPPORT_FEATURE

def test_declared_support_always_wins():
    theme = ThemeInfo(name="Twenty Ten", template="twentyten", supports={SUPPORT_FEATURE})
    assert is_theme_supported(theme) is True

@pytest.mark.parametrize("template", LEGACY_THEMES)
def test_legacy_theme_without_support_is_incompatible(template):
    assert is_theme_supported(ThemeInfo(template=template)) is False

def test_other_themes_are_compatible():
    assert is_theme_supported(ThemeInfo(template="storefront")) is True
    assert is_theme_supported(ThemeInfo(template="twentytwentyfour")) is True

def test_theme_info_section(host):
    host.theme = ThemeInfo(name="Child", version="1.0", template="twentytwelve", is_child=True)
    assert get_theme_info(host) == {
        "name": "Child",
        "version": "1.0",
        "child_theme": "Yes",
        "ac_supported": "No",
    }
