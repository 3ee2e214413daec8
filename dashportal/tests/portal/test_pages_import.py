from __future__ import annotations

"""
Import tests for the portal's Streamlit pages.

Each page module must import without raising; rendering is exercised
manually with `streamlit run scripts/portal/app.py`.
"""

import pytest

from scripts.portal.core.config import PAGE_REGISTRY


@pytest.mark.ui
@pytest.mark.parametrize("route", sorted(PAGE_REGISTRY))
def test_page_imports(route: str):
    module_name, func_name, _ = PAGE_REGISTRY[route]
    module = __import__(module_name, fromlist=[func_name])
    assert callable(getattr(module, func_name))


@pytest.mark.ui
def test_app_imports():
    __import__("scripts.portal.app")
