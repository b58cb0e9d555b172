import pytest


def pytest_collection_modifyitems(items):
    for item in items:
        if "skeleton-cmd" in str(item.fspath) and "integration" not in item.keywords:
            item.add_marker(pytest.mark.unit)
