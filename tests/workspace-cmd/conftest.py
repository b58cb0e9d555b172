import pytest


def pytest_collection_modifyitems(items):
    for item in items:
        if "workspace-cmd" in str(item.fspath) and "integration" not in item.keywords:
            item.add_marker(pytest.mark.unit)
