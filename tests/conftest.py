import pytest

try:
    from dotenv import load_dotenv
    from pathlib import Path

    # Load test-time environment variables (e.g. SPARQL endpoint config)
    load_dotenv(Path(__file__).with_name(".env"), override=True)
except Exception:
    # It is safe to run tests without a .env; live SPARQL tests will skip
    # themselves automatically if required env vars are missing.
    pass

# Register shared fixtures from the `tests/fixtures` package.
# - sparql_fixtures: mocked and live SPARQL clients.
pytest_plugins = [
    "tests.fixtures.sparql_fixtures",
]


@pytest.fixture(scope="function", autouse=True)
def reset_namespaces():
    """
    Ensure the process-wide prefix registry is back to its defaults
    between tests, so prefix injection is deterministic and tests cannot
    interfere with one another via registered namespaces.
    """
    from pydsparql.namespaces import RdfNamespace

    RdfNamespace.reset()
    yield
    RdfNamespace.reset()
