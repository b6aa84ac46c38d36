import logging
from fnmatch import fnmatchcase
from functools import lru_cache
from pathlib import Path
from typing import Any, Generator

import orjson
import pytest

from gemini_api.api import GeminiApiClient
from tests.mock_executors import MockHttpExecutor, MockOutputNotExhausted

DATA_DIR = Path(__file__).parent.joinpath("data")

log = logging.getLogger(__name__)

API_KEY = "account-FOO"
API_SECRET = "BAR"


@pytest.fixture
def mock_http_client() -> Generator[
    tuple[GeminiApiClient, MockHttpExecutor], None, None
]:
    mock_http = MockHttpExecutor()
    client = GeminiApiClient(
        api_key=API_KEY,
        api_secret=API_SECRET,
        # replace real network requests with our mock
        executor=mock_http,
    )

    yield (client, mock_http)

    if len(mock_http.staged_outputs) > 0:
        raise MockOutputNotExhausted(mock_http.staged_outputs)


@pytest.fixture
def public_http_client() -> Generator[
    tuple[GeminiApiClient, MockHttpExecutor], None, None
]:
    mock_http = MockHttpExecutor()
    client = GeminiApiClient(executor=mock_http)

    yield (client, mock_http)

    if len(mock_http.staged_outputs) > 0:
        raise MockOutputNotExhausted(mock_http.staged_outputs)


@lru_cache(maxsize=1)
def data_files() -> list[Path]:
    return list(DATA_DIR.iterdir())


@lru_cache
def json_data_files(name: str) -> list[Path]:
    return list(
        sorted(
            path
            for path in data_files()
            if fnmatchcase(path.name, f"{name}.*.json")
        )
    )


def load_json(name: str, case: int | None = None) -> Any:
    case_part = f"{case}." if case else ""
    path = DATA_DIR / f"{name}.{case_part}json"
    with open(path, "rb") as fh:
        return orjson.loads(fh.read())


def load_json_all_cases(name: str) -> list[tuple[Any, Path]]:
    """Load all json payloads for a given base name (case1, case2, ...)."""
    results = []
    for path in json_data_files(name):
        log.debug("Loading json from %s", path.as_posix())
        with open(path, "rb") as fh:
            payload = orjson.loads(fh.read())
            results.append((payload, path))
    return results
