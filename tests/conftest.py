"""Shared test fixtures for pubresolve."""

import logging

import pytest

from pubresolve.config.models import PubResolveConfig
from pubresolve.records.models import PublishEntry, PublishRecord
from pubresolve.services import SERVICES

from sample_data import CONNECT_SERVER, NETLIFY_ID, NETLIFY_URL, SAMPLE_RECORD_YAML


@pytest.fixture(autouse=True)
def _restore_package_logger():
    """CLI runs and logging tests reconfigure the package logger; undo that."""
    logger = logging.getLogger("pubresolve")
    level, handlers = logger.level, list(logger.handlers)
    yield
    logger.setLevel(level)
    logger.handlers[:] = handlers


@pytest.fixture(autouse=True)
def _clean_credential_env(monkeypatch):
    """No test should see credentials from the machine running it."""
    for spec in SERVICES.values():
        for name in spec.env_vars:
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def netlify_record():
    return PublishRecord(
        source="project",
        service="netlify",
        entries=[PublishEntry(id=NETLIFY_ID, url=NETLIFY_URL)],
    )


@pytest.fixture
def connect_record():
    return PublishRecord(
        source="project",
        service="connect",
        entries=[
            PublishEntry(
                id="4f2ee8b2-0a36-4b4f-a6c5-8f4b43a3c7a1",
                url=f"{CONNECT_SERVER}/content/4f2ee8b2/",
                server=CONNECT_SERVER,
            ),
            PublishEntry(
                id="9b1c7d55-2e1f-4a0b-8d3c-6e5f4a3b2c1d",
                url=f"{CONNECT_SERVER}/content/9b1c7d55/",
                server=CONNECT_SERVER,
            ),
        ],
    )


@pytest.fixture
def quarto_pub_record():
    return PublishRecord(
        source="project",
        service="quarto-pub",
        entries=[PublishEntry(id="a1b2c3", url="https://example.quarto.pub/site/")],
    )


@pytest.fixture
def full_env():
    return {
        "NETLIFY_AUTH_TOKEN": "nfp_token",
        "QUARTO_PUB_AUTH_TOKEN": "qp_token",
        "CONNECT_SERVER": CONNECT_SERVER,
        "CONNECT_API_KEY": "ck_secret",
    }


@pytest.fixture
def sample_config():
    return PubResolveConfig()


@pytest.fixture
def project_dir(tmp_path):
    """A project directory with a single Netlify record."""
    project = tmp_path / "site"
    project.mkdir()
    (project / "_publish.yml").write_text(SAMPLE_RECORD_YAML)
    return project
