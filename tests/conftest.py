"""
Pytest configuration for letterquill
"""

import logging
import sys

import pytest

from letterquill.engine.geometry import PageGeometry
from letterquill.engine.layout_engine import LetterLayoutEngine
from letterquill.engine.text_metrics import TextMetricsEngine
from letterquill.media.qr import build_qr_asset
from letterquill.models.recipient import LetterTemplate, Recipient


@pytest.fixture(autouse=True)
def configure_logging():
    """Configure logging for tests to avoid leaking handlers between tests."""
    # Clear all existing handlers
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    # Set up console-only logging for tests
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.WARNING)  # Only show warnings and errors during tests

    formatter = logging.Formatter(
        '%(name)s - %(levelname)s - %(message)s'
    )
    console_handler.setFormatter(formatter)

    root_logger.addHandler(console_handler)
    root_logger.setLevel(logging.WARNING)

    yield

    # Cleanup after test
    root_logger.handlers.clear()


@pytest.fixture
def geometry():
    """Default A4 letter geometry."""
    return PageGeometry()


@pytest.fixture
def metrics(geometry):
    """Metrics engine for the default Helvetica family."""
    return TextMetricsEngine(geometry.fonts)


@pytest.fixture
def layout_engine(geometry, metrics):
    """Layout engine with a short, known footer."""
    return LetterLayoutEngine(geometry, metrics, footer_lines=("Footer line one", "", "Footer line three"))


@pytest.fixture
def recipient():
    """Recipient with every placeholder field filled."""
    return Recipient.from_mapping({
        "first_name": "Anna",
        "last_name": "Berg",
        "company": "Berg & Söhne GmbH",
        "industry": "Logistik",
        "anrede": "frau",
        "token": "berg-soehne-gmbh",
    })


@pytest.fixture
def qr_asset():
    """QR asset for the sample recipient."""
    return build_qr_asset("https://example.com", "berg-soehne-gmbh")


@pytest.fixture
def letter_html():
    """Complete letter exercising every markup feature."""
    return (
        "<p>{{anrede}}</p>"
        "<p>{{personalized_intro}}</p>"
        "<p>wir helfen <strong>{{company}}</strong> dabei, Anfragen <em>schneller</em> zu beantworten.</p>"
        "<ul><li>Erste Antwort in Minuten</li><li><b>Rund um die Uhr</b> erreichbar</li></ul>"
        "<p>Scannen Sie den Code:</p>"
        "<p>{{qr_code}}</p>"
        "<p>Mit freundlichen Grüßen<br>Max Muster</p>"
        "<p>P.S. Die Demo dauert nur 15 Minuten.</p>"
    )


@pytest.fixture
def templates():
    """One industry template and one default template."""
    return [
        LetterTemplate(
            body_html="<p>{{anrede}}</p><p>Logistik-Brief für {{company}}.</p>",
            name="Logistik",
            industry="Logistik, Transport",
            subject_line="Weniger Telefonstress",
        ),
        LetterTemplate(
            body_html="<p>{{anrede}}</p><p>Allgemeiner Brief.</p><p>{{qr_code}}</p>",
            name="Default",
            is_default=True,
        ),
    ]


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    # Ignore logging errors during tests
    logging.raiseExceptions = False
