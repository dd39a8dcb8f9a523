"""Tests for the high-level letter API."""

import logging

import pytest

from letterquill import (
    FontSet,
    LetterConfig,
    PageGeometry,
    Recipient,
    generate_letter_pdf,
    layout_letter,
    letter_filename,
    render_letter,
)
from letterquill.api import letter_metadata
from letterquill.exceptions import AssetError, FontError, LetterError
from letterquill.media.qr import QRCodeAsset
from letterquill.parser.html_parser import parse_to_blocks


class TestGenerateLetterPdf:
    """Test end-to-end letter rendering."""

    def test_returns_pdf(self, letter_html, recipient):
        """Test a full letter renders to PDF bytes."""
        pdf = generate_letter_pdf(letter_html, recipient, personalized_intro="Schön, dass Sie da sind.")

        assert pdf.startswith(b"%PDF-")

    def test_deterministic(self, letter_html, recipient):
        """Test rendering twice yields byte-identical documents."""
        config = LetterConfig(base_url="https://letters.example.org")

        first = generate_letter_pdf(letter_html, recipient, config=config)
        second = generate_letter_pdf(letter_html, recipient, config=config)

        assert first == second

    def test_recipient_mapping(self, letter_html):
        """Test a plain mapping is accepted as recipient."""
        pdf = generate_letter_pdf(letter_html, {"first_name": "Max", "last_name": "Muster", "anrede": "herr"})

        assert pdf.startswith(b"%PDF-")

    def test_different_recipients_differ(self, letter_html, recipient):
        """Test personalisation changes the document."""
        other = Recipient.from_mapping({"first_name": "Max", "last_name": "Muster", "company": "Muster AG"})

        assert generate_letter_pdf(letter_html, recipient) != generate_letter_pdf(letter_html, other)

    def test_empty_markup(self, recipient):
        """Test an empty letter still renders QR and footer."""
        assert generate_letter_pdf("", recipient).startswith(b"%PDF-")

    def test_custom_geometry(self, letter_html, recipient):
        """Test a caller-supplied geometry is used."""
        pdf = generate_letter_pdf(letter_html, recipient, PageGeometry(margin=40, body_font_size=11))

        assert pdf.startswith(b"%PDF-")

    def test_missing_font_file_is_fatal(self, letter_html, recipient, tmp_path):
        """Test a font that cannot be embedded aborts the render."""
        fonts = FontSet(regular="LetterquillNoFile", files={"LetterquillNoFile": str(tmp_path / "none.ttf")})

        with pytest.raises(FontError):
            generate_letter_pdf(letter_html, recipient, PageGeometry(fonts=fonts))

    def test_logs_render(self, letter_html, recipient, caplog):
        """Test each render is logged with the recipient token."""
        with caplog.at_level(logging.INFO, logger="letterquill"):
            generate_letter_pdf(letter_html, recipient)

        assert "Rendering letter for berg-soehne-gmbh" in caplog.text


class TestRenderLetter:
    """Test rendering pre-parsed blocks."""

    def test_render_blocks(self, qr_asset):
        """Test parsed blocks render with an explicit QR asset."""
        blocks = parse_to_blocks("<p>Hallo</p><p>{{qr_code}}</p>")

        assert render_letter(blocks, None, qr_asset).startswith(b"%PDF-")

    def test_broken_qr_asset(self):
        """Test an undecodable QR bitmap propagates as AssetError."""
        broken = QRCodeAsset(png=b"\x89PNG broken", url="https://example.com/r/x")

        with pytest.raises(AssetError):
            render_letter(parse_to_blocks("<p>Hallo</p>"), None, broken)

    def test_asset_error_is_letter_error(self):
        """Test hard failures share the LetterError base."""
        assert issubclass(AssetError, LetterError)
        assert issubclass(FontError, LetterError)

    def test_layout_letter(self):
        """Test layout can be inspected without producing a PDF."""
        page = layout_letter(parse_to_blocks("<p>{{qr_code}}</p>"), landing_url="https://example.com/r/x")

        assert page.qr_inline
        assert page.texts_with_role("caption")[0].text == "https://example.com/r/x"


class TestLetterMetadata:
    """Test PDF document info."""

    def test_title_and_creator(self, recipient):
        """Test the title names recipient and company."""
        metadata = letter_metadata(recipient, LetterConfig(), subject="Weniger Telefonstress")

        assert metadata["title"] == "Anna Berg - Berg & Söhne GmbH"
        assert metadata["creator"].startswith("letterquill ")
        assert metadata["subject"] == "Weniger Telefonstress"

    def test_without_company(self):
        """Test the title without a company is just the name."""
        metadata = letter_metadata(Recipient(token="t", first_name="Max"), LetterConfig())

        assert metadata["title"] == "Max"
        assert "subject" not in metadata


class TestLetterFilename:
    """Test download filenames."""

    def test_filename(self):
        """Test the filename combines last name, company and token."""
        recipient = Recipient(token="acme-inc", last_name="Müller-Lüdenscheidt", company="ACME Inc.")

        assert letter_filename(recipient) == "Müller-Lüdenscheidt_ACME_Inc_acme-inc.pdf"

    def test_missing_parts(self):
        """Test missing name and company use placeholders."""
        assert letter_filename(Recipient(token="abc")) == "Unknown_Company_abc.pdf"

    def test_mapping(self):
        """Test a mapping recipient derives its token."""
        assert letter_filename({"last_name": "Berg", "company": "Berg & Söhne"}) == "Berg_Berg_Söhne_berg-soehne.pdf"

    def test_token_cannot_leave_directory(self):
        """Test path separators in the token are sanitized away."""
        filename = letter_filename(Recipient(token="../../etc/evil", last_name="x", company="y"))

        assert filename == "x_y_etc_evil.pdf"
        assert "/" not in filename and ".." not in filename

    def test_unusable_token(self):
        """Test a token with no safe characters falls back to a fixed name."""
        assert letter_filename(Recipient(token="../", last_name="x", company="y")) == "x_y_letter.pdf"
