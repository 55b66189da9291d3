"""Tests for mimetree.classifier."""

from __future__ import annotations

from mimetree.classifier import ContentKind, bare_content_type, classify


class TestClassify:
    def test_attachment(self):
        result = classify({
            "content-type": "application/pdf; name=\"r.pdf\"",
            "content-disposition": 'attachment; filename="r.pdf"',
        })
        assert result.kind is ContentKind.ATTACHMENT
        assert result.filename == "r.pdf"
        assert result.content_type == "application/pdf"

    def test_attachment_wins_over_text_type(self):
        result = classify({
            "content-type": "text/plain",
            "content-disposition": 'attachment; filename="notes.txt"',
        })
        assert result.kind is ContentKind.ATTACHMENT
        assert result.content_type == "text/plain"

    def test_inline_disposition_is_not_attachment(self):
        result = classify({
            "content-type": "text/plain",
            "content-disposition": 'inline; filename="notes.txt"',
        })
        assert result.kind is ContentKind.TEXT

    def test_unquoted_filename_is_not_attachment(self):
        result = classify({"content-disposition": "attachment; filename=r.pdf"}, "data")
        assert result.kind is ContentKind.BODY

    def test_text_plain(self):
        assert classify({"content-type": "text/plain; charset=utf-8"}).kind is ContentKind.TEXT

    def test_text_html(self):
        assert classify({"content-type": "text/html"}).kind is ContentKind.HTML

    def test_other_text_subtype_is_opaque(self):
        assert classify({"content-type": "text/csv"}, "a,b").kind is ContentKind.BODY

    def test_multipart(self):
        result = classify({"content-type": 'multipart/alternative; boundary="b1"'})
        assert result.kind is ContentKind.MULTIPART
        assert result.boundary == "b1"
        assert result.content_type == "multipart/alternative"

    def test_multipart_without_quoted_boundary_is_opaque(self):
        result = classify({"content-type": "multipart/mixed; boundary=b1"}, "--b1")
        assert result.kind is ContentKind.BODY

    def test_multipart_with_empty_boundary_is_opaque(self):
        result = classify({"content-type": 'multipart/mixed; boundary=""'}, "x")
        assert result.kind is ContentKind.BODY

    def test_opaque_body(self):
        assert classify({"subject": "hi"}, "some body").kind is ContentKind.BODY

    def test_empty(self):
        result = classify({"subject": "hi"}, "")
        assert result.kind is ContentKind.EMPTY
        assert result.filename is None
        assert result.boundary is None


class TestBareContentType:
    def test_with_parameters(self):
        assert bare_content_type({"content-type": "image/png; name=a.png"}) == "image/png"

    def test_without_parameters(self):
        assert bare_content_type({"content-type": "image/png"}) == "image/png"

    def test_missing(self):
        assert bare_content_type({}) is None
