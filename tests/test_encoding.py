from clinic_dashboard.domain.attachments import Attachment
from clinic_dashboard.domain.encoding import (
    decode_attachments,
    decode_tags,
    encode_attachments,
    encode_tags,
)


def test_tags_round_trip_keeps_order_and_accents():
    tags = ["ansiedad", "duelo", "niñez"]
    encoded = encode_tags(tags)
    assert encoded == '["ansiedad", "duelo", "niñez"]'
    assert decode_tags(encoded) == tags


def test_decode_tags_tolerates_missing_and_malformed_values():
    assert decode_tags(None) == []
    assert decode_tags("") == []
    assert decode_tags("not json") == []
    assert decode_tags('{"tag": "x"}') == []
    assert decode_tags('["ok", 3, null]') == ["ok"]


def test_attachments_are_stored_with_api_field_names():
    encoded = encode_attachments(
        [Attachment(name="informe.pdf", url="https://files.test/informe.pdf")]
    )
    assert encoded == '[{"nombre": "informe.pdf", "url": "https://files.test/informe.pdf"}]'
    assert decode_attachments(encoded) == [
        Attachment(name="informe.pdf", url="https://files.test/informe.pdf")
    ]


def test_decode_attachments_derives_missing_names_and_skips_broken_records():
    raw = (
        '[{"url": "https://files.test/docs/test.pdf"},'
        ' {"nombre": "sin url"},'
        ' "loose string",'
        ' {"nombre": "", "url": "C:\\\\docs\\\\notas.txt"}]'
    )
    decoded = decode_attachments(raw)
    assert [(a.name, a.url) for a in decoded] == [
        ("test.pdf", "https://files.test/docs/test.pdf"),
        ("notas.txt", "C:\\docs\\notas.txt"),
    ]


def test_decode_attachments_of_garbage_is_empty():
    assert decode_attachments(None) == []
    assert decode_attachments("[") == []
