import base64

import pytest

from markup_desktop.core.exceptions import DecodeError, UnsupportedMediaType
from markup_desktop.core.image_codec import (
    classify_media_type,
    decode,
    encode,
    is_embedded,
    parse_reference,
)


class TestParseReference:

    def test_png_payload_and_extension(self, png_data_url, png_bytes):
        decoded = parse_reference(png_data_url)
        assert decoded.payload == png_bytes
        assert decoded.extension == "png"
        assert decoded.media_type == "image/png"

    def test_subtype_is_taken_verbatim(self):
        decoded = parse_reference("data:image/jpeg;base64," + base64.b64encode(b"\xff\xd8\xff").decode())
        assert decoded.extension == "jpeg"
        decoded = parse_reference("data:image/svg+xml;base64," + base64.b64encode(b"<svg/>").decode())
        assert decoded.extension == "svg+xml"

    def test_video_is_supported(self):
        decoded = parse_reference("data:video/mp4;base64,AAAA")
        assert decoded.extension == "mp4"
        assert decoded.payload == b"\x00\x00\x00"

    def test_percent_encoded_payload(self):
        decoded = parse_reference("data:image/svg+xml,%3Csvg%2F%3E")
        assert decoded.payload == b"<svg/>"

    def test_whitespace_in_base64_is_ignored(self, png_data_url, png_bytes):
        header, data = png_data_url.split(",", 1)
        wrapped = header + "," + data[:20] + "\n  " + data[20:]
        assert parse_reference(wrapped).payload == png_bytes

    def test_non_embedded_reference_returns_none(self):
        assert parse_reference("images/cat.png") is None
        assert parse_reference("https://example.com/cat.png") is None

    def test_unsupported_top_level_type(self):
        with pytest.raises(UnsupportedMediaType) as info:
            parse_reference("data:application/pdf;base64,JVBERi0=")
        assert info.value.media_type == "application/pdf"

    def test_missing_comma_is_a_decode_error(self):
        with pytest.raises(DecodeError):
            parse_reference("data:image/png;base64")

    def test_malformed_media_type(self):
        with pytest.raises(DecodeError):
            parse_reference("data:image;base64,AAAA")

    def test_invalid_base64(self):
        with pytest.raises(DecodeError):
            parse_reference("data:image/png;base64,not*base64!")

    @pytest.mark.parametrize("reference", [
        "data:image/png/../x;base64,AAAA",
        "data:image/png\\..\\x;base64,AAAA",
        "data:image/..;base64,AAAA",
        "data:video/.hidden;base64,AAAA",
    ])
    def test_subtype_unusable_as_extension(self, reference):
        with pytest.raises(DecodeError):
            parse_reference(reference)

    def test_vendor_subtype_is_accepted(self):
        assert parse_reference("data:image/x-icon;base64,AAAA").extension == "x-icon"
        assert parse_reference("data:image/vnd.microsoft.icon;base64,AAAA").extension == "vnd.microsoft.icon"


class TestLenientDecode:

    def test_returns_none_for_unsupported_and_malformed(self):
        assert decode("data:text/plain;base64,SGk=") is None
        assert decode("data:image/png;base64,@@@") is None
        assert decode("cat.png") is None

    def test_returns_image_when_valid(self, png_data_url):
        assert decode(png_data_url).extension == "png"


def test_is_embedded_is_case_insensitive():
    assert is_embedded("DATA:image/png;base64,AAAA")
    assert not is_embedded("file:///tmp/a.png")


def test_encode_produces_a_parseable_reference(png_bytes):
    reference = encode(png_bytes, "image/png")
    assert reference.startswith("data:image/png;base64,")
    assert parse_reference(reference).payload == png_bytes


class TestClassifyMediaType:

    def test_png_from_content(self, png_bytes):
        assert classify_media_type(png_bytes, "whatever.bin") == "image/png"

    def test_content_wins_over_extension(self, png_bytes):
        assert classify_media_type(png_bytes, "photo.jpg") == "image/png"

    def test_video_by_file_name(self):
        assert classify_media_type(b"\x00\x00\x00\x18ftypmp42", "clip.mp4") == "video/mp4"

    def test_unknown_content_raises(self):
        with pytest.raises(UnsupportedMediaType):
            classify_media_type(b"plain text", "notes.txt")

    def test_no_file_name_and_unreadable_content(self):
        with pytest.raises(UnsupportedMediaType):
            classify_media_type(b"garbage")
