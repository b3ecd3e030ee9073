from array import array

import pytest

from utf8conv import (
    Converter,
    ConversionFailed,
    Encoding,
    InputTooLarge,
    SourceView,
    terminated_utf8,
    terminated_utf16,
    utf8_from_utf16,
    utf8_view,
    utf16_from_utf8,
    utf16_view,
)
from utf8conv.errors import (
    ERROR_INVALID_DATA,
    ERROR_INVALID_PARAMETER,
    ERROR_NO_UNICODE_TRANSLATION,
)
from utf8conv.transcoder import CodecsTranscoder, PureTranscoder, TranscodeError, Transcoder
from utf8conv.utils.text import units_from_bytes
from utf8conv.utils.validation import MAX_TRANSFER_COUNT


class RecordingTranscoder(Transcoder):
    name = "recording"

    def __init__(self) -> None:
        self.calls: list[str] = []

    def measure_utf16(self, source):
        self.calls.append("measure_utf16")
        raise AssertionError("transcoder must not be called")

    def fill_utf16(self, source, dest):
        self.calls.append("fill_utf16")
        raise AssertionError("transcoder must not be called")

    def measure_utf8(self, source):
        self.calls.append("measure_utf8")
        raise AssertionError("transcoder must not be called")

    def fill_utf8(self, source, dest):
        self.calls.append("fill_utf8")
        raise AssertionError("transcoder must not be called")


class FillFailsTranscoder(PureTranscoder):
    name = "fill-fails"

    def fill_utf16(self, source, dest):
        raise TranscodeError(ERROR_NO_UNICODE_TRANSLATION, "second pass rejected")


class ShortFillTranscoder(PureTranscoder):
    name = "short-fill"

    def fill_utf8(self, source, dest):
        return super().fill_utf8(source, dest) - 1


class ZeroMeasureTranscoder(PureTranscoder):
    name = "zero-measure"

    def measure_utf8(self, source):
        return 0


class LengthProbe:
    def __init__(self, length: int) -> None:
        self._length = length

    def __len__(self) -> int:
        return self._length

    def __getitem__(self, index):
        raise AssertionError("oversized input must not be read")


@pytest.fixture(params=[CodecsTranscoder, PureTranscoder], ids=lambda factory: factory.name)
def converter(request) -> Converter:
    return Converter(transcoder=request.param())


def test_japanese_kin_both_directions(converter: Converter) -> None:
    assert list(converter.utf16_from_utf8(b"\xE9\x87\x91")) == [0x91D1]
    assert converter.utf8_from_utf16([0x91D1]) == b"\xE9\x87\x91"


def test_result_types(converter: Converter) -> None:
    utf16 = converter.utf16_from_utf8(b"Ciao ciao")
    assert isinstance(utf16, array)
    assert utf16.typecode == "H"
    assert isinstance(converter.utf8_from_utf16("Hello world"), bytes)


def test_round_trips(converter: Converter) -> None:
    assert converter.utf8_from_utf16(converter.utf16_from_utf8(b"Ciao ciao")) == b"Ciao ciao"
    units = converter.utf16_from_utf8(converter.utf8_from_utf16("Hello world"))
    assert list(units) == [ord(char) for char in "Hello world"]


def test_supplementary_plane_uses_surrogate_pair(converter: Converter) -> None:
    assert list(converter.utf16_from_utf8("\N{GRINNING FACE}".encode("utf-8"))) == [0xD83D, 0xDE00]
    assert converter.utf8_from_utf16([0xD83D, 0xDE00]) == b"\xF0\x9F\x98\x80"


def test_empty_input_never_calls_transcoder() -> None:
    recording = RecordingTranscoder()
    converter = Converter(transcoder=recording)
    assert converter.utf16_from_utf8(b"") == array("H")
    assert converter.utf16_from_utf8(terminated_utf8(b"\0")) == array("H")
    assert converter.utf16_from_utf8(b"abc", 1, 1) == array("H")
    assert converter.utf8_from_utf16("") == b""
    assert converter.utf8_from_utf16([]) == b""
    assert converter.utf8_from_utf16(terminated_utf16([0])) == b""
    assert converter.validate_utf8(b"") == 0
    assert converter.validate_utf16("") == 0
    assert recording.calls == []


def test_utf8_input_forms_are_equivalent(converter: Converter) -> None:
    content = b"abc \xE9\x87\x91 xyz"
    padded = b"__" + content + b"__"
    expected = converter.utf16_from_utf8(content)
    assert converter.utf16_from_utf8(bytearray(content)) == expected
    assert converter.utf16_from_utf8(memoryview(content)) == expected
    assert converter.utf16_from_utf8(array("B", content)) == expected
    assert converter.utf16_from_utf8(padded, 2, 2 + len(content)) == expected
    assert converter.utf16_from_utf8(utf8_view(padded, 2, 2 + len(content))) == expected
    assert converter.utf16_from_utf8(terminated_utf8(content + b"\0ignored")) == expected


def test_utf16_input_forms_are_equivalent(converter: Converter) -> None:
    text = "abc 金 \N{GRINNING FACE}"
    units = units_from_bytes(text.encode("utf-16-le"), "little")
    expected = converter.utf8_from_utf16(text)
    assert expected == text.encode("utf-8")
    assert converter.utf8_from_utf16(units) == expected
    assert converter.utf8_from_utf16(list(units)) == expected
    assert converter.utf8_from_utf16(tuple(units)) == expected
    assert converter.utf8_from_utf16(memoryview(units)) == expected
    padded = [0x5F] + list(units) + [0x5F]
    assert converter.utf8_from_utf16(padded, 1, 1 + len(units)) == expected
    assert converter.utf8_from_utf16(utf16_view(padded, 1, 1 + len(units))) == expected
    assert converter.utf8_from_utf16(terminated_utf16(list(units) + [0, 0x41])) == expected


def test_invalid_utf8_is_rejected_not_replaced(converter: Converter) -> None:
    with pytest.raises(ConversionFailed) as info:
        converter.utf16_from_utf8(b"Invalid UTF-8 follows: \xC0\x76\x77")
    assert info.value.code == ERROR_NO_UNICODE_TRANSLATION
    assert info.value.hresult == 0x80070459
    assert info.value.phase == "measure"
    assert info.value.direction == "UTF-8 to UTF-16"
    assert "hr=0x80070459" in str(info.value)


@pytest.mark.parametrize(
    "data",
    [
        b"\xC0\x76\x77",
        b"\x80",
        b"\xE9\x87",
        b"\xE0\x80\x80",
        b"\xED\xA0\x80",
        b"\xF4\x90\x80\x80",
        b"\xF8\x88\x80\x80\x80",
        b"\xFF",
        b"ok\xC3",
    ],
)
def test_ill_formed_utf8_sequences(converter: Converter, data: bytes) -> None:
    with pytest.raises(ConversionFailed) as info:
        converter.utf16_from_utf8(data)
    assert info.value.code == ERROR_NO_UNICODE_TRANSLATION


@pytest.mark.parametrize(
    "units",
    [
        [0xD800, 0x0100],
        [0x41, 0xD800],
        [0xDC00],
        [0xDC00, 0xD800],
        [0xDBFF, 0xDBFF, 0xDC00],
    ],
)
def test_unpaired_surrogates_are_rejected(converter: Converter, units: list[int]) -> None:
    with pytest.raises(ConversionFailed) as info:
        converter.utf8_from_utf16(units)
    assert info.value.code == ERROR_NO_UNICODE_TRANSLATION


def test_lone_surrogate_in_str_is_rejected(converter: Converter) -> None:
    with pytest.raises(ConversionFailed):
        converter.utf8_from_utf16("Invalid UTF-16: \ud800\u0100")


@pytest.mark.parametrize(
    "units",
    [[0x10000], [-1], [0x41, 0x110000], [65.0], ["A"], [None], [0xD800, "A"], [0xDC00, None]],
)
def test_invalid_code_units(converter: Converter, units: list[int]) -> None:
    with pytest.raises(ConversionFailed) as info:
        converter.utf8_from_utf16(units)
    assert info.value.code == ERROR_INVALID_PARAMETER


@pytest.mark.parametrize("encoding", [Encoding.UTF8, Encoding.UTF16])
def test_oversized_input_rejected_before_transcoding(encoding: Encoding) -> None:
    recording = RecordingTranscoder()
    converter = Converter(transcoder=recording)
    length = MAX_TRANSFER_COUNT + 1
    view = SourceView(LengthProbe(length), 0, length, encoding)
    call = converter.utf16_from_utf8 if encoding is Encoding.UTF8 else converter.utf8_from_utf16
    with pytest.raises(InputTooLarge) as info:
        call(view)
    assert info.value.code == ERROR_INVALID_PARAMETER
    assert info.value.hresult == 0x80070057
    assert info.value.count == length
    assert recording.calls == []


def test_input_at_limit_reaches_transcoder() -> None:
    class MeasureOnly(RecordingTranscoder):
        def measure_utf16(self, source):
            self.calls.append("measure_utf16")
            raise TranscodeError(ERROR_NO_UNICODE_TRANSLATION)

    recording = MeasureOnly()
    converter = Converter(transcoder=recording)
    view = SourceView(LengthProbe(MAX_TRANSFER_COUNT), 0, MAX_TRANSFER_COUNT, Encoding.UTF8)
    with pytest.raises(ConversionFailed):
        converter.utf16_from_utf8(view)
    assert recording.calls == ["measure_utf16"]


def test_second_pass_failure_is_reported() -> None:
    converter = Converter(transcoder=FillFailsTranscoder())
    with pytest.raises(ConversionFailed) as info:
        converter.utf16_from_utf8(b"abc")
    assert info.value.phase == "fill"
    assert info.value.code == ERROR_NO_UNICODE_TRANSLATION


def test_fill_length_mismatch_is_reported() -> None:
    converter = Converter(transcoder=ShortFillTranscoder())
    with pytest.raises(ConversionFailed) as info:
        converter.utf8_from_utf16("abc")
    assert info.value.phase == "fill"
    assert info.value.code == ERROR_INVALID_DATA


def test_zero_measure_is_a_failure() -> None:
    converter = Converter(transcoder=ZeroMeasureTranscoder())
    with pytest.raises(ConversionFailed) as info:
        converter.utf8_from_utf16("abc")
    assert info.value.phase == "measure"


def test_validate_reports_destination_length(converter: Converter) -> None:
    assert converter.validate_utf8(b"\xE9\x87\x91\xF0\x9F\x98\x80") == 3
    assert converter.validate_utf16([0x91D1, 0xD83D, 0xDE00]) == 7
    with pytest.raises(ConversionFailed):
        converter.validate_utf8(b"\xC0\x76")


def test_module_functions_use_default_converter() -> None:
    assert list(utf16_from_utf8(b"\xE9\x87\x91")) == [0x91D1]
    assert utf8_from_utf16([0x91D1]) == b"\xE9\x87\x91"
    assert utf8_from_utf16([0x41, 0x42, 0x43], 1, 3) == b"BC"


def test_module_functions_accept_explicit_converter() -> None:
    recording = RecordingTranscoder()
    converter = Converter(transcoder=recording)
    with pytest.raises(AssertionError):
        utf16_from_utf8(b"a", converter=converter)
    assert recording.calls == ["measure_utf16"]
