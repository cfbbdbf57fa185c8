import pytest
from urilib_next import DecodeError
from urilib_next.uri import percent


@pytest.mark.parametrize(
    "token, expected",
    [
        ("John Smith", "John+Smith"),
        ("key/3", "key%2F3"),
        ("a+b", "a%2Bb"),
        ("a&b=c", "a%26b%3Dc"),
        ("100%20", "100%2520"),
        ("é", "%C3%A9"),
        ("abc-._~09", "abc-._~09"),
    ],
)
def test_encode(token, expected):
    assert percent.encode(token) == expected


@pytest.mark.parametrize(
    "token, expected",
    [
        ("John+Smith", "John Smith"),
        ("key%2f3", "key/3"),
        ("a%2Bb", "a+b"),
        ("%C3%A9", "é"),
        ("plain", "plain"),
        ("", ""),
    ],
)
def test_decode(token, expected):
    assert percent.decode(token) == expected


def test_decode_latin1():
    assert percent.decode("%E9", encoding="latin-1") == "é"


@pytest.mark.parametrize("token, position", [("100%", 3), ("%zz", 0), ("a%2", 1)])
def test_decode_malformed_escape(token, position):
    with pytest.raises(DecodeError) as exc_info:
        percent.decode(token)
    assert exc_info.value.position == position
    assert exc_info.value.token == token


def test_decode_invalid_bytes():
    with pytest.raises(DecodeError) as exc_info:
        percent.decode("%C3")
    assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)
    assert isinstance(exc_info.value, ValueError)


@pytest.mark.parametrize(
    "token, expected", [("100%", "100%"), ("%zz", "%zz"), ("%C3", "\ufffd")]
)
def test_decode_permissive(token, expected):
    assert percent.decode(token, strict=False) == expected
