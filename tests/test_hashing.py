import base64
import string

import pytest

from mcptoolkit.hashing import call, describe, hash_data
from mcptoolkit.types import CallToolRequest, Params, PluginError


def _request(**arguments):
    return CallToolRequest(params=Params(name="hash", arguments=arguments))


def test_sha256_standard_vector():
    assert hash_data("abc", "sha256") == (
        "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
    )


def test_md5_empty_vector():
    assert hash_data("", "md5") == "d41d8cd98f00b204e9800998ecf8427e"


def test_base32_rfc_vector():
    assert hash_data("foobar", "base32") == "MZXW6YTBOI======"


@pytest.mark.parametrize(
    "algorithm,length",
    [("sha256", 64), ("sha512", 128), ("sha384", 96), ("sha224", 56), ("sha1", 40), ("md5", 32)],
)
def test_digest_lengths_and_hex(algorithm, length):
    digest = hash_data("hello world", algorithm)
    assert len(digest) == length
    assert set(digest) <= set(string.hexdigits.lower())


def test_base64_round_trip():
    text = "héllo wörld"
    assert base64.b64decode(hash_data(text, "base64")).decode("utf-8") == text


def test_base32_round_trip():
    text = "some data"
    assert base64.b32decode(hash_data(text, "base32")).decode("utf-8") == text


def test_unknown_algorithm_falls_back_to_base64():
    assert hash_data("xyz", "whirlpool") == hash_data("xyz", "base64")


def test_different_inputs_differ():
    assert hash_data("a", "sha256") != hash_data("b", "sha256")


def test_call_returns_plain_text_result():
    result = call(_request(data="abc", algorithm="sha1"))
    assert result.is_error is None
    assert result.content[0].mime_type == "text/plain"
    assert result.content[0].text == hash_data("abc", "sha1")


def test_call_requires_data():
    with pytest.raises(PluginError, match="`data` is required"):
        call(_request(algorithm="md5"))


def test_call_requires_algorithm():
    with pytest.raises(PluginError, match="`algorithm` is required"):
        call(_request(data="x"))


def test_call_without_arguments():
    with pytest.raises(PluginError, match="`data` is required"):
        call(CallToolRequest(params=Params(name="hash")))


def test_call_rejects_non_string_data():
    with pytest.raises(PluginError):
        call(_request(data=5, algorithm="md5"))


def test_describe_lists_all_algorithms():
    tools = describe().tools
    assert [tool.name for tool in tools] == ["hash"]
    schema = tools[0].input_schema
    assert schema["required"] == ["data", "algorithm"]
    assert "base32" in schema["properties"]["algorithm"]["enum"]
    assert len(schema["properties"]["algorithm"]["enum"]) == 8