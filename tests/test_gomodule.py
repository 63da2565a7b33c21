import json

import pytest
import requests
import responses

from mcptoolkit import gomodule
from mcptoolkit.types import CallToolRequest, ListToolsResult, Params, PluginError

ALPHA = "github.com/example/alpha"
BETA = "github.com/example/beta"


def _url(name):
    return f"{gomodule.PROXY_URL}/{name}/@latest"


def _request(name, arguments=None):
    return CallToolRequest(params=Params(name=name, arguments=arguments))


def test_proxy_url_is_https():
    assert gomodule.PROXY_URL.startswith("https://proxy.")
    assert gomodule.PROXY_URL.endswith(".org")


def test_describe_lists_both_tools():
    result = gomodule.describe()
    assert [tool.name for tool in result.tools] == ["gomodule_latest_version", "gomodule_info"]
    for tool in result.tools:
        assert tool.input_schema["required"] == ["module_names"]
        assert tool.input_schema["properties"]["module_names"]["type"] == "string"


def test_describe_round_trips_through_dict():
    result = gomodule.describe()
    assert ListToolsResult.from_dict(result.to_dict()) == result


def test_unknown_tool():
    result = gomodule.call(_request("nope", {"module_names": ALPHA}))
    assert result.is_error is True
    assert result.content[0].text == "Unknown tool: nope"


@pytest.mark.parametrize("tool", ["gomodule_latest_version", "gomodule_info"])
@pytest.mark.parametrize("arguments", [None, {}, {"module_names": 5}])
def test_missing_module_names(tool, arguments):
    result = gomodule.call(_request(tool, arguments))
    assert result.is_error is True
    assert result.content[0].text == "Please provide module names"


def test_latest_version_collects_versions_with_trimmed_names():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, _url(ALPHA), json={"Version": "v1.2.3"})
        rsps.add(responses.GET, _url(BETA), json={"Version": "v0.4.0"})
        result = gomodule.call(
            _request("gomodule_latest_version", {"module_names": f" {BETA} , {ALPHA}"})
        )
        assert rsps.calls[0].request.headers["User-Agent"] == gomodule.USER_AGENT
    assert result.is_error is None
    assert result.content[0].mime_type == "text/plain"
    assert json.loads(result.content[0].text) == {ALPHA: "v1.2.3", BETA: "v0.4.0"}
    assert list(json.loads(result.content[0].text)) == sorted([ALPHA, BETA])


def test_latest_version_skips_modules_without_version():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, _url(ALPHA), json={"Version": "v1.2.3"})
        rsps.add(responses.GET, _url(BETA), json={"Origin": {}})
        result = gomodule.call(
            _request("gomodule_latest_version", {"module_names": f"{ALPHA},{BETA}"})
        )
    assert json.loads(result.content[0].text) == {ALPHA: "v1.2.3"}


def test_latest_version_fails_when_nothing_found():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, _url(ALPHA), json={"Version": 3})
        result = gomodule.call(_request("gomodule_latest_version", {"module_names": ALPHA}))
    assert result.is_error is True
    assert result.content[0].text == "Failed to get latest versions"


def test_module_info_returns_raw_documents_in_order():
    first = {"Version": "v1.2.3", "Time": "2024-01-02T03:04:05Z"}
    second = {"Version": "v0.4.0"}
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, _url(BETA), json=second)
        rsps.add(responses.GET, _url(ALPHA), json=first)
        result = gomodule.call(_request("gomodule_info", {"module_names": f"{BETA}, {ALPHA}"}))
    assert result.is_error is None
    assert result.content[0].mime_type == "text/plain"
    assert json.loads(result.content[0].text) == [second, first]


def test_invalid_json_raises():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, _url(ALPHA), body="not found")
        with pytest.raises(PluginError):
            gomodule.call(_request("gomodule_info", {"module_names": ALPHA}))


def test_connection_error_raises():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, _url(ALPHA), body=requests.ConnectionError("down"))
        with pytest.raises(PluginError):
            gomodule.call(_request("gomodule_latest_version", {"module_names": ALPHA}))