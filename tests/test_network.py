import io
import sys
import threading
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1] / "src"))

from lanshare import network  # noqa: E402
from lanshare.network import (  # noqa: E402
    InvalidSelectionError,
    NoAddressError,
    select_interface,
)

IPS = {"wlan0": "192.168.1.20", "eth0": "10.0.0.5", "docker0": "172.17.0.1"}


def _never_called():
    raise AssertionError("operator must not be asked")


def _answer(text):
    return lambda: text


def test_single_candidate_returned_without_prompt():
    out = io.StringIO()
    assert select_interface({"eth0": "10.0.0.5"}, 5, read_line=_never_called, out=out) == "10.0.0.5"
    assert out.getvalue() == ""


def test_empty_candidates_is_fatal():
    with pytest.raises(NoAddressError):
        select_interface({}, 5, read_line=_never_called)


def test_timeout_selects_first_sorted(caplog):
    release = threading.Event()
    out = io.StringIO()

    def blocked():
        release.wait()
        return "2\n"

    try:
        with caplog.at_level("INFO"):
            address = select_interface(IPS, 0.2, read_line=blocked, out=out)
    finally:
        release.set()
    assert address == IPS["docker0"]
    assert "Input timeout" in caplog.text


def test_valid_index_selects_sorted_candidate():
    out = io.StringIO()
    # сортировка: docker0, eth0, wlan0
    assert select_interface(IPS, 5, read_line=_answer("1\n"), out=out) == IPS["eth0"]
    assert select_interface(IPS, 5, read_line=_answer("2\n"), out=out) == IPS["wlan0"]


def test_prompt_lists_candidates_in_order():
    out = io.StringIO()
    select_interface(IPS, 5, read_line=_answer("0\n"), out=out)
    text = out.getvalue()
    assert text.index("docker0") < text.index("eth0") < text.index("wlan0")
    assert network.PROMPT in text


def test_blank_line_selects_default_index():
    assert select_interface(IPS, 5, read_line=_answer("\n"), out=io.StringIO()) == IPS["docker0"]


@pytest.mark.parametrize("answer", ["3\n", "-1\n", "abc\n", ""])
def test_invalid_input_is_fatal(answer):
    with pytest.raises(InvalidSelectionError):
        select_interface(IPS, 5, read_line=_answer(answer), out=io.StringIO())


def test_zero_timeout_skips_prompt():
    assert select_interface(IPS, 0, read_line=_never_called) == IPS["docker0"]


def test_enumerate_interfaces_skips_loopback(monkeypatch):
    addrs = {
        "lo": {network.netifaces.AF_INET: [{"addr": "127.0.0.1"}]},
        "eth0": {network.netifaces.AF_INET: [{"addr": "169.254.3.3"}, {"addr": "10.0.0.5"}]},
        "wlan0": {network.netifaces.AF_INET: [{"addr": "192.168.1.20"}]},
        "tun0": {},
    }
    monkeypatch.setattr(network.netifaces, "interfaces", lambda: list(addrs))
    monkeypatch.setattr(network.netifaces, "ifaddresses", lambda name: addrs[name])

    assert network.enumerate_interfaces() == {"eth0": "10.0.0.5", "wlan0": "192.168.1.20"}
