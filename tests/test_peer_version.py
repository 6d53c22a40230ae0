from types import SimpleNamespace

import pytest

from ark_client.peers import peer_version


@pytest.mark.parametrize(
    "version, expected",
    [
        ("1.0.3", 1),
        ("1.6.0-beta", 1),
        ("2.1.0", 2),
        ("2.0.0-next.1", 2),
        ("10.0.0", 2),
        ("", 1),
        (None, 1),
    ],
)
def test_classifies_version_strings(version, expected):
    assert peer_version({"ip": "1.2.3.4", "port": 4001, "version": version}) == expected


def test_missing_version_is_legacy():
    assert peer_version({"ip": "1.2.3.4", "port": 4001}) == 1


def test_accepts_objects_with_version_attribute():
    assert peer_version(SimpleNamespace(version="2.3.0")) == 2
    assert peer_version(SimpleNamespace(version="1.1.1")) == 1
    assert peer_version(object()) == 1
