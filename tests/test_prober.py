import httpx
import pytest
import respx

from ark_client import ArkClient, HttpClient, ResourceNotFoundError, UnsupportedNetworkError
from ark_client.peers import PeerProber
from ark_client.peers.prober import base_url, normalize_ip, peer_url
from ark_client.utils.retry import RetryPolicy

from .helpers import v1_body, v1_peer, v2_body, v2_peer

CANDIDATES = [
    {"ip": "10.0.0.1", "port": 4001},
    {"ip": "10.0.0.2", "port": 4001},
    {"ip": "10.0.0.3", "port": 4001},
]


def _peers_url(ip: str, port: int = 4001, scheme: str = "http") -> str:
    return f"{scheme}://{ip}:{port}/api/peers"


@pytest.mark.asyncio
async def test_stops_after_quorum_of_two(config, no_shuffle):
    with respx.mock(assert_all_called=False) as router:
        r1 = router.get(_peers_url("10.0.0.1")).respond(json=v1_body([v1_peer("1.1.1.1", height=10)]))
        r2 = router.get(_peers_url("10.0.0.2")).respond(json=v1_body([v1_peer("2.2.2.2", height=20)]))
        r3 = router.get(_peers_url("10.0.0.3")).respond(json=v1_body([v1_peer("3.3.3.3", height=30)]))

        peers = await ArkClient.find_peers("mainnet", 1, CANDIDATES, config=config, shuffle=no_shuffle)

    assert r1.called and r2.called
    assert not r3.called
    assert [p["ip"] for p in peers] == ["2.2.2.2", "1.1.1.1"]


@pytest.mark.asyncio
async def test_merges_responses_across_probes(config, no_shuffle):
    with respx.mock(assert_all_called=False) as router:
        router.get(_peers_url("10.0.0.1")).respond(
            json=v1_body([v1_peer("1.1.1.1", height=5, os="linux"), v1_peer("4.4.4.4", height=3)])
        )
        router.get(_peers_url("10.0.0.2")).respond(
            json=v1_body([v1_peer("1.1.1.1", height=7, delay=3), v1_peer("5.5.5.5", height=6)])
        )
        router.get(_peers_url("10.0.0.3"))

        peers = await ArkClient.find_peers("mainnet", 1, CANDIDATES, config=config, shuffle=no_shuffle)

    assert [p["ip"] for p in peers] == ["1.1.1.1", "5.5.5.5", "4.4.4.4"]
    merged = peers[0]
    assert merged["height"] == 7 and merged["delay"] == 3
    assert merged["os"] == "linux"


@pytest.mark.asyncio
async def test_filters_self_unhealthy_and_other_generation_peers(config, no_shuffle):
    listed = [
        v1_peer("127.0.0.1"),
        v1_peer("::ffff:127.0.0.1"),
        v1_peer("::1"),
        v1_peer("0:0:0:0:0:0:0:1"),
        v1_peer("6.6.6.6", status=500),
        v1_peer("7.7.7.7", status="EUNAVAILABLE"),
        v1_peer("8.8.8.8", version="2.0.0"),
        v1_peer("9.9.9.9", status=200),
        v1_peer("9.9.9.10", status="OK"),
    ]
    with respx.mock(assert_all_called=False) as router:
        router.get(_peers_url("10.0.0.1")).respond(json=v1_body(listed))
        router.get(_peers_url("10.0.0.2")).respond(json=v1_body(listed))
        router.get(_peers_url("10.0.0.3"))

        peers = await ArkClient.find_peers("mainnet", 1, CANDIDATES, config=config, shuffle=no_shuffle)

    assert sorted(p["ip"] for p in peers) == ["9.9.9.10", "9.9.9.9"]


@pytest.mark.asyncio
async def test_v2_reads_data_array_and_ignores_status(config, no_shuffle):
    candidates = [{"ip": "10.0.0.1", "port": 4002}]
    listed = [
        v2_peer("1.1.1.1", height=50),
        v2_peer("2.2.2.2", height=60, status=500),
        v2_peer("3.3.3.3", version="1.4.0"),
        {"ip": "4.4.4.4", "port": 4002},
        v2_peer("::1"),
    ]
    with respx.mock() as router:
        route = router.get(_peers_url("10.0.0.1", 4002)).respond(json=v2_body(listed))

        peers = await ArkClient.find_peers("devnet", 2, candidates, config=config, shuffle=no_shuffle)

    assert [p["ip"] for p in peers] == ["2.2.2.2", "1.1.1.1"]
    assert route.calls.last.request.headers["API-Version"] == "2"


@pytest.mark.asyncio
async def test_falls_back_to_sorted_candidates_when_every_probe_fails(config, no_shuffle):
    candidates = [
        {"ip": "10.0.0.1", "port": 4001, "height": 1},
        {"ip": "10.0.0.2", "port": 4001, "height": 3},
        {"ip": "10.0.0.3", "port": 4001, "height": 2},
    ]
    with respx.mock() as router:
        router.get(_peers_url("10.0.0.1")).mock(side_effect=httpx.ConnectError)
        router.get(_peers_url("10.0.0.2")).mock(side_effect=httpx.ReadTimeout)
        router.get(_peers_url("10.0.0.3")).respond(status_code=500, json={"error": "boom"})

        peers = await ArkClient.find_peers("mainnet", 1, candidates, config=config, shuffle=no_shuffle)

    assert [p["ip"] for p in peers] == ["10.0.0.2", "10.0.0.3", "10.0.0.1"]
    peers[0]["port"] = 1
    assert candidates[1]["port"] == 4001


@pytest.mark.asyncio
async def test_malformed_and_unsuccessful_bodies_are_skipped(config, no_shuffle):
    with respx.mock() as router:
        router.get(_peers_url("10.0.0.1")).respond(200, text="<html>not json</html>")
        router.get(_peers_url("10.0.0.2")).respond(json=v1_body([v1_peer("1.1.1.1")], success=False))
        router.get(_peers_url("10.0.0.3")).respond(json=["unexpected", "shape"])

        peers = await ArkClient.find_peers("mainnet", 1, CANDIDATES, config=config, shuffle=no_shuffle)

    assert [p["ip"] for p in peers] == ["10.0.0.1", "10.0.0.2", "10.0.0.3"]


@pytest.mark.asyncio
async def test_fully_filtered_response_does_not_count_towards_quorum(config, no_shuffle):
    with respx.mock() as router:
        router.get(_peers_url("10.0.0.1")).respond(json=v1_body([v1_peer("127.0.0.1")]))
        router.get(_peers_url("10.0.0.2")).respond(json=v1_body([v1_peer("2.2.2.2")]))
        r3 = router.get(_peers_url("10.0.0.3")).respond(json=v1_body([v1_peer("3.3.3.3")]))

        peers = await ArkClient.find_peers("mainnet", 1, CANDIDATES, config=config, shuffle=no_shuffle)

    assert r3.called
    assert sorted(p["ip"] for p in peers) == ["2.2.2.2", "3.3.3.3"]


@pytest.mark.asyncio
async def test_probes_in_shuffled_order(config):
    def reverse(peers):
        peers.reverse()

    with respx.mock() as router:
        for c in CANDIDATES:
            router.get(_peers_url(c["ip"])).mock(side_effect=httpx.ConnectError)

        await ArkClient.find_peers("mainnet", 1, CANDIDATES, config=config, shuffle=reverse)

        assert [call.request.url.host for call in router.calls] == ["10.0.0.3", "10.0.0.2", "10.0.0.1"]

    assert [c["ip"] for c in CANDIDATES] == ["10.0.0.1", "10.0.0.2", "10.0.0.3"]


@pytest.mark.asyncio
async def test_uses_https_for_https_peers(config, no_shuffle):
    candidates = [{"ip": "10.0.0.9", "port": 8443, "isHttps": True}]
    with respx.mock() as router:
        route = router.get(_peers_url("10.0.0.9", 8443, "https")).respond(json=v1_body([v1_peer("1.1.1.1")]))

        peers = await ArkClient.find_peers("mainnet", 1, candidates, config=config, shuffle=no_shuffle)

    assert route.called
    assert [p["ip"] for p in peers] == ["1.1.1.1"]


@pytest.mark.asyncio
async def test_unknown_network_without_override_is_rejected(config, seeds):
    with pytest.raises(UnsupportedNetworkError) as exc:
        await ArkClient.find_peers("nonet", 1, config=config, seeds=seeds)
    assert exc.value.network == "nonet"


@pytest.mark.asyncio
async def test_override_bypasses_network_check(config, seeds, no_shuffle):
    with respx.mock() as router:
        router.get(_peers_url("10.0.0.1")).mock(side_effect=httpx.ConnectError)

        peers = await ArkClient.find_peers(
            "nonet", 1, [{"ip": "10.0.0.1", "port": 4001}], config=config, seeds=seeds, shuffle=no_shuffle
        )

    assert peers == [{"ip": "10.0.0.1", "port": 4001}]


@pytest.mark.asyncio
async def test_seed_table_is_used_without_override(config, seeds, no_shuffle):
    with respx.mock() as router:
        r1 = router.get(_peers_url("10.0.0.1", 4002)).respond(json=v2_body([v2_peer("1.1.1.1")]))
        r2 = router.get(_peers_url("10.0.0.2", 4002)).respond(json=v2_body([v2_peer("2.2.2.2")]))

        peers = await ArkClient.find_peers("devnet", 2, config=config, seeds=seeds, shuffle=no_shuffle)

    assert r1.called and r2.called
    assert sorted(p["ip"] for p in peers) == ["1.1.1.1", "2.2.2.2"]
    assert seeds.peers("devnet")[0] == {"ip": "10.0.0.1", "port": 4002}


@pytest.mark.asyncio
async def test_each_probe_gets_a_fresh_binding(config, no_shuffle):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append((request.url.host, request.headers["API-Version"], request.headers["X-Trace"]))
        return httpx.Response(500)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as pool:
        scratch = HttpClient(headers={"X-Trace": "discovery"}, client=pool)
        prober = PeerProber(scratch, config=config, seeds=None, shuffle=no_shuffle)
        await prober.find_peers("mainnet", 2, CANDIDATES[:2])

    assert seen == [("10.0.0.1", "2", "discovery"), ("10.0.0.2", "2", "discovery")]
    assert scratch.host is None
    assert scratch.version == 1


def test_normalize_ip_collapses_equivalent_forms():
    assert normalize_ip("::ffff:127.0.0.1") == "127.0.0.1"
    assert normalize_ip("0:0:0:0:0:0:0:1") == "::1"
    assert normalize_ip("[::1]") == "::1"
    assert normalize_ip("Node.Example") == "node.example"


@pytest.mark.asyncio
async def test_unknown_api_version_is_a_configuration_error(config, no_shuffle):
    with pytest.raises(ResourceNotFoundError):
        await ArkClient.find_peers("mainnet", 3, CANDIDATES, config=config, shuffle=no_shuffle)


@pytest.mark.asyncio
async def test_unreachable_addresses_do_not_abort_discovery(config, no_shuffle):
    candidates = [
        {"ip": "2001:db8::1", "port": 4001},
        {"ip": "10.0.0.3"},
        {"ip": "10.0.0.2", "port": 4001},
        {"ip": "10.0.0.4", "port": 4001},
    ]
    hosts = []

    def handler(request: httpx.Request) -> httpx.Response:
        hosts.append(request.url.host)
        if request.url.host == "2001:db8::1":
            raise httpx.ConnectError("unreachable", request=request)
        return httpx.Response(200, json=v1_body([v1_peer(f"1.1.1.{len(hosts)}")]))

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as pool:
        peers = await ArkClient.find_peers(
            "mainnet", 1, candidates, config=config, http=HttpClient(client=pool), shuffle=no_shuffle
        )

    assert hosts == ["2001:db8::1", "10.0.0.2", "10.0.0.4"]
    assert sorted(p["ip"] for p in peers) == ["1.1.1.2", "1.1.1.3"]


@pytest.mark.asyncio
async def test_discovery_requests_are_not_retried_even_if_the_transport_retries(config, no_shuffle):
    hosts = []

    def handler(request: httpx.Request) -> httpx.Response:
        hosts.append(request.url.host)
        return httpx.Response(503)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as pool:
        scratch = HttpClient(retry=RetryPolicy(retries=3, base=0.0), client=pool)
        await ArkClient.find_peers("mainnet", 1, CANDIDATES, config=config, http=scratch, shuffle=no_shuffle)

    assert hosts == ["10.0.0.1", "10.0.0.2", "10.0.0.3"]
    assert scratch.retry.retries == 3


def test_base_url_brackets_ipv6_literals():
    assert base_url("10.0.0.1", 4001) == "http://10.0.0.1:4001"
    assert base_url("2001:db8::1", 4001, "https") == "https://[2001:db8::1]:4001"
    assert base_url("[::1]", 4003) == "http://[::1]:4003"
    assert base_url("node.example", 4003) == "http://node.example:4003"
    assert peer_url({"ip": "2001:db8::1", "port": 8443, "isHttps": True}) == "https://[2001:db8::1]:8443"
