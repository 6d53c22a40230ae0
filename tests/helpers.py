from typing import Any, Dict, List


def v1_body(peers: List[Dict[str, Any]], success: bool = True) -> Dict[str, Any]:
    return {"success": success, "peers": peers}


def v2_body(peers: List[Dict[str, Any]]) -> Dict[str, Any]:
    return {"data": peers}


def core_api_config(port: int = 4003, enabled: bool = True) -> Dict[str, Any]:
    return {
        "data": {
            "version": "2.0.0",
            "plugins": {
                "@arkecosystem/core-api": {"enabled": enabled, "port": port},
                "@arkecosystem/core-webhooks": {"enabled": False, "port": 4004},
            },
        }
    }


def v1_peer(ip: str, height: int = 100, delay: int = 10, **extra: Any) -> Dict[str, Any]:
    peer = {"ip": ip, "port": 4001, "status": "OK", "version": "1.6.0", "height": height, "delay": delay}
    peer.update(extra)
    return peer


def v2_peer(ip: str, height: int = 100, delay: int = 10, **extra: Any) -> Dict[str, Any]:
    peer = {"ip": ip, "port": 4002, "version": "2.0.0", "height": height, "latency": delay, "delay": delay}
    peer.update(extra)
    return peer
