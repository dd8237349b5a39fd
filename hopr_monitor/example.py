"""Built-in placeholder fleet shown before any host is registered."""

from __future__ import annotations

from .const import LOCAL_HEALTH_PORT, LOCAL_HTTP_PORT, LOCAL_WS_PORT
from .domain import Balance, Fleet, Identity, NodeSnapshot

EXAMPLE_HOST = "localhost"

_PEER_ID = "16Uiu2HAm91QFjPepnwjuZWzK5pb5ZS8z8qxQRfKZJNXjkgGNUAit"
_CHANNEL = {
    "type": "incoming",
    "channelId": "0x04e50b7ddce9770f58cebe51f33b472c92d1c40384759f5a0b1025220bf15ec5",
    "peerId": "16Uiu2HAmVfV4GKQhdECMqYmUMGLy84RjTJQxTWDcmUX5847roBar",
    "status": "Open",
    "balance": "10000000000000000000",
}


def example_fleet() -> Fleet:
    """Return a one-node fleet with representative payloads."""

    return (
        NodeSnapshot(
            instance_index=0,
            http_endpoint=f"http://{EXAMPLE_HOST}:{LOCAL_HTTP_PORT}",
            ws_endpoint=f"ws://{EXAMPLE_HOST}:{LOCAL_WS_PORT}",
            health_endpoint=f"http://{EXAMPLE_HOST}:{LOCAL_HEALTH_PORT}",
            identity=Identity(
                hopr_address="16Uiu2HAmE9b3TSHeF25uJS1Ecf2Js3TutnaSnipdV9otEpxbRN8Q",
                native_address="0xEA9eDAE5CfC794B75C45c8fa89b605508A03742a",
            ),
            balance=Balance(hopr="1234000000000000000", native="2345000000000000000"),
            version="1.87.x",
            info={
                "environment": "hardhat-localhost",
                "announcedAddress": [
                    f"/ip4/128.0.215.32/tcp/9080/p2p/{_PEER_ID}",
                    f"/ip4/127.0.0.1/tcp/9080/p2p/{_PEER_ID}",
                ],
                "listeningAddress": [f"/ip4/0.0.0.0/tcp/9080/p2p/{_PEER_ID}"],
                "network": "hardhat",
                "hoprToken": "0xe7f1725E7734CE288F8367e1Bb143E90bb3F0512",
                "hoprChannels": "0x2a54194c8fe0e3CdeAa39c49B95495aA3b44Db63",
                "channelClosurePeriod": 1,
            },
            channels={"incoming": [dict(_CHANNEL)], "outgoing": [dict(_CHANNEL)]},
            tickets={
                "pending": 0,
                "unredeemed": 0,
                "unredeemedValue": "0",
                "redeemed": 0,
                "redeemedValue": "0",
                "losingTickets": 0,
                "winProportion": 0,
                "neglected": 0,
                "rejected": 0,
                "rejectedValue": "0",
            },
        ),
    )
