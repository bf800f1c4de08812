import argparse, asyncio, random, uuid
import httpx

from hitmon.security.signature import (
    DELIVERY_HEADER,
    EVENT_HEADER,
    SIGNATURE_HEADER,
    expected_signature,
)

ZONES = ["head", "brain", "torso", "leftarm", "rightarm", "leftleg", "rightleg"]


def _signed_headers(secret: str) -> dict:
    delivery = uuid.uuid4().hex
    return {
        DELIVERY_HEADER: delivery,
        SIGNATURE_HEADER: expected_signature(delivery, secret),
        EVENT_HEADER: "user.kill",
    }


def _hit(actor_id: str, name: str, head_bias: float) -> dict:
    # head_bias: 0..1, kafa vuruşu oranını yapay olarak yükseltir
    zone = "head" if random.random() < head_bias else random.choice(ZONES)
    return {
        "murderer_id": actor_id,
        "murderer": name,
        "zone": zone,
        "distance": round(random.uniform(5.0, 350.0), 1),
    }


async def phase(client, url: str, secret: str, actor_id: str, name: str, count: int, head_bias: float, delay: float):
    for _ in range(count):
        r = await client.post(url, json=_hit(actor_id, name, head_bias), headers=_signed_headers(secret), timeout=5.0)
        if r.status_code != 204:
            print(f"[replay] unexpected status {r.status_code}: {r.text}")
        if delay > 0:
            await asyncio.sleep(delay)


async def main():
    ap = argparse.ArgumentParser(description="Send signed synthetic hit events to a running Hit-Mon")
    ap.add_argument("--base-url", default="http://127.0.0.1:3000/")
    ap.add_argument("--secret", default="")
    ap.add_argument("--actor-id", default="5f1a2b3c4d5e6f7a8b9c0d1e")
    ap.add_argument("--name", default="Survivor")
    ap.add_argument("--baseline", type=int, default=60, help="normal hits before the spike")
    ap.add_argument("--spike", type=int, default=20, help="head-heavy hits at the end")
    ap.add_argument("--spike-head-bias", type=float, default=0.9)
    ap.add_argument("--delay", type=float, default=0.0)
    args = ap.parse_args()
    async with httpx.AsyncClient() as client:
        await phase(client, args.base_url, args.secret, args.actor_id, args.name, args.baseline, 0.15, args.delay)
        await phase(client, args.base_url, args.secret, args.actor_id, args.name, args.spike, args.spike_head_bias, args.delay)


if __name__ == "__main__":
    asyncio.run(main())
