#!/usr/bin/env python3

import json
import secrets
import sys
import time

from wemeet_webhook.core.config import WebhookCredentials
from wemeet_webhook.services.payload_codec import PayloadCodec
from wemeet_webhook.services.signature import compute_signature


def make_callback(token: str, payload: str, aes_key: str = "") -> dict:
    """Build the headers and JSON body of a signed test callback."""
    codec = PayloadCodec(WebhookCredentials(token=token, encoding_aes_key=aes_key))
    data = codec.encode(payload)
    timestamp = str(int(time.time()))
    nonce = str(secrets.randbelow(10**9))
    return {
        "headers": {
            "timestamp": timestamp,
            "nonce": nonce,
            "signature": compute_signature(token, timestamp, nonce, data),
        },
        "body": {"data": data},
    }


if __name__ == "__main__":
    if len(sys.argv) not in (3, 4):
        print("Usage: make_callback.py <token> <payload> [encoding_aes_key]")
        sys.exit(1)

    token = sys.argv[1]
    payload = sys.argv[2]
    aes_key = sys.argv[3] if len(sys.argv) == 4 else ""

    # Validate payload is valid JSON
    try:
        json.loads(payload)
    except json.JSONDecodeError:
        print("Error: Payload must be valid JSON", file=sys.stderr)
        sys.exit(1)

    print(json.dumps(make_callback(token, payload, aes_key), indent=2))
