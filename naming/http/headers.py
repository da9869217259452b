"""Request headers sent with every naming request."""

import uuid
from typing import List, Tuple

ACCEPT_ENCODING = "gzip,deflate,sdch"
REQUEST_MODULE = "Naming"


def build_headers(version: str, module: str = REQUEST_MODULE) -> List[Tuple[str, str]]:
    """Fixed header set with a fresh RequestId on every call"""
    return [
        ("Client-Version", version),
        ("User-Agent", version),
        ("Accept-Encoding", ACCEPT_ENCODING),
        ("Connection", "Keep-Alive"),
        ("RequestId", str(uuid.uuid4())),
        ("Request-Module", module),
    ]
