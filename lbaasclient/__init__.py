"""lbaasclient: a client for paginated, resource-oriented HTTP services.

lbaasclient walks multi-page collections lazily and decodes untyped JSON
bodies into dataclass records, with load balancer resources of the OpenStack
Networking LBaaS v2 API as the first consumers.

Quick Start:
    ```python
    from lbaasclient import ServiceClient
    from lbaasclient.networking.lbaas_v2 import loadbalancers

    client = ServiceClient("https://network.example.com:9696", token="...")

    # Iterate over every load balancer, page by page under the hood
    for lb in loadbalancers.list_loadbalancers(client):
        print(lb.id, lb.vip_address)

    # Single-resource calls return result envelopes
    lb = loadbalancers.get(client, "a36c20d0-18e9-42ce-88fd-82a35977ee8c").extract()
    ```

Main Pieces:
    - `ServiceClient`: endpoint, token and request defaults
    - `Pager` / `each_page()`: sequential traversal of linked pages
    - `LinkedPage`, `MarkerPage`, `SinglePage`: page strategies
    - `Record`, `wire_field()`: declare record shapes
    - `extract_one()`, `extract_many()`: decode wrapped bodies
    - `DataResult`, `DeleteResult`: single-resource outcomes
"""

import logging
from importlib.metadata import PackageNotFoundError, version

from .client import ServiceClient
from .decode import (
    BOOLEAN,
    INTEGER,
    NUMBER,
    REFERENCE_LIST,
    TEXT,
    TEXT_LIST,
    Nested,
    Record,
    decode_record,
    extract_many,
    extract_one,
    wire_field,
)
from .exceptions import (
    BodyParseError,
    DecodeError,
    LbaasError,
    MalformedError,
    NotFoundError,
    TransportError,
    ValidationError,
)
from .pagination import (
    LinkedPage,
    MarkerPage,
    Page,
    Pager,
    SinglePage,
    each_page,
    normalize_body,
    normalize_response,
)
from .results import DataResult, DeleteResult, Result

logger = logging.getLogger(__name__)

__all__ = [
    # client.py
    "ServiceClient",
    # pagination
    "normalize_body",
    "normalize_response",
    "Page",
    "LinkedPage",
    "MarkerPage",
    "SinglePage",
    "Pager",
    "each_page",
    # decode
    "Record",
    "wire_field",
    "Nested",
    "TEXT",
    "BOOLEAN",
    "INTEGER",
    "NUMBER",
    "TEXT_LIST",
    "REFERENCE_LIST",
    "decode_record",
    "extract_one",
    "extract_many",
    # results.py
    "Result",
    "DataResult",
    "DeleteResult",
    # exceptions.py
    "LbaasError",
    "TransportError",
    "DecodeError",
    "MalformedError",
    "BodyParseError",
    "NotFoundError",
    "ValidationError",
]

try:
    __version__ = version("lbaasclient")
except PackageNotFoundError:
    __version__ = "0.0.0"
