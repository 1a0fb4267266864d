"""Load balancers.

A load balancer is the primary configuration object: it owns the virtual IP
address on which client traffic is received and groups the listeners that
accept that traffic.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from ..._core._validators import require_non_empty
from ...client import ServiceClient
from ...decode import BOOLEAN, REFERENCE_LIST, Record, wire_field
from ...pagination import LinkedPage, Page, Pager
from ...results import DataResult, DeleteResult
from ...types import Observer, ReferenceStub
from ._common import list_url, resource_url, root_url, to_body

logger = logging.getLogger(__name__)

FAMILY = "loadbalancers"


@dataclass
class LoadBalancer(Record):
    """A load balancer as reported by the service.

    Attributes:
        provisioning_status: ``ACTIVE``, ``PENDING_CREATE`` or ``ERROR``
        operating_status: ``ONLINE`` or ``OFFLINE``
        listeners: Stubs of the attached listeners
        pools: Stubs of the pools behind those listeners
    """

    id: str = wire_field("id")
    name: str = wire_field("name")
    description: str = wire_field("description")
    admin_state_up: bool = wire_field("admin_state_up", BOOLEAN)
    tenant_id: str = wire_field("tenant_id")
    provisioning_status: str = wire_field("provisioning_status")
    operating_status: str = wire_field("operating_status")
    vip_address: str = wire_field("vip_address")
    vip_subnet_id: str = wire_field("vip_subnet_id")
    vip_port_id: str = wire_field("vip_port_id")
    flavor: str = wire_field("flavor")
    provider: str = wire_field("provider")
    listeners: List[ReferenceStub] = wire_field("listeners", REFERENCE_LIST)
    pools: List[ReferenceStub] = wire_field("pools", REFERENCE_LIST)


class LoadBalancerPage(LinkedPage):
    resource_key = "loadbalancers"
    record_cls = LoadBalancer


class LoadBalancerResult(DataResult):
    resource_key = "loadbalancer"
    record_cls = LoadBalancer


@dataclass
class ListOpts:
    """Filters for :func:`list_loadbalancers`; unset fields are not sent."""

    id: Optional[str] = None
    name: Optional[str] = None
    tenant_id: Optional[str] = None
    provisioning_status: Optional[str] = None
    operating_status: Optional[str] = None
    vip_address: Optional[str] = None
    vip_subnet_id: Optional[str] = None
    admin_state_up: Optional[bool] = None
    limit: Optional[int] = None
    marker: Optional[str] = None
    sort_key: Optional[str] = None
    sort_dir: Optional[str] = None


@dataclass
class CreateOpts:
    vip_subnet_id: str = ""
    name: Optional[str] = None
    description: Optional[str] = None
    tenant_id: Optional[str] = None
    vip_address: Optional[str] = None
    admin_state_up: Optional[bool] = None
    flavor: Optional[str] = None
    provider: Optional[str] = None

    def to_body(self) -> dict:
        body = to_body(self, "loadbalancer")
        require_non_empty(body["loadbalancer"], ["vip_subnet_id"])
        return body


@dataclass
class UpdateOpts:
    name: Optional[str] = None
    description: Optional[str] = None
    admin_state_up: Optional[bool] = None

    def to_body(self) -> dict:
        return to_body(self, "loadbalancer")


def extract_loadbalancers(page: Page) -> List[LoadBalancer]:
    """Decode the load balancers on one page."""
    return page.extract()  # type: ignore[return-value]


def list_loadbalancers(
    client: ServiceClient,
    opts: Optional[ListOpts] = None,
    observer: Optional[Observer] = None,
) -> Pager:
    """Return a pager over the load balancers visible to the caller."""
    url = list_url(client, root_url(client, FAMILY), opts)
    return Pager(client.fetch, url, LoadBalancerPage, observer=observer)


def create(client: ServiceClient, opts: CreateOpts) -> LoadBalancerResult:
    body = opts.to_body()
    logger.debug("Creating load balancer on subnet %s", opts.vip_subnet_id)
    return LoadBalancerResult.capture(
        lambda: client.post(root_url(client, FAMILY), json=body)
    )


def get(client: ServiceClient, loadbalancer_id: str) -> LoadBalancerResult:
    url = resource_url(client, FAMILY, loadbalancer_id)
    return LoadBalancerResult.capture(lambda: client.get(url))


def update(
    client: ServiceClient, loadbalancer_id: str, opts: UpdateOpts
) -> LoadBalancerResult:
    url = resource_url(client, FAMILY, loadbalancer_id)
    body = opts.to_body()
    return LoadBalancerResult.capture(lambda: client.put(url, json=body))


def delete(client: ServiceClient, loadbalancer_id: str) -> DeleteResult:
    url = resource_url(client, FAMILY, loadbalancer_id)
    return DeleteResult.capture(lambda: client.delete(url))
