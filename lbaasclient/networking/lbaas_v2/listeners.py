"""Listeners: the protocol/port front ends attached to a load balancer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from ..._core._validators import require_non_empty
from ...client import ServiceClient
from ...decode import BOOLEAN, INTEGER, REFERENCE_LIST, TEXT_LIST, Record, wire_field
from ...pagination import LinkedPage, Page, Pager
from ...results import DataResult, DeleteResult
from ...types import Observer, ReferenceStub
from ._common import list_url, resource_url, root_url, to_body

FAMILY = "listeners"


@dataclass
class Listener(Record):
    id: str = wire_field("id")
    tenant_id: str = wire_field("tenant_id")
    name: str = wire_field("name")
    description: str = wire_field("description")
    protocol: str = wire_field("protocol")
    protocol_port: int = wire_field("protocol_port", INTEGER)
    default_pool_id: str = wire_field("default_pool_id")
    # -1 means unlimited
    connection_limit: int = wire_field("connection_limit", INTEGER)
    admin_state_up: bool = wire_field("admin_state_up", BOOLEAN)
    default_tls_container_ref: str = wire_field("default_tls_container_ref")
    sni_container_refs: List[str] = wire_field("sni_container_refs", TEXT_LIST)
    loadbalancers: List[ReferenceStub] = wire_field("loadbalancers", REFERENCE_LIST)
    pools: List[ReferenceStub] = wire_field("pools", REFERENCE_LIST)


class ListenerPage(LinkedPage):
    resource_key = "listeners"
    record_cls = Listener


class ListenerResult(DataResult):
    resource_key = "listener"
    record_cls = Listener


@dataclass
class ListOpts:
    id: Optional[str] = None
    name: Optional[str] = None
    tenant_id: Optional[str] = None
    loadbalancer_id: Optional[str] = None
    default_pool_id: Optional[str] = None
    protocol: Optional[str] = None
    protocol_port: Optional[int] = None
    admin_state_up: Optional[bool] = None
    limit: Optional[int] = None
    marker: Optional[str] = None
    sort_key: Optional[str] = None
    sort_dir: Optional[str] = None


@dataclass
class CreateOpts:
    loadbalancer_id: str = ""
    protocol: str = ""
    protocol_port: Optional[int] = None
    name: Optional[str] = None
    description: Optional[str] = None
    tenant_id: Optional[str] = None
    default_pool_id: Optional[str] = None
    connection_limit: Optional[int] = None
    admin_state_up: Optional[bool] = None
    default_tls_container_ref: Optional[str] = None
    sni_container_refs: Optional[List[str]] = None

    def to_body(self) -> dict:
        body = to_body(self, "listener")
        require_non_empty(
            body["listener"], ["loadbalancer_id", "protocol", "protocol_port"]
        )
        return body


@dataclass
class UpdateOpts:
    name: Optional[str] = None
    description: Optional[str] = None
    connection_limit: Optional[int] = None
    admin_state_up: Optional[bool] = None
    default_tls_container_ref: Optional[str] = None
    sni_container_refs: Optional[List[str]] = None

    def to_body(self) -> dict:
        return to_body(self, "listener")


def extract_listeners(page: Page) -> List[Listener]:
    return page.extract()  # type: ignore[return-value]


def list_listeners(
    client: ServiceClient,
    opts: Optional[ListOpts] = None,
    observer: Optional[Observer] = None,
) -> Pager:
    url = list_url(client, root_url(client, FAMILY), opts)
    return Pager(client.fetch, url, ListenerPage, observer=observer)


def create(client: ServiceClient, opts: CreateOpts) -> ListenerResult:
    body = opts.to_body()
    return ListenerResult.capture(
        lambda: client.post(root_url(client, FAMILY), json=body)
    )


def get(client: ServiceClient, listener_id: str) -> ListenerResult:
    url = resource_url(client, FAMILY, listener_id)
    return ListenerResult.capture(lambda: client.get(url))


def update(client: ServiceClient, listener_id: str, opts: UpdateOpts) -> ListenerResult:
    url = resource_url(client, FAMILY, listener_id)
    body = opts.to_body()
    return ListenerResult.capture(lambda: client.put(url, json=body))


def delete(client: ServiceClient, listener_id: str) -> DeleteResult:
    url = resource_url(client, FAMILY, listener_id)
    return DeleteResult.capture(lambda: client.delete(url))
