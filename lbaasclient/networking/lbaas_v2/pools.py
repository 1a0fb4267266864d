"""Pools and pool members.

A pool is a logical set of back-end members, such as web servers, that
receive the traffic accepted by a listener. The load balancing algorithm
picks which member handles each new connection.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ..._core._validators import require_id, require_non_empty
from ...client import ServiceClient
from ...decode import BOOLEAN, INTEGER, REFERENCE_LIST, Nested, Record, wire_field
from ...exceptions import ValidationError
from ...pagination import LinkedPage, Page, Pager
from ...results import DataResult, DeleteResult
from ...types import Observer, ReferenceStub
from ._common import list_url, resource_url, root_url, to_body

logger = logging.getLogger(__name__)

FAMILY = "pools"


@dataclass
class SessionPersistence(Record):
    """Session stickiness of a pool.

    ``type`` is one of:

    - ``SOURCE_IP``: connections from the same source address go to the same
      member.
    - ``HTTP_COOKIE``: the load balancer sets a cookie on the first response
      and routes requests carrying it to the same member.
    - ``APP_COOKIE``: routing follows a cookie set by the back-end
      application, named by ``cookie_name``.
    """

    type: str = wire_field("type")
    cookie_name: str = wire_field("cookie_name")


@dataclass
class Pool(Record):
    """A pool of back-end members.

    Attributes:
        lb_method: Load balancing algorithm, sent as ``lb_algorithm`` on the
            wire (``ROUND_ROBIN``, ``LEAST_CONNECTIONS``, ``SOURCE_IP``)
        listeners: Stubs of the listeners using this pool
        members: Stubs of the members, fetch them with :func:`list_members`
        health_monitors: Stubs of the health monitors watching the members
        loadbalancers: Stubs of the owning load balancers
    """

    id: str = wire_field("id")
    name: str = wire_field("name")
    description: str = wire_field("description")
    lb_method: str = wire_field("lb_algorithm")
    protocol: str = wire_field("protocol")
    subnet_id: str = wire_field("subnet_id")
    tenant_id: str = wire_field("tenant_id")
    admin_state_up: bool = wire_field("admin_state_up", BOOLEAN)
    provider: str = wire_field("provider")
    listeners: List[ReferenceStub] = wire_field("listeners", REFERENCE_LIST)
    members: List[ReferenceStub] = wire_field("members", REFERENCE_LIST)
    health_monitors: List[ReferenceStub] = wire_field("health_monitors", REFERENCE_LIST)
    loadbalancers: List[ReferenceStub] = wire_field("loadbalancers", REFERENCE_LIST)
    persistence: SessionPersistence = wire_field(
        "session_persistence", Nested(SessionPersistence)
    )


@dataclass
class Member(Record):
    """One back-end server in a pool."""

    id: str = wire_field("id")
    name: str = wire_field("name")
    weight: int = wire_field("weight", INTEGER)
    admin_state_up: bool = wire_field("admin_state_up", BOOLEAN)
    tenant_id: str = wire_field("tenant_id")
    subnet_id: str = wire_field("subnet_id")
    pool_id: str = wire_field("pool_id")
    address: str = wire_field("address")
    protocol_port: int = wire_field("protocol_port", INTEGER)


class PoolPage(LinkedPage):
    resource_key = "pools"
    record_cls = Pool


class MemberPage(LinkedPage):
    resource_key = "members"
    record_cls = Member


class PoolResult(DataResult):
    resource_key = "pool"
    record_cls = Pool


class MemberResult(DataResult):
    resource_key = "member"
    record_cls = Member


@dataclass
class ListOpts:
    id: Optional[str] = None
    name: Optional[str] = None
    tenant_id: Optional[str] = None
    loadbalancer_id: Optional[str] = None
    lb_algorithm: Optional[str] = None
    protocol: Optional[str] = None
    admin_state_up: Optional[bool] = None
    limit: Optional[int] = None
    marker: Optional[str] = None
    sort_key: Optional[str] = None
    sort_dir: Optional[str] = None


@dataclass
class CreateOpts:
    """Options for :func:`create`; one of listener_id or loadbalancer_id is required."""

    lb_algorithm: str = ""
    protocol: str = ""
    listener_id: Optional[str] = None
    loadbalancer_id: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    tenant_id: Optional[str] = None
    admin_state_up: Optional[bool] = None
    session_persistence: Optional[Dict[str, Any]] = None

    def to_body(self) -> dict:
        body = to_body(self, "pool")
        require_non_empty(body["pool"], ["lb_algorithm", "protocol"])
        if not (self.listener_id or self.loadbalancer_id):
            raise ValidationError(
                "Either listener_id or loadbalancer_id is required",
                field="listener_id",
            )
        return body


@dataclass
class UpdateOpts:
    name: Optional[str] = None
    description: Optional[str] = None
    lb_algorithm: Optional[str] = None
    admin_state_up: Optional[bool] = None
    session_persistence: Optional[Dict[str, Any]] = None

    def to_body(self) -> dict:
        return to_body(self, "pool")


@dataclass
class MemberListOpts:
    id: Optional[str] = None
    name: Optional[str] = None
    tenant_id: Optional[str] = None
    address: Optional[str] = None
    protocol_port: Optional[int] = None
    weight: Optional[int] = None
    subnet_id: Optional[str] = None
    admin_state_up: Optional[bool] = None
    limit: Optional[int] = None
    marker: Optional[str] = None
    sort_key: Optional[str] = None
    sort_dir: Optional[str] = None


@dataclass
class MemberCreateOpts:
    address: str = ""
    protocol_port: Optional[int] = None
    subnet_id: Optional[str] = None
    name: Optional[str] = None
    weight: Optional[int] = None
    tenant_id: Optional[str] = None
    admin_state_up: Optional[bool] = None

    def to_body(self) -> dict:
        body = to_body(self, "member")
        require_non_empty(body["member"], ["address", "protocol_port"])
        return body


@dataclass
class MemberUpdateOpts:
    name: Optional[str] = None
    weight: Optional[int] = None
    admin_state_up: Optional[bool] = None

    def to_body(self) -> dict:
        return to_body(self, "member")


def extract_pools(page: Page) -> List[Pool]:
    return page.extract()  # type: ignore[return-value]


def extract_members(page: Page) -> List[Member]:
    return page.extract()  # type: ignore[return-value]


def list_pools(
    client: ServiceClient,
    opts: Optional[ListOpts] = None,
    observer: Optional[Observer] = None,
) -> Pager:
    url = list_url(client, root_url(client, FAMILY), opts)
    return Pager(client.fetch, url, PoolPage, observer=observer)


def create(client: ServiceClient, opts: CreateOpts) -> PoolResult:
    body = opts.to_body()
    return PoolResult.capture(lambda: client.post(root_url(client, FAMILY), json=body))


def get(client: ServiceClient, pool_id: str) -> PoolResult:
    url = resource_url(client, FAMILY, pool_id)
    return PoolResult.capture(lambda: client.get(url))


def update(client: ServiceClient, pool_id: str, opts: UpdateOpts) -> PoolResult:
    url = resource_url(client, FAMILY, pool_id)
    body = opts.to_body()
    return PoolResult.capture(lambda: client.put(url, json=body))


def delete(client: ServiceClient, pool_id: str) -> DeleteResult:
    url = resource_url(client, FAMILY, pool_id)
    return DeleteResult.capture(lambda: client.delete(url))


def _members_url(client: ServiceClient, pool_id: str, *parts: str) -> str:
    return root_url(client, FAMILY, require_id(pool_id, "pool id"), "members", *parts)


def list_members(
    client: ServiceClient,
    pool_id: str,
    opts: Optional[MemberListOpts] = None,
    observer: Optional[Observer] = None,
) -> Pager:
    """Return a pager over the members of *pool_id*."""
    url = list_url(client, _members_url(client, pool_id), opts)
    return Pager(client.fetch, url, MemberPage, observer=observer)


def create_member(
    client: ServiceClient, pool_id: str, opts: MemberCreateOpts
) -> MemberResult:
    body = opts.to_body()
    url = _members_url(client, pool_id)
    logger.debug("Adding member %s:%s to pool %s", opts.address, opts.protocol_port, pool_id)
    return MemberResult.capture(lambda: client.post(url, json=body))


def get_member(client: ServiceClient, pool_id: str, member_id: str) -> MemberResult:
    url = _members_url(client, pool_id, require_id(member_id, "member id"))
    return MemberResult.capture(lambda: client.get(url))


def update_member(
    client: ServiceClient, pool_id: str, member_id: str, opts: MemberUpdateOpts
) -> MemberResult:
    url = _members_url(client, pool_id, require_id(member_id, "member id"))
    body = opts.to_body()
    return MemberResult.capture(lambda: client.put(url, json=body))


def delete_member(client: ServiceClient, pool_id: str, member_id: str) -> DeleteResult:
    url = _members_url(client, pool_id, require_id(member_id, "member id"))
    return DeleteResult.capture(lambda: client.delete(url))
